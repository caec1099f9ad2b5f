"""
Data models for the contact form domain.

These type-safe data structures define clear contracts between the
validator, the dispatcher and the response formatter.
"""

import json
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any, Tuple


@dataclass
class HttpRequest:
    """
    Runtime-neutral view of an inbound HTTP request.

    Attributes:
        method: Upper-case HTTP method (e.g., "POST")
        headers: Header mapping with lower-case keys
        body: Raw body (string, already-decoded dict, or None)
        path: Request path, informational only
    """
    method: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = None
    path: str = ''

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        return self.headers.get(name.lower())

    @property
    def origin(self) -> Optional[str]:
        return self.header('origin')


@dataclass
class HttpResponse:
    """
    Runtime-neutral HTTP response.

    Attributes:
        status_code: HTTP status
        headers: Response headers
        body: JSON-serializable body, or None for an empty response
    """
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None

    def to_lambda(self) -> Dict[str, Any]:
        """Render as an API Gateway / Function URL proxy response."""
        return {
            'statusCode': self.status_code,
            'headers': dict(self.headers),
            'body': json.dumps(self.body) if self.body is not None else ''
        }


@dataclass(frozen=True)
class Submission:
    """
    Validated and sanitized contact form payload.

    Attributes:
        name: Trimmed sender name (1-100 chars)
        email: Trimmed, lower-cased sender email (1-255 chars)
        message: Trimmed message (10-5000 chars)
    """
    name: str
    email: str
    message: str


@dataclass(frozen=True)
class GitHubConfig:
    """Issue tracker destination and credentials."""
    token: str
    owner: str
    repo: str
    labels: Tuple[str, ...] = ('inquiry', 'contact-form')


@dataclass(frozen=True)
class EmailConfig:
    """
    Transactional email destination and credentials.

    Attributes:
        api_key: Resend API key (unused by the SES transport)
        recipient: Inbox that receives the inquiries
        from_address: Sender shown on the notification email
        transport: "resend" or "ses"
        site_name: Studio name shown in the email heading
    """
    api_key: Optional[str]
    recipient: str
    from_address: str
    transport: str = 'resend'
    site_name: str = 'Tattoo Studio'


@dataclass(frozen=True)
class InstagramConfig:
    """Instagram Graph API account and credentials."""
    access_token: str
    user_id: str
    api_version: str = 'v21.0'


@dataclass
class DispatchResult:
    """
    Result of a single outbound call to a notification provider.

    Attributes:
        ok: Whether the provider accepted the request
        external_id: Provider identifier (issue number, email id)
        url: Link to the created resource, when the provider returns one
        error_message: Internal failure description (never shown to callers)
    """
    ok: bool
    external_id: Optional[Any] = None
    url: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def from_error(cls, error: Exception) -> 'DispatchResult':
        """Failed outcome of a dispatch; keeps the internal detail for the logs."""
        detail = getattr(error, 'internal_detail', None) or f"{error.__class__.__name__}: {error}"
        return cls(ok=False, error_message=detail)

    def __repr__(self) -> str:
        """Human-readable representation for logging."""
        if self.ok:
            return f"DispatchResult(ok=True, external_id={self.external_id})"
        else:
            return f"DispatchResult(ok=False, error={self.error_message})"


@dataclass
class FeedItem:
    """Portfolio item projected from an Instagram media object."""
    id: str
    url: str
    thumb: str
    caption: str
    link: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'id': self.id,
            'url': self.url,
            'thumb': self.thumb,
            'caption': self.caption,
            'link': self.link,
        }


@dataclass
class FeedResult:
    """
    Outcome of the read-only feed fetch.

    Failures are expressed as ok=False with an empty feed, never as errors.
    """
    ok: bool
    feed: List[FeedItem] = field(default_factory=list)
    message: Optional[str] = None

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            'ok': self.ok,
            'feed': [item.to_dict() for item in self.feed],
        }
        if self.message:
            body['message'] = self.message
        return body


@dataclass
class NormalizedError:
    """
    Transport-independent description of a failed request.

    Attributes:
        kind: client, configuration, provider, timeout or unexpected
        http_status: Status returned to the caller
        public_message: Safe message for the response body
        internal_detail: Diagnostic detail, logged only
        allowed_methods: Populated for 405 responses
    """
    kind: str
    http_status: int
    public_message: str
    internal_detail: Optional[str] = None
    allowed_methods: Optional[List[str]] = None

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {'error': self.public_message}
        if self.allowed_methods:
            body['allowedMethods'] = list(self.allowed_methods)
        return body
