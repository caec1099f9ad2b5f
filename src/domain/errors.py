"""
Error taxonomy for contact form requests.

Every failure that can reach the handler boundary is one of these classes.
Each converts to a NormalizedError whose public message is safe to return;
the internal detail is only ever logged.
"""

from typing import List, Optional

from .models import NormalizedError

GENERIC_CONFIGURATION_MESSAGE = 'Server configuration error. Please contact the administrator.'
GENERIC_PROVIDER_MESSAGE = 'Failed to process your inquiry. Please try again later.'
TIMEOUT_MESSAGE = 'Request timeout. Please try again.'
UNEXPECTED_MESSAGE = 'An unexpected error occurred. Please try again later.'


class ContactFormError(Exception):
    """Base class for normalized contact form failures."""

    kind = 'unexpected'
    http_status = 500
    default_public_message = UNEXPECTED_MESSAGE

    def __init__(self, internal_detail: Optional[str] = None, public_message: Optional[str] = None):
        super().__init__(internal_detail or public_message or self.default_public_message)
        self.internal_detail = internal_detail
        self.public_message = public_message or self.default_public_message

    def to_normalized(self) -> NormalizedError:
        return NormalizedError(
            kind=self.kind,
            http_status=self.http_status,
            public_message=self.public_message,
            internal_detail=self.internal_detail
        )


class RequestValidationError(ContactFormError):
    """Raised when the caller sent a bad method, body or field. Message is public."""

    kind = 'client'
    http_status = 400

    def __init__(
        self,
        public_message: str,
        http_status: int = 400,
        allowed_methods: Optional[List[str]] = None
    ):
        super().__init__(internal_detail=public_message, public_message=public_message)
        self.http_status = http_status
        self.allowed_methods = allowed_methods

    def to_normalized(self) -> NormalizedError:
        normalized = super().to_normalized()
        normalized.allowed_methods = self.allowed_methods
        return normalized


class ConfigurationError(ContactFormError):
    """Raised when provider credentials or destinations are missing."""

    kind = 'configuration'
    default_public_message = GENERIC_CONFIGURATION_MESSAGE


class ProviderError(ContactFormError):
    """Raised when a provider answers with a non-success status or cannot be reached."""

    kind = 'provider'
    default_public_message = GENERIC_PROVIDER_MESSAGE

    def __init__(
        self,
        internal_detail: Optional[str] = None,
        public_message: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(internal_detail=internal_detail, public_message=public_message)
        self.status_code = status_code


class ProviderTimeoutError(ContactFormError):
    """Raised when the outbound call exceeded its time bound and was aborted."""

    kind = 'timeout'
    http_status = 504
    default_public_message = TIMEOUT_MESSAGE


class UnexpectedError(ContactFormError):
    """Wraps any other exception caught at the handler boundary."""

    kind = 'unexpected'
    http_status = 500
    default_public_message = UNEXPECTED_MESSAGE

    @classmethod
    def from_exception(cls, exc: Exception) -> 'UnexpectedError':
        return cls(internal_detail=f"{exc.__class__.__name__}: {exc}")
