"""
Configuration loading for Lambda handlers.

Every value is read from environment variables at invocation time, never
cached at import, so a redeployed variable takes effect on the next request
and concurrent invocations share no mutable state.

Loaders raise ConfigurationError naming the missing variables. That name
list is internal detail: callers only ever see the generic message.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Mapping, Optional

from domain.errors import ConfigurationError
from domain.models import EmailConfig, GitHubConfig, InstagramConfig

logger = logging.getLogger(__name__)

CORS_MODE_WILDCARD = 'wildcard'
CORS_MODE_ALLOW_LIST = 'allow-list'
CORS_MODES = (CORS_MODE_WILDCARD, CORS_MODE_ALLOW_LIST)

EMAIL_TRANSPORTS = ('resend', 'ses')

DEFAULT_FROM_EMAIL = 'Tattoo Studio <onboarding@resend.dev>'
DEFAULT_SITE_NAME = 'Tattoo Studio'
DEFAULT_GITHUB_LABELS = 'inquiry,contact-form'
DEFAULT_INSTAGRAM_API_VERSION = 'v21.0'


@dataclass(frozen=True)
class CorsSettings:
    """
    CORS origin policy.

    Attributes:
        mode: "wildcard" or "allow-list"
        allowed_origins: Exact origins echoed back in allow-list mode
    """
    mode: str = CORS_MODE_ALLOW_LIST
    allowed_origins: FrozenSet[str] = frozenset()


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _split_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]


def _require(environ: Mapping[str, str], names: List[str]) -> Dict[str, str]:
    values = {name: _env(environ, name) for name in names}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ConfigurationError(f"Missing environment variables: {', '.join(missing)}")
    return values


def load_cors_settings(environ: Optional[Mapping[str, str]] = None) -> CorsSettings:
    """
    Read the CORS policy.

    Unknown CORS_MODE values fall back to allow-list mode, which itself
    falls back to the wildcard for unrecognized origins.

    Returns:
        CorsSettings
    """
    environ = os.environ if environ is None else environ

    mode = (_env(environ, 'CORS_MODE') or CORS_MODE_ALLOW_LIST).lower()
    if mode not in CORS_MODES:
        logger.warning(f"Unknown CORS_MODE '{mode}', using '{CORS_MODE_ALLOW_LIST}'")
        mode = CORS_MODE_ALLOW_LIST

    origins = frozenset(_split_list(_env(environ, 'ALLOWED_ORIGINS')))
    return CorsSettings(mode=mode, allowed_origins=origins)


def load_github_config(environ: Optional[Mapping[str, str]] = None) -> GitHubConfig:
    """
    Read issue tracker configuration.

    Raises:
        ConfigurationError: If GITHUB_TOKEN, GITHUB_OWNER or GITHUB_REPO is unset
    """
    environ = os.environ if environ is None else environ
    values = _require(environ, ['GITHUB_TOKEN', 'GITHUB_OWNER', 'GITHUB_REPO'])

    labels = _split_list(_env(environ, 'GITHUB_LABELS') or DEFAULT_GITHUB_LABELS)

    return GitHubConfig(
        token=values['GITHUB_TOKEN'],
        owner=values['GITHUB_OWNER'],
        repo=values['GITHUB_REPO'],
        labels=tuple(labels)
    )


def load_email_config(environ: Optional[Mapping[str, str]] = None) -> EmailConfig:
    """
    Read transactional email configuration.

    The Resend transport needs RESEND_API_KEY; the SES transport uses the
    Lambda execution role instead. Both need CONTACT_EMAIL.

    Raises:
        ConfigurationError: If a required variable is unset or EMAIL_TRANSPORT is unknown
    """
    environ = os.environ if environ is None else environ

    transport = (_env(environ, 'EMAIL_TRANSPORT') or 'resend').lower()
    if transport not in EMAIL_TRANSPORTS:
        raise ConfigurationError(f"Unsupported EMAIL_TRANSPORT: {transport}")

    required = ['CONTACT_EMAIL']
    if transport == 'resend':
        required.insert(0, 'RESEND_API_KEY')
    values = _require(environ, required)

    return EmailConfig(
        api_key=values.get('RESEND_API_KEY'),
        recipient=values['CONTACT_EMAIL'],
        from_address=_env(environ, 'FROM_EMAIL') or DEFAULT_FROM_EMAIL,
        transport=transport,
        site_name=_env(environ, 'SITE_NAME') or DEFAULT_SITE_NAME
    )


def load_instagram_config(environ: Optional[Mapping[str, str]] = None) -> InstagramConfig:
    """
    Read Instagram Graph API configuration.

    Raises:
        ConfigurationError: If INSTAGRAM_ACCESS_TOKEN or INSTAGRAM_USER_ID is unset
    """
    environ = os.environ if environ is None else environ
    values = _require(environ, ['INSTAGRAM_ACCESS_TOKEN', 'INSTAGRAM_USER_ID'])

    return InstagramConfig(
        access_token=values['INSTAGRAM_ACCESS_TOKEN'],
        user_id=values['INSTAGRAM_USER_ID'],
        api_version=_env(environ, 'INSTAGRAM_API_VERSION') or DEFAULT_INSTAGRAM_API_VERSION
    )


def environment_name(environ: Optional[Mapping[str, str]] = None) -> str:
    environ = os.environ if environ is None else environ
    return _env(environ, 'ENVIRONMENT') or 'dev'


def is_configured(loader, environ: Optional[Mapping[str, str]] = None) -> bool:
    """Check whether a loader succeeds, without surfacing the error."""
    try:
        loader(environ)
    except ConfigurationError:
        return False
    return True
