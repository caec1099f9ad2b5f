"""
Resend transactional email integration.

Sends the inquiry notification through the Resend HTTP API.
"""

import logging
import time
from typing import Optional

import requests

from domain.errors import ProviderError, ProviderTimeoutError
from domain.models import DispatchResult, EmailConfig
from integrations.deadline import DeadlineExceeded, call_with_deadline

logger = logging.getLogger(__name__)

RESEND_API_URL = 'https://api.resend.com/emails'

# Seconds; total deadline for the call, also the connect and read timeout
REQUEST_TIMEOUT = 10

EMAIL_FAILED_MESSAGE = 'Failed to send your message. Please try again later.'


def send_email(
    config: EmailConfig,
    subject: str,
    html_body: str,
    reply_to: Optional[str] = None,
    timeout: float = REQUEST_TIMEOUT
) -> DispatchResult:
    """
    Send an HTML email to the configured recipient.

    Args:
        config: API key, recipient and sender
        subject: Email subject
        html_body: Rendered HTML body
        reply_to: Address replies should go to (the submitter)
        timeout: Seconds before the call is aborted

    Returns:
        DispatchResult with the Resend email id

    Raises:
        ProviderTimeoutError: If Resend did not answer within the timeout
        ProviderError: For network failures and non-2xx responses
    """
    headers = {
        'Authorization': f'Bearer {config.api_key}',
        'Content-Type': 'application/json',
    }
    payload = {
        'from': config.from_address,
        'to': [config.recipient],
        'subject': subject,
        'html': html_body,
    }
    if reply_to:
        payload['reply_to'] = reply_to

    logger.info(f"Sending email via Resend: subject_length={len(subject)}, html_length={len(html_body)}")
    start_time = time.time()

    try:
        response = call_with_deadline(
            timeout, requests.post, RESEND_API_URL, json=payload, headers=headers, timeout=timeout
        )
    except (requests.exceptions.Timeout, DeadlineExceeded):
        logger.error(f"Resend request timeout after {timeout}s")
        raise ProviderTimeoutError(f"Resend API timeout after {timeout}s")
    except requests.exceptions.RequestException as e:
        logger.error(f"Resend network error: {e}")
        raise ProviderError(f"Resend network error: {e}", public_message=EMAIL_FAILED_MESSAGE)

    elapsed = time.time() - start_time

    try:
        data = response.json()
    except ValueError:
        data = {}

    if not response.ok:
        # Full provider response goes to the logs only
        logger.error(
            f"Resend API error: status={response.status_code}, "
            f"elapsed={elapsed:.2f}s, body={response.text}"
        )
        raise ProviderError(
            f"Resend API returned {response.status_code}: {response.text}",
            public_message=EMAIL_FAILED_MESSAGE,
            status_code=response.status_code
        )

    email_id = data.get('id') if isinstance(data, dict) else None
    logger.info(f"Email sent via Resend: id={email_id}, elapsed={elapsed:.2f}s")

    return DispatchResult(ok=True, external_id=email_id)
