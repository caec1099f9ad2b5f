"""
Amazon SES email integration.

Alternative to Resend for deployments that send from a verified SES
identity. Selected with EMAIL_TRANSPORT=ses; credentials come from the
Lambda execution role.
"""

import logging
import os
import time
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    ReadTimeoutError,
)

from domain.errors import ProviderError, ProviderTimeoutError
from domain.models import DispatchResult, EmailConfig
from integrations.deadline import DeadlineExceeded, call_with_deadline

logger = logging.getLogger(__name__)

# Seconds; total deadline for the call, also the connect and read timeout
REQUEST_TIMEOUT = 10

EMAIL_FAILED_MESSAGE = 'Failed to send your message. Please try again later.'


def _initialize_ses_client(timeout: float = REQUEST_TIMEOUT):
    """
    Initialize boto3 SES client with timeout configuration.

    Returns:
        boto3.client: Configured SES client
    """
    # 0 attempts = 1 total call, the caller must resubmit on failure
    client_config = Config(
        retries={
            'max_attempts': 0,
            'mode': 'standard'
        },
        connect_timeout=timeout,
        read_timeout=timeout
    )

    region = os.environ.get('AWS_REGION', os.environ.get('AWS_DEFAULT_REGION', 'us-east-1'))

    client = boto3.client('ses', region_name=region, config=client_config)

    logger.info(f"SES client initialized: region={region}, timeout={timeout}s, max_attempts=0 (no retries)")
    return client


# Module-level client (connection pool reused across invocations, holds no request data)
ses_client = _initialize_ses_client()


def send_email(
    config: EmailConfig,
    subject: str,
    html_body: str,
    reply_to: Optional[str] = None
) -> DispatchResult:
    """
    Send an HTML email through SES.

    Args:
        config: Recipient and verified sender
        subject: Email subject
        html_body: Rendered HTML body
        reply_to: Address replies should go to (the submitter)

    Returns:
        DispatchResult with the SES MessageId

    Raises:
        ProviderTimeoutError: If SES did not answer within the timeout
        ProviderError: For AWS service and client errors
    """
    params = {
        'Source': config.from_address,
        'Destination': {'ToAddresses': [config.recipient]},
        'Message': {
            'Subject': {'Data': subject, 'Charset': 'UTF-8'},
            'Body': {'Html': {'Data': html_body, 'Charset': 'UTF-8'}},
        },
    }
    if reply_to:
        params['ReplyToAddresses'] = [reply_to]

    logger.info(f"Sending email via SES: subject_length={len(subject)}, html_length={len(html_body)}")
    start_time = time.time()

    try:
        response = call_with_deadline(REQUEST_TIMEOUT, ses_client.send_email, **params)
    except (ConnectTimeoutError, ReadTimeoutError, DeadlineExceeded) as e:
        logger.error(f"SES request timeout: {e}")
        raise ProviderTimeoutError(f"SES timeout: {e}")
    except ClientError as e:
        error_code = e.response.get('Error', {}).get('Code', 'Unknown')
        error_message = e.response.get('Error', {}).get('Message', str(e))
        logger.error(f"SES send_email failed: error_code={error_code}, error_message={error_message}")
        raise ProviderError(
            f"SES error {error_code}: {error_message}",
            public_message=EMAIL_FAILED_MESSAGE
        )
    except BotoCoreError as e:
        logger.error(f"SES client error: {e}")
        raise ProviderError(f"SES client error: {e}", public_message=EMAIL_FAILED_MESSAGE)

    elapsed = time.time() - start_time
    message_id = response.get('MessageId')
    logger.info(f"Email sent via SES: message_id={message_id}, elapsed={elapsed:.2f}s")

    return DispatchResult(ok=True, external_id=message_id)
