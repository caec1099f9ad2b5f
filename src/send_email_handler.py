"""
AWS Lambda handler: contact form -> notification email.

Thin orchestration layer that delegates to ContactProcessor.
Route: POST /send-email (OPTIONS for CORS preflight).
Transport: Resend by default, SES when EMAIL_TRANSPORT=ses.
"""

from typing import Dict, Any

from domain.contact_processor import ContactProcessor
from domain.dispatcher import EmailDispatcher
from domain.models import DispatchResult
from services import config as config_service
from services.events import request_from_event
from services.logging_config import configure_logging

logger = configure_logging()

SUCCESS_MESSAGE = "Your inquiry has been sent. We'll get back to you soon!"


def _success_body(result: DispatchResult) -> Dict[str, Any]:
    return {'message': SUCCESS_MESSAGE}


def build_processor() -> ContactProcessor:
    return ContactProcessor(
        name='send-email',
        load_config=config_service.load_email_config,
        dispatcher=EmailDispatcher(),
        success_body=_success_body
    )


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Email a contact form submission to the studio inbox.

    Args:
        event: API Gateway / Function URL proxy event
        context: Lambda context

    Returns:
        Proxy response dict (statusCode, headers, body)
    """
    request = request_from_event(event)
    response = build_processor().handle(request)
    logger.info(f"send-email responded with status {response.status_code}")
    return response.to_lambda()
