"""
AWS Lambda handler: contact form -> GitHub issue.

Thin orchestration layer that delegates to ContactProcessor.
Route: POST /create-issue (OPTIONS for CORS preflight).
"""

from typing import Dict, Any

from domain.contact_processor import ContactProcessor
from domain.dispatcher import IssueDispatcher
from domain.models import DispatchResult
from services import config as config_service
from services.events import request_from_event
from services.logging_config import configure_logging

logger = configure_logging()

SUCCESS_MESSAGE = 'Your inquiry has been submitted successfully!'


def _success_body(result: DispatchResult) -> Dict[str, Any]:
    body: Dict[str, Any] = {'issueNumber': result.external_id}
    if result.url:
        body['issueUrl'] = result.url
    body['message'] = SUCCESS_MESSAGE
    return body


def build_processor() -> ContactProcessor:
    return ContactProcessor(
        name='create-issue',
        load_config=config_service.load_github_config,
        dispatcher=IssueDispatcher(),
        success_body=_success_body
    )


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Create a GitHub issue from a contact form submission.

    Args:
        event: API Gateway / Function URL proxy event
        context: Lambda context

    Returns:
        Proxy response dict (statusCode, headers, body)
    """
    request = request_from_event(event)
    response = build_processor().handle(request)
    logger.info(f"create-issue responded with status {response.status_code}")
    return response.to_lambda()
