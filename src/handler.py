import logging
from typing import Dict, Any

from domain.models import HttpResponse
from services import config as config_service
from services import responses as response_service
from services.events import request_from_event
from services.logging_config import configure_logging

configure_logging()
logger = logging.getLogger(__name__)


def health_check(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Simple health check endpoint for monitoring.

    Reports which providers are configured as booleans only; variable
    names and values are never exposed.
    """
    request = request_from_event(event)
    headers = response_service.cors_headers(
        config_service.load_cors_settings(),
        request.origin,
        ('GET',)
    )

    if request.method == 'OPTIONS':
        return response_service.preflight_response(headers).to_lambda()

    providers = {
        'github': config_service.is_configured(config_service.load_github_config),
        'email': config_service.is_configured(config_service.load_email_config),
        'instagram': config_service.is_configured(config_service.load_instagram_config),
    }
    logger.info(f"Health check: providers={providers}")

    response: HttpResponse = response_service.json_response(
        200,
        {
            'status': 'healthy',
            'environment': config_service.environment_name(),
            'providers': providers
        },
        headers
    )
    return response.to_lambda()
