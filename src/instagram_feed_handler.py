"""
AWS Lambda handler: Instagram portfolio feed.

Route: GET /instagram-feed (OPTIONS for CORS preflight).
Policy: the page must never break because of the feed, so every failure
is answered with 200 {ok: false, feed: []}. Only a wrong method gets a 405.
"""

from typing import Dict, Any

from domain.contact_processor import FeedProcessor
from domain.dispatcher import FeedFetcher
from services import config as config_service
from services.events import request_from_event
from services.logging_config import configure_logging

logger = configure_logging()


def build_processor() -> FeedProcessor:
    return FeedProcessor(
        fetcher=FeedFetcher(),
        load_config=config_service.load_instagram_config,
        load_cors=config_service.load_cors_settings
    )


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Return recent Instagram media as portfolio items.

    Returns:
        Proxy response dict; body is {ok, feed:[{id,url,thumb,caption,link}], message?}
    """
    request = request_from_event(event)
    response = build_processor().handle(request)
    logger.info(f"instagram-feed responded with status {response.status_code}")
    return response.to_lambda()
