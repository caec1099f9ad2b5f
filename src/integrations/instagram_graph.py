"""
Instagram Graph API integration.

Fetches recent media for a Business or Creator account and projects it
into portfolio feed items.
"""

import logging
import time
from typing import Any, Dict, List

import requests

from domain.errors import ProviderError, ProviderTimeoutError
from domain.models import FeedItem, InstagramConfig
from integrations.deadline import DeadlineExceeded, call_with_deadline

logger = logging.getLogger(__name__)

GRAPH_API_URL = 'https://graph.facebook.com'
MEDIA_FIELDS = 'id,media_url,thumbnail_url,caption,permalink,media_type'
FEED_LIMIT = 24
CAPTION_MAX_LENGTH = 120

# Seconds; the read path uses a shorter bound than the write paths
REQUEST_TIMEOUT = 8

DISPLAYABLE_MEDIA_TYPES = ('IMAGE', 'CAROUSEL_ALBUM')


def media_url(config: InstagramConfig) -> str:
    return f"{GRAPH_API_URL}/{config.api_version}/{config.user_id}/media"


def fetch_media(config: InstagramConfig, timeout: float = REQUEST_TIMEOUT) -> List[Dict[str, Any]]:
    """
    Fetch the raw media list for the configured account.

    Args:
        config: Account id and access token
        timeout: Seconds before the call is aborted

    Returns:
        List of media objects as returned by the Graph API

    Raises:
        ProviderTimeoutError: If the Graph API did not answer within the timeout
        ProviderError: For network failures and non-2xx responses
    """
    url = media_url(config)
    params = {
        'fields': MEDIA_FIELDS,
        'limit': FEED_LIMIT,
        'access_token': config.access_token,
    }

    # The access token travels as a query parameter; log the path only
    logger.info(f"Fetching Instagram media: {url}")
    start_time = time.time()

    try:
        response = call_with_deadline(timeout, requests.get, url, params=params, timeout=timeout)
    except (requests.exceptions.Timeout, DeadlineExceeded):
        logger.error(f"Instagram API timeout after {timeout}s")
        raise ProviderTimeoutError(f"Instagram API timeout after {timeout}s")
    except requests.exceptions.RequestException as e:
        logger.error(f"Instagram API network error: {e.__class__.__name__}")
        raise ProviderError(f"Instagram API network error: {e.__class__.__name__}")

    elapsed = time.time() - start_time

    if not response.ok:
        logger.error(
            f"Instagram API error: status={response.status_code}, "
            f"elapsed={elapsed:.2f}s, body={response.text}"
        )
        raise ProviderError(
            f"Instagram API returned {response.status_code}",
            status_code=response.status_code
        )

    try:
        data = response.json()
    except ValueError as e:
        logger.error(f"Instagram API returned a non-JSON body: {e}")
        raise ProviderError(f"Instagram API returned a non-JSON body: {e}")

    media = data.get('data') if isinstance(data, dict) else None
    logger.info(f"Fetched {len(media or [])} Instagram media item(s) in {elapsed:.2f}s")
    return media or []


def is_displayable(media: Dict[str, Any]) -> bool:
    """Images and albums are shown; videos only when they have a thumbnail."""
    if not media.get('media_url'):
        return False

    media_type = media.get('media_type')
    if media_type in DISPLAYABLE_MEDIA_TYPES:
        return True
    return media_type == 'VIDEO' and bool(media.get('thumbnail_url'))


def to_feed_item(media: Dict[str, Any]) -> FeedItem:
    media_id = str(media.get('id', ''))
    return FeedItem(
        id=media_id,
        url=media['media_url'],
        thumb=media.get('thumbnail_url') or media['media_url'],
        caption=(media.get('caption') or '')[:CAPTION_MAX_LENGTH],
        link=media.get('permalink') or f"https://www.instagram.com/p/{media_id}/"
    )


def build_feed(media_items: List[Dict[str, Any]], limit: int = FEED_LIMIT) -> List[FeedItem]:
    """Filter to displayable media, cap to the limit and project to feed items."""
    displayable = [m for m in media_items if isinstance(m, dict) and is_displayable(m)]
    return [to_feed_item(m) for m in displayable[:limit]]
