"""
Outbound dispatch to notification providers.

Each dispatcher turns a validated Submission into one provider call:
1. Build the provider payload (issue title/body or email subject/HTML)
2. Make exactly one time-bounded call through the integration module
3. Return a DispatchResult, or let the integration's normalized error propagate

No retries: a failed or timed-out call is reported and the client resubmits.
"""

import logging
from datetime import datetime, timezone

from .errors import ConfigurationError, ProviderError, ProviderTimeoutError
from .models import DispatchResult, EmailConfig, FeedResult, GitHubConfig, InstagramConfig, Submission
from services import templates as template_service
from integrations import github_issues
from integrations import instagram_graph
from integrations import resend_email
from integrations import ses_email

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 255
ISSUE_TITLE_PREFIX = 'New Tattoo Inquiry from '
EMAIL_SUBJECT_PREFIX = 'Tattoo inquiry from '

FEED_NOT_CONFIGURED_MESSAGE = (
    'Instagram feed not configured. Set INSTAGRAM_ACCESS_TOKEN and INSTAGRAM_USER_ID.'
)
FEED_UNAVAILABLE_MESSAGE = 'Unable to load Instagram feed.'
FEED_TIMEOUT_MESSAGE = 'Request timeout.'


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2025-01-01T00:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def truncate_title(title: str, max_length: int = MAX_TITLE_LENGTH) -> str:
    """Cut a title to max_length characters, ending in "..." when shortened."""
    if len(title) <= max_length:
        return title
    return title[:max_length - 3] + '...'


def build_issue_title(name: str) -> str:
    return truncate_title(f"{ISSUE_TITLE_PREFIX}{name}")


class IssueDispatcher:
    """
    Files a contact form inquiry as a GitHub issue.

    Returns a DispatchResult carrying the issue number and URL.
    """

    def dispatch(self, submission: Submission, config: GitHubConfig) -> DispatchResult:
        title = build_issue_title(submission.name)
        body = template_service.render_issue_body(
            name=submission.name,
            email=submission.email,
            message=submission.message,
            timestamp=utc_timestamp()
        )

        result = github_issues.create_issue(config, title=title, body=body)
        logger.info(f"Issue dispatch finished: {result!r}")
        return result


class EmailDispatcher:
    """
    Sends a contact form inquiry as an HTML email.

    reply_to is set to the submitter so the studio can answer directly.
    The transport (Resend or SES) comes from EmailConfig.
    """

    def dispatch(self, submission: Submission, config: EmailConfig) -> DispatchResult:
        subject = f"{EMAIL_SUBJECT_PREFIX}{submission.name}"
        html_body = template_service.render_email_html(
            name=submission.name,
            email=submission.email,
            message=submission.message,
            timestamp=utc_timestamp(),
            site_name=config.site_name
        )

        if config.transport == 'ses':
            result = ses_email.send_email(
                config,
                subject=subject,
                html_body=html_body,
                reply_to=submission.email
            )
        else:
            result = resend_email.send_email(
                config,
                subject=subject,
                html_body=html_body,
                reply_to=submission.email
            )

        logger.info(f"Email dispatch finished via {config.transport}: {result!r}")
        return result


class FeedFetcher:
    """
    Loads the Instagram portfolio feed.

    Read path: every failure degrades to FeedResult(ok=False, feed=[])
    instead of raising, so a broken feed never breaks the page.
    """

    def fetch(self, load_config) -> FeedResult:
        """
        Fetch the feed.

        Args:
            load_config: Callable returning InstagramConfig or raising ConfigurationError

        Returns:
            FeedResult (ok=False with a message on any failure)
        """
        try:
            config: InstagramConfig = load_config()
        except ConfigurationError:
            logger.warning("Instagram feed requested but not configured")
            return FeedResult(ok=False, message=FEED_NOT_CONFIGURED_MESSAGE)

        try:
            media = instagram_graph.fetch_media(config)
        except ProviderTimeoutError:
            return FeedResult(ok=False, message=FEED_TIMEOUT_MESSAGE)
        except ProviderError as e:
            logger.warning(f"Instagram feed unavailable: {e.internal_detail}")
            return FeedResult(ok=False, message=FEED_UNAVAILABLE_MESSAGE)

        feed = instagram_graph.build_feed(media)
        logger.info(f"Instagram feed built: {len(feed)} item(s) from {len(media)} media")
        return FeedResult(ok=True, feed=feed)
