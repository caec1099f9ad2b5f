"""
GitHub Issues integration.

Creates one issue per contact form inquiry through the REST API.

Usage:
    from integrations import github_issues

    result = github_issues.create_issue(config, title="...", body="...")
    print(result.external_id, result.url)
"""

import logging
import time

import requests

from domain.errors import ProviderError, ProviderTimeoutError
from domain.models import DispatchResult, GitHubConfig
from integrations.deadline import DeadlineExceeded, call_with_deadline

logger = logging.getLogger(__name__)

GITHUB_API_URL = 'https://api.github.com'
USER_AGENT = 'Tattoo-Studio-Contact-Form'

# Seconds; total deadline for the call, also the connect and read timeout
REQUEST_TIMEOUT = 10

ISSUE_FAILED_MESSAGE = 'Failed to process your inquiry. Please try again later.'


def issues_url(config: GitHubConfig) -> str:
    return f"{GITHUB_API_URL}/repos/{config.owner}/{config.repo}/issues"


def create_issue(
    config: GitHubConfig,
    title: str,
    body: str,
    timeout: float = REQUEST_TIMEOUT
) -> DispatchResult:
    """
    Create a GitHub issue.

    Args:
        config: Repository and token
        title: Issue title
        body: Markdown issue body
        timeout: Seconds before the call is aborted

    Returns:
        DispatchResult with the issue number and html_url

    Raises:
        ProviderTimeoutError: If GitHub did not answer within the timeout
        ProviderError: For network failures and non-2xx responses
    """
    url = issues_url(config)
    headers = {
        'Authorization': f'Bearer {config.token}',
        'Accept': 'application/vnd.github.v3+json',
        'Content-Type': 'application/json',
        'User-Agent': USER_AGENT,
    }
    payload = {
        'title': title,
        'body': body,
        'labels': list(config.labels),
    }

    logger.info(f"Creating GitHub issue: repo={config.owner}/{config.repo}, title_length={len(title)}")
    start_time = time.time()

    try:
        response = call_with_deadline(
            timeout, requests.post, url, json=payload, headers=headers, timeout=timeout
        )
    except (requests.exceptions.Timeout, DeadlineExceeded):
        logger.error(f"GitHub API timeout after {timeout}s: {url}")
        raise ProviderTimeoutError(f"GitHub API timeout after {timeout}s")
    except requests.exceptions.RequestException as e:
        logger.error(f"GitHub API network error: {e}")
        raise ProviderError(
            f"GitHub API network error: {e}",
            public_message=ISSUE_FAILED_MESSAGE
        )

    elapsed = time.time() - start_time

    if not response.ok:
        logger.error(
            f"GitHub API error: status={response.status_code}, "
            f"elapsed={elapsed:.2f}s, body={response.text}"
        )
        raise ProviderError(
            f"GitHub API returned {response.status_code}: {response.text}",
            public_message=ISSUE_FAILED_MESSAGE,
            status_code=response.status_code
        )

    try:
        issue = response.json()
    except ValueError as e:
        logger.error(f"GitHub API returned a non-JSON body: {e}")
        raise ProviderError(
            f"GitHub API returned a non-JSON body: {e}",
            public_message=ISSUE_FAILED_MESSAGE,
            status_code=response.status_code
        )

    logger.info(f"GitHub issue created: number={issue.get('number')}, elapsed={elapsed:.2f}s")

    return DispatchResult(
        ok=True,
        external_id=issue.get('number'),
        url=issue.get('html_url')
    )
