# The MIT License (MIT)
# Copyright © 2025 Entrius
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

import bittensor as bt
import requests

from ticketgate.classes import Commit, CommitStatus
from ticketgate.constants import (
    BASE_GITHUB_API_URL,
    GITHUB_REQUEST_TIMEOUT,
    MAX_COMMITS_PER_PAGE,
    MAX_STATUS_DESCRIPTION_LENGTH,
)

# =============================================================================
# Rate Limit Configuration
# =============================================================================
RATE_LIMIT_MIN_REMAINING = 10  # Remaining requests at which a warning is logged


class GitHubAPIError(requests.HTTPError):
    """Raised when the GitHub API answers with an unexpected status code."""

    def __init__(self, message: str, status_code: Optional[int] = None, response: Optional[requests.Response] = None):
        super().__init__(message, response=response)
        self.status_code = status_code


@dataclass
class RateLimitInfo:
    """Represents GitHub API rate limit information extracted from response headers."""

    limit: int  # Maximum requests allowed per hour
    remaining: int  # Requests remaining in current window
    reset_timestamp: int  # Unix timestamp when the rate limit resets
    used: int  # Requests used in current window

    @property
    def seconds_until_reset(self) -> int:
        """Calculate seconds until rate limit resets."""
        current_time = int(time.time())
        return max(0, self.reset_timestamp - current_time)

    def __str__(self) -> str:
        return f"RateLimit(remaining={self.remaining}/{self.limit}, resets_in={self.seconds_until_reset}s)"


def parse_rate_limit_headers(response: requests.Response) -> Optional[RateLimitInfo]:
    """
    Parse GitHub API rate limit information from response headers.

    Args:
        response: The HTTP response from GitHub API

    Returns:
        RateLimitInfo object if headers are present, None otherwise
    """
    headers = response.headers

    try:
        limit = int(headers.get('X-RateLimit-Limit', 0))
        remaining = int(headers.get('X-RateLimit-Remaining', 0))
        reset_timestamp = int(headers.get('X-RateLimit-Reset', 0))
        used = int(headers.get('X-RateLimit-Used', 0))

        if limit == 0 and reset_timestamp == 0:
            return None

        return RateLimitInfo(limit=limit, remaining=remaining, reset_timestamp=reset_timestamp, used=used)
    except (ValueError, TypeError) as e:
        bt.logging.debug(f"Could not parse rate limit headers: {e}")
        return None


def check_preemptive_rate_limit(response: requests.Response) -> None:
    """
    Log a warning when the remaining GitHub API budget is running low.

    Args:
        response: The HTTP response from GitHub API
    """
    rate_limit_info = parse_rate_limit_headers(response)

    if rate_limit_info:
        if rate_limit_info.remaining <= RATE_LIMIT_MIN_REMAINING:
            bt.logging.warning(
                f"Approaching GitHub API rate limit: {rate_limit_info.remaining} requests remaining, "
                f"resets in {rate_limit_info.seconds_until_reset}s"
            )
        elif rate_limit_info.remaining <= rate_limit_info.limit * 0.1:
            bt.logging.info(
                f"GitHub API rate limit status: {rate_limit_info.remaining}/{rate_limit_info.limit} remaining"
            )


def make_headers(token: str) -> Dict[str, str]:
    """Build standard GitHub HTTP headers for a token.

    Args:
        token (str): GitHub token
    Returns:
        Dict[str, str]: Mapping of HTTP header names to values.
    """
    return {
        "Authorization": f"token {token}",
        "Accept": "application/vnd.github.v3+json",
    }


def get_pull_request_commits(
    owner: str, repo: str, pr_number: int, token: str, api_url: str = BASE_GITHUB_API_URL
) -> List[Commit]:
    '''
    Get the commits of a PR, in the order GitHub lists them.
    Only the first page is fetched, so at most MAX_COMMITS_PER_PAGE commits are returned.

    Args:
        owner (str): Repository owner login
        repo (str): Repository name
        pr_number (int): PR number
        token (str): GitHub token
        api_url (str): GitHub REST API base URL
    Returns:
        List[Commit]: Commits of the PR
    Raises:
        GitHubAPIError: if GitHub does not answer with 200
    '''
    response = requests.get(
        f'{api_url}/repos/{owner}/{repo}/pulls/{pr_number}/commits',
        headers=make_headers(token),
        params={'per_page': MAX_COMMITS_PER_PAGE},
        timeout=GITHUB_REQUEST_TIMEOUT,
    )

    if response.status_code != 200:
        raise GitHubAPIError(
            f"Failed to get commits for PR #{pr_number} in {owner}/{repo}: status {response.status_code}",
            status_code=response.status_code,
            response=response,
        )

    check_preemptive_rate_limit(response)
    commits = [Commit.from_github_response(item) for item in response.json()]
    bt.logging.debug(f"Fetched {len(commits)} commits for PR #{pr_number} in {owner}/{repo}")
    return commits


def truncate_description(description: str) -> str:
    """Fit a status description into GitHub's length limit."""
    if len(description) <= MAX_STATUS_DESCRIPTION_LENGTH:
        return description
    return description[: MAX_STATUS_DESCRIPTION_LENGTH - 3] + '...'


def create_commit_status(
    repository: str, sha: str, status: CommitStatus, token: str, api_url: str = BASE_GITHUB_API_URL
) -> None:
    '''
    Report one named check against a commit.

    Args:
        repository (str): Repository in format 'owner/repo'
        sha (str): Commit SHA the status is attached to (the PR head)
        status (CommitStatus): Check name, outcome, description and optional detail URL
        token (str): GitHub token
        api_url (str): GitHub REST API base URL
    Raises:
        GitHubAPIError: if GitHub does not answer with 201
    '''
    payload = {
        'state': status.state,
        'context': status.context,
        'description': truncate_description(status.description),
    }
    if status.target_url:
        payload['target_url'] = status.target_url

    response = requests.post(
        f'{api_url}/repos/{repository}/statuses/{sha}',
        headers=make_headers(token),
        json=payload,
        timeout=GITHUB_REQUEST_TIMEOUT,
    )

    if response.status_code != 201:
        raise GitHubAPIError(
            f"Failed to create '{status.context}' status on {repository}@{sha[:7]}: status {response.status_code}",
            status_code=response.status_code,
            response=response,
        )

    check_preemptive_rate_limit(response)
