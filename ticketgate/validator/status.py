# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Turn a validation outcome into commit statuses on the PR head."""

import asyncio
from typing import Callable, Iterable, List, Optional

import bittensor as bt

from ticketgate.classes import CommitStatus, PullRequest, ValidationOutcome, flag_enabled
from ticketgate.constants import (
    ALLOW_MANY_COMMITS,
    JIRA_TICKET_CHECK,
    MAINT_MERGE_CHECK,
    MAINT_MERGE_REMINDER,
    SINGLE_COMMIT_CHECK,
)
from ticketgate.utils.github_api_tools import create_commit_status
from ticketgate.validator.utils.config import DO_NOT_TOUCH_REPOS, GITHUB_API_URL, GITHUB_TOKEN

StatusCreator = Callable[[PullRequest, CommitStatus], None]


def post_commit_status(pull_request: PullRequest, status: CommitStatus) -> None:
    create_commit_status(pull_request.full_name, pull_request.head_sha, status, GITHUB_TOKEN, GITHUB_API_URL)


def is_suppressed(pull_request: PullRequest, do_not_touch_repos: Iterable[str]) -> Optional[str]:
    """Return the reason statuses must not be published for this PR, or None."""
    if pull_request.full_name in do_not_touch_repos:
        return f'Not touching: repo is {pull_request.full_name}'
    if pull_request.state != 'open':
        return f'Not touching: PR is {pull_request.state}: {pull_request.number}'
    return None


def single_commit_status(outcome: ValidationOutcome, target_url: Optional[str] = None) -> CommitStatus:
    """Pass for exactly one commit, or for several when a maint merge or ALLOW_MANY_COMMITS permits it."""
    count = outcome.commit_count
    passed = count == 1 or (
        count > 1 and (outcome.is_maint_merge or flag_enabled(outcome.flags, ALLOW_MANY_COMMITS))
    )

    if count == 0:
        description = 'No commits found on PR'
    elif count == 1:
        description = 'This PR includes exactly 1 commit!'
    else:
        description = f'This PR has {count} commits' + ('' if passed else '; consider squashing.')

    return CommitStatus(SINGLE_COMMIT_CHECK, passed, description, target_url)


def build_statuses(outcome: ValidationOutcome, target_url: Optional[str] = None) -> List[CommitStatus]:
    statuses = [
        CommitStatus(JIRA_TICKET_CHECK, outcome.ticket_pass, outcome.ticket_message, target_url),
        single_commit_status(outcome, target_url),
    ]
    if outcome.is_maint_merge:
        # advisory only, always failing
        statuses.append(CommitStatus(MAINT_MERGE_CHECK, False, MAINT_MERGE_REMINDER))
    return statuses


async def publish_statuses(
    pull_request: PullRequest,
    outcome: ValidationOutcome,
    do_not_touch_repos: Optional[Iterable[str]] = None,
    target_url: Optional[str] = None,
    create_status: StatusCreator = post_commit_status,
) -> List[CommitStatus]:
    """Publish the checks for a validated PR concurrently.

    Args:
        pull_request (PullRequest): The validated PR
        outcome (ValidationOutcome): Result of validate_pull_request
        do_not_touch_repos (Optional[Iterable[str]]): owner/repo names to skip, DO_NOT_TOUCH_REPOS by default
        target_url (Optional[str]): Detail link attached to the jira-ticket and single-commit checks
        create_status (StatusCreator): Publishes a single status

    Returns:
        List[CommitStatus]: The statuses published, empty when publishing is suppressed
    """
    if do_not_touch_repos is None:
        do_not_touch_repos = DO_NOT_TOUCH_REPOS

    reason = is_suppressed(pull_request, list(do_not_touch_repos))
    if reason:
        bt.logging.info(reason)
        return []

    statuses = build_statuses(outcome, target_url)
    await asyncio.gather(*[asyncio.to_thread(create_status, pull_request, status) for status in statuses])

    for status in statuses:
        bt.logging.info(f'{status.context}: {status.state} - {status.description}')
    return statuses
