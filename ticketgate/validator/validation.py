# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Consistency checks between a PR title, its commits, and the Jira ticket it names."""

import asyncio
from typing import Callable, List, Optional, Tuple

import bittensor as bt

from ticketgate.classes import Commit, PRFlags, PullRequest, TicketState, ValidationOutcome, flag_enabled
from ticketgate.constants import ACCEPTED_JIRA_STATUSES, DISABLE_JIRA_ISSUE_MATCH, MAX_COMMITS_PER_PAGE
from ticketgate.utils.github_api_tools import get_pull_request_commits
from ticketgate.utils.jira_api_tools import get_jira_issue_status
from ticketgate.utils.parsing import parse_message, parse_pull_request_flags
from ticketgate.validator.utils.config import (
    GITHUB_API_URL,
    GITHUB_TOKEN,
    JIRA_API_TOKEN,
    JIRA_EMAIL,
    JIRA_URL,
)

TicketFetcher = Callable[[str], Optional[TicketState]]
CommitsFetcher = Callable[[PullRequest], List[Commit]]

MISMATCH_MESSAGE = (
    'Please fix your commit messages to have the same ticket number as the pull request. '
    f'If the inconsistency is intentional, you can disable this warning with {DISABLE_JIRA_ISSUE_MATCH}=true '
    'in the PR description.'
)


def fetch_ticket_state(issue_key: str) -> Optional[TicketState]:
    return get_jira_issue_status(issue_key, JIRA_URL, JIRA_EMAIL, JIRA_API_TOKEN)


def fetch_commits(pull_request: PullRequest) -> List[Commit]:
    return get_pull_request_commits(
        pull_request.owner, pull_request.repo, pull_request.number, GITHUB_TOKEN, GITHUB_API_URL
    )


def check_ticket_state(issue_key: str, ticket: Optional[TicketState]) -> Optional[str]:
    """Verify the ticket exists and is in an accepted workflow status. Returns error string or None."""
    if ticket is None:
        return f'Jira ticket {issue_key} not found'
    if ticket.status not in ACCEPTED_JIRA_STATUSES:
        return f'Jira ticket {issue_key} is not accepted; it has status {ticket.status}'
    return None


def check_commits(issue_key: str, commits: List[Commit], flags: PRFlags, is_maint_merge: bool) -> Optional[str]:
    """Verify every commit references the PR ticket. Stops at the first offending commit.

    A commit naming a different ticket is allowed for maintenance merges and when
    DISABLE_JIRA_ISSUE_MATCH is set; a commit naming no ticket never is.
    """
    allow_mismatch = is_maint_merge or flag_enabled(flags, DISABLE_JIRA_ISSUE_MATCH)

    for commit in commits:
        commit_issue_key = parse_message(commit.message)
        if commit_issue_key is None:
            return f'Commit message for {commit.short_sha} fails validation'
        if commit_issue_key != issue_key and not allow_mismatch:
            bt.logging.debug(f'Commit {commit.short_sha} references {commit_issue_key}, PR references {issue_key}')
            return MISMATCH_MESSAGE

    if len(commits) == MAX_COMMITS_PER_PAGE:
        return f'PR has more than {MAX_COMMITS_PER_PAGE} commits; please rebase and squash'

    return None


async def validate_pull_request(
    pull_request: PullRequest,
    get_ticket_state: TicketFetcher = fetch_ticket_state,
    get_commits: CommitsFetcher = fetch_commits,
) -> Tuple[Optional[ValidationOutcome], Optional[str]]:
    """Run every consistency check for a PR.

    The ticket lookup and the commit listing run concurrently; an exception from
    either propagates and no partial result is used.

    Args:
        pull_request (PullRequest): The PR under validation
        get_ticket_state (TicketFetcher): Issue tracker lookup, None when the ticket does not exist
        get_commits (CommitsFetcher): Commit listing for the PR

    Returns:
        Tuple[Optional[ValidationOutcome], Optional[str]]: (outcome, None) when all checks pass,
        otherwise (None, reason) for the first failing check
    """
    flags = parse_pull_request_flags(pull_request.body)
    if flags:
        bt.logging.info(f'PR flags: {", ".join(f"{key}={value}" for key, value in flags.items())}')

    issue_key = parse_message(pull_request.title)
    if not issue_key:
        return None, 'Pull request title must start with a Jira ticket ID'

    ticket, commits = await asyncio.gather(
        asyncio.to_thread(get_ticket_state, issue_key),
        asyncio.to_thread(get_commits, pull_request),
    )
    is_maint_merge = pull_request.is_maint_merge
    bt.logging.info(
        f'PR #{pull_request.number} in {pull_request.full_name}: ticket {issue_key}, '
        f'{len(commits)} commits, maint merge: {is_maint_merge}'
    )

    error = check_ticket_state(issue_key, ticket)
    if error:
        return None, error

    error = check_commits(issue_key, commits, flags, is_maint_merge)
    if error:
        return None, error

    return (
        ValidationOutcome(
            ticket_pass=True,
            ticket_message=f'Jira ticket {issue_key} has status {ticket.status}',
            commit_count=len(commits),
            is_maint_merge=is_maint_merge,
            flags=flags,
        ),
        None,
    )
