# The MIT License (MIT)
# Copyright © 2025 Entrius
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

from ticketgate.constants import MAINT_BRANCH_PREFIX, MAINT_MERGE_BASE_BRANCHES

GITHUB_DOMAIN = 'https://github.com/'


class FlagKind(Enum):
    """Type tag for a value parsed from a PR description flag"""

    BOOLEAN = "BOOLEAN"
    NUMBER = "NUMBER"
    STRING = "STRING"


@dataclass(frozen=True)
class FlagValue:
    """A tagged override value: boolean, number, or string."""

    kind: FlagKind
    value: Union[bool, float, str]

    @property
    def is_truthy(self) -> bool:
        """Truthiness as the flag consumers see it.

        false, 0, NaN and the empty string are falsy; everything else is truthy.
        """
        if self.kind == FlagKind.NUMBER:
            return self.value != 0 and not math.isnan(self.value)
        return bool(self.value)

    def __str__(self) -> str:
        if self.kind == FlagKind.BOOLEAN:
            return 'true' if self.value else 'false'
        if self.kind == FlagKind.NUMBER and float(self.value).is_integer():
            return str(int(self.value))
        return str(self.value)


PRFlags = Dict[str, FlagValue]


def flag_enabled(flags: PRFlags, key: str) -> bool:
    """Missing keys are treated as unset."""
    flag = flags.get(key)
    return flag is not None and flag.is_truthy


@dataclass(frozen=True)
class Commit:
    """A single commit on a pull request"""

    short_sha: str
    message: str

    @classmethod
    def from_github_response(cls, commit_info: Dict[str, Any]) -> 'Commit':
        """Create Commit from an item of the GitHub PR commits endpoint"""
        return cls(
            short_sha=commit_info['sha'][:7],
            message=commit_info['commit']['message'],
        )


@dataclass(frozen=True)
class TicketState:
    """Jira issue key and its workflow status name"""

    key: str
    status: str


@dataclass(frozen=True)
class PullRequest:
    """Snapshot of the pull request an event refers to.

    The base repository owns the PR: `owner`/`repo` and every GitHub call target it.
    `head_repo_full_name` is None when the head fork no longer exists.
    """

    number: int
    title: str
    body: str
    state: str
    base_ref: str
    head_ref: str
    head_sha: str
    base_repo_full_name: str
    head_repo_full_name: Optional[str]
    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def url(self) -> str:
        return f"{GITHUB_DOMAIN}{self.full_name}/pull/{self.number}"

    @property
    def is_maint_merge(self) -> bool:
        """Same-repository merge of a maint/* branch into master or main."""
        return (
            self.base_ref in MAINT_MERGE_BASE_BRANCHES
            and self.head_ref.startswith(MAINT_BRANCH_PREFIX)
            and self.head_repo_full_name is not None
            and self.base_repo_full_name == self.head_repo_full_name
        )

    @classmethod
    def from_github_payload(cls, payload: Dict[str, Any]) -> 'PullRequest':
        """Create PullRequest from a pull_request object or a full pull_request event payload"""
        pr = payload.get('pull_request', payload)
        base = pr['base']
        head = pr['head']
        head_repo = head.get('repo') or {}
        return cls(
            number=pr['number'],
            title=pr.get('title') or '',
            body=pr.get('body') or '',
            state=pr.get('state', ''),
            base_ref=base['ref'],
            head_ref=head['ref'],
            head_sha=head['sha'],
            base_repo_full_name=base['repo']['full_name'],
            head_repo_full_name=head_repo.get('full_name'),
            owner=base['repo']['owner']['login'],
            repo=base['repo']['name'],
        )


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of a fully passing validation run, consumed by the status publisher"""

    ticket_pass: bool
    ticket_message: str
    commit_count: int
    is_maint_merge: bool
    flags: PRFlags = field(default_factory=dict)


@dataclass(frozen=True)
class CommitStatus:
    """One named check to report against the PR head commit"""

    context: str
    passed: bool
    description: str
    target_url: Optional[str] = None

    @property
    def state(self) -> str:
        return 'success' if self.passed else 'failure'
