# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Shared pytest fixtures for ticketgate tests.

Usage:
    Fixtures are automatically available in all test files under tests/

    # In your test file:
    def test_something(pr_factory, commit_factory):
        pr = pr_factory(title='ABC-1 Fix it', base_ref='main', head_ref='maint/1.2')
        commits = commit_factory('ABC-1 Fix it', count=3)
        ...
"""

from typing import Any, Dict, List

import pytest

from ticketgate.classes import Commit, PullRequest

# ============================================================================
# Payload Fixtures
# ============================================================================


def build_pr_payload(**overrides: Any) -> Dict[str, Any]:
    """Raw GitHub pull_request object with sensible defaults."""
    payload = {
        'number': 42,
        'title': 'ABC-123 Fix the widget',
        'body': '',
        'state': 'open',
        'base': {
            'ref': 'main',
            'sha': 'b' * 40,
            'repo': {'name': 'widgets', 'full_name': 'acme/widgets', 'owner': {'login': 'acme'}},
        },
        'head': {
            'ref': 'feature/widget',
            'sha': 'a' * 40,
            'repo': {'name': 'widgets', 'full_name': 'contributor/widgets', 'owner': {'login': 'contributor'}},
        },
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def pr_payload() -> Dict[str, Any]:
    return build_pr_payload()


# ============================================================================
# Model Factories
# ============================================================================


@pytest.fixture
def pr_factory():
    """Create a PullRequest with defaults, overriding any field by keyword."""

    def _create(**overrides: Any) -> PullRequest:
        fields = dict(
            number=42,
            title='ABC-123 Fix the widget',
            body='',
            state='open',
            base_ref='main',
            head_ref='feature/widget',
            head_sha='a' * 40,
            base_repo_full_name='acme/widgets',
            head_repo_full_name='contributor/widgets',
            owner='acme',
            repo='widgets',
        )
        fields.update(overrides)
        return PullRequest(**fields)

    return _create


@pytest.fixture
def maint_pr(pr_factory) -> PullRequest:
    """Same-repository merge of maint/1.2 into main."""
    return pr_factory(base_ref='main', head_ref='maint/1.2', head_repo_full_name='acme/widgets')


@pytest.fixture
def commit_factory():
    """Create `count` commits sharing one message."""

    def _create(message: str = 'ABC-123 Fix the widget', count: int = 1) -> List[Commit]:
        return [Commit(short_sha=f'{i:07x}', message=message) for i in range(count)]

    return _create
