# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Parsers for ticket references and override flags found in PR text."""

from typing import Optional

from ticketgate.classes import FlagKind, FlagValue, PRFlags
from ticketgate.constants import (
    FLOAT_PREFIX_PATTERN,
    JIRA_COMMIT_PATTERN,
    LINE_TERMINATOR_PATTERN,
    PR_BODY_VAR_PATTERN,
)


def parse_message(message: Optional[str]) -> Optional[str]:
    """Extract the Jira ticket key a commit message or PR title starts with.

    Args:
        message (Optional[str]): Commit message or PR title

    Returns:
        Optional[str]: Ticket key such as 'ABC-123', or None if the text does not start with one
    """
    if not message:
        return None
    match = JIRA_COMMIT_PATTERN.match(message)
    if not match:
        return None
    return match.group(1)


def coerce_flag_value(raw: str) -> FlagValue:
    """Coerce a raw flag value: boolean literal, then leading number, then string."""
    if raw == 'true':
        return FlagValue(FlagKind.BOOLEAN, True)
    if raw == 'false':
        return FlagValue(FlagKind.BOOLEAN, False)
    number = FLOAT_PREFIX_PATTERN.match(raw)
    if number:
        return FlagValue(FlagKind.NUMBER, float(number.group(0)))
    return FlagValue(FlagKind.STRING, raw)


def parse_pull_request_flags(body: Optional[str]) -> PRFlags:
    """Collect KEY=value override flags from every line of a PR description.

    Args:
        body (Optional[str]): PR description

    Returns:
        PRFlags: Flags keyed by name. A key repeated on a later line overwrites the earlier value.
    """
    flags: PRFlags = {}
    if not body:
        return flags

    for line in LINE_TERMINATOR_PATTERN.split(body):
        match = PR_BODY_VAR_PATTERN.match(line)
        if match:
            flags[match.group(1)] = coerce_flag_value(match.group(2))
    return flags
