# The MIT License (MIT)
# Copyright © 2025 Entrius
import re

# =============================================================================
# GitHub API
# =============================================================================
BASE_GITHUB_API_URL = "https://api.github.com"
MAX_COMMITS_PER_PAGE = 100  # GitHub caps the PR commits endpoint at one page of 100
MAX_STATUS_DESCRIPTION_LENGTH = 140
GITHUB_REQUEST_TIMEOUT = 30  # seconds

# =============================================================================
# Jira API
# =============================================================================
JIRA_ISSUE_ENDPOINT = "/rest/api/2/issue/{issue_key}"
JIRA_REQUEST_TIMEOUT = 30  # seconds

ACCEPTED_JIRA_STATUSES = ('Accepted', 'Reviewing', 'Review Feedback')

# =============================================================================
# Message Grammar
# =============================================================================
# Ticket key at the very start of a message, then one space and a word character.
JIRA_COMMIT_PATTERN = re.compile(r'^([A-Z]+-\d+) \w', re.ASCII)

# One override flag per line: KEY=value, optionally followed by a # comment.
PR_BODY_VAR_PATTERN = re.compile(r'^([A-Z_]+)=(.*?)(\s*#.*)?$')

# Line terminators recognised when scanning a PR body.
LINE_TERMINATOR_PATTERN = re.compile('\r\n|\r|\n|\u2028|\u2029')

# Leading float literal, the same prefix that JavaScript's parseFloat accepts.
FLOAT_PREFIX_PATTERN = re.compile(r'^\s*[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)', re.ASCII)

# =============================================================================
# Branches
# =============================================================================
MAINT_MERGE_BASE_BRANCHES = ('master', 'main')
MAINT_BRANCH_PREFIX = 'maint/'

# =============================================================================
# Override Flags
# =============================================================================
DISABLE_JIRA_ISSUE_MATCH = 'DISABLE_JIRA_ISSUE_MATCH'
ALLOW_MANY_COMMITS = 'ALLOW_MANY_COMMITS'

# =============================================================================
# Status Checks
# =============================================================================
JIRA_TICKET_CHECK = 'jira-ticket'
SINGLE_COMMIT_CHECK = 'single-commit'
MAINT_MERGE_CHECK = 'maint-merge'

MAINT_MERGE_REMINDER = 'Reminder: use a MERGE COMMIT and new ticket in the message.'
