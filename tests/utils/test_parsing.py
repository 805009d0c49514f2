# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Unit tests for ticket reference and override flag parsing.

Covers:
    - parse_message() anchored ticket key extraction
    - coerce_flag_value() boolean / number / string coercion
    - parse_pull_request_flags() multi-line scanning, comments, duplicates
"""

import math

import pytest

from ticketgate.classes import FlagKind, FlagValue, flag_enabled
from ticketgate.utils.parsing import coerce_flag_value, parse_message, parse_pull_request_flags

# ============================================================================
# parse_message
# ============================================================================


class TestParseMessage:
    def test_ticket_at_start(self):
        assert parse_message('ABC-123 fix bug') == 'ABC-123'

    def test_ticket_mid_string(self):
        assert parse_message('fix ABC-123 bug') is None

    def test_no_boundary_space(self):
        assert parse_message('ABC-123fix') is None

    def test_ticket_alone(self):
        """A bare key without a following word is not a reference."""
        assert parse_message('ABC-123') is None
        assert parse_message('ABC-123 ') is None

    def test_space_then_punctuation(self):
        assert parse_message('ABC-123 (fix)') is None

    def test_double_space(self):
        assert parse_message('ABC-123  fix') is None

    def test_lowercase_project_key(self):
        assert parse_message('abc-123 fix bug') is None

    def test_digit_after_space(self):
        assert parse_message('CLDR-9 2nd attempt') == 'CLDR-9'

    def test_only_first_line_matters(self):
        assert parse_message('ICU-22 Update data\n\nSee also ICU-23 follow-up') == 'ICU-22'

    def test_second_line_ticket_ignored(self):
        assert parse_message('Update data\nICU-22 follow-up') is None

    @pytest.mark.parametrize('message', ['', None])
    def test_empty(self, message):
        assert parse_message(message) is None


# ============================================================================
# coerce_flag_value
# ============================================================================


class TestCoerceFlagValue:
    def test_true(self):
        assert coerce_flag_value('true') == FlagValue(FlagKind.BOOLEAN, True)

    def test_false(self):
        assert coerce_flag_value('false') == FlagValue(FlagKind.BOOLEAN, False)

    def test_boolean_literal_is_case_sensitive(self):
        assert coerce_flag_value('True') == FlagValue(FlagKind.STRING, 'True')

    def test_float(self):
        assert coerce_flag_value('3.5') == FlagValue(FlagKind.NUMBER, 3.5)

    def test_negative_exponent(self):
        assert coerce_flag_value('-1e3') == FlagValue(FlagKind.NUMBER, -1000.0)

    def test_leading_number_prefix(self):
        """Like parseFloat, only the numeric prefix is kept."""
        assert coerce_flag_value('2 commits') == FlagValue(FlagKind.NUMBER, 2.0)

    def test_infinity(self):
        value = coerce_flag_value('Infinity')
        assert value.kind == FlagKind.NUMBER
        assert math.isinf(value.value)

    def test_string(self):
        assert coerce_flag_value('x') == FlagValue(FlagKind.STRING, 'x')

    def test_empty_string(self):
        assert coerce_flag_value('') == FlagValue(FlagKind.STRING, '')


# ============================================================================
# parse_pull_request_flags
# ============================================================================


class TestParsePullRequestFlags:
    def test_mixed_types_with_comment(self):
        flags = parse_pull_request_flags('FOO=true\nBAR=3.5 # comment\nBAZ=x')
        assert flags == {
            'FOO': FlagValue(FlagKind.BOOLEAN, True),
            'BAR': FlagValue(FlagKind.NUMBER, 3.5),
            'BAZ': FlagValue(FlagKind.STRING, 'x'),
        }

    def test_last_duplicate_wins(self):
        flags = parse_pull_request_flags('ALLOW_MANY_COMMITS=true\nALLOW_MANY_COMMITS=false')
        assert flags == {'ALLOW_MANY_COMMITS': FlagValue(FlagKind.BOOLEAN, False)}

    def test_flags_among_prose(self):
        body = 'This PR fixes the widget.\n\nDISABLE_JIRA_ISSUE_MATCH=true\n\nThanks!'
        assert parse_pull_request_flags(body) == {'DISABLE_JIRA_ISSUE_MATCH': FlagValue(FlagKind.BOOLEAN, True)}

    def test_crlf_line_endings(self):
        flags = parse_pull_request_flags('FOO=true\r\nBAR=x\r\n')
        assert flags == {
            'FOO': FlagValue(FlagKind.BOOLEAN, True),
            'BAR': FlagValue(FlagKind.STRING, 'x'),
        }

    def test_comment_without_space(self):
        assert parse_pull_request_flags('FOO=bar#note') == {'FOO': FlagValue(FlagKind.STRING, 'bar')}

    def test_trailing_whitespace_without_comment_is_kept(self):
        assert parse_pull_request_flags('FOO=true  ') == {'FOO': FlagValue(FlagKind.STRING, 'true  ')}

    def test_indented_line_ignored(self):
        assert parse_pull_request_flags('  FOO=true') == {}

    def test_lowercase_key_ignored(self):
        assert parse_pull_request_flags('foo=true') == {}

    def test_key_with_digits_ignored(self):
        assert parse_pull_request_flags('FOO2=true') == {}

    def test_value_containing_equals(self):
        assert parse_pull_request_flags('FOO=a=b') == {'FOO': FlagValue(FlagKind.STRING, 'a=b')}

    def test_no_flags(self):
        assert parse_pull_request_flags('Just a description') == {}

    @pytest.mark.parametrize('body', ['', None])
    def test_empty_body(self, body):
        assert parse_pull_request_flags(body) == {}


# ============================================================================
# Flag truthiness
# ============================================================================


class TestFlagEnabled:
    @pytest.mark.parametrize(
        'body, expected',
        [
            ('FLAG=true', True),
            ('FLAG=false', False),
            ('FLAG=1', True),
            ('FLAG=0', False),
            ('FLAG=yes', True),
            ('FLAG=', False),
        ],
    )
    def test_truthiness(self, body, expected):
        assert flag_enabled(parse_pull_request_flags(body), 'FLAG') is expected

    def test_missing_key(self):
        assert flag_enabled({}, 'FLAG') is False
