# encoding: utf-8
"""test_completer.py

Unit tests for bofh.cli.completer
"""

import pytest

from bofh.cli.completer import Completions, complete
from bofh.schema.builder import build


CATALOGUE = {
    'user_create': [['user', 'create'], [{'type': 'uname'}]],
    'user_info': [['user', 'info'], [{'type': 'uname'}]],
    'usermap_list': [['usermap', 'list'], []],
    'misc_about': [['misc', 'about'], None],
    'misc_check': [['misc', 'check'], 'prompt_func'],
}


class TestCompletions:
    """Test the Completions value"""

    def test_single_replacement(self) -> None:
        """Test a single candidate is applied with a trailing space"""
        assert Completions(0, ['user']).replacement == 'user '

    def test_no_replacement(self) -> None:
        """Test zero or several candidates can not be applied"""
        assert Completions(0, []).replacement is None
        assert Completions(0, ['user', 'usermap']).replacement is None


class TestCompleteGroups:
    """Test completion of the first word"""

    def setup_method(self) -> None:
        self.schema = build(CATALOGUE)

    def test_empty_line(self) -> None:
        """Test an empty line offers every group"""
        assert complete(self.schema, '', 0) == Completions(0, ['misc', 'user', 'usermap'])

    def test_whitespace_only(self) -> None:
        """Test a line of spaces offers every group at the cursor"""
        assert complete(self.schema, '   ', 3) == Completions(3, ['misc', 'user', 'usermap'])

    def test_ambiguous_prefix(self) -> None:
        """Test both groups are offered, in alphabetic order"""
        assert complete(self.schema, 'us', 2) == Completions(0, ['user', 'usermap'])

    def test_unique_prefix(self) -> None:
        """Test a unique prefix has a replacement"""
        completions = complete(self.schema, 'm', 1)
        assert completions == Completions(0, ['misc'])
        assert completions.replacement == 'misc '

    def test_full_name_prefix_of_another(self) -> None:
        """Test a full group name that also starts a longer one stays ambiguous"""
        completions = complete(self.schema, 'user', 4)
        assert completions.candidates == ['user', 'usermap']
        assert completions.replacement is None

    def test_unknown_prefix(self) -> None:
        """Test nothing is offered for an unknown prefix"""
        assert complete(self.schema, 'xyz', 3) == Completions(0, [])

    def test_leading_whitespace(self) -> None:
        """Test the anchor skips leading whitespace"""
        assert complete(self.schema, '  us', 4) == Completions(2, ['user', 'usermap'])


class TestCompleteCommands:
    """Test completion of the second word"""

    def setup_method(self) -> None:
        self.schema = build(CATALOGUE)

    def test_all_commands(self) -> None:
        """Test a group followed by a space offers all its commands"""
        assert complete(self.schema, 'misc ', 5) == Completions(5, ['about', 'check'])

    def test_group_prefix(self) -> None:
        """Test the group may be given by a unique prefix"""
        assert complete(self.schema, 'mi ', 3) == Completions(3, ['about', 'check'])

    def test_ambiguous_group(self) -> None:
        """Test nothing is offered after an ambiguous group"""
        assert complete(self.schema, 'us ', 3) == Completions(3, [])

    def test_full_name_group_ambiguous(self) -> None:
        """Test 'user' offers no command while 'usermap' exists"""
        assert complete(self.schema, 'user ', 5) == Completions(5, [])
        assert complete(self.schema, 'user cr', 7) == Completions(5, [])

    def test_full_name_group_alone(self) -> None:
        """Test 'user' offers its commands once no other group starts with it"""
        schema = build({name: value for name, value in CATALOGUE.items() if not name.startswith('usermap')})
        assert complete(schema, 'user ', 5) == Completions(5, ['create', 'info'])
        assert complete(schema, 'user cr', 7) == Completions(5, ['create'])

    def test_unknown_group(self) -> None:
        """Test nothing is offered after an unknown group"""
        assert complete(self.schema, 'xyz ', 4) == Completions(4, [])

    def test_command_prefix(self) -> None:
        """Test a command prefix is completed from its start"""
        completions = complete(self.schema, 'misc a', 6)
        assert completions == Completions(5, ['about'])
        assert completions.replacement == 'about '

    def test_several_spaces(self) -> None:
        """Test every whitespace character moves the anchor"""
        assert complete(self.schema, 'misc   c', 8) == Completions(7, ['check'])

    def test_tab_separator(self) -> None:
        """Test tabs count as whitespace"""
        assert complete(self.schema, 'misc\tab', 7) == Completions(5, ['about'])


class TestCompleteArguments:
    """Test nothing is completed past the command"""

    def setup_method(self) -> None:
        self.schema = build(CATALOGUE)

    @pytest.mark.parametrize(
        'line',
        [
            'user create ',
            'user create jdoe',
            'user create jdoe ',
            'misc check something else',
        ],
    )
    def test_no_candidates(self, line: str) -> None:
        """Test arguments get no candidates"""
        assert complete(self.schema, line, len(line)).candidates == []

    def test_anchor_inside_argument(self) -> None:
        """Test the anchor points at the argument being typed"""
        assert complete(self.schema, 'user create jd', 14).anchor == 12


class TestCompleteCursor:
    """Test only the text before the cursor is considered"""

    def setup_method(self) -> None:
        self.schema = build(CATALOGUE)

    def test_cursor_in_first_word(self) -> None:
        """Test completing in the middle of a line"""
        assert complete(self.schema, 'user create', 2) == Completions(0, ['user', 'usermap'])

    def test_cursor_after_group(self) -> None:
        """Test completing after the group with more text to the right"""
        assert complete(self.schema, 'misc about', 5) == Completions(5, ['about', 'check'])
