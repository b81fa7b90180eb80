# encoding: utf-8
"""test_prompt.py

Unit tests for the prompt_toolkit adapters in bofh.cli.prompt
"""

from unittest.mock import Mock

from prompt_toolkit.completion import CompleteEvent
from prompt_toolkit.document import Document

from bofh.cli.prompt import AMBIGUOUS, KNOWN, UNKNOWN, BofhAutoSuggest, BofhCompleter, BofhLexer
from bofh.cli.session import ShellSession
from bofh.schema.builder import build


CATALOGUE = {
    'user_create': [['user', 'create'], [{'type': 'uname'}]],
    'user_info': [['user', 'info'], [{'type': 'uname'}]],
    'misc_about': [['misc', 'about'], None],
}

# 'user' is also the start of 'usermap'
SHADOWED = dict(CATALOGUE, usermap_list=[['usermap', 'list'], []])


def session(catalogue: dict = CATALOGUE) -> ShellSession:
    return ShellSession(Mock(), build(catalogue))


class TestBofhCompleter:
    """Test completions handed to prompt_toolkit"""

    def setup_method(self) -> None:
        self.completer = BofhCompleter(session())

    def _complete(self, text: str, cursor: int | None = None) -> list:
        document = Document(text, len(text) if cursor is None else cursor)
        return list(self.completer.get_completions(document, CompleteEvent(completion_requested=True)))

    def test_several(self) -> None:
        """Test several candidates are offered as typed words"""
        completer = BofhCompleter(session(SHADOWED))
        completions = list(completer.get_completions(Document('us', 2), CompleteEvent(completion_requested=True)))
        assert [_.text for _ in completions] == ['user', 'usermap']
        assert all(_.start_position == -2 for _ in completions)

    def test_single(self) -> None:
        """Test a single candidate brings a trailing space"""
        completions = self._complete('user c')
        assert len(completions) == 1
        assert completions[0].text == 'create '
        assert completions[0].start_position == -1
        assert completions[0].display_text == 'create'

    def test_after_space(self) -> None:
        """Test nothing is replaced after a space"""
        completions = self._complete('user ')
        assert [_.text for _ in completions] == ['create', 'info']
        assert all(_.start_position == 0 for _ in completions)

    def test_shadowed_group(self) -> None:
        """Test no command is offered after a group name that starts another"""
        completer = BofhCompleter(session(SHADOWED))
        for text in ('user ', 'user c'):
            document = Document(text, len(text))
            assert list(completer.get_completions(document, CompleteEvent(completion_requested=True))) == []

    def test_none(self) -> None:
        assert self._complete('user create jdoe') == []

    def test_cursor(self) -> None:
        """Test the cursor position is used"""
        completions = self._complete('mi about', 2)
        assert [_.text for _ in completions] == ['misc ']


class TestBofhAutoSuggest:
    """Test suggestions handed to prompt_toolkit"""

    def setup_method(self) -> None:
        self.suggest = BofhAutoSuggest(session())

    def _suggest(self, text: str):
        return self.suggest.get_suggestion(Mock(), Document(text, len(text)))

    def test_argument(self) -> None:
        suggestion = self._suggest('user create ')
        assert suggestion is not None
        assert suggestion.text == 'uname'

    def test_command(self) -> None:
        suggestion = self._suggest('mi')
        assert suggestion is not None
        assert suggestion.text == 'sc'

    def test_nothing(self) -> None:
        assert self._suggest('nope') is None

    def test_shadowed_group(self) -> None:
        suggest = BofhAutoSuggest(session(SHADOWED))
        assert suggest.get_suggestion(Mock(), Document('us', 2)) is None
        assert suggest.get_suggestion(Mock(), Document('user create ', 12)) is None


class TestBofhLexer:
    """Test colouring of the group and command words"""

    def setup_method(self) -> None:
        self.lexer = BofhLexer(session())

    def _lex(self, text: str) -> list:
        return self.lexer.lex_document(Document(text))(0)

    def test_known(self) -> None:
        assert self._lex('user info jdoe') == [
            (KNOWN, 'user'),
            ('', ' '),
            (KNOWN, 'info'),
            ('', ' '),
            ('', 'jdoe'),
        ]

    def test_ambiguous(self) -> None:
        assert self._lex('user  i') == [(KNOWN, 'user'), ('', '  '), (KNOWN, 'i')]
        lexer = BofhLexer(session(SHADOWED))
        assert lexer.lex_document(Document('us'))(0) == [(AMBIGUOUS, 'us')]

    def test_shadowed_group(self) -> None:
        """Test a full group name that starts another group is ambiguous"""
        lexer = BofhLexer(session(SHADOWED))
        assert lexer.lex_document(Document('user info'))(0) == [(AMBIGUOUS, 'user'), ('', ' '), (UNKNOWN, 'info')]
        assert lexer.lex_document(Document('usermap list'))(0) == [(KNOWN, 'usermap'), ('', ' '), (KNOWN, 'list')]

    def test_unknown(self) -> None:
        assert self._lex('nope x') == [(UNKNOWN, 'nope'), ('', ' '), (UNKNOWN, 'x')]
        assert self._lex('user zz') == [(KNOWN, 'user'), ('', ' '), (UNKNOWN, 'zz')]

    def test_ambiguous_command(self) -> None:
        lexer = BofhLexer(ShellSession(Mock(), build(dict(CATALOGUE, user_clear=[['user', 'clear'], []]))))
        assert lexer.lex_document(Document('user c'))(0)[-1] == (AMBIGUOUS, 'c')

    def test_leading_space(self) -> None:
        assert self._lex(' mi') == [('', ' '), (KNOWN, 'mi')]

    def test_missing_line(self) -> None:
        assert self.lexer.lex_document(Document('user'))(3) == []
