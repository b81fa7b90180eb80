"""prompt.py

prompt_toolkit glue: the completer, the auto-suggest and the lexer of the
interactive shell, all driven by a ShellSession.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from typing import Callable, Iterable

from prompt_toolkit.auto_suggest import AutoSuggest, Suggestion
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer
from prompt_toolkit.styles import Style

from bofh.cli.session import ShellSession
from bofh.schema.model import CommandSchema

KNOWN = 'class:word.known'
AMBIGUOUS = 'class:word.ambiguous'
UNKNOWN = 'class:word.unknown'

STYLE = Style.from_dict(
    {
        'word.known': 'ansigreen',
        'word.ambiguous': 'ansiyellow',
        'word.unknown': 'ansired',
        'auto-suggestion': 'ansibrightblack',
    }
)


class BofhCompleter(Completer):
    def __init__(self, session: ShellSession) -> None:
        self.session = session

    def get_completions(self, document: Document, complete_event: CompleteEvent) -> Iterable[Completion]:
        completions = self.session.complete(document.text, document.cursor_position)
        start_position = completions.anchor - document.cursor_position
        single = completions.replacement

        for candidate in completions.candidates:
            yield Completion(
                single if single is not None else candidate,
                start_position=start_position,
                display=candidate,
            )


class BofhAutoSuggest(AutoSuggest):
    def __init__(self, session: ShellSession) -> None:
        self.session = session

    def get_suggestion(self, buffer: Buffer, document: Document) -> Suggestion | None:
        suggestion = self.session.hint(document.text, document.cursor_position)
        if suggestion is None:
            return None
        return Suggestion(suggestion)


def word_style(schema: CommandSchema, words: list[str], index: int) -> str:
    """Style of the group (index 0) or command (index 1) word, '' for arguments"""
    if index == 0:
        if schema.resolve_group(words[0]) is not None:
            return KNOWN
        return AMBIGUOUS if schema.group_candidates(words[0]) else UNKNOWN

    if index == 1:
        group = schema.resolve_group(words[0])
        if group is None:
            return UNKNOWN
        if schema.resolve_command(group, words[1]) is not None:
            return KNOWN
        return AMBIGUOUS if group.candidates(words[1]) else UNKNOWN

    return ''


class BofhLexer(Lexer):
    """Colour the group and command words by how well they resolve."""

    def __init__(self, session: ShellSession) -> None:
        self.session = session

    def lex_line(self, line: str) -> StyleAndTextTuples:
        words = line.split()
        fragments: StyleAndTextTuples = []
        index = 0
        position = 0

        while position < len(line):
            start = position
            if line[position].isspace():
                while position < len(line) and line[position].isspace():
                    position += 1
                fragments.append(('', line[start:position]))
                continue

            while position < len(line) and not line[position].isspace():
                position += 1
            fragments.append((word_style(self.session.schema, words, index), line[start:position]))
            index += 1

        return fragments

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines

        def get_line(lineno: int) -> StyleAndTextTuples:
            try:
                return self.lex_line(lines[lineno])
            except IndexError:
                return []

        return get_line
