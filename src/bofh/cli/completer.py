"""completer.py

Tab completion of group and command names.

complete() is a pure function of the schema, the line and the cursor. Only
the first two words (group, then command) are completed, arguments are left
to the hinter.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from typing import NamedTuple

from bofh.schema.model import CommandSchema


class Completions(NamedTuple):
    """Candidates for the token that starts at anchor and ends at the cursor.

    A completion replaces line[anchor:cursor] with a candidate. Only a single
    candidate may be applied, and it then brings a trailing space so the user
    can go on typing the next word.
    """

    anchor: int
    candidates: list[str]

    @property
    def replacement(self) -> str | None:
        if len(self.candidates) != 1:
            return None
        return f'{self.candidates[0]} '


def _partial_length(text: str, completed: list[str]) -> int:
    # count every whitespace character, runs are not collapsed
    spaces = sum(1 for _ in text if _.isspace())
    return len(text) - spaces - sum(len(_) for _ in completed)


def complete(schema: CommandSchema, line: str, cursor: int) -> Completions:
    """Completion candidates for the word under the cursor.

    Args:
        schema: the command schema
        line: the whole line buffer
        cursor: caret offset in line, completion only looks at what is before it

    Returns:
        Completions, with candidates in alphabetic order
    """
    text = line[:cursor]
    words = text.split()
    trailing = bool(text) and text[-1].isspace()

    if not words:
        return Completions(cursor - _partial_length(text, []), list(schema))

    completed = words if trailing else words[:-1]
    anchor = cursor - _partial_length(text, completed)

    if len(words) == 1 and not trailing:
        return Completions(anchor, schema.group_candidates(words[0]))

    if len(words) > 2 or (len(words) == 2 and trailing):
        return Completions(anchor, [])

    group = schema.resolve_group(words[0])
    if group is None:
        return Completions(anchor, [])

    if len(words) == 1:
        return Completions(anchor, list(group.commands))

    return Completions(anchor, group.candidates(words[1]))
