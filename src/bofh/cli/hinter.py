"""hinter.py

Inline hints shown after the caret.

Once group and command are known the hint lists the types of the arguments
still expected. Before that it completes the group or command name, but only
when a single name is possible.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from bofh.schema.model import CommandSchema


def _argument_hint(schema: CommandSchema, words: list[str], trailing: bool) -> str | None:
    if len(words) < 2:
        return None

    group = schema.resolve_group(words[0])
    if group is None:
        return None
    command = schema.resolve_command(group, words[1])
    if command is None:
        return None

    # the command word is only committed once typed in full or followed by a space
    if words[1] != command.short_name and not trailing:
        return None

    # without a trailing space the caret is still inside the last word
    supplied = len(words) - 2 if trailing else len(words) - 3
    if supplied < 0 or supplied >= len(command.arguments):
        return None

    return ' '.join(command.type_tags(supplied)) if trailing else ' ' + ' '.join(command.type_tags(supplied))


def hint(schema: CommandSchema, line: str, cursor: int) -> str | None:
    """The text to show after the caret, or None.

    Args:
        schema: the command schema
        line: the whole line buffer
        cursor: caret offset in line, hints are only given at the end of the line

    Returns:
        the suffix to display, never a guess between several possibilities.
        Arguments still expected but without a type give None, not an empty
        string: both display nothing.
    """
    if cursor != len(line):
        return None

    words = line.split()
    if not words:
        return None

    trailing = line[-1].isspace()

    arguments = _argument_hint(schema, words, trailing)
    if arguments is not None:
        # untyped arguments only, nothing to show
        return arguments if arguments.strip() else None

    # A space after the words would push the hint to the right while typing.
    # This also means a lone group or lone command is not hinted after a space.
    if trailing:
        return None

    if len(words) == 1:
        candidates = [_ for _ in schema.group_candidates(words[0]) if _ != words[0]]
    elif len(words) == 2:
        group = schema.resolve_group(words[0])
        if group is None:
            return None
        candidates = [_ for _ in group.candidates(words[1]) if _ != words[1]]
    else:
        return None

    if len(candidates) != 1:
        return None

    return candidates[0][len(words[-1]) :]
