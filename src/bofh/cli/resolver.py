"""resolver.py

Find the command a line refers to.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from bofh.protocol.error import IncompleteCommandError, UnknownCommandError
from bofh.schema.model import Command, CommandSchema


def resolve(schema: CommandSchema, line: str) -> tuple[Command, list[str]] | None:
    """Resolve group and command of line, each by a prefix only one name starts with.

    Returns:
        (command, arguments) or None for a blank line

    Raises:
        UnknownCommandError: the group or the command does not resolve
        IncompleteCommandError: only a group was given
    """
    words = line.split()
    if not words:
        return None

    group = schema.resolve_group(words[0])
    if group is None:
        raise UnknownCommandError(words[0])

    if len(words) == 1:
        raise IncompleteCommandError(group.name, group.commands)

    command = schema.resolve_command(group, words[1])
    if command is None:
        raise UnknownCommandError(words[0], words[1])

    return command, words[2:]
