"""session.py

What the line editor talks to: completion, hints and command execution over
one authenticated client and its command schema.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from typing import Any

from bofh.cli.completer import Completions, complete
from bofh.cli.hinter import hint
from bofh.cli.resolver import resolve
from bofh.logger import log, lazymsg
from bofh.protocol.client import Bofh
from bofh.protocol.error import UnknownCommandError
from bofh.schema.model import CommandSchema


class ShellSession:
    def __init__(self, client: Bofh, schema: CommandSchema) -> None:
        self.client = client
        self.schema = schema

    def complete(self, line: str, cursor: int) -> Completions:
        return complete(self.schema, line, cursor)

    def hint(self, line: str, cursor: int) -> str | None:
        return hint(self.schema, line, cursor)

    def resolve_and_invoke(self, line: str) -> Any:
        """Run the command typed on line, None for a blank line.

        Input errors (unknown or incomplete command) are raised before
        anything is sent to the server.
        """
        resolved = resolve(self.schema, line)
        if resolved is None:
            return None
        command, arguments = resolved
        log.debug(lazymsg('running {command} with {count} argument(s)', command=command.full_name, count=len(arguments)), 'cli')
        return self.client.invoke(command.full_name, arguments)

    def help(self, words: list[str]) -> str:
        """Server help on everything, a group, or a command of a group."""
        if not words:
            return self.client.get_help()

        group = self.schema.resolve_group(words[0])
        if group is None:
            raise UnknownCommandError(words[0])
        if len(words) == 1:
            return self.client.get_help(group.name)

        command = self.schema.resolve_command(group, words[1])
        if command is None:
            raise UnknownCommandError(words[0], words[1])
        return self.client.get_help(group.name, command.short_name)
