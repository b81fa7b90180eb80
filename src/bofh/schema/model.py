"""model.py

Immutable command schema: groups, commands and their arguments.

The schema is built once after login (see builder.py) and only read
afterwards, by the completer, the hinter and the command resolver. The
lookup helpers here implement the prefix matching they all share.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator


def _frozen(mapping: Mapping[str, object]) -> MappingProxyType:
    return MappingProxyType(dict(sorted(mapping.items())))


@dataclass(frozen=True)
class Argument:
    """One formal parameter of a command.

    type_tag is the server's name for the kind of value (e.g. 'accountName'),
    shown verbatim in hints. help_reference is the key to ask the server for
    help on this argument, prompt the text to show when it is left out.
    """

    optional: bool = False
    repeats: bool = False
    default: str | None = None
    type_tag: str | None = None
    help_reference: str | None = None
    prompt: str | None = None


@dataclass(frozen=True)
class Command:
    """One invocable command.

    short_name is the word typed after the group name, full_name the name the
    server knows the command by (passed to run_command).
    """

    short_name: str
    full_name: str
    arguments: tuple[Argument, ...] = ()
    format_hint: str | None = None
    help_text: str | None = None

    def type_tags(self, start: int = 0) -> list[str]:
        """type_tag of every argument from position start, untyped ones skipped"""
        return [argument.type_tag for argument in self.arguments[start:] if argument.type_tag is not None]


@dataclass(frozen=True)
class CommandGroup:
    name: str
    commands: Mapping[str, Command] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, 'commands', _frozen(self.commands))

    def candidates(self, prefix: str) -> list[str]:
        """Command names starting with prefix, in alphabetic order"""
        return [name for name in self.commands if name.startswith(prefix)]


class CommandSchema(Mapping[str, CommandGroup]):
    """Read-only mapping of group name to CommandGroup, iterated alphabetically."""

    def __init__(self, groups: Mapping[str, CommandGroup] | None = None) -> None:
        self._groups: Mapping[str, CommandGroup] = _frozen(groups or {})

    def __getitem__(self, name: str) -> CommandGroup:
        return self._groups[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __repr__(self) -> str:
        return f'CommandSchema({list(self._groups)!r})'

    def group_candidates(self, prefix: str) -> list[str]:
        """Group names starting with prefix, in alphabetic order"""
        return [name for name in self._groups if name.startswith(prefix)]

    def command_candidates(self, group: str, prefix: str) -> list[str]:
        """Command names of group starting with prefix, empty for an unknown group"""
        if group not in self._groups:
            return []
        return self._groups[group].candidates(prefix)

    def resolve_group(self, word: str) -> CommandGroup | None:
        """The only group starting with word, None when there are none or several.

        A full group name that is also the prefix of another one is ambiguous.
        """
        candidates = self.group_candidates(word)
        if len(candidates) != 1:
            return None
        return self._groups[candidates[0]]

    def resolve_command(self, group: CommandGroup, word: str) -> Command | None:
        """The only command of group starting with word, else None"""
        candidates = group.candidates(word)
        if len(candidates) != 1:
            return None
        return group.commands[candidates[0]]
