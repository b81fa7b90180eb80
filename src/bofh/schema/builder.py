"""builder.py

Build the CommandSchema from the command catalogue returned by get_commands.

The catalogue maps the full name of a command to a two element descriptor:

    {'user_create': [['user', 'create'], [{'type': 'accountName'}, ...]],
     'misc_check':  [['misc', 'check'], 'prompt_func'],
     'misc_about':  [['misc', 'about'], None]}

The second element is a list of argument dictionaries, a string marking a
command whose arguments are resolved by prompting, or an empty value.

The server encodes booleans either natively or as the string 'True'. That
coercion happens here and nowhere else.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from bofh.logger import log, lazymsg
from bofh.protocol.error import MalformedCatalogueError
from bofh.schema.model import Argument, Command, CommandGroup, CommandSchema


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return value == 'True'


def _text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    return None


def parse_argument(raw: Any) -> Argument:
    """Build an Argument from one argument dictionary of the catalogue."""
    if not isinstance(raw, Mapping):
        raise MalformedCatalogueError(f'argument description is not a mapping: {raw!r}')
    return Argument(
        optional=_flag(raw.get('optional', False)),
        repeats=_flag(raw.get('repeat', False)),
        default=_text(raw.get('default')),
        type_tag=_text(raw.get('type')),
        help_reference=_text(raw.get('help_ref')),
        prompt=_text(raw.get('prompt')),
    )


def parse_arguments(raw: Any) -> tuple[Argument, ...]:
    if isinstance(raw, str):
        if raw:
            # prompt_func: one free form parameter, the server prompts for the rest
            return (Argument(),)
        return ()
    if isinstance(raw, Sequence):
        return tuple(parse_argument(_) for _ in raw)
    return ()


def _names(full_name: str, descriptor: Any) -> tuple[str, str]:
    if isinstance(descriptor, str) or not isinstance(descriptor, Sequence) or len(descriptor) < 2:
        raise MalformedCatalogueError(f'command {full_name} has an invalid description: {descriptor!r}')
    names = descriptor[0]
    if isinstance(names, str) or not isinstance(names, Sequence) or len(names) < 2:
        raise MalformedCatalogueError(f'command {full_name} has an invalid name: {names!r}')
    group, short_name = names[0], names[1]
    if not isinstance(group, str) or not isinstance(short_name, str):
        raise MalformedCatalogueError(f'command {full_name} has an invalid name: {names!r}')
    return group, short_name


def build(catalogue: Any) -> CommandSchema:
    """Turn the raw get_commands answer into an immutable CommandSchema."""
    if not isinstance(catalogue, Mapping):
        raise MalformedCatalogueError(f'command catalogue is not a mapping but {type(catalogue).__name__}')

    groups: dict[str, dict[str, Command]] = {}

    for full_name, descriptor in catalogue.items():
        group, short_name = _names(full_name, descriptor)
        commands = groups.setdefault(group, {})
        if short_name in commands:
            log.debug(
                lazymsg('{group} {command} redefined by {full_name}', group=group, command=short_name, full_name=full_name),
                'schema',
            )
        commands[short_name] = Command(
            short_name=short_name,
            full_name=str(full_name),
            arguments=parse_arguments(descriptor[1]),
        )

    schema = CommandSchema({name: CommandGroup(name, commands) for name, commands in groups.items()})
    log.info(
        lazymsg('{groups} command groups, {commands} commands', groups=len(schema), commands=sum(len(_.commands) for _ in schema.values())),
        'schema',
    )
    return schema
