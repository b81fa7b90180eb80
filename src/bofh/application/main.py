"""main.py

Entry point of the bofh command.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import sys
import argparse
from types import ModuleType

from bofh.application import run
from bofh.application import shell
from bofh.application import environ
from bofh.application import version

# name, module providing setargs() and cmdline(), help
SUBCOMMANDS: tuple[tuple[str, ModuleType, str], ...] = (
    ('shell', shell, 'interactive shell with completion (default)'),
    ('run', run, 'run one command and exit'),
    ('env', environ, 'show the bofh configuration'),
    ('version', version, 'report the bofh version'),
)

# sub-commands whose module docstring is a file header
DESCRIPTIONS = {
    'shell': 'Interactive bofhd shell with completion, hints and history',
}


def parser() -> argparse.ArgumentParser:
    top = argparse.ArgumentParser(prog='bofh', description='Interactive client for the Cerebrum bofhd server')
    subparsers = top.add_subparsers(metavar='command')

    for name, module, text in SUBCOMMANDS:
        sub = subparsers.add_parser(name, help=text, description=DESCRIPTIONS.get(name, module.__doc__))
        sub.set_defaults(func=module.cmdline)
        module.setargs(sub)

    return top


def arguments(argv: list[str]) -> list[str]:
    """argv without the program name, with 'shell' added when no sub-command is named"""
    if '-h' in argv or '--help' in argv:
        return argv
    if argv and argv[0] in (name for name, _, _ in SUBCOMMANDS):
        return argv
    return ['shell'] + argv


def main(argv: list[str] | None = None) -> int:
    cmdarg = parser().parse_args(arguments(sys.argv[1:] if argv is None else argv))

    if hasattr(cmdarg, 'func'):
        return cmdarg.func(cmdarg)

    parser().print_help()
    environ.default()
    return 1


if __name__ == '__main__':
    try:
        sys.exit(main())
    except BrokenPipeError:
        # ( bofh run ... | head ) closed the pipe early
        sys.exit(1)
