"""Run a single bofhd command and exit (non-interactive)"""

from __future__ import annotations

import argparse

from bofh.application import shell


def setargs(sub: argparse.ArgumentParser) -> None:
    shell.connection_args(sub)
    # fmt: off
    sub.add_argument('command', nargs='+', help='group, command and arguments, e.g. user info jdoe')
    # fmt: on


def cmdline(cmdarg: argparse.Namespace) -> int:
    return shell.start(cmdarg, ' '.join(cmdarg.command))
