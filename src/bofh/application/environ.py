"""bofh configuration values"""

from __future__ import annotations

import sys
import argparse

from bofh.environment import ENVFILE, Environment


def setargs(sub: argparse.ArgumentParser) -> None:
    # fmt: off
    sub.add_argument('-d', '--diff', help='show only the different from the defaults', action='store_true')
    sub.add_argument('-e', '--env', help='display using environment (not ini)', action='store_true')
    # fmt: on


def default() -> None:
    sys.stdout.write(f'\nEnvironment values are (configuration file {ENVFILE}):\n')
    sys.stdout.write('\n'.join(f'    {_}' for _ in Environment.default()))
    sys.stdout.write('\n')
    sys.stdout.flush()


def cmdline(cmdarg: argparse.Namespace) -> int:
    dispatch = {
        True: Environment.iter_env,
        False: Environment.iter_ini,
    }

    for line in dispatch[cmdarg.env](cmdarg.diff):
        sys.stdout.write(f'{line}\n')
    sys.stdout.flush()
    return 0
