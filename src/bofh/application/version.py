"""Report the bofh, Python and system versions"""

from __future__ import annotations

import sys
import argparse
import platform

from bofh.version import version, get_root


def setargs(sub: argparse.ArgumentParser) -> None:
    """version takes no option"""


def cmdline(cmdarg: argparse.Namespace) -> int:
    report = (
        ('bofh', version),
        ('Python', sys.version.replace('\n', ' ')),
        ('Uname', ' '.join(platform.uname()[:5])),
        ('From', get_root()),
    )
    for name, value in report:
        sys.stdout.write(f'{name:<7}: {value}\n')
    sys.stdout.flush()
    return 0
