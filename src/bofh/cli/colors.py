"""colors.py

ANSI escape sequences for the shell messages.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import os
import sys


def _sgr(code: int) -> str:
    return f'\033[{code}m'


class Colors:
    RESET = _sgr(0)
    BOLD = _sgr(1)
    DIM = _sgr(2)

    RED = _sgr(31)
    YELLOW = _sgr(33)
    CYAN = _sgr(36)

    @staticmethod
    def supports_color() -> bool:
        """True when stdout is a terminal that was not asked to stay plain"""
        isatty = getattr(sys.stdout, 'isatty', None)
        if isatty is None or not isatty():
            return False
        # https://no-color.org/
        if os.environ.get('NO_COLOR'):
            return False
        return os.environ.get('TERM', 'dumb') not in ('dumb', '')
