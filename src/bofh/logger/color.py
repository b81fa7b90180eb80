"""color.py

Terminal colouring of log lines, by level.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import sys

RESET: str = '\033[0m'

# level: (source column, message)
_LEVEL: dict[str, tuple[str, str]] = {
    'FATAL': ('\033[00;31m', '\033[1m'),
    'CRITICAL': ('\033[00;31m', '\033[1m'),
    'ERROR': ('\033[01;31m', '\033[1m'),
    'WARNING': ('\033[01;33m', ''),
    'INFO': ('\033[01;32m', ''),
    'DEBUG': ('', ''),
}


def _paint(code: str, text: str) -> str:
    if not code:
        return text
    return f'{code}{text}{RESET}'


def source(level: str, name: str) -> str:
    code = _LEVEL.get(level, ('', ''))[0]
    return _paint(code, f'{name:<9}') if code else name


def message(level: str, text: str) -> str:
    return _paint(_LEVEL.get(level, ('', ''))[1], text)


def istty(destination: str) -> bool:
    """True when the stdout/stderr destination is a terminal"""
    stream = {'stdout': sys.stdout, 'stderr': sys.stderr}.get(destination)
    if stream is None:
        return False
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError):
        # closed or replaced stream
        return False
