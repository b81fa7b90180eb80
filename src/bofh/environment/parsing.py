"""parsing.py

Readers and writers for configuration values.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import os
from typing import Any
from urllib.parse import urlsplit

from bofh.logger.option import LEVELS


def integer(_: Any) -> int:
    return int(_)


def real(_: Any) -> float:
    return float(_)


def unquote(_: str) -> str:
    return _.strip().strip('\'"')


def quote(_: Any) -> str:
    return f"'{_!s}'"


def boolean(_: str) -> bool:
    return _.lower() in ('1', 'yes', 'on', 'enable', 'true')


def lower(_: Any) -> str:
    return str(_).lower()


def positive(_: str) -> int:
    value = int(_)
    if value < 0:
        raise TypeError(f'{_} is not a positive number')
    return value


def url(_: str) -> str:
    value = unquote(_)
    parts = urlsplit(value)
    if parts.scheme not in ('http', 'https') or not parts.netloc:
        raise TypeError(f'url {value} is invalid, expected http(s)://host[:port]/')
    return value


def path(_: str) -> str:
    value = unquote(_)
    if not value:
        return value
    return os.path.normpath(os.path.expanduser(value))


def prompt(_: str) -> str:
    # keep trailing spaces, only remove the quoting
    value = _.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in '\'"':
        return value[1:-1]
    return value


def level(_: str) -> str:
    value = unquote(_).upper()
    if value not in LEVELS:
        raise TypeError(f'invalid log level {value}')
    return value
