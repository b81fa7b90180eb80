"""format.py

Line formatters for each log destination, and the lazy message builders
used with the log facade.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import os
import time
from typing import Callable, Sequence

from bofh.logger import color
from bofh.logger.color import istty

FormatterFunc = Callable[[str, str, str, time.struct_time], str]


def _stamp(level: str, timestamp: time.struct_time) -> str:
    return f'{time.strftime("%H:%M:%S", timestamp)} {os.getpid():<6} {level:<8}'


def _short_formater(message: str, source: str, level: str, timestamp: time.struct_time) -> str:
    return f'{source:<9} {message}'


def _long_formater(message: str, source: str, level: str, timestamp: time.struct_time) -> str:
    return f'{_stamp(level, timestamp)} {source:<9} {message}'


def _short_color_formater(message: str, source: str, level: str, timestamp: time.struct_time) -> str:
    return f'\r{color.source(level, source)} {color.message(level, message)}'


def _long_color_formater(message: str, source: str, level: str, timestamp: time.struct_time) -> str:
    return f'\r{_stamp(level, timestamp)} {color.source(level, source)} {color.message(level, message)}'


def formater(short: bool, destination: str) -> FormatterFunc | None:
    """The formatter for destination, None for an unknown one.

    syslog adds its own timestamp, files always get one, terminals are coloured.
    """
    if destination == 'syslog':
        return _short_formater
    if destination == 'file':
        return _long_formater
    if destination not in ('stdout', 'stderr'):
        return None
    if istty(destination):
        return _short_color_formater if short else _long_color_formater
    return _short_formater if short else _long_formater


def lazymsg(template: str, **kwargs: object) -> Callable[[], str]:
    """Create a lazy log message from a format string template.

    Usage:
        log.debug(lazymsg('calling {method}', method=method), 'protocol')
    """

    def _format() -> str:
        return template.format(**kwargs)

    return _format


def lazyexc(prefix: str, exc: BaseException) -> Callable[[], str]:
    def _lazy() -> str:
        return f'{prefix}: {exc} ({type(exc).__name__})'

    return _lazy


def lazycall(method: str, params: Sequence[object], hidden: int = 0, token: bool = False) -> Callable[[], str]:
    """Describe a remote call, masking the last `hidden` parameters.

    With token, the first parameter is a session token and is masked too.
    """

    def _lazy() -> str:
        cut = max(len(params) - hidden, 0)
        shown = [repr(_) for _ in params[:cut]] + ['***'] * (len(params) - cut)
        if token and shown:
            shown[0] = '***'
        return f'{method}({", ".join(shown)})'

    return _lazy
