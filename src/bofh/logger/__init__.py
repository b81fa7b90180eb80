"""bofh.logger

The log facade. A message is a callable returning its text (lazymsg, lazyexc,
lazycall or a lambda), so nothing is formatted for a category or a level
that is switched off. Every message names its source: network, protocol,
schema, cli or startup.

    log.debug(lazymsg('calling {method}', method=method), 'protocol')

Nothing is written until log.init() has been given the configuration.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import time
from typing import Callable, ClassVar, TYPE_CHECKING

if TYPE_CHECKING:
    from bofh.environment.config import Environment

from bofh.logger.option import option
from bofh.logger.format import lazymsg, lazyexc, lazycall

__all__ = [
    'lazymsg',
    'lazyexc',
    'lazycall',
    'option',
    'LogMessage',
    'log',
]

LogMessage = Callable[[], str]
Emit = Callable[[str], None]


def _drop(emit: Emit, message: LogMessage, source: str, level: str) -> None:
    return None


def _write(emit: Emit, message: LogMessage, source: str, level: str) -> None:
    if not option.log_enabled(source, level):
        return
    timestamp = time.localtime()
    for line in message().split('\n'):
        emit(option.formater(line, source, level, timestamp))


def _severe(emit: Emit, message: LogMessage, source: str, level: str) -> None:
    if level in ('CRITICAL', 'FATAL'):
        _write(emit, message, source, level)


class log:
    writer: ClassVar[Callable[[Emit, LogMessage, str, str], None]] = staticmethod(_write)

    @staticmethod
    def init(env: 'Environment') -> None:
        option.setup(env)

    @classmethod
    def disable(cls) -> None:
        cls.writer = staticmethod(_drop)
        option.logger = None

    @classmethod
    def silence(cls) -> None:
        """Only let critical messages through (-q)."""
        cls.writer = staticmethod(_severe)

    @classmethod
    def restore(cls) -> None:
        """Undo disable() or silence()."""
        cls.writer = staticmethod(_write)

    @classmethod
    def _log(cls, level: str, message: LogMessage, source: str) -> None:
        if option.logger is None:
            return
        cls.writer(getattr(option.logger, level.lower()), message, source, level)

    @classmethod
    def debug(cls, message: LogMessage, source: str = '') -> None:
        cls._log('DEBUG', message, source)

    @classmethod
    def info(cls, message: LogMessage, source: str = '') -> None:
        cls._log('INFO', message, source)

    @classmethod
    def warning(cls, message: LogMessage, source: str = '') -> None:
        cls._log('WARNING', message, source)

    @classmethod
    def error(cls, message: LogMessage, source: str = '') -> None:
        cls._log('ERROR', message, source)

    @classmethod
    def critical(cls, message: LogMessage, source: str = '') -> None:
        cls._log('CRITICAL', message, source)
