"""option.py

Logging state derived from the log section of the configuration: which
categories are on, from which level, and to where.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import time
import logging
from typing import ClassVar, TYPE_CHECKING

if TYPE_CHECKING:
    from bofh.environment.config import Environment

from bofh.logger.handler import get_logger
from bofh.logger.format import formater as get_formater, FormatterFunc

LEVELS: tuple[str, ...] = ('FATAL', 'CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG', 'NOTSET')

# categories with their own switch in the configuration, startup is always on
CATEGORIES: tuple[str, ...] = ('network', 'protocol', 'schema', 'cli')


def echo(message: str, source: str, level: str, timestamp: time.struct_time) -> str:
    return message


class option:
    logger: ClassVar[logging.Logger | None] = None
    formater: ClassVar[FormatterFunc] = echo

    level: ClassVar[str] = 'WARNING'
    logit: ClassVar[dict[str, bool]] = {}

    # stdout, stderr, syslog or a file name
    destination: ClassVar[str] = ''

    enabled: ClassVar[dict[str, bool]] = dict.fromkeys(CATEGORIES + ('startup',), False)

    @classmethod
    def _set_level(cls, level: str) -> None:
        cls.level = level
        threshold = LEVELS.index(level)
        cls.logit = {name: index <= threshold for index, name in enumerate(LEVELS)}

    @classmethod
    def log_enabled(cls, source: str, level: str) -> bool:
        return cls.enabled.get(source, True) and cls.logit.get(level, False)

    @classmethod
    def load(cls, env: 'Environment') -> None:
        cls._set_level(env.log.level)

        cls.enabled = {name: env.log.enable and (env.log.all or env.log[name]) for name in CATEGORIES}
        cls.enabled['startup'] = env.log.enable

        destination = env.log.destination
        if destination in ('stdout', 'stderr', 'syslog'):
            cls.destination = destination
        elif destination.startswith('file:'):
            cls.destination = destination[5:]
        else:
            cls.destination = 'stderr'

    @classmethod
    def setup(cls, env: 'Environment') -> None:
        cls.load(env)
        cls.logger = get_logger(cls.destination, cls.level)

        kind = cls.destination if cls.destination in ('stdout', 'stderr', 'syslog') else 'file'
        cls.formater = get_formater(env.log.short, kind) or echo
