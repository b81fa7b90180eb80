"""handler.py

Where log lines end up. A single stdlib logger named 'bofh' is (re)configured
through logging.config.dictConfig for one destination at a time.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import os
import sys
import logging
import logging.config
from typing import Any

LOGGER: str = 'bofh'

# the line is fully formatted by bofh.logger.format before it gets here
FORMAT: str = '%(message)s'

ROTATE_SIZE: int = 1 << 20
ROTATE_COUNT: int = 3


def syslog_address() -> str:
    if sys.platform == 'darwin':
        return '/var/run/syslog'
    if sys.platform.startswith(('freebsd', 'netbsd')):
        return '/var/run/log'
    return '/dev/log'


def _handler(destination: str) -> dict[str, Any]:
    if destination in ('stdout', 'stderr'):
        return {
            'class': 'logging.StreamHandler',
            'stream': f'ext://sys.{destination}',
        }
    if destination == 'syslog':
        return {
            'class': 'logging.handlers.SysLogHandler',
            'address': syslog_address(),
            'facility': 'user',
        }
    return {
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': os.path.expanduser(destination),
        'maxBytes': ROTATE_SIZE,
        'backupCount': ROTATE_COUNT,
    }


def get_logger(destination: str, level: str = 'DEBUG') -> logging.Logger:
    """Point the bofh logger at destination and return it.

    Args:
        destination: stdout, stderr, syslog or the name of a file
        level: threshold of the logger and its handler

    Calling it again replaces the handler installed by the previous call.
    """
    handler = _handler(destination)
    handler.update(level=level, formatter='line')

    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {'line': {'format': FORMAT}},
            'handlers': {LOGGER: handler},
            'loggers': {LOGGER: {'level': level, 'handlers': [LOGGER], 'propagate': False}},
        }
    )
    return logging.getLogger(LOGGER)
