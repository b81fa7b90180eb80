"""version.py

Version of the bofh distribution.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import os
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as distribution_version

MINIMUM_PYTHON = (3, 10)

if sys.version_info[:2] < MINIMUM_PYTHON:
    sys.exit(f'bofh requires python{MINIMUM_PYTHON[0]}.{MINIMUM_PYTHON[1]} or later')


def get_root() -> str:
    """Directory the bofh package was imported from"""
    return os.path.dirname(os.path.abspath(__file__))


def _installed() -> str:
    try:
        return distribution_version('bofh')
    except PackageNotFoundError:
        # running from a checkout
        return 'unknown'


version = os.environ.get('bofh_version') or _installed()
