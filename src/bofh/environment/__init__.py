"""bofh.environment

The configuration, read from the environment and the INI file when this
package is first imported.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from bofh.environment.base import APPLICATION, ENVFILE
from bofh.environment.config import Environment

__all__ = ['APPLICATION', 'ENVFILE', 'Environment', 'getenv']

Environment.setup()


def getenv() -> Environment:
    return Environment()
