from __future__ import annotations

import os


def _find_envfile() -> str:
    envfile: str = os.environ.get(f'{APPLICATION}_envfile', '')
    if envfile:
        return os.path.normpath(os.path.abspath(os.path.expanduser(envfile)))

    config_home: str = os.environ.get('XDG_CONFIG_HOME', '') or os.path.join(os.path.expanduser('~'), '.config')
    return os.path.join(config_home, APPLICATION, f'{APPLICATION}.env')


APPLICATION: str = 'bofh'
ENVFILE: str = _find_envfile()
