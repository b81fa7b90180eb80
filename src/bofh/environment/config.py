"""config.py

Typed configuration of bofh: the connection, shell and log sections.

Every option is a ConfigOption descriptor on its section class. A value is
looked up, first match wins, in:

    the environment variable bofh.<section>.<option>
    the environment variable bofh_<section>_<option>
    the [bofh.<section>] section of the INI file
    the default given to option()

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import os
import getpass
import configparser as ConfigParser
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Generic, Iterator, TypeVar, cast

from bofh.environment import base
from bofh.environment import parsing

T = TypeVar('T')

# bool first, it is a subclass of int
_READERS: tuple[tuple[type, Callable[[str], Any]], ...] = (
    (bool, parsing.boolean),
    (int, parsing.integer),
    (float, parsing.real),
    (str, parsing.unquote),
)


@dataclass
class ConfigOption(Generic[T]):
    """Descriptor holding the default, help and conversion of one option."""

    default: T
    help: str
    reader: Callable[[str], T] | None = None
    writer: Callable[[T], str] | None = None

    name: str = field(default='', init=False)

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: Any, owner: type) -> T | ConfigOption[T]:
        if obj is None:
            return self
        return cast(T, obj._values.get(self.name, self.default))

    def __set__(self, obj: Any, value: T) -> None:
        obj._values[self.name] = value

    def parse(self, value: str) -> T:
        if self.reader is not None:
            return self.reader(value)
        for kind, reader in _READERS:
            if isinstance(self.default, kind):
                return cast(T, reader(value))
        raise TypeError(f'no reader for {self.name} of type {type(self.default).__name__}')

    def format(self, value: T) -> str:
        if self.writer is not None:
            return self.writer(value)
        if isinstance(self.default, bool):
            return parsing.lower(value)
        if isinstance(self.default, str):
            return parsing.quote(value)
        return str(value)


def option(
    default: T,
    help: str,
    reader: Callable[[str], T] | None = None,
    writer: Callable[[T], str] | None = None,
) -> T:
    # typed as T so that section attributes read as their value type
    return cast(T, ConfigOption(default, help, reader, writer))


class ConfigSection:
    """Values set on one section, defaults come from the descriptors."""

    _section_name: ClassVar[str] = ''

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    @classmethod
    def options(cls) -> dict[str, ConfigOption[Any]]:
        return {name: attr for name in dir(cls) if isinstance(attr := getattr(cls, name, None), ConfigOption)}

    def __getitem__(self, key: str) -> Any:
        return getattr(self, key.replace('-', '_'))

    def __setitem__(self, key: str, value: Any) -> None:
        setattr(self, key.replace('-', '_'), value)

    def __contains__(self, key: str) -> bool:
        return key.replace('-', '_') in self.options()

    def __iter__(self) -> Iterator[str]:
        return iter(self.options())

    def reset(self) -> None:
        self._values.clear()


def _login_name() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return ''


class ConnectionSection(ConfigSection):
    _section_name: ClassVar[str] = 'connection'

    url: str = option('https://cerebrum-uio-test.uio.no:8000/', 'connect to bofhd server at URL', reader=parsing.url)
    user: str = option(_login_name(), 'authenticate as USER')
    cert: str = option('', 'CA certificates (PEM) used to verify the server, empty means system store', reader=parsing.path)
    insecure: bool = option(False, 'skip certificate hostname validation')
    timeout: int = option(0, 'connection timeout in seconds (0 for none)', reader=parsing.positive)
    retries: int = option(1, 'how many times a request is re-sent after a server restart', reader=parsing.positive)


class ShellSection(ConfigSection):
    _section_name: ClassVar[str] = 'shell'

    prompt: str = option('bofh> ', 'prompt shown by the interactive shell', reader=parsing.prompt)
    vi: bool = option(False, 'use vi editing mode and circular (column) completion')
    history: str = option(
        os.path.join(os.path.expanduser('~'), '.bofh_history'),
        'where the command history is kept, empty disables it',
        reader=parsing.path,
    )
    color: bool = option(True, 'colour the prompt line and messages when the terminal allows it')


_SPACE: str = ' ' * 33
LOGGING_HELP_DESTINATION: str = f"""\
where logging should log
{_SPACE} syslog sends the data to the local syslog
{_SPACE} stdout sends the data to stdout
{_SPACE} stderr sends the data to stderr
{_SPACE} file:<filename> send the data to a file"""


class LogSection(ConfigSection):
    _section_name: ClassVar[str] = 'log'

    enable: bool = option(True, 'enable logging')
    level: str = option('WARNING', 'log message with at least the priority SYSLOG.<level>', reader=parsing.level)
    destination: str = option('stderr', LOGGING_HELP_DESTINATION)
    all: bool = option(False, 'report debug information for everything')
    network: bool = option(True, 'report transport information (connection, TLS, timeouts)')
    protocol: bool = option(True, 'report remote calls, faults and retries')
    schema: bool = option(True, 'report command catalogue parsing')
    cli: bool = option(True, 'report shell activity')
    short: bool = option(True, 'use short log format (not prepended with time,level,pid and source)')


def _lookup(ini: ConfigParser.ConfigParser, section: str, name: str) -> str | None:
    dotted = f'{base.APPLICATION}.{section}.{name}'
    for variable in (dotted, dotted.replace('.', '_')):
        if variable in os.environ:
            return os.environ[variable]
    try:
        return ini.get(f'{base.APPLICATION}.{section}', name, raw=True)
    except (ConfigParser.NoSectionError, ConfigParser.NoOptionError):
        return None


class Environment:
    """The configuration, one instance shared by the whole program."""

    SECTIONS: ClassVar[tuple[type[ConfigSection], ...]] = (ConnectionSection, ShellSection, LogSection)

    _instance: ClassVar[Environment | None] = None
    _setup_done: ClassVar[bool] = False

    connection: ConnectionSection
    shell: ShellSection
    log: LogSection

    def __new__(cls) -> Environment:
        if cls._instance is None:
            instance = super().__new__(cls)
            for section in cls.SECTIONS:
                setattr(instance, section._section_name, section())
            cls._instance = instance
        return cls._instance

    def __getitem__(self, key: str) -> ConfigSection:
        return cast(ConfigSection, getattr(self, key.replace('-', '_')))

    def items(self) -> Iterator[tuple[str, ConfigSection]]:
        for section in self.SECTIONS:
            yield section._section_name, self[section._section_name]

    @classmethod
    def setup(cls, envfile: str = base.ENVFILE) -> None:
        """Read the environment and the INI file, only the first time it is called."""
        if cls._setup_done:
            return
        cls._setup_done = True

        ini = ConfigParser.ConfigParser()
        if os.path.exists(envfile):
            ini.read(envfile)

        for section_name, section in cls().items():
            for option_name, opt in section.options().items():
                conf = _lookup(ini, section_name, option_name)
                if conf is None:
                    continue
                try:
                    section[option_name] = opt.parse(conf)
                except (TypeError, ValueError):
                    raise ValueError(f'invalid value for {section_name}.{option_name} : {conf}') from None

    @classmethod
    def reset(cls) -> None:
        """Forget loaded and set values, setup() will read the configuration again."""
        for _, section in cls().items():
            section.reset()
        cls._setup_done = False

    @classmethod
    def _walk(cls, diff: bool) -> Iterator[tuple[str, str, ConfigOption[Any], Any]]:
        for section_name, section in cls().items():
            for option_name, opt in section.options().items():
                value = section[option_name]
                if diff and value == opt.default:
                    continue
                yield section_name, option_name, opt, value

    @classmethod
    def default(cls) -> Iterator[str]:
        """One line per option: its name, help and default."""
        for section_name, option_name, opt, _ in cls._walk(diff=False):
            default = f"'{opt.default}'" if isinstance(opt.default, str) else opt.default
            padding = ' ' * (22 - len(section_name) - len(option_name))
            yield f'{base.APPLICATION}.{section_name}.{option_name} {padding} {opt.help}. default ({default})'

    @classmethod
    def iter_ini(cls, diff: bool = False) -> Iterator[str]:
        current = ''
        for section_name, option_name, opt, value in cls._walk(diff):
            if section_name != current:
                current = section_name
                yield f'\n[{base.APPLICATION}.{section_name}]'
            yield f'{option_name} = {opt.format(value)}'

    @classmethod
    def iter_env(cls, diff: bool = False) -> Iterator[str]:
        for section_name, option_name, opt, value in cls._walk(diff):
            text = f"'{value}'" if isinstance(opt.default, str) else opt.format(value)
            yield f'{base.APPLICATION}.{section_name}.{option_name}={text}'
