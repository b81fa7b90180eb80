"""shell.py

Interactive bofhd shell with completion, hints and history.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import sys
import argparse
from typing import Callable

from prompt_toolkit import PromptSession
from prompt_toolkit import prompt as ask
from prompt_toolkit.history import FileHistory, History, InMemoryHistory
from prompt_toolkit.shortcuts import CompleteStyle

from bofh.cli.formatter import OutputFormatter
from bofh.cli.prompt import STYLE, BofhAutoSuggest, BofhCompleter, BofhLexer
from bofh.cli.session import ShellSession
from bofh.environment import getenv, parsing
from bofh.environment.config import Environment
from bofh.logger import log, lazymsg, lazyexc
from bofh.protocol.client import Bofh
from bofh.protocol.error import BofhError, SessionExpiredError

VERBOSITY = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')
GOODBYE = 'So long, and thanks for all the fish!'

PasswordPrompt = Callable[[str], str]


def connection_args(sub: argparse.ArgumentParser) -> None:
    # fmt: off
    sub.add_argument('--url', help='connect to bofhd server at URL', type=parsing.url, default=None)
    sub.add_argument('-u', '--user', help='authenticate as USER', default=None)
    sub.add_argument('-c', '--cert', metavar='PEM', help='CA certificates used to verify the server', type=parsing.path, default=None)
    sub.add_argument('--insecure', help='do not check the certificate hostname', action='store_true')
    sub.add_argument('--timeout', metavar='SECONDS', help='connection timeout, 0 for none', type=parsing.positive, default=None)
    sub.add_argument('-v', '--verbose', help='be more verbose (can be repeated)', action='count', default=0)
    sub.add_argument('--verbosity', metavar='N', help=f'log level from 0 ({VERBOSITY[0]}) to {len(VERBOSITY) - 1} ({VERBOSITY[-1]})', type=int, default=None)
    sub.add_argument('-q', '--quiet', help='only report critical problems', action='store_true')
    # fmt: on


def setargs(sub: argparse.ArgumentParser) -> None:
    connection_args(sub)
    # fmt: off
    sub.add_argument('--vi', help='use vi editing mode', action='store_true')
    sub.add_argument('-p', '--prompt', help='prompt of the interactive shell', type=parsing.prompt, default=None)
    sub.add_argument('--cmd', metavar='LINE', help='run LINE then exit instead of starting the shell', default=None)
    # fmt: on


def log_level(current: str, verbose: int = 0, verbosity: int | None = None) -> str:
    """Level resulting from the configured one and the -v / --verbosity flags"""
    if verbosity is not None:
        return VERBOSITY[max(0, min(verbosity, len(VERBOSITY) - 1))]
    if not verbose:
        return current
    index = VERBOSITY.index(current) if current in VERBOSITY else VERBOSITY.index('WARNING')
    return VERBOSITY[min(index + verbose, len(VERBOSITY) - 1)]


def configure(env: Environment, cmdarg: argparse.Namespace) -> None:
    """Apply the command line on top of the configuration, then start logging."""
    for name in ('url', 'user', 'cert', 'timeout'):
        value = getattr(cmdarg, name, None)
        if value is not None:
            env.connection[name] = value

    if getattr(cmdarg, 'insecure', False):
        env.connection.insecure = True
    if getattr(cmdarg, 'vi', False):
        env.shell.vi = True
    if getattr(cmdarg, 'prompt', None) is not None:
        env.shell.prompt = cmdarg.prompt

    env.log.level = log_level(env.log.level, getattr(cmdarg, 'verbose', 0), getattr(cmdarg, 'verbosity', None))

    log.init(env)
    if getattr(cmdarg, 'quiet', False):
        log.silence()


def ask_password(user: str) -> str:
    return ask(f'Password for {user}: ', is_password=True)


def connect(env: Environment, formatter: OutputFormatter) -> Bofh:
    sys.stdout.write(f'Connecting to {env.connection.url}\n\n')
    sys.stdout.flush()
    client = Bofh.connect(
        env.connection.url,
        timeout=env.connection.timeout,
        cert=env.connection.cert,
        insecure=env.connection.insecure,
        retries=env.connection.retries,
    )
    if client.motd:
        sys.stdout.write(f'{formatter.format_motd(client.motd)}\n\n')
        sys.stdout.flush()
    return client


class InteractiveShell:
    """Read-eval-print loop over an authenticated ShellSession"""

    def __init__(
        self,
        session: ShellSession,
        user: str,
        formatter: OutputFormatter | None = None,
        password_prompt: PasswordPrompt = ask_password,
    ) -> None:
        self.session = session
        self.user = user
        self.formatter = formatter if formatter is not None else OutputFormatter(use_color=False)
        self.password_prompt = password_prompt
        self.running = True

    def _write(self, text: str) -> None:
        if text:
            sys.stdout.write(f'{text}\n')
            sys.stdout.flush()

    def _error(self, message: str) -> None:
        sys.stderr.write(f'{self.formatter.format_error(message)}\n')
        sys.stderr.flush()

    def _commands(self) -> str:
        schema = self.session.schema
        return '\n'.join(f'{group} {command}' for group in schema for command in schema[group].commands)

    def _handle_builtin(self, line: str) -> bool:
        """Run a shell builtin, False when line is not one"""
        tokens = line.split()
        if not tokens:
            return True

        cmd = tokens[0]

        if cmd in ('quit', 'exit'):
            self.running = False
            return True

        if cmd == 'commands':
            self._write(self._commands())
            return True

        if cmd == 'help':
            self._write(self.formatter.format_result(self.session.help(tokens[1:])))
            return True

        return False

    def _relogin(self) -> None:
        self._error('session expired, please log in again')
        password = self.password_prompt(self.user)
        self.session.schema = self.session.client.login(self.user, password)
        log.info(lazymsg('logged in again as {user}', user=self.user), 'cli')

    def _dispatch(self, line: str) -> None:
        if self._handle_builtin(line):
            return
        self._write(self.formatter.format_result(self.session.resolve_and_invoke(line)))

    def execute(self, line: str) -> bool:
        """Run one line, print its outcome, True when it succeeded"""
        try:
            try:
                self._dispatch(line)
            except SessionExpiredError:
                try:
                    self._relogin()
                except (EOFError, KeyboardInterrupt):
                    self._error(str(SessionExpiredError()))
                    return False
                self._dispatch(line)
        except BofhError as exc:
            log.debug(lazyexc(f'{line.strip()!r} failed', exc), 'cli')
            self._error(str(exc))
            return False
        return True

    def _history(self, path: str) -> History:
        if not path:
            return InMemoryHistory()
        return FileHistory(path)

    def prompt_session(self, env: Environment) -> PromptSession:
        return PromptSession(
            history=self._history(env.shell.history),
            completer=BofhCompleter(self.session),
            auto_suggest=BofhAutoSuggest(self.session),
            lexer=BofhLexer(self.session) if self.formatter.use_color else None,
            style=STYLE,
            vi_mode=env.shell.vi,
            complete_style=CompleteStyle.COLUMN if env.shell.vi else CompleteStyle.READLINE_LIKE,
            complete_while_typing=False,
            multiline=False,
        )

    def run(self, env: Environment) -> None:
        prompt_session = self.prompt_session(env)

        while self.running:
            try:
                line = prompt_session.prompt(env.shell.prompt)
            except (EOFError, KeyboardInterrupt):
                break

            if not line.strip():
                continue

            self.execute(line)

        self._write(GOODBYE)


def start(cmdarg: argparse.Namespace, line: str | None = None, password_prompt: PasswordPrompt = ask_password) -> int:
    """Connect, log in, then run line or the interactive loop"""
    env = getenv()
    configure(env, cmdarg)
    formatter = OutputFormatter(env.shell.color)

    try:
        client = connect(env, formatter)
    except BofhError as exc:
        sys.stderr.write(f'{formatter.format_error(str(exc))}\n')
        return 1

    with client:
        user = env.connection.user
        try:
            schema = client.login(user, password_prompt(user))
        except (EOFError, KeyboardInterrupt):
            sys.stdout.write('\n')
            return 1
        except BofhError as exc:
            sys.stderr.write(f'{formatter.format_error(str(exc))}\n')
            return 1

        log.info(lazymsg('logged in as {user}, {groups} command groups', user=user, groups=len(schema)), 'startup')
        shell = InteractiveShell(ShellSession(client, schema), user, formatter, password_prompt)
        if line is not None:
            return 0 if shell.execute(line) else 1

        shell.run(env)
    return 0


def cmdline(cmdarg: argparse.Namespace) -> int:
    return start(cmdarg, getattr(cmdarg, 'cmd', None))
