"""client.py

Blocking XML-RPC client for a bofhd server.

The client owns the endpoint and the session token. Faults are classified in
one place (_call) and a "server restarted" fault makes the same request go
out again, a bounded number of times.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import http.client
import xmlrpc.client
from types import TracebackType
from typing import Any, Sequence
from xml.parsers.expat import ExpatError

from bofh.logger import log, lazymsg, lazycall, lazyexc
from bofh.protocol.error import (
    BofhError,
    NoActiveSessionError,
    ServerRestartedError,
    TransportError,
    classify_fault,
)
from bofh.protocol.transport import make_proxy
from bofh.schema.builder import build
from bofh.schema.model import CommandSchema

# everything xmlrpc/http/ssl/sockets raise when no fault payload came back
TRANSPORT_ERRORS = (
    OSError,
    xmlrpc.client.ProtocolError,
    xmlrpc.client.ResponseError,
    http.client.HTTPException,
    ExpatError,
)


class Bofh:
    """Connection to a bofhd server.

    Use Bofh.connect() to create one, the server is contacted straight away.
    The client should be closed (or used as a context manager) so that an
    open session gets logged out.
    """

    def __init__(self, url: str, proxy: Any = None, retries: int = 1) -> None:
        self.url = url
        self.motd: str | None = None
        self.retries = retries
        self._proxy = proxy if proxy is not None else make_proxy(url)
        self._session: str | None = None

    @classmethod
    def connect(
        cls,
        url: str,
        timeout: int = 0,
        cert: str = '',
        insecure: bool = False,
        retries: int = 1,
        proxy: Any = None,
    ) -> Bofh:
        """Create a client and fetch the message of the day to check the server answers."""
        if proxy is None:
            try:
                proxy = make_proxy(url, timeout=timeout, cert=cert, insecure=insecure)
            except TRANSPORT_ERRORS as exc:
                raise TransportError(str(exc)) from exc
        bofh = cls(url, proxy=proxy, retries=retries)
        bofh.motd = bofh.get_motd()
        log.info(lazymsg('connected to {url}', url=url), 'network')
        return bofh

    @property
    def session(self) -> str | None:
        return self._session

    @property
    def authenticated(self) -> bool:
        return self._session is not None

    # =========================================================================
    # Raw calls
    # =========================================================================

    def _call(self, method: str, params: Sequence[Any], hidden: int = 0, token: bool = False) -> Any:
        restarts = 0
        while True:
            log.debug(lazycall(method, params, hidden, token), 'protocol')
            try:
                return getattr(self._proxy, method)(*params)
            except xmlrpc.client.Fault as fault:
                error = classify_fault(str(fault.faultString))
            except TRANSPORT_ERRORS as exc:
                log.debug(lazyexc(f'{method} failed', exc), 'network')
                raise TransportError(str(exc) or type(exc).__name__) from exc

            if not isinstance(error, ServerRestartedError):
                log.debug(lazymsg('{method} fault: {error}', method=method, error=error), 'protocol')
                raise error

            if restarts >= self.retries:
                raise TransportError(f'server restarted {restarts + 1} times while running {method}, giving up')
            restarts += 1
            log.info(lazymsg('server restarted, sending {method} again', method=method), 'protocol')

    def run_raw_command(self, method: str, *args: Any) -> Any:
        return self._call(method, args)

    def run_raw_sess_command(self, method: str, *args: Any) -> Any:
        if self._session is None:
            raise NoActiveSessionError()
        return self._call(method, (self._session, *args), token=True)

    # =========================================================================
    # bofhd operations
    # =========================================================================

    def get_motd(self) -> str:
        """Get the current Message of the Day from the server."""
        return str(self.run_raw_command('get_motd'))

    def authenticate(self, username: str, password: str) -> str:
        """Open a session, the password is only used for this call."""
        self._session = str(self._call('login', (username, password), hidden=1))
        log.info(lazymsg('authenticated as {username}', username=username), 'protocol')
        return self._session

    def fetch_schema(self) -> Any:
        """Return the raw command catalogue, the server may hide some commands."""
        return self.run_raw_sess_command('get_commands')

    def login(self, username: str, password: str) -> CommandSchema:
        """Authenticate then build the command schema from the server catalogue."""
        self.authenticate(username, password)
        return build(self.fetch_schema())

    def invoke(self, full_name: str, args: Sequence[str] = ()) -> Any:
        """Run the command known remotely as full_name with positional arguments."""
        return self.run_raw_sess_command('run_command', full_name, *args)

    def get_help(self, *topic: str) -> str:
        """General help, help on a group, on a command, or ('arg_help', help_ref)."""
        return str(self.run_raw_sess_command('help', *topic))

    def get_format_suggestion(self, full_name: str) -> Any:
        """Server formatting hints for full_name, asked without a session."""
        return self.run_raw_command('get_format_suggestion', full_name)

    def logout(self) -> None:
        """End the session, failures are logged and ignored."""
        if self._session is None:
            return
        try:
            self.run_raw_sess_command('logout')
        except BofhError as exc:
            log.debug(lazyexc('logout failed', exc), 'protocol')
        finally:
            self._session = None

    def close(self) -> None:
        self.logout()
        # ServerProxy('close') hands back the transport close method
        if not callable(self._proxy):
            return
        try:
            self._proxy('close')()
        except TRANSPORT_ERRORS as exc:
            log.debug(lazyexc('closing transport failed', exc), 'network')

    def __enter__(self) -> Bofh:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()
