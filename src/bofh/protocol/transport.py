"""transport.py

XML-RPC transports with a connection timeout and TLS settings.

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

import ssl
import http.client
import xmlrpc.client
from typing import Any
from urllib.parse import urlsplit

from bofh.logger import log, lazymsg


class _TimeoutMixin:
    timeout: float | None = None

    def make_connection(self, host: Any) -> http.client.HTTPConnection:
        connection: http.client.HTTPConnection = super().make_connection(host)  # type: ignore[misc]
        if self.timeout:
            connection.timeout = self.timeout
        return connection


class TimeoutTransport(_TimeoutMixin, xmlrpc.client.Transport):
    def __init__(self, timeout: float | None = None) -> None:
        super().__init__()
        self.timeout = timeout


class SafeTimeoutTransport(_TimeoutMixin, xmlrpc.client.SafeTransport):
    def __init__(self, timeout: float | None = None, context: ssl.SSLContext | None = None) -> None:
        super().__init__(context=context)
        self.timeout = timeout


def ssl_context(cert: str = '', insecure: bool = False) -> ssl.SSLContext:
    """Build the TLS context used to talk to bofhd.

    Args:
        cert: PEM file with the CA certificates to trust, empty for the system store
        insecure: do not check that the certificate matches the host name
    """
    context = ssl.create_default_context(cafile=cert or None)
    if insecure:
        log.warning(lambda: 'certificate hostname validation is disabled', 'network')
        context.check_hostname = False
    return context


def make_proxy(url: str, timeout: int = 0, cert: str = '', insecure: bool = False) -> xmlrpc.client.ServerProxy:
    """Create the ServerProxy for a bofhd URL, http or https."""
    scheme = urlsplit(url).scheme
    transport: xmlrpc.client.Transport
    if scheme == 'https':
        transport = SafeTimeoutTransport(timeout or None, ssl_context(cert, insecure))
    else:
        transport = TimeoutTransport(timeout or None)

    log.debug(lazymsg('using {scheme} transport to {url}, timeout {timeout}', scheme=scheme, url=url, timeout=timeout or 'none'), 'network')
    return xmlrpc.client.ServerProxy(url, transport=transport, allow_none=True, use_builtin_types=True)
