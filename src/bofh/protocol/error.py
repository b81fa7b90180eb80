"""error.py

Error taxonomy for the bofhd client and classification of XML-RPC faults.

Faults are classified once, here, from the fault string sent by the server.
Every layer above the client receives one of the exceptions below and never
looks at a raw fault string again.

Key classes:
    BofhError: base of every error raised by this package
    TransportError: no fault payload (socket, HTTP, TLS or XML failure)
    DomainError, NotImplementedFault, GenericFault: faults sent by the server
    SessionExpiredError, NoActiveSessionError: session state problems
    UnknownCommandError, IncompleteCommandError: user input problems

License: 3-clause BSD. (See the COPYRIGHT file)
"""

from __future__ import annotations

from typing import Iterable

__all__ = [
    'FAULT_NAMESPACE',
    'BofhError',
    'TransportError',
    'DomainError',
    'NotImplementedFault',
    'GenericFault',
    'ServerRestartedError',
    'SessionExpiredError',
    'NoActiveSessionError',
    'MalformedCatalogueError',
    'UnknownCommandError',
    'IncompleteCommandError',
    'classify_fault',
]

FAULT_NAMESPACE: str = 'Cerebrum.modules.bofhd.errors.'


class BofhError(Exception):
    """Base class, str() is the one line shown to the user."""


class TransportError(BofhError):
    pass


class DomainError(BofhError):
    """The server refused the request (CerebrumError)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotImplementedFault(BofhError):
    """The server declines the operation (NotImplementedError)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class GenericFault(BofhError):
    """A fault we do not know, the message is the raw fault string."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ServerRestartedError(BofhError):
    # only seen inside the client, which re-sends the request
    def __str__(self) -> str:
        return 'Server restarted'


class SessionExpiredError(BofhError):
    def __str__(self) -> str:
        return 'Session expired'


class NoActiveSessionError(BofhError):
    def __str__(self) -> str:
        return 'Attempted to run session command before session was established'


class MalformedCatalogueError(BofhError):
    """The command catalogue sent by the server does not have the expected shape."""


class UnknownCommandError(BofhError):
    def __init__(self, *words: str) -> None:
        super().__init__(*words)
        self.words = words

    def __str__(self) -> str:
        if not self.words:
            return 'Unknown command'
        command = ' '.join(self.words)
        return f"Unknown command '{command}'"


class IncompleteCommandError(BofhError):
    def __init__(self, group: str, subcommands: Iterable[str]) -> None:
        self.group = group
        self.subcommands = tuple(subcommands)
        super().__init__(group, self.subcommands)

    def __str__(self) -> str:
        return f"Incomplete command '{self.group}', possible subcommands: {', '.join(self.subcommands)}"


def classify_fault(fault_string: str) -> BofhError:
    """Turn the fault string of an XML-RPC fault into one of our errors.

    >>> classify_fault('Cerebrum.modules.bofhd.errors.CerebrumError:Entity not found')
    DomainError('Entity not found')
    """
    if fault_string.startswith(FAULT_NAMESPACE):
        bofhd_error = fault_string[len(FAULT_NAMESPACE) :]
        if bofhd_error.startswith('CerebrumError:'):
            return DomainError(bofhd_error[len('CerebrumError:') :])
        if bofhd_error.startswith('ServerRestartedError:'):
            return ServerRestartedError()
        if bofhd_error.startswith('SessionExpiredError:'):
            return SessionExpiredError()
        return GenericFault(fault_string)

    if fault_string.startswith('NotImplementedError:'):
        return NotImplementedFault(fault_string[len('NotImplementedError:') :])

    return GenericFault(fault_string)
