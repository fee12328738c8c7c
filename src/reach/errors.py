# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers.

Every user-facing failure of a probe is a ``ReachError``. Each one ends the run after being
rendered as a single ``"<label>: <detail>"`` line. Anything that is not a ``ReachError`` is a
programming fault and is left to propagate.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_URL = "INVALID_URL"
    DNS_ERROR = "DNS_ERROR"
    CONNECT_ERROR = "CONNECT_ERROR"
    TLS_ERROR = "TLS_ERROR"
    TIMEOUT = "TIMEOUT"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    FINALIZE_ERROR = "FINALIZE_ERROR"


class ReachError(Exception):
    """Base class for terminal probe failures."""

    kind: ErrorKind = ErrorKind.TRANSPORT_ERROR
    label: str = "Request Failed"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.label}: {self.detail}"


class InvalidURLError(ReachError):
    kind = ErrorKind.INVALID_URL
    label = "Invalid URL"

    @classmethod
    def for_url(cls, url: str) -> InvalidURLError:
        return cls(f"Unable to parse '{url}'")


class DNSError(ReachError):
    kind = ErrorKind.DNS_ERROR
    label = "DNS Lookup Failed"


class ConnectError(ReachError):
    kind = ErrorKind.CONNECT_ERROR
    label = "Connection Failed"


class TLSHandshakeError(ReachError):
    kind = ErrorKind.TLS_ERROR
    label = "TLS Handshake Failed"


class ResponseTimeoutError(ReachError):
    kind = ErrorKind.TIMEOUT
    label = "Request Failed"

    def __init__(self, detail: str = "Request timed out before a response was received."):
        super().__init__(detail)


class TransportError(ReachError):
    kind = ErrorKind.TRANSPORT_ERROR
    label = "Request Failed"


class ConnectionFinalizeError(ReachError):
    kind = ErrorKind.FINALIZE_ERROR
    label = "Could Not Finish Connection"


_ERRORS_BY_KIND: dict[ErrorKind, type[ReachError]] = {
    ErrorKind.INVALID_URL: InvalidURLError,
    ErrorKind.DNS_ERROR: DNSError,
    ErrorKind.CONNECT_ERROR: ConnectError,
    ErrorKind.TLS_ERROR: TLSHandshakeError,
    ErrorKind.TIMEOUT: ResponseTimeoutError,
    ErrorKind.TRANSPORT_ERROR: TransportError,
    ErrorKind.FINALIZE_ERROR: ConnectionFinalizeError,
}


def _cause_chain(exc: BaseException) -> list[BaseException]:
    chain: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and current not in chain:
        chain.append(current)
        current = current.__cause__ or current.__context__
    return chain


def categorize_exception(exc: BaseException) -> ErrorKind:
    """
    Map Python/httpx/httpcore exceptions to ErrorKind.

    The whole cause chain is inspected, since httpx wraps httpcore errors which in turn wrap
    the socket/ssl error that actually happened.
    """
    import socket
    import ssl as ssl_module

    import httpcore
    import httpx

    chain = _cause_chain(exc)

    if any(isinstance(e, ReachError) for e in chain):
        return next(e for e in chain if isinstance(e, ReachError)).kind

    if any(isinstance(e, (socket.gaierror, socket.herror)) for e in chain):
        return ErrorKind.DNS_ERROR

    if any(isinstance(e, (ssl_module.SSLError, ssl_module.CertificateError)) for e in chain):
        return ErrorKind.TLS_ERROR

    if isinstance(exc, (httpx.TimeoutException, httpcore.TimeoutException, TimeoutError)):
        return ErrorKind.TIMEOUT

    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return ErrorKind.INVALID_URL

    if isinstance(exc, (httpx.ConnectError, httpcore.ConnectError, ConnectionError)):
        return ErrorKind.CONNECT_ERROR

    return ErrorKind.TRANSPORT_ERROR


def error_from_exception(exc: BaseException) -> ReachError:
    """Wrap a low-level exception in the ReachError matching its kind."""
    if isinstance(exc, ReachError):
        return exc
    error_cls = _ERRORS_BY_KIND[categorize_exception(exc)]
    if error_cls is ResponseTimeoutError:
        return ResponseTimeoutError()
    return error_cls(str(exc) or type(exc).__name__)


__all__ = [
    "ConnectError",
    "ConnectionFinalizeError",
    "DNSError",
    "ErrorKind",
    "InvalidURLError",
    "ReachError",
    "ResponseTimeoutError",
    "TLSHandshakeError",
    "TransportError",
    "categorize_exception",
    "error_from_exception",
]
