# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Connection-lifecycle tracing for a single request.

``TransportTracer`` plugs into httpx through the ``trace`` request extension, which httpcore
calls as ``trace(event_name, info)`` around each low-level step. The tracer narrows those steps
down to a fixed set of events and turns each one into either a progress message or a recorded
``ReachError``. Build a new tracer for every attempt; they are not meant to be reused.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..errors import (
    ConnectError,
    ConnectionFinalizeError,
    DNSError,
    ErrorKind,
    ReachError,
    TLSHandshakeError,
    categorize_exception,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


class TraceEventType(str, Enum):
    DNS_START = "dns_start"
    DNS_DONE = "dns_done"
    CONNECT_START = "connect_start"
    CONNECT_DONE = "connect_done"
    TLS_DONE = "tls_done"
    FIRST_BYTE = "first_byte"
    PROVISIONAL = "provisional"
    FINALIZE = "finalize"


@dataclass(frozen=True)
class TraceEvent:
    type: TraceEventType
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


PROGRESS_MESSAGES: dict[TraceEventType, str] = {
    TraceEventType.DNS_START: "Starting DNS Lookup",
    TraceEventType.DNS_DONE: "DNS Lookup Complete",
    TraceEventType.CONNECT_START: "Connection Started",
    TraceEventType.CONNECT_DONE: "Connected - waiting for response...",
    TraceEventType.TLS_DONE: "TLS Handshake Complete.",
    TraceEventType.FIRST_BYTE: "Receiving Response",
    TraceEventType.PROVISIONAL: "Received 100 Response - Waiting...",
    TraceEventType.FINALIZE: "Connection finished",
}

_FAILURE_ERRORS: dict[TraceEventType, type[ReachError]] = {
    TraceEventType.DNS_DONE: DNSError,
    TraceEventType.CONNECT_DONE: ConnectError,
    TraceEventType.TLS_DONE: TLSHandshakeError,
    TraceEventType.FINALIZE: ConnectionFinalizeError,
}

# httpcore step name -> (event on .started, event on .complete/.failed)
_HTTPCORE_STEPS: dict[str, tuple[TraceEventType | None, TraceEventType | None]] = {
    "connection.connect_tcp": (TraceEventType.CONNECT_START, TraceEventType.CONNECT_DONE),
    "connection.connect_unix_socket": (TraceEventType.CONNECT_START, TraceEventType.CONNECT_DONE),
    "connection.start_tls": (None, TraceEventType.TLS_DONE),
    "http11.receive_response_headers": (None, TraceEventType.FIRST_BYTE),
    "http2.receive_response_headers": (None, TraceEventType.FIRST_BYTE),
    "http11.response_closed": (None, TraceEventType.FINALIZE),
    "http2.response_closed": (None, TraceEventType.FINALIZE),
}


def _is_provisional(step: str, info: dict[str, Any]) -> bool:
    """Whether the headers just received carry a 1xx status.

    httpcore returns ``(http_version, status, reason, headers)`` for HTTP/1.1 and
    ``(status, headers)`` for HTTP/2.
    """
    value = info.get("return_value")
    if not isinstance(value, tuple) or not value:
        return False
    status = value[0] if step.startswith("http2.") else (value[1] if len(value) > 1 else None)
    return isinstance(status, int) and 100 <= status < 200


class TransportTracer:
    """Observes one request's lifecycle and reports progress through ``on_progress``."""

    def __init__(self, on_progress: ProgressCallback | None = None):
        self._on_progress = on_progress
        self.events: list[TraceEvent] = []
        self.error: ReachError | None = None

    def __call__(self, event_name: str, info: dict[str, Any]) -> None:
        step, _, phase = event_name.rpartition(".")
        mapped = _HTTPCORE_STEPS.get(step)
        if mapped is None:
            return
        on_started, on_finished = mapped
        if phase == "started" and on_started is not None:
            self.emit(TraceEvent(on_started))
        elif phase == "complete" and on_finished is not None:
            self.emit(TraceEvent(on_finished))
            if on_finished is TraceEventType.FIRST_BYTE and _is_provisional(step, info):
                self.emit(TraceEvent(TraceEventType.PROVISIONAL))
        elif phase == "failed" and on_finished is not None:
            if on_finished is TraceEventType.FIRST_BYTE:
                # Waiting for headers failed; the executor classifies that (timeout or transport).
                return
            self.emit(TraceEvent(on_finished, error=info.get("exception")))

    def emit(self, event: TraceEvent) -> None:
        self.events.append(event)
        if event.ok:
            message = PROGRESS_MESSAGES[event.type]
            logger.debug("trace: %s", message)
            if self._on_progress is not None:
                self._on_progress(message)
            return

        if self.error is None:
            self.error = self._error_for(event)
            logger.debug("trace: %s failed: %r", event.type.value, event.error)

    def raise_for_error(self) -> None:
        """Raise the first error reported by a hook, if any."""
        if self.error is not None:
            raise self.error

    @staticmethod
    def _error_for(event: TraceEvent) -> ReachError:
        error_cls = _FAILURE_ERRORS.get(event.type, ConnectError)
        exc = event.error
        # Name resolution inside connect still counts as a DNS failure.
        if error_cls is ConnectError and exc is not None and categorize_exception(exc) is ErrorKind.DNS_ERROR:
            error_cls = DNSError
        detail = (str(exc) or type(exc).__name__) if exc is not None else "unknown error"
        error = error_cls(detail)
        if isinstance(exc, BaseException):
            error.__cause__ = exc
        return error


__all__ = [
    "PROGRESS_MESSAGES",
    "ProgressCallback",
    "TraceEvent",
    "TraceEventType",
    "TransportTracer",
]
