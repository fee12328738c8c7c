# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations."""

from __future__ import annotations

from collections.abc import Sequence

from ..errors import TransportError
from .client import HttpClient
from .models import HttpRequest, HttpResponse
from .trace import TraceEvent, TraceEventType, TransportTracer

DEFAULT_STUB_EVENTS: tuple[TraceEvent, ...] = (
    TraceEvent(TraceEventType.DNS_START),
    TraceEvent(TraceEventType.DNS_DONE),
    TraceEvent(TraceEventType.CONNECT_START),
    TraceEvent(TraceEventType.CONNECT_DONE),
    TraceEvent(TraceEventType.FIRST_BYTE),
    TraceEvent(TraceEventType.FINALIZE),
)


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests.

    Each URL maps to either an ``HttpResponse`` or an exception to raise. Before answering, the
    stub replays ``events`` through the attempt's tracer the same way a real transport would.
    """

    def __init__(
        self,
        responses: dict[str, HttpResponse | BaseException] | None = None,
        events: Sequence[TraceEvent] = DEFAULT_STUB_EVENTS,
    ):
        self._responses = responses or {}
        self._events = tuple(events)
        self.requests: list[HttpRequest] = []
        self.tracers: list[TransportTracer] = []
        self.closed = False

    def request(self, request: HttpRequest, tracer: TransportTracer | None = None) -> HttpResponse:
        tracer = tracer or TransportTracer()
        self.requests.append(request)
        self.tracers.append(tracer)

        outcome = self._responses.get(request.url)
        if outcome is None:
            raise TransportError(f"No stubbed response configured for {request.url}")

        for event in self._events:
            tracer.emit(event)
            tracer.raise_for_error()

        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def close(self) -> None:
        self.closed = True
