# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client abstraction and factory."""

from __future__ import annotations

from typing import Protocol

from ..config import ProbeSettings, load_probe_settings
from .models import HttpRequest, HttpResponse
from .trace import TransportTracer


class HttpClient(Protocol):
    """Issues exactly one request per call and never follows redirects.

    Implementations raise ``ReachError`` subclasses for user-facing failures.
    """

    def request(self, request: HttpRequest, tracer: TransportTracer | None = None) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_http_client(settings: ProbeSettings | None = None) -> HttpClient:
    """Factory for the default httpx-backed client."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_probe_settings())
