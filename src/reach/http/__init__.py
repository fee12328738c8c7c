# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse, StatusClass
from .trace import TraceEvent, TraceEventType, TransportTracer
from .url import normalize_url, resolve_location, validate_url

__all__ = [
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "StatusClass",
    "StubHttpClient",
    "TraceEvent",
    "TraceEventType",
    "TransportTracer",
    "create_default_http_client",
    "normalize_url",
    "resolve_location",
    "validate_url",
]
