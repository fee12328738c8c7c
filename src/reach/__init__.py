# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
reach package entrypoint.

reach checks whether an HTTP(S) resource is reachable: it sends HEAD requests, reports connection
progress as it happens and walks redirects by hand, printing one status line per hop. HTTP
behavior sits behind an injectable client interface so the walker can be driven without a
network.
"""

from .config import ProbeSettings, load_probe_settings
from .errors import ErrorKind, ReachError
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    TransportTracer,
    create_default_http_client,
)
from .log import setup_logging
from .models import Hop, ProbeResult
from .render import ProgressRenderer
from .runtime import Reach
from .version import __version__
from .walker import RedirectWalker

__all__ = [
    "ErrorKind",
    "Hop",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "ProbeResult",
    "ProbeSettings",
    "ProgressRenderer",
    "Reach",
    "ReachError",
    "RedirectWalker",
    "StubHttpClient",
    "TransportTracer",
    "create_default_http_client",
    "load_probe_settings",
    "setup_logging",
    "__version__",
]
