# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level reach facade that wires the client, renderer and walker for one run."""

from __future__ import annotations

from contextlib import suppress
from typing import TextIO

from .config import ProbeSettings, load_probe_settings
from .http.client import HttpClient, create_default_http_client
from .models import ProbeResult
from .render import ProgressRenderer
from .walker import RedirectWalker


class Reach:
    """
    Convenience wrapper owning the HTTP client for the duration of a probe.

    The same client (and so its connection pool) serves every hop of the chain, and is closed
    when the facade is closed or leaves its ``with`` block.
    """

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        http_client: HttpClient | None = None,
        stream: TextIO | None = None,
    ):
        self.settings = settings or load_probe_settings()
        self.http_client = http_client or create_default_http_client(self.settings)
        self.renderer = ProgressRenderer(color_enabled=self.settings.color_enabled, stream=stream)
        self.walker = RedirectWalker(self.http_client, self.renderer, self.settings)

    def probe(self, url: str) -> ProbeResult:
        return self.walker.walk(url)

    def report(self, result: ProbeResult) -> None:
        """Render how the run ended: the error line, or the closing blank line."""
        if result.error is not None:
            self.renderer.error(result.error)
        self.renderer.newline()

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> Reach:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
