# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Manual redirect walking: one traced HEAD request per hop."""

from __future__ import annotations

import logging

from .config import ProbeSettings, load_probe_settings
from .errors import InvalidURLError, ReachError
from .http.client import HttpClient
from .http.models import HttpRequest
from .http.trace import TransportTracer
from .http.url import normalize_url, resolve_location, validate_url
from .models.probe import Hop, ProbeResult
from .render import ProgressRenderer

logger = logging.getLogger(__name__)


class RedirectWalker:
    """
    Follows a redirect chain hop by hop, rendering every status line along the way.

    Each hop is validated, executed with a fresh tracer and rendered. A 3xx response moves on to
    its ``Location``; anything else ends the walk. The walk also ends, without an error, once more
    than ``max_redirects`` redirects have been followed. Failures come back on the result rather
    than being raised or rendered here, so the caller decides how to report them.
    """

    def __init__(
        self,
        http_client: HttpClient,
        renderer: ProgressRenderer,
        settings: ProbeSettings | None = None,
    ):
        self.http_client = http_client
        self.renderer = renderer
        self.settings = settings or load_probe_settings()

    def walk(self, url: str) -> ProbeResult:
        result = ProbeResult()
        next_url = normalize_url(url)
        redirects = 0

        while True:
            if not validate_url(next_url):
                result.error = InvalidURLError.for_url(next_url)
                return result

            try:
                hop = self._attempt(next_url)
            except ReachError as exc:
                logger.debug("Hop %d to %s failed: %s", len(result.hops) + 1, next_url, exc)
                result.error = exc
                return result

            result.hops.append(hop)
            self.renderer.status(hop)
            if not hop.is_redirect:
                return result

            self.renderer.newline()
            redirects += 1
            if redirects > self.settings.max_redirects:
                logger.info("Stopped after %d redirects (limit %d)", redirects - 1, self.settings.max_redirects)
                result.redirect_limit_reached = True
                return result
            next_url = resolve_location(hop.url, hop.location)

    def _attempt(self, url: str) -> Hop:
        tracer = TransportTracer(on_progress=self.renderer.progress)
        request = HttpRequest(url=url, method="HEAD", timeout=self.settings.timeout)
        response = self.http_client.request(request, tracer)
        hop = Hop.from_response(url, response)
        logger.debug("HEAD %s -> %s", url, hop.status_line)
        return hop


__all__ = ["RedirectWalker"]
