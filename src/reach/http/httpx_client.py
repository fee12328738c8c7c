# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
import socket

import httpx

from ..config import ProbeSettings, load_probe_settings
from ..errors import InvalidURLError, ResponseTimeoutError, error_from_exception
from .client import HttpClient
from .deadline import HeaderDeadlineBackend, HeaderDeadlineTransport
from .models import HttpRequest, HttpResponse
from .trace import TraceEvent, TraceEventType, TransportTracer

logger = logging.getLogger(__name__)

_DEFAULT_PORTS = {"http": 80, "https": 443}


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper that sends single, traced HEAD requests."""

    def __init__(self, settings: ProbeSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_probe_settings()
        self._backend = HeaderDeadlineBackend()
        # trust_env=False: the probe connects directly to the host it resolved itself.
        self._client = client or httpx.Client(
            follow_redirects=False,
            timeout=httpx.Timeout(self.settings.timeout),
            transport=HeaderDeadlineTransport(self._backend, verify=self.settings.verify_ssl),
            trust_env=False,
        )

    def request(self, request: HttpRequest, tracer: TransportTracer | None = None) -> HttpResponse:
        tracer = tracer or TransportTracer()
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)

        try:
            url = httpx.URL(request.url)
        except httpx.InvalidURL as exc:
            raise InvalidURLError.for_url(request.url) from exc

        self._resolve(url, tracer)

        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        try:
            with self._backend.header_deadline(timeout):
                resp = self._client.request(
                    request.method,
                    url,
                    headers=headers,
                    timeout=httpx.Timeout(timeout),
                    follow_redirects=False,
                    extensions={"trace": tracer},
                )
        except httpx.TimeoutException as exc:
            tracer.raise_for_error()
            raise ResponseTimeoutError() from exc
        except httpx.InvalidURL as exc:
            raise InvalidURLError.for_url(request.url) from exc
        except httpx.HTTPError as exc:
            tracer.raise_for_error()
            raise error_from_exception(exc) from exc

        tracer.raise_for_error()

        logger.debug("%s %s -> %s", request.method, request.url, resp.status_code)
        return HttpResponse(
            status_code=resp.status_code,
            reason_phrase=resp.reason_phrase,
            headers=resp.headers,
            url=str(resp.url),
        )

    @staticmethod
    def _resolve(url: httpx.URL, tracer: TransportTracer) -> None:
        """Resolve the target host up front so DNS shows up as its own lifecycle step."""
        host = url.raw_host.decode("ascii")
        port = url.port or _DEFAULT_PORTS.get(url.scheme, 80)
        tracer.emit(TraceEvent(TraceEventType.DNS_START))
        try:
            socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
        except (socket.gaierror, socket.herror, UnicodeError) as exc:
            tracer.emit(TraceEvent(TraceEventType.DNS_DONE, error=exc))
            tracer.raise_for_error()
        else:
            tracer.emit(TraceEvent(TraceEventType.DNS_DONE))

    def close(self) -> None:
        self._client.close()
