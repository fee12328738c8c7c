# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
One deadline for the whole response-header wait of a hop.

``httpx.Timeout`` bounds each individual socket read, so a server that trickles header lines in
just under the read timeout is never cut off. ``HeaderDeadlineBackend`` wraps httpcore's sync
network backend and clamps every read to the time left on the current hop's deadline. The clock
starts at the first read of the hop, which is after the request has been written.
"""

from __future__ import annotations

import ssl
import time
import typing
from collections.abc import Iterator
from contextlib import contextmanager

import httpcore
import httpx


class HeaderDeadline:
    def __init__(self, seconds: float):
        self.seconds = seconds
        self.expires_at: float | None = None

    def remaining(self) -> float:
        now = time.monotonic()
        if self.expires_at is None:
            self.expires_at = now + self.seconds
        return self.expires_at - now


class DeadlineStream(httpcore.NetworkStream):
    def __init__(self, stream: httpcore.NetworkStream, backend: HeaderDeadlineBackend):
        self._stream = stream
        self._backend = backend

    def read(self, max_bytes: int, timeout: float | None = None) -> bytes:
        deadline = self._backend.deadline
        if deadline is not None:
            remaining = deadline.remaining()
            if remaining <= 0:
                raise httpcore.ReadTimeout("response headers not received in time")
            timeout = remaining if timeout is None else min(timeout, remaining)
        return self._stream.read(max_bytes, timeout)

    def write(self, buffer: bytes, timeout: float | None = None) -> None:
        self._stream.write(buffer, timeout)

    def close(self) -> None:
        self._stream.close()

    def start_tls(
        self,
        ssl_context: ssl.SSLContext,
        server_hostname: str | None = None,
        timeout: float | None = None,
    ) -> httpcore.NetworkStream:
        return DeadlineStream(self._stream.start_tls(ssl_context, server_hostname, timeout), self._backend)

    def get_extra_info(self, info: str) -> typing.Any:
        return self._stream.get_extra_info(info)


class HeaderDeadlineBackend(httpcore.NetworkBackend):
    """Sync network backend whose streams honour the active ``header_deadline``."""

    def __init__(self, backend: httpcore.NetworkBackend | None = None):
        self._backend = backend or httpcore.SyncBackend()
        self.deadline: HeaderDeadline | None = None

    @contextmanager
    def header_deadline(self, seconds: float) -> Iterator[HeaderDeadline]:
        self.deadline = HeaderDeadline(seconds)
        try:
            yield self.deadline
        finally:
            self.deadline = None

    def connect_tcp(
        self,
        host: str,
        port: int,
        timeout: float | None = None,
        local_address: str | None = None,
        socket_options: typing.Iterable[typing.Any] | None = None,
    ) -> httpcore.NetworkStream:
        stream = self._backend.connect_tcp(
            host,
            port,
            timeout=timeout,
            local_address=local_address,
            socket_options=socket_options,
        )
        return DeadlineStream(stream, self)

    def connect_unix_socket(
        self,
        path: str,
        timeout: float | None = None,
        socket_options: typing.Iterable[typing.Any] | None = None,
    ) -> httpcore.NetworkStream:
        stream = self._backend.connect_unix_socket(path, timeout=timeout, socket_options=socket_options)
        return DeadlineStream(stream, self)

    def sleep(self, seconds: float) -> None:
        self._backend.sleep(seconds)


class HeaderDeadlineTransport(httpx.HTTPTransport):
    """``httpx.HTTPTransport`` whose connection pool runs on a ``HeaderDeadlineBackend``."""

    def __init__(self, backend: HeaderDeadlineBackend, verify: bool = True):
        super().__init__(verify=verify, retries=0)
        self._pool = httpcore.ConnectionPool(
            ssl_context=httpx.create_ssl_context(verify=verify),
            network_backend=backend,
        )


__all__ = ["DeadlineStream", "HeaderDeadline", "HeaderDeadlineBackend", "HeaderDeadlineTransport"]
