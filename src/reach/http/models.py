# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used by the probe."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from http import HTTPStatus

import httpx

Headers = dict[str, str]


class StatusClass(IntEnum):
    """The hundreds digit of an HTTP status code."""

    UNKNOWN = 0
    INFORMATIONAL = 1
    SUCCESS = 2
    REDIRECT = 3
    CLIENT_ERROR = 4
    SERVER_ERROR = 5

    @classmethod
    def from_status(cls, status_code: int) -> StatusClass:
        try:
            return cls(status_code // 100)
        except ValueError:
            return cls.UNKNOWN


def reason_phrase_for(status_code: int) -> str:
    """Standard reason phrase for ``status_code``, or an empty string when unknown."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "HEAD"
    headers: Headers | None = None
    timeout: float | None = None


@dataclass
class HttpResponse:
    """The raw result of exactly one request/response exchange."""

    status_code: int
    reason_phrase: str = ""
    headers: httpx.Headers | Headers = field(default_factory=httpx.Headers)
    url: str | None = None

    def __post_init__(self) -> None:
        # Stubs may pass plain dicts; httpx.Headers keeps lookups case-insensitive.
        if not isinstance(self.headers, httpx.Headers):
            self.headers = httpx.Headers(self.headers)
        if not self.reason_phrase:
            self.reason_phrase = reason_phrase_for(self.status_code)

    @property
    def status_class(self) -> StatusClass:
        return StatusClass.from_status(self.status_code)

    @property
    def status_line(self) -> str:
        """Standard status text, e.g. ``404 Not Found``."""
        return f"{self.status_code} {self.reason_phrase}".rstrip()

    @property
    def location(self) -> str | None:
        value = self.headers.get("location", "").strip()
        return value or None
