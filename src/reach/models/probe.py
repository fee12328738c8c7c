# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe hop/result models."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import ReachError
from ..http.models import HttpResponse, StatusClass


@dataclass(frozen=True)
class Hop:
    """One request/response pair within a redirect chain."""

    url: str
    status_code: int
    reason_phrase: str = ""
    location: str | None = None

    @property
    def status_class(self) -> StatusClass:
        return StatusClass.from_status(self.status_code)

    @property
    def is_redirect(self) -> bool:
        return self.status_class is StatusClass.REDIRECT

    @property
    def status_line(self) -> str:
        return f"{self.status_code} {self.reason_phrase}".rstrip()

    @classmethod
    def from_response(cls, url: str, response: HttpResponse) -> Hop:
        location = response.location if response.status_class is StatusClass.REDIRECT else None
        return cls(
            url=url,
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            location=location,
        )


@dataclass
class ProbeResult:
    """Outcome of walking one redirect chain: success when ``error`` is None."""

    hops: list[Hop] = field(default_factory=list)
    error: ReachError | None = None
    redirect_limit_reached: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def final_hop(self) -> Hop | None:
        return self.hops[-1] if self.hops else None
