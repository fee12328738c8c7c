# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for reach."""

from ..http.models import Headers, HttpRequest, HttpResponse, StatusClass
from .probe import Hop, ProbeResult

__all__ = [
    "Headers",
    "Hop",
    "HttpRequest",
    "HttpResponse",
    "ProbeResult",
    "StatusClass",
]
