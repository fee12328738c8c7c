# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers used before every probe attempt."""

from __future__ import annotations

from urllib.parse import urljoin, urlparse

ALLOWED_SCHEMES = ("http", "https")
DEFAULT_SCHEME = "http"


def normalize_url(raw: str) -> str:
    """
    Return ``raw`` with an ``http://`` prefix unless it already carries an http(s) scheme.

    Example:
      example.com/path -> http://example.com/path
      https://example.com -> https://example.com
    """
    value = str(raw or "").strip()
    if value.startswith(("http://", "https://")):
        return value
    return f"{DEFAULT_SCHEME}://{value}"


def validate_url(url: str) -> bool:
    """Return True when ``url`` parses with an http(s) scheme and a non-empty host."""
    try:
        parsed = urlparse(str(url or ""))
        # Accessing .port validates the port component (raises ValueError when out of range).
        parsed.port
    except ValueError:
        return False
    if not parsed.scheme or not parsed.hostname:
        return False
    return parsed.scheme in ALLOWED_SCHEMES


def resolve_location(current_url: str, location: str | None) -> str:
    """
    Resolve a redirect ``Location`` against the URL of the hop that returned it.

    Absolute locations pass through unchanged. A missing/blank location stays empty so the next
    validation step rejects it.
    """
    value = str(location or "").strip()
    if not value:
        return ""
    return urljoin(current_url, value)


__all__ = ["normalize_url", "resolve_location", "validate_url"]
