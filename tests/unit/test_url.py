# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from reach.http.url import normalize_url, resolve_location, validate_url


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("example.com", "http://example.com"),
        ("example.com/path?q=1", "http://example.com/path?q=1"),
        ("  example.com  ", "http://example.com"),
        ("http://example.com", "http://example.com"),
        ("https://example.com/a", "https://example.com/a"),
    ],
)
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


def test_normalize_url_prefixes_exactly_once():
    once = normalize_url("example.com")
    assert normalize_url(once) == once
    assert once.count("http://") == 1


@pytest.mark.parametrize("url", ["", "ftp://host", "http://", "https://", "http://[::1", "http://host:99999/", "mailto:a@b"])
def test_validate_url_rejects(url):
    assert validate_url(url) is False


@pytest.mark.parametrize("url", ["http://example.com", "https://example.com/path", "http://127.0.0.1:8080/x", "http://[::1]/"])
def test_validate_url_accepts(url):
    assert validate_url(url) is True


def test_resolve_location_relative_and_absolute():
    assert resolve_location("http://a.test/dir/page", "/login") == "http://a.test/login"
    assert resolve_location("http://a.test/dir/page", "next") == "http://a.test/dir/next"
    assert resolve_location("http://a.test/", "https://b.test/x") == "https://b.test/x"
    assert resolve_location("https://a.test/", "//c.test/") == "https://c.test/"


def test_resolve_location_blank_stays_empty():
    assert resolve_location("http://a.test/", None) == ""
    assert resolve_location("http://a.test/", "   ") == ""
    assert validate_url(resolve_location("http://a.test/", "")) is False
