# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket

import httpcore
import httpx
import pytest

from reach.config import ProbeSettings
from reach.errors import (
    ConnectError,
    DNSError,
    ErrorKind,
    InvalidURLError,
    ReachError,
    ResponseTimeoutError,
    TransportError,
)
from reach.http.adapters import StubHttpClient
from reach.http.client import create_default_http_client
from reach.http.httpx_client import HttpxClient
from reach.http.models import HttpRequest, HttpResponse, StatusClass
from reach.http.trace import TraceEvent, TraceEventType, TransportTracer


@pytest.fixture
def resolved(monkeypatch):
    lookups = []

    def fake_getaddrinfo(host, port, *args, **kwargs):  # noqa: ARG001
        lookups.append((host, port))
        return [(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("127.0.0.1", port))]

    monkeypatch.setattr(socket, "getaddrinfo", fake_getaddrinfo)
    return lookups


def _client(handler, **settings):
    transport = httpx.MockTransport(handler)
    return HttpxClient(ProbeSettings(**settings), client=httpx.Client(transport=transport))


def test_http_response_derives_status_fields():
    resp = HttpResponse(status_code=404)
    assert resp.reason_phrase == "Not Found"
    assert resp.status_line == "404 Not Found"
    assert resp.status_class is StatusClass.CLIENT_ERROR
    assert resp.location is None

    redirect = HttpResponse(status_code=302, headers={"Location": "http://b.test"})
    assert redirect.status_class is StatusClass.REDIRECT
    assert redirect.location == "http://b.test"

    unknown = HttpResponse(status_code=799)
    assert unknown.reason_phrase == ""
    assert unknown.status_line == "799"
    assert unknown.status_class is StatusClass.UNKNOWN


def test_http_response_headers_are_case_insensitive():
    resp = HttpResponse(status_code=307, headers={"LoCaTiOn": " /next ", "X-Test": "1"})
    assert isinstance(resp.headers, httpx.Headers)
    assert resp.location == "/next"
    assert resp.headers["x-test"] == "1"
    assert HttpResponse(status_code=302, headers={"Location": "  "}).location is None


def test_httpx_client_sends_single_head_request(resolved):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(301, headers={"Location": "https://b.test/"})

    client = _client(handler, user_agent="UA/1.0")
    messages = []
    response = client.request(HttpRequest(url="http://a.test/start"), TransportTracer(on_progress=messages.append))

    assert len(seen) == 1
    assert seen[0].method == "HEAD"
    assert seen[0].headers["User-Agent"] == "UA/1.0"
    assert response.status_code == 301
    assert response.reason_phrase == "Moved Permanently"
    assert response.location == "https://b.test/"
    assert resolved == [("a.test", 80)]
    assert messages[:2] == ["Starting DNS Lookup", "DNS Lookup Complete"]


def test_httpx_client_passes_tracer_to_transport(resolved):  # noqa: ARG001
    def handler(request: httpx.Request) -> httpx.Response:
        trace = request.extensions["trace"]
        trace("connection.connect_tcp.started", {})
        trace("connection.connect_tcp.complete", {})
        trace("http11.receive_response_headers.complete", {})
        return httpx.Response(200)

    messages = []
    _client(handler).request(HttpRequest(url="https://a.test/"), TransportTracer(on_progress=messages.append))
    assert messages == [
        "Starting DNS Lookup",
        "DNS Lookup Complete",
        "Connection Started",
        "Connected - waiting for response...",
        "Receiving Response",
    ]


def test_httpx_client_uses_default_https_port(resolved):
    _client(lambda request: httpx.Response(204)).request(HttpRequest(url="https://a.test/"))
    assert resolved == [("a.test", 443)]


def test_httpx_client_reports_provisional_before_finish(resolved):  # noqa: ARG001
    def handler(request: httpx.Request) -> httpx.Response:
        trace = request.extensions["trace"]
        trace("http11.receive_response_headers.complete", {"return_value": (b"HTTP/1.1", 101, b"Switching Protocols", [])})
        trace("http11.response_closed.complete", {})
        return httpx.Response(101)

    messages = []
    response = _client(handler).request(HttpRequest(url="http://a.test/"), TransportTracer(on_progress=messages.append))
    assert response.status_class is StatusClass.INFORMATIONAL
    assert messages[-3:] == ["Receiving Response", "Received 100 Response - Waiting...", "Connection finished"]


def test_httpx_client_timeout(resolved):  # noqa: ARG001
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(ResponseTimeoutError) as info:
        _client(handler).request(HttpRequest(url="http://a.test/"))
    assert info.value.kind is ErrorKind.TIMEOUT
    assert str(info.value) == "Request Failed: Request timed out before a response was received."


def test_httpx_client_other_transport_errors(resolved):  # noqa: ARG001
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.RemoteProtocolError("Server disconnected without sending a response.", request=request)

    with pytest.raises(TransportError) as info:
        _client(handler).request(HttpRequest(url="http://a.test/"))
    assert str(info.value) == "Request Failed: Server disconnected without sending a response."


def test_httpx_client_prefers_hook_error_over_transport_error(resolved):  # noqa: ARG001
    def handler(request: httpx.Request) -> httpx.Response:
        request.extensions["trace"]("connection.connect_tcp.failed", {"exception": httpcore.ConnectError("refused")})
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(ConnectError) as info:
        _client(handler).request(HttpRequest(url="http://a.test/"))
    assert str(info.value) == "Connection Failed: refused"


def test_httpx_client_dns_failure_stops_before_sending(monkeypatch):
    def failing_getaddrinfo(*args, **kwargs):  # noqa: ARG001
        raise socket.gaierror(-2, "Name or service not known")

    monkeypatch.setattr(socket, "getaddrinfo", failing_getaddrinfo)
    sent = []
    client = _client(lambda request: sent.append(request) or httpx.Response(200))

    with pytest.raises(DNSError) as info:
        client.request(HttpRequest(url="http://missing.test/"))
    assert info.value.label == "DNS Lookup Failed"
    assert sent == []


def test_httpx_client_invalid_url():
    client = _client(lambda request: httpx.Response(200))
    with pytest.raises(InvalidURLError):
        client.request(HttpRequest(url="http://exa mple.com:abc/"))


def test_httpx_client_unexpected_exceptions_propagate(resolved):  # noqa: ARG001
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        raise RuntimeError("bug")

    with pytest.raises(RuntimeError):
        _client(handler).request(HttpRequest(url="http://a.test/"))


def test_create_default_http_client_builds_httpx_client():
    client = create_default_http_client(ProbeSettings(timeout=3, verify_ssl=False))
    try:
        assert isinstance(client, HttpxClient)
        assert client.settings.timeout == 3
    finally:
        client.close()


def test_stub_http_client_replays_events_and_records_requests():
    ok = HttpResponse(status_code=200)
    stub = StubHttpClient({"http://a.test/": ok})
    messages = []
    tracer = TransportTracer(on_progress=messages.append)

    assert stub.request(HttpRequest(url="http://a.test/"), tracer) is ok
    assert stub.requests[0].url == "http://a.test/"
    assert stub.tracers == [tracer]
    assert messages[0] == "Starting DNS Lookup"
    assert messages[-1] == "Connection finished"

    with pytest.raises(TransportError):
        stub.request(HttpRequest(url="http://missing.test/"))


def test_stub_http_client_raises_hook_errors():
    events = [TraceEvent(TraceEventType.DNS_START), TraceEvent(TraceEventType.DNS_DONE, error=socket.gaierror(-2, "nope"))]
    stub = StubHttpClient({"http://a.test/": HttpResponse(status_code=200)}, events=events)
    with pytest.raises(ReachError) as info:
        stub.request(HttpRequest(url="http://a.test/"))
    assert info.value.kind is ErrorKind.DNS_ERROR
