import logging

import pytest
import requests

import httptestclient
from httptestclient import HandlerSession, RoundTripFunc, intercept


def test_round_trip_func_accepts_any_callable():
    seen = []

    def round_trip(request):
        seen.append(request.url)
        response = requests.Response()
        response.status_code = 204
        response.url = request.url
        response.request = request
        response._content = b""  # noqa: SLF001
        return response

    client = HandlerSession(RoundTripFunc(round_trip))
    resp = client.get("http://localhost/ping")

    assert resp.status_code == 204
    assert seen == ["http://localhost/ping"]


def test_status_defaults_to_200_when_handler_writes_nothing():
    def silent(environ, start_response):
        return []

    resp = httptestclient.new(silent).get("http://localhost/")
    assert resp.status_code == 200
    assert resp.reason == "OK"
    assert resp.content == b""
    assert len(resp.headers) == 0


def test_handler_exception_propagates():
    def broken(environ, start_response):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        httptestclient.new(broken).get("http://localhost/")


def test_handler_reported_failure_is_not_translated(hello_handler):
    resp = httptestclient.new(hello_handler).get("http://localhost/error")
    assert resp.status_code == 500
    assert resp.ok is False
    with pytest.raises(requests.HTTPError):
        resp.raise_for_status()


def test_app_iterable_is_closed():
    closed = []

    class Body:
        def __iter__(self):
            yield b"chunk-1 "
            yield b"chunk-2"

        def close(self):
            closed.append(True)

    def app(environ, start_response):
        start_response("200 OK", [("Content-Type", "text/plain")])
        return Body()

    resp = httptestclient.new(app).get("http://localhost/")
    assert resp.content == b"chunk-1 chunk-2"
    assert closed == [True]


def test_write_callable_and_iterable_are_combined():
    def app(environ, start_response):
        write = start_response("201 Created", [("X-Kind", "legacy")])
        write(b"head ")
        return [b"tail"]

    resp = httptestclient.new(app).post("http://localhost/")
    assert resp.status_code == 201
    assert resp.headers["x-kind"] == "legacy"
    assert resp.content == b"head tail"


def test_each_call_gets_fresh_sink(hello_handler):
    adapter = intercept(hello_handler)
    first = adapter.send(requests.Request("GET", "http://localhost/error").prepare())
    second = adapter.send(requests.Request("GET", "http://localhost/").prepare())
    assert first.raw is not second.raw
    assert first.text == "Internal Server Error"
    assert second.text == "Hello, World!"


def test_stream_reads_raw_body(hello_handler):
    resp = httptestclient.new(hello_handler).get("http://localhost/fish", stream=True)
    assert resp.raw.read() == b"Fish"


def test_intercept_logs_each_call(caplog, hello_handler):
    with caplog.at_level(logging.DEBUG, logger="httptestclient.transport"):
        httptestclient.new(hello_handler).get("http://localhost/error")
    assert "GET http://localhost/error → 500" in caplog.text
