import json
from http.cookies import SimpleCookie

import pytest


def _text(start_response, status: str, body: str, extra_headers=()):
    start_response(status, [("Content-Type", "text/plain; charset=utf-8"), *extra_headers])
    return [body.encode("utf-8")]


def hello_app(environ, start_response):
    path = environ["PATH_INFO"]
    if path == "/error":
        return _text(start_response, "500 Internal Server Error", "Internal Server Error")
    if path == "/redirect":
        start_response("302 Found", [("Location", "/fish")])
        return [b""]
    if path == "/fish":
        return _text(start_response, "200 OK", "Fish")
    return _text(start_response, "200 OK", "Hello, World!")


def cookie_app(environ, start_response):
    path = environ["PATH_INFO"]
    if path == "/set-cookie":
        return _text(start_response, "200 OK", "Cookie Set", [("Set-Cookie", "testcookie=testvalue")])
    if path == "/login":
        start_response("302 Found", [("Set-Cookie", "testcookie=testvalue"), ("Location", "/get-cookie")])
        return [b""]
    if path == "/get-cookie":
        cookie = SimpleCookie(environ.get("HTTP_COOKIE", ""))
        if "testcookie" not in cookie:
            return _text(start_response, "400 Bad Request", "No Cookie Found")
        return _text(start_response, "200 OK", f"Cookie Value: {cookie['testcookie'].value}")
    return _text(start_response, "404 Not Found", "Not Found")


def echo_app(environ, start_response):
    length = int(environ.get("CONTENT_LENGTH") or 0)
    payload = {
        "method": environ["REQUEST_METHOD"],
        "path": environ["PATH_INFO"],
        "query": environ["QUERY_STRING"],
        "host": environ.get("HTTP_HOST"),
        "server_name": environ["SERVER_NAME"],
        "server_port": environ["SERVER_PORT"],
        "scheme": environ["wsgi.url_scheme"],
        "content_type": environ.get("CONTENT_TYPE"),
        "body": environ["wsgi.input"].read(length).decode("utf-8"),
        "headers": {k[5:]: v for k, v in environ.items() if k.startswith("HTTP_")},
    }
    start_response("200 OK", [("Content-Type", "application/json")])
    return [json.dumps(payload).encode("utf-8")]


@pytest.fixture
def hello_handler():
    return hello_app


@pytest.fixture
def cookie_handler():
    return cookie_app


@pytest.fixture
def echo_handler():
    return echo_app
