from __future__ import annotations


class HttpTestClientError(Exception):
    """Base exception type for library consumers."""


class CookieJarError(HttpTestClientError):
    pass
