"""In-process HTTP client for exercising WSGI handlers without a server."""

from .client import HandlerSession, new, new_with_cookie_jar
from .config import ClientConfig, CookieJarConfig
from .cookies import OriginCookiePolicy
from .exceptions import CookieJarError, HttpTestClientError
from .recorder import ResponseRecorder
from .transport import RoundTripFunc, intercept

__all__ = [
    "ClientConfig",
    "CookieJarConfig",
    "CookieJarError",
    "HandlerSession",
    "HttpTestClientError",
    "OriginCookiePolicy",
    "ResponseRecorder",
    "RoundTripFunc",
    "intercept",
    "new",
    "new_with_cookie_jar",
]
