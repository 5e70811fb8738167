from __future__ import annotations

from http import cookiejar as cookielib
from urllib.parse import urlsplit, urlunsplit

import requests
from requests import PreparedRequest, Request
from requests.adapters import BaseAdapter
from requests.cookies import RequestsCookieJar, cookiejar_from_dict, merge_cookies
from requests.sessions import merge_hooks, merge_setting
from requests.structures import CaseInsensitiveDict
from requests.utils import requote_uri

from .config import ClientConfig, CookieJarConfig
from .cookies import new_cookie_jar, null_cookie_jar
from .transport import WSGIApp, intercept
from .urls import has_origin


class RelativePreparedRequest(PreparedRequest):
    """Prepared request that keeps a URL without scheme or host as-is."""

    def prepare_url(self, url, params):
        url = url.decode("utf8") if isinstance(url, bytes) else str(url)
        if has_origin(url):
            return super().prepare_url(url, params)

        parts = urlsplit(url.strip())
        query = parts.query
        if isinstance(params, bytes):
            params = params.decode("utf8")
        enc_params = self._encode_params(params)
        if enc_params:
            query = f"{query}&{enc_params}" if query else enc_params
        self.url = requote_uri(urlunsplit(("", "", parts.path or "/", query, parts.fragment)))


class HandlerSession(requests.Session):
    """``requests.Session`` whose only transport is an in-process adapter.

    Behaves like a networked session, except that relative URLs are accepted
    and no environment settings (proxies, netrc, CA bundles) are consulted.
    """

    def __init__(self, adapter: BaseAdapter, config: ClientConfig | None = None) -> None:
        super().__init__()
        config = config or ClientConfig()
        self.trust_env = False
        self.max_redirects = config.max_redirects
        self.headers.update(config.headers)
        self.cookies = null_cookie_jar()
        self.adapters.clear()
        self.mount("", adapter)

    def prepare_request(self, request: Request) -> PreparedRequest:
        if has_origin(request.url):
            p = super().prepare_request(request)
        else:
            p = self._prepare_relative(request)
        # Redirect hops store and attach cookies through the per-request jar.
        p._cookies.set_policy(self.cookies.get_policy())
        return p

    def _prepare_relative(self, request: Request) -> PreparedRequest:
        cookies = request.cookies or {}
        if not isinstance(cookies, cookielib.CookieJar):
            cookies = cookiejar_from_dict(cookies)

        p = RelativePreparedRequest()
        p.prepare(
            method=request.method.upper(),
            url=request.url,
            files=request.files,
            data=request.data,
            json=request.json,
            headers=merge_setting(request.headers, self.headers, dict_class=CaseInsensitiveDict),
            params=merge_setting(request.params, self.params),
            auth=merge_setting(request.auth, self.auth),
            # Session cookies are keyed by origin; only explicit ones apply here.
            cookies=merge_cookies(RequestsCookieJar(), cookies),
            hooks=merge_hooks(request.hooks, self.hooks),
        )
        return p


def new(handler: WSGIApp, config: ClientConfig | None = None) -> HandlerSession:
    """Create a session that answers every request by calling ``handler``.

    No socket is opened and no network call is made. Cookies are not kept
    between calls.
    """
    return HandlerSession(intercept(handler, config), config)


def new_with_cookie_jar(
    handler: WSGIApp,
    config: ClientConfig | None = None,
    jar_config: CookieJarConfig | None = None,
) -> HandlerSession:
    """Like :func:`new`, with a cookie store shared by every call on the session.

    Cookies are only kept and sent for absolute URLs.

    Raises:
        CookieJarError: if the cookie store cannot be initialized.
    """
    jar = new_cookie_jar(jar_config)
    client = new(handler, config)
    client.cookies = jar
    return client
