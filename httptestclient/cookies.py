from __future__ import annotations

import logging
from http.cookiejar import DefaultCookiePolicy

from requests.cookies import RequestsCookieJar

from .config import CookieJarConfig
from .exceptions import CookieJarError
from .urls import has_origin

logger = logging.getLogger(__name__)


class OriginCookiePolicy(DefaultCookiePolicy):
    """Keeps cookies keyed by the scheme and host of absolute request URLs.

    A relative request URL has no origin, so no cookie is attached to it and
    nothing is stored from its response.
    """

    def set_ok(self, cookie, request):
        if not has_origin(request.get_full_url()):
            return False
        return super().set_ok(cookie, request)

    def return_ok(self, cookie, request):
        if not has_origin(request.get_full_url()):
            return False
        return super().return_ok(cookie, request)


class RefuseAllCookiePolicy(DefaultCookiePolicy):
    """Policy for clients built without a cookie store."""

    def set_ok(self, cookie, request):
        return False

    def return_ok(self, cookie, request):
        return False


def _domains(values: list[str], label: str) -> tuple[str, ...]:
    domains: list[str] = []
    for value in values:
        if not isinstance(value, str):
            raise TypeError(f"{label} entries must be strings, got {type(value).__name__}")
        domain = value.strip().lower()
        if not domain or " " in domain:
            raise ValueError(f"{label} entry {value!r} is not a domain")
        domains.append(domain)
    return tuple(domains)


def _strictness(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"strict_ns_domain must be an int, got {type(value).__name__}")
    if not 0 <= value <= DefaultCookiePolicy.DomainStrict:
        raise ValueError(f"strict_ns_domain must be between 0 and {DefaultCookiePolicy.DomainStrict}, got {value}")
    return value


def _protocols(values: tuple[str, ...]) -> tuple[str, ...]:
    if isinstance(values, str):
        raise TypeError("secure_protocols must be a sequence of scheme names, not a string")
    return tuple(_domains(list(values), "secure_protocols"))


def null_cookie_jar() -> RequestsCookieJar:
    return RequestsCookieJar(policy=RefuseAllCookiePolicy())


def new_cookie_jar(config: CookieJarConfig | None = None) -> RequestsCookieJar:
    """Build an empty in-memory cookie store.

    Raises:
        CookieJarError: when ``config`` holds options the store cannot be built with.
    """
    config = config or CookieJarConfig()
    try:
        policy = OriginCookiePolicy(
            blocked_domains=_domains(config.blocked_domains, "blocked_domains"),
            allowed_domains=(
                None if config.allowed_domains is None else _domains(config.allowed_domains, "allowed_domains")
            ),
            rfc2965=bool(config.rfc2965),
            strict_ns_domain=_strictness(config.strict_ns_domain),
            secure_protocols=_protocols(config.secure_protocols),
        )
    except (TypeError, ValueError) as exc:
        raise CookieJarError(f"Could not initialize cookie jar: {exc}") from exc
    logger.debug("Created cookie jar (blocked=%s, allowed=%s)", policy.blocked_domains(), policy.allowed_domains())
    return RequestsCookieJar(policy=policy)
