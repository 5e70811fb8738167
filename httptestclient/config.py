from __future__ import annotations

from dataclasses import dataclass, field
from http.cookiejar import DefaultCookiePolicy

from requests.models import DEFAULT_REDIRECT_LIMIT

DEFAULT_SECURE_PROTOCOLS = ("https", "wss")


@dataclass
class ClientConfig:
    headers: dict[str, str] = field(default_factory=dict)
    max_redirects: int = DEFAULT_REDIRECT_LIMIT
    # Reported to the handler when the request URL carries no host.
    server_name: str = "localhost"
    server_port: str = "80"
    remote_addr: str = "127.0.0.1"


@dataclass
class CookieJarConfig:
    blocked_domains: list[str] = field(default_factory=list)
    allowed_domains: list[str] | None = None
    strict_ns_domain: int = DefaultCookiePolicy.DomainLiberal
    rfc2965: bool = False
    secure_protocols: tuple[str, ...] = DEFAULT_SECURE_PROTOCOLS
