from __future__ import annotations

from urllib.parse import urlparse


def has_origin(url: str) -> bool:
    """True when ``url`` names both a scheme and a host."""
    parsed = urlparse(url)
    return bool(parsed.scheme) and bool(parsed.netloc)


def default_port(scheme: str) -> str:
    return "443" if scheme.lower() == "https" else "80"
