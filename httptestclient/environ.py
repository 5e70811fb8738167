from __future__ import annotations

import sys
from io import BytesIO
from typing import Any
from urllib.parse import unquote_to_bytes, urlsplit

from requests import PreparedRequest

from .config import ClientConfig
from .urls import default_port


def _native(value: str | bytes) -> str:
    return value.decode("latin-1") if isinstance(value, bytes) else str(value)


def _encode(chunk: str | bytes) -> bytes:
    return chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk)


def read_body(body: Any) -> bytes:
    """Materialize a prepared request body as bytes."""
    if body is None:
        return b""
    if isinstance(body, (str, bytes, bytearray)):
        return _encode(body)
    if hasattr(body, "read"):
        return _encode(body.read())
    return b"".join(_encode(chunk) for chunk in body)


def build_environ(request: PreparedRequest, config: ClientConfig) -> dict[str, Any]:
    """Translate a prepared request into a PEP 3333 environ.

    Requests without a host report ``config.server_name``/``server_port`` and
    carry no ``HTTP_HOST`` unless the caller set a ``Host`` header.
    """
    parts = urlsplit(request.url or "/")
    scheme = parts.scheme or "http"
    body = read_body(request.body)

    if parts.netloc:
        server_name = parts.hostname or config.server_name
        server_port = str(parts.port or default_port(scheme))
    else:
        server_name, server_port = config.server_name, config.server_port

    environ: dict[str, Any] = {
        "REQUEST_METHOD": (request.method or "GET").upper(),
        "SCRIPT_NAME": "",
        "PATH_INFO": unquote_to_bytes(parts.path or "/").decode("latin-1"),
        "QUERY_STRING": parts.query,
        "SERVER_NAME": server_name,
        "SERVER_PORT": server_port,
        "SERVER_PROTOCOL": "HTTP/1.1",
        "REMOTE_ADDR": config.remote_addr,
        "wsgi.version": (1, 0),
        "wsgi.url_scheme": scheme,
        "wsgi.input": BytesIO(body),
        "wsgi.errors": sys.stderr,
        "wsgi.multithread": False,
        "wsgi.multiprocess": False,
        "wsgi.run_once": False,
    }
    if parts.netloc:
        environ["HTTP_HOST"] = parts.netloc.rpartition("@")[2]

    for name, value in request.headers.items():
        key = _native(name).upper().replace("-", "_")
        if key not in ("CONTENT_TYPE", "CONTENT_LENGTH"):
            key = f"HTTP_{key}"
        environ[key] = _native(value)

    if body and not environ.get("CONTENT_LENGTH"):
        environ["CONTENT_LENGTH"] = str(len(body))
    environ.pop("HTTP_TRANSFER_ENCODING", None)
    return environ
