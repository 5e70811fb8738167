from __future__ import annotations

from collections.abc import Iterable
from http.client import HTTPMessage, responses
from io import BytesIO
from types import SimpleNamespace

from requests import PreparedRequest, Response
from requests.cookies import extract_cookies_to_jar
from requests.structures import CaseInsensitiveDict
from requests.utils import get_encoding_from_headers

DEFAULT_STATUS = "200 OK"


class RecordedBody(BytesIO):
    """Body stream handed out as ``Response.raw``.

    Carries the raw header block the way an ``http.client`` response does, so
    the ``requests`` cookie machinery can read every ``Set-Cookie`` line.
    """

    def __init__(self, data: bytes, message: HTTPMessage) -> None:
        super().__init__(data)
        self._original_response = SimpleNamespace(msg=message)


def _fold(headers: list[tuple[str, str]]) -> CaseInsensitiveDict:
    folded: CaseInsensitiveDict = CaseInsensitiveDict()
    for name, value in headers:
        folded[name] = f"{folded[name]}, {value}" if name in folded else value
    return folded


class ResponseRecorder:
    """WSGI sink capturing the status, headers and body written for one request.

    If the handler never calls ``start_response`` the recorded status is
    ``200 OK``.
    """

    def __init__(self) -> None:
        self.status: str | None = None
        self.headers: list[tuple[str, str]] = []
        self.body = BytesIO()
        self.headers_sent = False

    def start_response(self, status: str, headers: list[tuple[str, str]], exc_info=None):
        if exc_info is not None:
            try:
                if self.headers_sent:
                    raise exc_info[1].with_traceback(exc_info[2])
            finally:
                exc_info = None
        elif self.status is not None:
            raise AssertionError("start_response() called twice without exc_info")
        self.status = status
        self.headers = list(headers)
        return self.write

    def write(self, data: bytes) -> None:
        if not isinstance(data, bytes):
            raise TypeError(f"WSGI body chunks must be bytes, got {type(data).__name__}")
        if data:
            self.headers_sent = True
            self.body.write(data)

    def consume(self, app_iter: Iterable[bytes]) -> None:
        try:
            for chunk in app_iter:
                self.write(chunk)
        finally:
            close = getattr(app_iter, "close", None)
            if close is not None:
                close()

    def result(self, request: PreparedRequest) -> Response:
        code, _, reason = (self.status or DEFAULT_STATUS).strip().partition(" ")
        message = HTTPMessage()
        for name, value in self.headers:
            message[name] = value

        response = Response()
        response.status_code = int(code)
        response.reason = reason.strip() or responses.get(response.status_code, "")
        response.headers = _fold(self.headers)
        response.encoding = get_encoding_from_headers(response.headers)
        response.raw = RecordedBody(self.body.getvalue(), message)
        response.url = request.url
        response.request = request
        extract_cookies_to_jar(response.cookies, request, response.raw)
        return response
