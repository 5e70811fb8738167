from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from requests import PreparedRequest, Response
from requests.adapters import BaseAdapter

from .config import ClientConfig
from .environ import build_environ
from .recorder import ResponseRecorder

logger = logging.getLogger(__name__)

RoundTrip = Callable[[PreparedRequest], Response]
WSGIApp = Callable[[dict[str, Any], Callable[..., Any]], Iterable[bytes]]


class RoundTripFunc(BaseAdapter):
    """Transport adapter backed by a plain callable.

    Any function taking a prepared request and returning a response can be
    mounted on a session through this class.
    """

    def __init__(self, round_trip: RoundTrip) -> None:
        super().__init__()
        self.round_trip = round_trip

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        response = self.round_trip(request)
        response.connection = self
        return response

    def close(self) -> None:
        return


def intercept(handler: WSGIApp, config: ClientConfig | None = None) -> RoundTripFunc:
    """Wrap a WSGI application as a transport adapter.

    Every request is answered by one synchronous call into ``handler`` on the
    caller's thread. Exceptions raised by the handler propagate unchanged.
    """
    config = config or ClientConfig()

    def round_trip(request: PreparedRequest) -> Response:
        recorder = ResponseRecorder()
        recorder.consume(handler(build_environ(request, config), recorder.start_response))
        response = recorder.result(request)
        logger.debug("Intercepted %s %s → %s", request.method, request.url, response.status_code)
        return response

    return RoundTripFunc(round_trip)
