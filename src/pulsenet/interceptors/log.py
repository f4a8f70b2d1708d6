"""Request logging interceptor."""

from __future__ import annotations

import httpx

from pulsenet.interceptors.base import Interceptor
from pulsenet.output import get_output


class LoggingInterceptor(Interceptor):
    """Report every outgoing request on stderr.

    Writes ``-> METHOD URL`` followed by one ``Header: name: value`` line
    per header through the global :class:`~pulsenet.output.OutputManager`.
    The request is returned untouched.  Place it last in the chain to see
    the headers other interceptors added.
    """

    async def intercept(self, request: httpx.Request) -> httpx.Request:
        output = get_output()
        output.info(f"-> {request.method} {request.url}")
        for key, value in request.headers.items():
            output.info(f"  Header: {key}: {value}")
        return request
