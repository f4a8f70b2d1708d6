"""Static header injection."""

from __future__ import annotations

from collections.abc import Mapping

import httpx

from pulsenet.interceptors.base import Interceptor


class CustomHeaderInterceptor(Interceptor):
    """Set a fixed group of headers on every request.

    Configured values overwrite any header of the same name already on the
    request, including headers the caller passed explicitly.

    Args:
        headers: Header name to value mapping applied to each request.
    """

    def __init__(self, headers: Mapping[str, str]) -> None:
        self._headers = dict(headers)

    async def intercept(self, request: httpx.Request) -> httpx.Request:
        for key, value in self._headers.items():
            request.headers[key] = value
        return request
