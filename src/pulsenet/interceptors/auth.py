"""Bearer token injection.

This module provides :class:`AuthInterceptor`, which asks an async token
provider for a token on every attempt and injects it as an
``Authorization: Bearer <token>`` header.  Because the provider is called
per attempt, a provider that refreshes expired tokens is picked up
naturally on retries.
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Callable, Optional

import httpx

from pulsenet.interceptors.base import Interceptor

TokenProvider = Callable[[], Awaitable[Optional[str]]]


class AuthInterceptor(Interceptor):
    """Add a bearer token to every request.

    When the provider returns ``None`` the request is passed through
    without an ``Authorization`` header; it is up to the server to reject
    it.

    Args:
        token_provider: Async callable returning the current token, or
            ``None`` when no token is available.

    Example::

        async def current_token() -> str | None:
            return await token_store.get()

        AuthInterceptor(current_token)
    """

    def __init__(self, token_provider: TokenProvider) -> None:
        self._token_provider = token_provider

    async def intercept(self, request: httpx.Request) -> httpx.Request:
        token = await self._token_provider()
        if token is not None:
            request.headers["Authorization"] = f"Bearer {token}"
        return request
