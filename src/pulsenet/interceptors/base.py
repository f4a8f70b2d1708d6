"""Abstract base class for request interceptors.

An interceptor receives the transport-ready :class:`httpx.Request` just
before dispatch and returns the request to send -- usually the same object
with headers added or changed.  Raising from :meth:`Interceptor.intercept`
aborts the call; the error reaches the caller unchanged and is never
retried.

To implement a new interceptor, subclass :class:`Interceptor` and implement
:meth:`~Interceptor.intercept`.  Raise
:class:`~pulsenet.exceptions.CustomError` for domain-specific refusals.

See Also:
    :class:`~pulsenet.interceptors.chain.InterceptorChain` for ordering
    and short-circuit rules.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import httpx


class Interceptor(ABC):
    """Abstract base class for request interceptors.

    Interceptors may keep internal state (token caches, counters), but the
    executor treats each one as an async function from request to request
    and may call it concurrently from independent calls.
    """

    @abstractmethod
    async def intercept(self, request: httpx.Request) -> httpx.Request:
        """Transform *request* before it is dispatched.

        Args:
            request: The request produced by the previous interceptor, or
                by :meth:`~pulsenet.models.NetworkRequest.to_httpx_request`
                for the first one.

        Returns:
            The request to hand to the next interceptor or the transport.
        """
        ...
