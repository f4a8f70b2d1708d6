"""Ordered application of interceptors.

The chain follows a pipeline pattern: each interceptor receives the output
of the previous one, in configuration order.  The first interceptor that
raises stops the chain and the request is never dispatched.
"""

from __future__ import annotations

from collections.abc import Iterable

import httpx

from pulsenet.interceptors.base import Interceptor


class InterceptorChain:
    """Runs interceptors in registration order.

    The chain holds an immutable snapshot of the interceptor list taken at
    construction time, so later changes to the source list have no effect.

    Args:
        interceptors: Interceptors in the order they should run.
    """

    def __init__(self, interceptors: Iterable[Interceptor] = ()) -> None:
        self._interceptors: tuple[Interceptor, ...] = tuple(interceptors)

    @property
    def interceptors(self) -> tuple[Interceptor, ...]:
        """The interceptors in execution order."""
        return self._interceptors

    def __len__(self) -> int:
        return len(self._interceptors)

    async def run(self, request: httpx.Request) -> httpx.Request:
        """Thread *request* through every interceptor.

        Args:
            request: The transport-ready request for this attempt.

        Returns:
            The request returned by the last interceptor, or *request*
            itself when the chain is empty.

        Raises:
            Exception: Whatever the failing interceptor raised.
        """
        for interceptor in self._interceptors:
            request = await interceptor.intercept(request)
        return request
