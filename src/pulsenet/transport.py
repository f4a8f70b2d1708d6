"""Transport capability and the default httpx-backed implementation.

A :class:`Transport` performs exactly one network round trip: it takes a
fully prepared :class:`httpx.Request` and returns the raw payload together
with status metadata, or raises :class:`~pulsenet.exceptions.TransportError`.
Everything else -- retries, status validation, decoding, caching -- is the
executor's job.

:class:`HttpxTransport` adapts :class:`httpx.AsyncClient` to this contract
and classifies httpx exceptions into
:class:`~pulsenet.exceptions.TransportErrorKind` values so retry policies
can reason about them without importing httpx.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

import httpx

from pulsenet.exceptions import TransportError, TransportErrorKind


@dataclass
class TransportResponse:
    """Raw result of a dispatch.

    Attributes:
        content: The response body bytes.
        status_code: HTTP status, or ``None`` when the transport could not
            provide one.
        headers: Response headers.
    """

    content: bytes = b""
    status_code: Optional[int] = None
    headers: dict[str, str] = field(default_factory=dict)


class Transport(ABC):
    """Abstract transport used by :class:`~pulsenet.client.NetworkClient`."""

    @abstractmethod
    async def dispatch(self, request: httpx.Request) -> TransportResponse:
        """Send *request* and return the raw response.

        The per-attempt timeout is carried in ``request.extensions`` and
        must be enforced here.

        Raises:
            TransportError: If no response could be obtained.
        """
        ...

    async def aclose(self) -> None:
        """Release any resources held by the transport."""
        return None


class HttpxTransport(Transport):
    """Transport backed by :class:`httpx.AsyncClient`.

    Args:
        client: An existing client to send through.  When omitted, a client
            with ``follow_redirects=True`` is created and owned by this
            transport, and :meth:`aclose` closes it.

    Example::

        transport = HttpxTransport(httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(follow_redirects=True)

    async def dispatch(self, request: httpx.Request) -> TransportResponse:
        try:
            response = await self._client.send(request)
        except httpx.TransportError as exc:
            raise TransportError(str(exc) or type(exc).__name__, classify_error(exc)) from exc

        return TransportResponse(
            content=response.content,
            status_code=response.status_code,
            headers=dict(response.headers),
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def classify_error(exc: httpx.TransportError) -> TransportErrorKind:
    """Map an httpx transport exception onto a :class:`TransportErrorKind`."""
    if isinstance(exc, httpx.TimeoutException):
        return TransportErrorKind.TIMED_OUT
    if isinstance(exc, httpx.ConnectError):
        return TransportErrorKind.NOT_CONNECTED
    if isinstance(exc, (httpx.NetworkError, httpx.RemoteProtocolError)):
        return TransportErrorKind.CONNECTION_LOST
    return TransportErrorKind.OTHER
