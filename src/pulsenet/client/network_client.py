"""Asynchronous request executor with interceptors, retry, and caching.

This module provides :class:`NetworkClient`, the centrepiece of pulsenet.
Every public call funnels into :meth:`NetworkClient.request`, which runs
the execution pipeline:

1. **Cache lookup** -- once per call, when caching is enabled.  A hit that
   decodes is returned without touching the network; a hit that does not
   decode as the requested type is evicted with a warning.
2. **Interceptors** -- applied in order to a fresh transport request on
   every attempt.  Interceptor failures abort the call immediately.
3. **Dispatch** -- through the configured
   :class:`~pulsenet.transport.Transport`.
4. **Validation** -- a missing status is an
   :class:`~pulsenet.exceptions.InvalidResponseError`; a status outside
   ``200-299`` is an :class:`~pulsenet.exceptions.HTTPError`.
5. **Retry** -- transport, invalid-response, and HTTP failures are offered
   to the :class:`~pulsenet.retry.RetryPolicy`; attempts are strictly
   sequential with :func:`asyncio.sleep` between them.
6. **Decode and store** -- the body is decoded as the requested type and,
   when caching is enabled, the raw bytes are written back.  Decode
   failures are never retried.

The client holds no mutable state after construction, so one instance can
serve any number of concurrent calls.  Callers that need an overall
deadline across retries wrap the call in :func:`asyncio.wait_for`.

See Also:
    :class:`~pulsenet.client.builder.NetworkClientBuilder` for fluent
    construction.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import Any, Optional

import httpx

from pulsenet.cache import NetworkCache, NoCache
from pulsenet.codec import decode_body, encode_body
from pulsenet.exceptions import (
    DecodingError,
    HTTPError,
    InvalidResponseError,
    InvalidURLError,
    TransportError,
)
from pulsenet.interceptors import Interceptor, InterceptorChain
from pulsenet.models import HTTPMethod, NetworkRequest
from pulsenet.output import get_output
from pulsenet.retry import NoRetryPolicy, RetryPolicy
from pulsenet.transport import HttpxTransport, Transport, TransportResponse

_RETRYABLE_ERRORS = (TransportError, InvalidResponseError, HTTPError)
_BODY_METHODS = frozenset({HTTPMethod.POST, HTTPMethod.PUT, HTTPMethod.PATCH})


class NetworkClient:
    """Asynchronous HTTP client returning decoded, typed responses.

    Args:
        base_url: Prefix for relative paths.  When ``None``, every path
            passed to the verb methods must be an absolute URL.
        transport: Transport used for dispatch.  Defaults to an
            :class:`~pulsenet.transport.HttpxTransport` with its own
            :class:`httpx.AsyncClient`.
        interceptors: Interceptors applied to every attempt, in order.
        retry_policy: Policy consulted after each failed attempt.
            Defaults to :class:`~pulsenet.retry.NoRetryPolicy`.
        cache: Store for successful response payloads.  Defaults to
            :class:`~pulsenet.cache.NoCache`.
        cache_enabled: Whether to read from and write to *cache*.
        cache_ttl: Lifetime of cached payloads in seconds.
        timeout: Per-attempt timeout for requests built by the verb
            methods.

    Raises:
        InvalidURLError: If *base_url* is not an absolute URL.

    Example::

        async with NetworkClient(base_url="https://api.example.com") as client:
            user = await client.get("/users/1", User)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[Transport] = None,
        interceptors: Iterable[Interceptor] = (),
        retry_policy: Optional[RetryPolicy] = None,
        cache: Optional[NetworkCache] = None,
        cache_enabled: bool = False,
        cache_ttl: float = 300.0,
        timeout: float = 30.0,
    ) -> None:
        if base_url is not None and not is_absolute_url(base_url):
            raise InvalidURLError(base_url)
        self._base_url = base_url
        self._transport = transport if transport is not None else HttpxTransport()
        self._interceptors = InterceptorChain(interceptors)
        self._retry_policy = retry_policy if retry_policy is not None else NoRetryPolicy()
        self._cache = cache if cache is not None else NoCache()
        self._cache_enabled = cache_enabled
        self._cache_ttl = cache_ttl
        self._timeout = timeout

    # ------------------------------------------------------------------ #
    # Configuration (read-only)
    # ------------------------------------------------------------------ #

    @property
    def base_url(self) -> Optional[str]:
        return self._base_url

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def interceptors(self) -> tuple[Interceptor, ...]:
        return self._interceptors.interceptors

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    @property
    def cache(self) -> NetworkCache:
        return self._cache

    @property
    def cache_enabled(self) -> bool:
        return self._cache_enabled

    @property
    def cache_ttl(self) -> float:
        return self._cache_ttl

    @property
    def timeout(self) -> float:
        return self._timeout

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> NetworkClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport."""
        await self._transport.aclose()

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    async def get(
        self,
        path: str,
        response_type: Any = Any,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """Send a GET request and decode the response as *response_type*.

        Args:
            path: Path appended to the base URL, or an absolute URL.
            response_type: Expected type of the decoded body.
            headers: Extra request headers.

        Returns:
            The decoded response body.
        """
        return await self.request(self._build_request(HTTPMethod.GET, path, headers), response_type)

    async def post(
        self,
        path: str,
        body: Any,
        response_type: Any = Any,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """Send a POST request with *body* serialised as JSON.

        ``Content-Type: application/json`` is added unless *headers*
        already sets a content type.

        Raises:
            EncodingError: If *body* cannot be serialised.  Nothing is sent.
        """
        return await self.request(
            self._build_request(HTTPMethod.POST, path, headers, body), response_type
        )

    async def put(
        self,
        path: str,
        body: Any,
        response_type: Any = Any,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """Send a PUT request with *body* serialised as JSON.

        See :meth:`post` for header and encoding behaviour.
        """
        return await self.request(
            self._build_request(HTTPMethod.PUT, path, headers, body), response_type
        )

    async def patch(
        self,
        path: str,
        body: Any,
        response_type: Any = Any,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """Send a PATCH request with *body* serialised as JSON.

        See :meth:`post` for header and encoding behaviour.
        """
        return await self.request(
            self._build_request(HTTPMethod.PATCH, path, headers, body), response_type
        )

    async def delete(
        self,
        path: str,
        response_type: Any = Any,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """Send a DELETE request and decode the response as *response_type*."""
        return await self.request(
            self._build_request(HTTPMethod.DELETE, path, headers), response_type
        )

    async def request(self, request: NetworkRequest, response_type: Any = Any) -> Any:
        """Execute a fully formed request descriptor.

        Args:
            request: The request to execute.  Its URL is used as-is.
            response_type: Expected type of the decoded body.

        Returns:
            The decoded response body.

        Raises:
            TransportError: The transport failed and the policy gave up.
            InvalidResponseError: No status metadata and the policy gave up.
            HTTPError: Non-2xx status and the policy gave up.
            DecodingError: The body does not match *response_type*.
            Exception: Anything raised by an interceptor.
        """
        cache_key = request.cache_key()

        if self._cache_enabled:
            cached = await self._cache.get(cache_key)
            if cached is not None:
                try:
                    value = decode_body(cached, response_type)
                except DecodingError:
                    get_output().warning(f"Discarding undecodable cache entry {cache_key}")
                    await self._cache.remove(cache_key)
                else:
                    get_output().debug(f"Cache hit {cache_key}")
                    return value

        return await self._execute_with_retry(request, response_type, cache_key)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    async def _execute_with_retry(
        self,
        request: NetworkRequest,
        response_type: Any,
        cache_key: str,
    ) -> Any:
        """Run dispatch attempts until success or until the policy declines.

        Each attempt rebuilds the transport request from the descriptor, so
        interceptor changes never leak from one attempt into the next.
        """
        output = get_output()
        attempt = 1

        while True:
            http_request = await self._interceptors.run(request.to_httpx_request())

            try:
                response = await self._transport.dispatch(http_request)
                self._validate_response(response)
            except _RETRYABLE_ERRORS as exc:
                if not self._retry_policy.should_retry(exc, attempt):
                    raise
                delay = self._retry_policy.delay_before_retry(attempt)
                output.debug(
                    f"{exc}, retrying {request.method.value} {request.url} in {delay}s "
                    f"(attempt {attempt})"
                )
                await asyncio.sleep(delay)
                attempt += 1
                continue

            value = decode_body(response.content, response_type)
            if self._cache_enabled:
                await self._cache.set(cache_key, response.content, self._cache_ttl)
            return value

    @staticmethod
    def _validate_response(response: TransportResponse) -> None:
        """Raise for a missing or non-2xx status."""
        if response.status_code is None:
            raise InvalidResponseError()
        if not 200 <= response.status_code < 300:
            raise HTTPError(response.status_code, response.content)

    def _build_request(
        self,
        method: HTTPMethod,
        path: str,
        headers: Optional[dict[str, str]],
        body: Any = None,
    ) -> NetworkRequest:
        """Resolve *path* and assemble the descriptor for a verb method."""
        url = self._build_url(path)
        merged_headers: dict[str, str] = dict(headers or {})
        payload: Optional[bytes] = None

        if method in _BODY_METHODS:
            payload = encode_body(body)
            if not any(name.lower() == "content-type" for name in merged_headers):
                merged_headers["Content-Type"] = "application/json"

        return NetworkRequest(
            url=url,
            method=method,
            headers=merged_headers,
            body=payload,
            timeout=self._timeout,
        )

    def _build_url(self, path: str) -> str:
        """Append *path* to the base URL, or validate it as an absolute URL."""
        if self._base_url is not None:
            url = f"{self._base_url.rstrip('/')}/{path.lstrip('/')}"
        else:
            url = path
        if not is_absolute_url(url):
            raise InvalidURLError(path)
        return url


def is_absolute_url(url: str) -> bool:
    """Return True if *url* parses with both a scheme and a host."""
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError):
        return False
    return bool(parsed.scheme) and bool(parsed.host)
