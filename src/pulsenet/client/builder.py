"""Fluent construction of :class:`~pulsenet.client.NetworkClient` instances.

:class:`NetworkClientBuilder` is a staged, mutable helper: every ``with_*``
method updates the builder in place and returns it, so calls chain.
Configuration happens once, before any request runs, so the builder has no
concurrency concerns of its own.

Example::

    client = (
        NetworkClientBuilder()
        .with_base_url("https://api.example.com")
        .with_interceptor(AuthInterceptor(token_provider))
        .with_exponential_backoff_retry(max_retries=3)
        .with_cache(enabled=True, ttl=120)
        .build()
    )
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from pulsenet.cache import InMemoryCache, NetworkCache, NoCache
from pulsenet.client.network_client import NetworkClient, is_absolute_url
from pulsenet.exceptions import InvalidURLError
from pulsenet.interceptors import Interceptor
from pulsenet.models import ClientSettings
from pulsenet.retry import (
    ExponentialBackoffRetryPolicy,
    NoRetryPolicy,
    RetryPolicy,
    SimpleRetryPolicy,
)
from pulsenet.transport import Transport


class NetworkClientBuilder:
    """Chainable builder for :class:`~pulsenet.client.NetworkClient`.

    Defaults match the client's own: no base URL, the default httpx
    transport, no interceptors, :class:`~pulsenet.retry.NoRetryPolicy`,
    caching disabled with a 300 second TTL, and a 30 second timeout.
    """

    def __init__(self) -> None:
        self._base_url: Optional[str] = None
        self._transport: Optional[Transport] = None
        self._interceptors: list[Interceptor] = []
        self._retry_policy: RetryPolicy = NoRetryPolicy()
        self._cache: NetworkCache = NoCache()
        self._cache_enabled = False
        self._cache_ttl = 300.0
        self._timeout = 30.0

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> NetworkClientBuilder:
        """Create a builder pre-populated from serialisable settings.

        Args:
            settings: Typically the result of
                :func:`~pulsenet.config.load_settings`.

        Returns:
            A new builder; further ``with_*`` calls may still override it.
        """
        builder = cls()
        if settings.base_url is not None:
            builder.with_base_url(settings.base_url)
        builder.with_timeout(settings.timeout)
        builder.with_retry_policy(settings.retry.build_policy())
        builder.with_cache(settings.cache.enabled, ttl=settings.cache.ttl_seconds)
        return builder

    def with_base_url(self, url: str) -> NetworkClientBuilder:
        """Set the base URL that relative paths are appended to.

        Raises:
            InvalidURLError: If *url* is not an absolute URL.
        """
        if not is_absolute_url(url):
            raise InvalidURLError(url)
        self._base_url = url
        return self

    def with_transport(self, transport: Transport) -> NetworkClientBuilder:
        """Use *transport* for dispatch instead of the default httpx transport."""
        self._transport = transport
        return self

    def with_interceptor(self, interceptor: Interceptor) -> NetworkClientBuilder:
        """Append one interceptor to the chain."""
        self._interceptors.append(interceptor)
        return self

    def with_interceptors(self, interceptors: Iterable[Interceptor]) -> NetworkClientBuilder:
        """Append several interceptors to the chain, preserving their order."""
        self._interceptors.extend(interceptors)
        return self

    def with_retry_policy(self, policy: RetryPolicy) -> NetworkClientBuilder:
        """Install a retry policy, replacing any previous one."""
        self._retry_policy = policy
        return self

    def with_exponential_backoff_retry(
        self,
        max_retries: int = 3,
        initial_delay: float = 1.0,
        max_delay: float = 30.0,
    ) -> NetworkClientBuilder:
        """Install an :class:`~pulsenet.retry.ExponentialBackoffRetryPolicy`."""
        self._retry_policy = ExponentialBackoffRetryPolicy(
            max_retries=max_retries,
            initial_delay=initial_delay,
            max_delay=max_delay,
        )
        return self

    def with_simple_retry(
        self,
        max_retries: int = 3,
        delay_interval: float = 1.0,
    ) -> NetworkClientBuilder:
        """Install a :class:`~pulsenet.retry.SimpleRetryPolicy`."""
        self._retry_policy = SimpleRetryPolicy(
            max_retries=max_retries,
            delay_interval=delay_interval,
        )
        return self

    def with_cache(self, enabled: bool, ttl: float = 300.0) -> NetworkClientBuilder:
        """Enable or disable response caching.

        Enabling installs a fresh :class:`~pulsenet.cache.InMemoryCache`.
        Disabling keeps whatever store is configured but stops the client
        from using it.

        Args:
            enabled: Whether responses are cached.
            ttl: Lifetime of cached payloads in seconds.
        """
        self._cache_enabled = enabled
        self._cache_ttl = ttl
        if enabled:
            self._cache = InMemoryCache()
        return self

    def with_custom_cache(self, cache: NetworkCache, enabled: bool = True) -> NetworkClientBuilder:
        """Use *cache* as the response store.

        The TTL set by :meth:`with_cache` (300 seconds by default) still
        applies.
        """
        self._cache = cache
        self._cache_enabled = enabled
        return self

    def with_timeout(self, timeout: float) -> NetworkClientBuilder:
        """Set the per-attempt timeout, in seconds, for requests built by the verb methods."""
        self._timeout = timeout
        return self

    def build(self) -> NetworkClient:
        """Create the :class:`~pulsenet.client.NetworkClient`."""
        return NetworkClient(
            base_url=self._base_url,
            transport=self._transport,
            interceptors=list(self._interceptors),
            retry_policy=self._retry_policy,
            cache=self._cache,
            cache_enabled=self._cache_enabled,
            cache_ttl=self._cache_ttl,
            timeout=self._timeout,
        )
