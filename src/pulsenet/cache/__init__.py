"""Response caching for pulsenet.

This package provides the :class:`NetworkCache` store contract and its two
built-in implementations: :class:`InMemoryCache`, a TTL cache that is safe
to share between concurrent requests, and :class:`NoCache`, the default
store when caching is disabled.

The cache is consumed by :class:`~pulsenet.client.NetworkClient` and is
enabled with :meth:`~pulsenet.client.NetworkClientBuilder.with_cache` or
the ``cache`` section of :class:`~pulsenet.models.ClientSettings`.
"""

from pulsenet.cache.cache import InMemoryCache, NetworkCache, NoCache

__all__ = ["NetworkCache", "InMemoryCache", "NoCache"]
