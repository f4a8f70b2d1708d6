"""In-memory response caching with per-entry TTL.

:class:`NetworkCache` is the store contract used by
:class:`~pulsenet.client.NetworkClient`: an async key/bytes mapping with
expiry.  Two stores ship with the library:

* :class:`InMemoryCache` -- a dict guarded by an :class:`asyncio.Lock`.
  Entries expire lazily: the first ``get`` that finds an entry past its
  deadline evicts it.  There is no background sweep.
* :class:`NoCache` -- stores nothing.  Installed when caching is disabled
  so the executor never has to branch on a missing cache.

Cache keys are produced by
:meth:`~pulsenet.models.NetworkRequest.cache_key` (``"<METHOD>_<url>"``)
and are opaque to the store.
"""

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class NetworkCache(ABC):
    """Abstract async cache store for raw response payloads.

    Implementations must make concurrent calls from independent tasks
    appear atomic with respect to each other.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[bytes]:
        """Return the payload stored under *key*, or ``None`` if absent or expired."""
        ...

    @abstractmethod
    async def set(self, key: str, data: bytes, ttl: float) -> None:
        """Store *data* under *key* for *ttl* seconds, replacing any existing entry."""
        ...

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Delete the entry for *key*. Missing keys are ignored."""
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Remove all entries."""
        ...


@dataclass(frozen=True)
class _CacheEntry:
    data: bytes
    expires_at: float


class InMemoryCache(NetworkCache):
    """Process-local TTL cache safe for concurrent use from many tasks.

    Args:
        clock: Monotonic time source in seconds.  Override in tests to
            control expiry deterministically.

    Example::

        cache = InMemoryCache()
        await cache.set("GET_https://api.example.com/users/1", payload, ttl=300)
        hit = await cache.get("GET_https://api.example.com/users/1")
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Optional[bytes]:
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() >= entry.expires_at:
                del self._entries[key]
                logger.debug("Evicted expired cache entry %s", key)
                return None
            return entry.data

    async def set(self, key: str, data: bytes, ttl: float) -> None:
        async with self._lock:
            self._entries[key] = _CacheEntry(data=data, expires_at=self._clock() + ttl)

    async def remove(self, key: str) -> None:
        async with self._lock:
            self._entries.pop(key, None)

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        """Number of stored entries, including expired ones not yet evicted."""
        return len(self._entries)


class NoCache(NetworkCache):
    """Cache store that never stores anything."""

    async def get(self, key: str) -> Optional[bytes]:
        return None

    async def set(self, key: str, data: bytes, ttl: float) -> None:
        return None

    async def remove(self, key: str) -> None:
        return None

    async def clear(self) -> None:
        return None
