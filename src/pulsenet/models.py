"""Canonical Pydantic models shared across all pulsenet modules.

The models fall into two groups:

**Request models** -- the in-memory description of a pending call:
    :class:`HTTPMethod` and :class:`NetworkRequest`.

**Configuration models** -- the settings consumed by
:class:`~pulsenet.client.NetworkClientBuilder` and loaded from disk or the
environment by :func:`~pulsenet.config.load_settings`:
    :class:`CacheConfig`, :class:`RetryConfig`, and :class:`ClientSettings`.

All models use Pydantic v2.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Literal, Optional

import httpx
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from pulsenet.retry import RetryPolicy


# --- Request models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods supported by :class:`~pulsenet.client.NetworkClient`."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class NetworkRequest(BaseModel):
    """Descriptor of a single HTTP request before it reaches the transport.

    The descriptor is converted into an :class:`httpx.Request` once per
    dispatch attempt via :meth:`to_httpx_request`; interceptors then work on
    that transport-ready copy, so the descriptor itself is never mutated by
    the pipeline.

    Example::

        NetworkRequest(
            url="https://api.example.com/users",
            method=HTTPMethod.POST,
            headers={"Content-Type": "application/json"},
            body=b'{"name": "Jane"}',
        )
    """

    url: str = Field(description="Absolute request URL")
    method: HTTPMethod = HTTPMethod.GET
    headers: dict[str, str] = Field(default_factory=dict)
    body: Optional[bytes] = None
    timeout: float = Field(default=30.0, description="Per-attempt timeout in seconds")

    def cache_key(self) -> str:
        """Return the cache key for this request: ``"<METHOD>_<url>"``.

        Requests that share method and URL share a cache entry, regardless
        of body or headers.
        """
        return f"{self.method.value}_{self.url}"

    def to_httpx_request(self) -> httpx.Request:
        """Build the transport-ready :class:`httpx.Request`.

        The timeout travels in the ``timeout`` request extension, which is
        where httpx transports read it from.
        """
        return httpx.Request(
            self.method.value,
            self.url,
            headers=dict(self.headers),
            content=self.body,
            extensions={"timeout": httpx.Timeout(self.timeout).as_dict()},
        )


# --- Configuration models ---


class CacheConfig(BaseModel):
    """Response cache settings."""

    enabled: bool = Field(default=False, description="Enable response caching")
    ttl_seconds: float = Field(default=300.0, gt=0, description="Cache TTL in seconds")


class RetryConfig(BaseModel):
    """Retry policy settings.

    ``strategy`` selects the policy; the remaining fields are read only by
    the strategies that use them.
    """

    strategy: Literal["none", "simple", "exponential"] = "none"
    max_retries: int = Field(default=3, ge=0)
    initial_delay: float = Field(default=1.0, ge=0)
    max_delay: float = Field(default=30.0, ge=0)
    multiplier: float = Field(default=2.0, gt=0)
    delay_interval: float = Field(default=1.0, ge=0, description="Fixed delay for 'simple'")
    retryable_status_codes: list[int] = Field(
        default_factory=lambda: [408, 429, 500, 502, 503, 504]
    )

    def build_policy(self) -> RetryPolicy:
        """Instantiate the :class:`~pulsenet.retry.RetryPolicy` this config describes."""
        from pulsenet.retry import (
            ExponentialBackoffRetryPolicy,
            NoRetryPolicy,
            SimpleRetryPolicy,
        )

        if self.strategy == "exponential":
            return ExponentialBackoffRetryPolicy(
                max_retries=self.max_retries,
                initial_delay=self.initial_delay,
                max_delay=self.max_delay,
                multiplier=self.multiplier,
                retryable_status_codes=frozenset(self.retryable_status_codes),
            )
        if self.strategy == "simple":
            return SimpleRetryPolicy(
                max_retries=self.max_retries,
                delay_interval=self.delay_interval,
            )
        return NoRetryPolicy()


class ClientSettings(BaseModel):
    """Serialisable client configuration.

    Loaded by :func:`~pulsenet.config.load_settings` and applied with
    :meth:`~pulsenet.client.NetworkClientBuilder.from_settings`.  Transport,
    interceptors, and custom caches are code-level objects and are
    configured on the builder directly.
    """

    base_url: Optional[str] = Field(default=None, description="Base URL for relative paths")
    timeout: float = Field(default=30.0, gt=0, description="Per-attempt timeout in seconds")
    cache: CacheConfig = Field(default_factory=CacheConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
