"""Tests for the fluent client builder."""

from __future__ import annotations

import httpx
import pytest

from pulsenet.cache import InMemoryCache, NoCache
from pulsenet.client import NetworkClient, NetworkClientBuilder
from pulsenet.exceptions import InvalidURLError
from pulsenet.interceptors import CustomHeaderInterceptor, LoggingInterceptor
from pulsenet.models import CacheConfig, ClientSettings, RetryConfig
from pulsenet.retry import (
    ExponentialBackoffRetryPolicy,
    NoRetryPolicy,
    SimpleRetryPolicy,
)
from pulsenet.transport import HttpxTransport


class TestDefaults:
    def test_build_with_defaults(self) -> None:
        client = NetworkClientBuilder().build()
        assert isinstance(client, NetworkClient)
        assert client.base_url is None
        assert client.interceptors == ()
        assert isinstance(client.retry_policy, NoRetryPolicy)
        assert isinstance(client.cache, NoCache)
        assert client.cache_enabled is False
        assert client.cache_ttl == 300.0
        assert client.timeout == 30.0


class TestChaining:
    def test_every_setter_returns_builder(self) -> None:
        builder = NetworkClientBuilder()
        assert builder.with_base_url("https://api.example.com") is builder
        assert builder.with_transport(HttpxTransport()) is builder
        assert builder.with_interceptor(LoggingInterceptor()) is builder
        assert builder.with_interceptors([LoggingInterceptor()]) is builder
        assert builder.with_retry_policy(NoRetryPolicy()) is builder
        assert builder.with_exponential_backoff_retry() is builder
        assert builder.with_simple_retry() is builder
        assert builder.with_cache(True) is builder
        assert builder.with_custom_cache(NoCache()) is builder
        assert builder.with_timeout(5) is builder

    def test_full_configuration(self) -> None:
        transport = HttpxTransport(httpx.AsyncClient())
        first = CustomHeaderInterceptor({"X-A": "1"})
        second = LoggingInterceptor()

        client = (
            NetworkClientBuilder()
            .with_base_url("https://api.example.com")
            .with_transport(transport)
            .with_interceptor(first)
            .with_interceptor(second)
            .with_exponential_backoff_retry(max_retries=5, initial_delay=0.5, max_delay=4.0)
            .with_cache(enabled=True, ttl=60)
            .with_timeout(10)
            .build()
        )

        assert client.base_url == "https://api.example.com"
        assert client.transport is transport
        assert client.interceptors == (first, second)
        assert isinstance(client.retry_policy, ExponentialBackoffRetryPolicy)
        assert client.retry_policy.max_retries == 5
        assert client.retry_policy.initial_delay == 0.5
        assert client.retry_policy.max_delay == 4.0
        assert isinstance(client.cache, InMemoryCache)
        assert client.cache_enabled is True
        assert client.cache_ttl == 60
        assert client.timeout == 10

    def test_invalid_base_url(self) -> None:
        with pytest.raises(InvalidURLError):
            NetworkClientBuilder().with_base_url("api.example.com")

    def test_with_interceptors_preserves_order(self) -> None:
        a, b, c = LoggingInterceptor(), LoggingInterceptor(), LoggingInterceptor()
        client = NetworkClientBuilder().with_interceptor(a).with_interceptors([b, c]).build()
        assert client.interceptors == (a, b, c)

    def test_simple_retry(self) -> None:
        client = NetworkClientBuilder().with_simple_retry(max_retries=2, delay_interval=0.1).build()
        assert isinstance(client.retry_policy, SimpleRetryPolicy)
        assert client.retry_policy.max_retries == 2
        assert client.retry_policy.delay_interval == 0.1

    def test_last_retry_setter_wins(self) -> None:
        client = (
            NetworkClientBuilder()
            .with_exponential_backoff_retry()
            .with_retry_policy(NoRetryPolicy())
            .build()
        )
        assert isinstance(client.retry_policy, NoRetryPolicy)


class TestCacheConfiguration:
    def test_disabling_keeps_store_but_stops_use(self) -> None:
        client = NetworkClientBuilder().with_cache(True).with_cache(False).build()
        assert client.cache_enabled is False

    def test_custom_cache(self) -> None:
        store = InMemoryCache()
        client = NetworkClientBuilder().with_custom_cache(store).build()
        assert client.cache is store
        assert client.cache_enabled is True
        assert client.cache_ttl == 300.0

    def test_custom_cache_keeps_ttl(self) -> None:
        store = InMemoryCache()
        client = NetworkClientBuilder().with_cache(True, ttl=42).with_custom_cache(store).build()
        assert client.cache is store
        assert client.cache_ttl == 42

    def test_builds_are_independent(self) -> None:
        builder = NetworkClientBuilder().with_interceptor(LoggingInterceptor())
        first = builder.build()
        builder.with_interceptor(LoggingInterceptor())
        assert len(first.interceptors) == 1
        assert len(builder.build().interceptors) == 2


class TestFromSettings:
    def test_applies_settings(self) -> None:
        settings = ClientSettings(
            base_url="https://api.example.com",
            timeout=12,
            cache=CacheConfig(enabled=True, ttl_seconds=90),
            retry=RetryConfig(strategy="simple", max_retries=1, delay_interval=0.3),
        )

        client = NetworkClientBuilder.from_settings(settings).build()

        assert client.base_url == "https://api.example.com"
        assert client.timeout == 12
        assert client.cache_enabled is True
        assert client.cache_ttl == 90
        assert isinstance(client.cache, InMemoryCache)
        assert isinstance(client.retry_policy, SimpleRetryPolicy)
        assert client.retry_policy.delay_interval == 0.3

    def test_default_settings(self) -> None:
        client = NetworkClientBuilder.from_settings(ClientSettings()).build()
        assert client.base_url is None
        assert isinstance(client.retry_policy, NoRetryPolicy)
        assert client.cache_enabled is False

    def test_invalid_base_url_in_settings(self) -> None:
        with pytest.raises(InvalidURLError):
            NetworkClientBuilder.from_settings(ClientSettings(base_url="/relative"))

    def test_overridable_after_from_settings(self) -> None:
        settings = ClientSettings(retry=RetryConfig(strategy="exponential"))
        client = NetworkClientBuilder.from_settings(settings).with_retry_policy(NoRetryPolicy()).build()
        assert isinstance(client.retry_policy, NoRetryPolicy)
