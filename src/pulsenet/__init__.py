"""pulsenet -- a typed async HTTP client with interceptors, retry policies, and caching.

Every call goes through a single execution pipeline: an optional cache
lookup, the configured interceptor chain, network dispatch via a pluggable
transport, status validation, response decoding, and a retry loop driven
by a :class:`~pulsenet.retry.RetryPolicy`.  Successful payloads are
written back to the cache when caching is enabled.

Typical usage::

    from pulsenet.client import NetworkClientBuilder

    client = (
        NetworkClientBuilder()
        .with_base_url("https://api.example.com")
        .with_exponential_backoff_retry(max_retries=3)
        .with_cache(enabled=True, ttl=60)
        .build()
    )
    async with client:
        user = await client.get("/users/1", User)

Modules:
    client: The request executor and its fluent builder.
    models: Pydantic models for request descriptors and configuration.
    cache: Cache store abstraction with in-memory and no-op variants.
    retry: Retry policy abstraction with the built-in policies.
    interceptors: Request interceptors and the chain that applies them.
    transport: Transport capability and the default httpx adapter.
    codec: JSON body encoding/decoding via pydantic.
    config: Settings loading from JSON files and environment variables.
    exceptions: The error taxonomy raised by the client.
    output: stderr diagnostics with Rich support.
"""

__version__ = "0.2.3"
