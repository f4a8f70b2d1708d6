"""HTTP client module for pulsenet.

Provides the request executor and its builder.

Classes:
    :class:`NetworkClient` -- async executor with interceptors, retry, and caching.
    :class:`NetworkClientBuilder` -- chainable configuration helper.

Example::

    from pulsenet.client import NetworkClientBuilder

    async with NetworkClientBuilder().with_base_url(url).build() as client:
        users = await client.get("/users", list[User])
"""

from pulsenet.client.builder import NetworkClientBuilder
from pulsenet.client.network_client import NetworkClient

__all__ = ["NetworkClient", "NetworkClientBuilder"]
