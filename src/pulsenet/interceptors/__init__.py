"""Request interceptors for pulsenet.

Interceptors transform each outgoing :class:`httpx.Request` right before
dispatch.  They run once per attempt, in configuration order, through an
:class:`InterceptorChain`.

Built-in interceptors:
    :class:`AuthInterceptor` -- bearer token from an async provider.
    :class:`LoggingInterceptor` -- method, URL, and headers to stderr.
    :class:`CustomHeaderInterceptor` -- fixed headers on every request.
"""

from pulsenet.interceptors.auth import AuthInterceptor, TokenProvider
from pulsenet.interceptors.base import Interceptor
from pulsenet.interceptors.chain import InterceptorChain
from pulsenet.interceptors.headers import CustomHeaderInterceptor
from pulsenet.interceptors.log import LoggingInterceptor

__all__ = [
    "Interceptor",
    "InterceptorChain",
    "AuthInterceptor",
    "TokenProvider",
    "LoggingInterceptor",
    "CustomHeaderInterceptor",
]
