"""Retry policies for pulsenet.

:class:`RetryPolicy` is the abstract contract; the built-in variants are
:class:`ExponentialBackoffRetryPolicy`, :class:`SimpleRetryPolicy`, and
:class:`NoRetryPolicy` (the default).
"""

from pulsenet.retry.policy import (
    DEFAULT_RETRYABLE_STATUS_CODES,
    ExponentialBackoffRetryPolicy,
    NoRetryPolicy,
    RetryPolicy,
    SimpleRetryPolicy,
)

__all__ = [
    "DEFAULT_RETRYABLE_STATUS_CODES",
    "RetryPolicy",
    "ExponentialBackoffRetryPolicy",
    "SimpleRetryPolicy",
    "NoRetryPolicy",
]
