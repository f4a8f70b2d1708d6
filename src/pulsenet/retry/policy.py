"""Retry policies consulted by the request executor after a failed attempt.

A policy answers two questions for a 1-based ``attempt`` number:

* :meth:`RetryPolicy.should_retry` -- is this error worth another try?
* :meth:`RetryPolicy.delay_before_retry` -- how many seconds to wait first?

Only transport failures, missing status metadata, and non-2xx responses
are ever offered to a policy.  Interceptor and codec failures propagate
without consultation.

To implement a custom policy, subclass :class:`RetryPolicy` and pass an
instance to :meth:`~pulsenet.client.NetworkClientBuilder.with_retry_policy`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AbstractSet

from pulsenet.exceptions import HTTPError, TransportError, TransportErrorKind

DEFAULT_RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({408, 429, 500, 502, 503, 504})


class RetryPolicy(ABC):
    """Abstract base class for retry policies."""

    @abstractmethod
    def should_retry(self, error: Exception, attempt: int) -> bool:
        """Decide whether the request that failed with *error* should be retried.

        Args:
            error: The failure of the most recent attempt.
            attempt: 1-based number of the attempt that just failed.

        Returns:
            ``True`` to schedule another attempt.
        """
        ...

    @abstractmethod
    def delay_before_retry(self, attempt: int) -> float:
        """Return the delay in seconds before the attempt after *attempt*."""
        ...


class ExponentialBackoffRetryPolicy(RetryPolicy):
    """Retry transient network failures and selected HTTP statuses with growing delays.

    Retries timeouts, lost connections, and unreachable networks, plus any
    :class:`~pulsenet.exceptions.HTTPError` whose status is in
    *retryable_status_codes*.  The delay for attempt ``n`` is
    ``initial_delay * multiplier ** (n - 1)``, clamped to *max_delay*.

    Args:
        max_retries: Retries allowed after the first attempt.
        initial_delay: Delay after the first failure, in seconds.
        max_delay: Upper bound for any single delay, in seconds.
        multiplier: Growth factor between consecutive delays.
        retryable_status_codes: HTTP statuses treated as transient.
    """

    _RETRYABLE_KINDS = frozenset(
        {
            TransportErrorKind.TIMED_OUT,
            TransportErrorKind.CONNECTION_LOST,
            TransportErrorKind.NOT_CONNECTED,
        }
    )

    def __init__(
        self,
        max_retries: int = 3,
        initial_delay: float = 1.0,
        max_delay: float = 30.0,
        multiplier: float = 2.0,
        retryable_status_codes: AbstractSet[int] = DEFAULT_RETRYABLE_STATUS_CODES,
    ) -> None:
        self._max_retries = max_retries
        self._initial_delay = initial_delay
        self._max_delay = max_delay
        self._multiplier = multiplier
        self._retryable_status_codes = frozenset(retryable_status_codes)

    @property
    def max_retries(self) -> int:
        return self._max_retries

    @property
    def initial_delay(self) -> float:
        return self._initial_delay

    @property
    def max_delay(self) -> float:
        return self._max_delay

    @property
    def multiplier(self) -> float:
        return self._multiplier

    @property
    def retryable_status_codes(self) -> frozenset[int]:
        return self._retryable_status_codes

    def should_retry(self, error: Exception, attempt: int) -> bool:
        if attempt > self._max_retries:
            return False
        if isinstance(error, TransportError):
            return error.kind in self._RETRYABLE_KINDS
        if isinstance(error, HTTPError):
            return error.status_code in self._retryable_status_codes
        return False

    def delay_before_retry(self, attempt: int) -> float:
        try:
            delay = self._initial_delay * self._multiplier ** (attempt - 1)
        except OverflowError:
            return self._max_delay
        return min(delay, self._max_delay)

    def __repr__(self) -> str:
        return (
            f"ExponentialBackoffRetryPolicy(max_retries={self._max_retries}, "
            f"initial_delay={self._initial_delay}, max_delay={self._max_delay}, "
            f"multiplier={self._multiplier}, "
            f"retryable_status_codes={sorted(self._retryable_status_codes)})"
        )


class SimpleRetryPolicy(RetryPolicy):
    """Retry timeouts and lost connections after a fixed delay.

    HTTP error responses are never retried by this policy.

    Args:
        max_retries: Retries allowed after the first attempt.
        delay_interval: Constant delay between attempts, in seconds.
    """

    _RETRYABLE_KINDS = frozenset(
        {TransportErrorKind.TIMED_OUT, TransportErrorKind.CONNECTION_LOST}
    )

    def __init__(self, max_retries: int = 3, delay_interval: float = 1.0) -> None:
        self._max_retries = max_retries
        self._delay_interval = delay_interval

    @property
    def max_retries(self) -> int:
        return self._max_retries

    @property
    def delay_interval(self) -> float:
        return self._delay_interval

    def should_retry(self, error: Exception, attempt: int) -> bool:
        if attempt > self._max_retries:
            return False
        if isinstance(error, TransportError):
            return error.kind in self._RETRYABLE_KINDS
        return False

    def delay_before_retry(self, attempt: int) -> float:
        return self._delay_interval

    def __repr__(self) -> str:
        return (
            f"SimpleRetryPolicy(max_retries={self._max_retries}, "
            f"delay_interval={self._delay_interval})"
        )


class NoRetryPolicy(RetryPolicy):
    """Never retry. The default policy."""

    def should_retry(self, error: Exception, attempt: int) -> bool:
        return False

    def delay_before_retry(self, attempt: int) -> float:
        return 0.0

    def __repr__(self) -> str:
        return "NoRetryPolicy()"
