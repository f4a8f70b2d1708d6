"""Exception hierarchy for pulsenet.

All exceptions inherit from :class:`PulsenetError`, so callers can catch
every client failure with a single ``except`` clause and then branch on the
concrete subclass when they need to.

Subclass hierarchy::

    PulsenetError
    +-- InvalidURLError        path / base URL does not form an absolute URL
    +-- TransportError         the transport itself failed (timeout, DNS, ...)
    +-- InvalidResponseError   transport returned no status metadata
    +-- DecodingError          response body does not match the expected type
    +-- EncodingError          request body could not be serialised
    +-- NoDataError            no payload where one was required
    +-- HTTPError              non-2xx HTTP status
    +-- CacheError             failure inside a custom cache store
    +-- RetryExhaustedError    summary wrapper for an exhausted retry budget
    +-- CustomError            escape hatch for interceptor-defined failures
    +-- ConfigError            settings file or environment is invalid

Only :class:`TransportError`, :class:`InvalidResponseError`, and
:class:`HTTPError` are ever offered to a retry policy; the rest are
terminal the moment they are raised.
"""

from __future__ import annotations

import enum
from typing import Optional


class PulsenetError(Exception):
    """Base exception for all pulsenet errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidURLError(PulsenetError):
    """Raised when a path or base URL does not resolve to an absolute URL."""

    def __init__(self, url: str):
        super().__init__(f"Invalid URL: {url}")
        self.url = url


class TransportErrorKind(str, enum.Enum):
    """Classification of transport failures consumed by retry policies."""

    TIMED_OUT = "timed_out"
    CONNECTION_LOST = "connection_lost"
    NOT_CONNECTED = "not_connected"
    OTHER = "other"


class TransportError(PulsenetError):
    """Raised when the transport fails before producing a response.

    The underlying httpx exception (e.g. :class:`httpx.ReadTimeout`) is
    chained as ``__cause__``.

    Args:
        message: Description of the underlying failure.
        kind: Failure classification used by retry policies.
    """

    def __init__(self, message: str, kind: TransportErrorKind = TransportErrorKind.OTHER):
        super().__init__(f"Request failed: {message}")
        self.kind = kind


class InvalidResponseError(PulsenetError):
    """Raised when the transport returns a payload without HTTP status metadata."""

    def __init__(self) -> None:
        super().__init__("Invalid response from server")


class DecodingError(PulsenetError):
    """Raised when a response body cannot be decoded into the expected type."""

    def __init__(self, detail: str):
        super().__init__(f"Decoding failed: {detail}")


class EncodingError(PulsenetError):
    """Raised when a request body cannot be serialised to JSON."""

    def __init__(self, detail: str):
        super().__init__(f"Encoding failed: {detail}")


class NoDataError(PulsenetError):
    """Raised when a payload was required but none was received."""

    def __init__(self) -> None:
        super().__init__("No data received from server")


class HTTPError(PulsenetError):
    """Raised when the server responds with a status outside ``200-299``.

    Attributes:
        status_code: The HTTP status code.
        body: The raw response body, unmodified.
    """

    def __init__(self, status_code: int, body: Optional[bytes] = None):
        super().__init__(f"HTTP error {status_code}")
        self.status_code = status_code
        self.body = body


class CacheError(PulsenetError):
    """Raised by custom cache stores. The built-in stores never raise it."""

    def __init__(self, detail: str):
        super().__init__(f"Cache error: {detail}")


class RetryExhaustedError(PulsenetError):
    """Summary of a request that failed on every permitted attempt.

    :class:`~pulsenet.client.NetworkClient` re-raises the last underlying
    error instead of this wrapper; it is available for custom executors and
    policies that want to report the attempt count.

    Attributes:
        error: The last error observed.
        attempts: How many dispatches were made.
    """

    def __init__(self, error: Exception, attempts: int):
        super().__init__(f"Request failed after {attempts} attempts: {error}")
        self.error = error
        self.attempts = attempts


class CustomError(PulsenetError):
    """Free-form failure, typically raised by user interceptors to abort a request."""


class ConfigError(PulsenetError):
    """Raised for configuration problems (missing settings file, invalid JSON, bad values)."""
