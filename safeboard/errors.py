"""Typed faults raised by the Safe Transaction Service client and services.

Classification into these types happens once, where an HTTP response or
transport failure is first observed (``safeboard.safe_api.retry``). Callers
branch on the class, never on message text.
"""
from __future__ import annotations


class SafeApiError(Exception):
    """Base class for every fault raised by the query layer."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status: int | None = None,
        network_id: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status = status
        self.network_id = network_id


class ConfigurationError(SafeApiError):
    """API credential missing or empty. Never retried, never recovered."""


class ExpectedAbsence(SafeApiError):
    """Resource legitimately absent on one network."""


class SafeNotFoundError(ExpectedAbsence):
    """HTTP 404: no such Safe (or no Safes for this owner) on the network."""


class NotASafeError(ExpectedAbsence):
    """HTTP 422: the address exists but is not a Safe on the network."""


class RetryableError(SafeApiError):
    """Outcome that may succeed on a later attempt."""


class RateLimitedError(RetryableError):
    """HTTP 429."""

    def __init__(self, message: str, *, retry_after: float | None = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class TransientError(RetryableError):
    """Other non-2xx response, malformed body or transport failure."""


class RetriesExhaustedError(SafeApiError):
    """Every attempt ended in a retryable fault."""

    def __init__(self, message: str, *, last_error: SafeApiError, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.last_error = last_error


class DeadlineExceededError(SafeApiError, TimeoutError):
    """The caller's time budget ran out before the operation finished."""


class NoWalletFoundError(SafeApiError):
    """The address is not a Safe on any queried network."""


class NoWalletsOwnedError(SafeApiError):
    """The owner holds no Safes on any scanned network."""


class InvalidAddressError(ValueError):
    """Input is not a 20-byte hex address."""
