"""Request state machine and HTTP outcome classification.

Each logical request moves through::

    PENDING -> SUCCEEDED
    PENDING -> RETRY_WAITING -> PENDING
    PENDING -> TERMINAL_FAILURE
    PENDING -> EXHAUSTED_FAILURE

``RETRY_WAITING`` is only entered for rate-limit and transient outcomes.
"""
from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..errors import (
    ExpectedAbsence,
    NotASafeError,
    RateLimitedError,
    RetryableError,
    SafeApiError,
    SafeNotFoundError,
    TransientError,
)


class RequestState(enum.Enum):
    PENDING = "pending"
    RETRY_WAITING = "retry_waiting"
    SUCCEEDED = "succeeded"
    TERMINAL_FAILURE = "terminal_failure"
    EXHAUSTED_FAILURE = "exhausted_failure"


@dataclass(frozen=True)
class Outcome:
    """Result of one attempt: either a payload or a classified fault."""

    payload: Any = None
    error: SafeApiError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_retry_after(value: str | None) -> float | None:
    """Seconds to wait from a ``Retry-After`` header, if it holds a number."""
    if value is None:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    return max(0.0, seconds)


def classify_status(status: int, headers: Mapping[str, str], url: str) -> SafeApiError | None:
    """Map a non-2xx status to its fault type; None for 2xx."""
    if 200 <= status < 300:
        return None
    if status == 404:
        return SafeNotFoundError(f"Safe not found: {url}", url=url, status=status)
    if status == 422:
        return NotASafeError(f"Address is not a Safe wallet: {url}", url=url, status=status)
    if status == 429:
        return RateLimitedError(
            f"Rate limited: too many requests for {url}",
            retry_after=parse_retry_after(headers.get("Retry-After")),
            url=url,
            status=status,
        )
    return TransientError(f"HTTP {status} from {url}", url=url, status=status)


def next_state(outcome: Outcome, attempt: int, max_retries: int) -> RequestState:
    """Transition out of PENDING after ``attempt`` (1-based) has finished."""
    if outcome.ok:
        return RequestState.SUCCEEDED
    if isinstance(outcome.error, ExpectedAbsence) or not isinstance(outcome.error, RetryableError):
        return RequestState.TERMINAL_FAILURE
    if attempt >= max_retries:
        return RequestState.EXHAUSTED_FAILURE
    return RequestState.RETRY_WAITING


def backoff_delay(error: SafeApiError | None, attempt: int, retry_delay: float) -> float:
    """Wait before the next attempt: ``Retry-After`` if given, else linear."""
    if isinstance(error, RateLimitedError) and error.retry_after is not None:
        return error.retry_after
    return retry_delay * attempt
