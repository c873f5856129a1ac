"""Deadline threaded through retries, lookup delays and HTTP calls."""
from __future__ import annotations

import asyncio
import time

from .errors import DeadlineExceededError


class Deadline:
    """Absolute point on the monotonic clock after which work must stop."""

    def __init__(self, expires_at: float) -> None:
        self.expires_at = expires_at

    @classmethod
    def after(cls, seconds: float) -> Deadline:
        return cls(time.monotonic() + seconds)

    def remaining(self) -> float:
        return max(0.0, self.expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        return time.monotonic() >= self.expires_at

    def check(self, what: str = "operation") -> None:
        if self.expired:
            raise DeadlineExceededError(f"Deadline exceeded before {what}")

    def cap(self, seconds: float) -> float:
        """Shorten ``seconds`` so it does not run past the deadline."""
        return min(seconds, self.remaining())


async def sleep(seconds: float, deadline: Deadline | None = None) -> None:
    """Sleep for ``seconds``, refusing to sleep past ``deadline``."""
    if deadline is not None and seconds > deadline.remaining():
        raise DeadlineExceededError(
            f"Waiting {seconds:.2f}s would exceed the deadline "
            f"({deadline.remaining():.2f}s left)"
        )
    if seconds > 0:
        await asyncio.sleep(seconds)
