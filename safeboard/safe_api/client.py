"""Safe Transaction Service HTTP client with retry and rate-limit backoff."""
from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ..config import SafeApiConfig
from ..deadline import Deadline, sleep
from ..errors import (
    ConfigurationError,
    DeadlineExceededError,
    RetriesExhaustedError,
    TransientError,
)
from .retry import Outcome, RequestState, backoff_delay, classify_status, next_state

logger = logging.getLogger(__name__)


class SafeApiClient:
    """Authenticated GET against the Safe Transaction Service.

    The client holds configuration only; every call keeps its own request
    state, so one instance can serve concurrent callers.
    """

    def __init__(self, config: SafeApiConfig) -> None:
        self.api_key = config.api_key
        self.timeout = config.request_timeout
        self.max_retries = config.max_retries
        self.retry_delay = config.retry_delay

    @staticmethod
    def safe_url(endpoint: str, address: str) -> str:
        return f"{endpoint}/api/v1/safes/{address}/"

    @staticmethod
    def owner_safes_url(endpoint: str, owner: str) -> str:
        return f"{endpoint}/api/v2/owners/{owner}/safes/"

    def _auth_headers(self) -> dict[str, str]:
        if not self.api_key or not self.api_key.strip():
            raise ConfigurationError("SAFE_API_KEY is not configured")
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def get_json(
        self,
        url: str,
        *,
        max_retries: int | None = None,
        retry_delay: float | None = None,
        deadline: Deadline | None = None,
    ) -> Any:
        """GET ``url`` and return the decoded JSON body.

        Raises:
            ConfigurationError: API key missing; raised before any I/O.
            SafeNotFoundError: HTTP 404, not retried.
            NotASafeError: HTTP 422, not retried.
            RetriesExhaustedError: every attempt was rate limited or failed.
            DeadlineExceededError: the next wait would overrun ``deadline``.
        """
        headers = self._auth_headers()
        if max_retries is None:
            max_retries = self.max_retries
        if retry_delay is None:
            retry_delay = self.retry_delay

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        async with aiohttp.ClientSession(connector=connector, headers=headers) as session:
            attempt = 0
            while True:
                attempt += 1
                if deadline is not None:
                    deadline.check(f"GET {url}")

                outcome = await self._attempt(session, url, deadline)
                state = next_state(outcome, attempt, max_retries)
                logger.debug("GET %s attempt %d/%d -> %s", url, attempt, max_retries, state.value)

                if state is RequestState.SUCCEEDED:
                    return outcome.payload
                if state is RequestState.TERMINAL_FAILURE:
                    raise outcome.error
                if state is RequestState.EXHAUSTED_FAILURE:
                    if deadline is not None and deadline.expired:
                        raise DeadlineExceededError(
                            f"Deadline exceeded during GET {url}: {outcome.error}"
                        ) from outcome.error
                    raise RetriesExhaustedError(
                        f"Giving up on {url} after {attempt} attempts: {outcome.error}",
                        last_error=outcome.error,
                        url=url,
                        status=outcome.error.status,
                    ) from outcome.error

                wait = backoff_delay(outcome.error, attempt, retry_delay)
                logger.warning(
                    "%s, retrying in %.2fs (attempt %d/%d)",
                    outcome.error, wait, attempt, max_retries,
                )
                await sleep(wait, deadline)

    async def _attempt(
        self, session: aiohttp.ClientSession, url: str, deadline: Deadline | None
    ) -> Outcome:
        timeout = self.timeout if deadline is None else deadline.cap(self.timeout)
        if timeout <= 0:
            # ClientTimeout(total=0) disables the timeout.
            raise DeadlineExceededError(f"Deadline exceeded before GET {url}")
        try:
            async with session.get(
                url, timeout=aiohttp.ClientTimeout(total=timeout)
            ) as response:
                error = classify_status(response.status, response.headers, url)
                if error is not None:
                    return Outcome(error=error)
                try:
                    return Outcome(payload=await response.json())
                except (aiohttp.ContentTypeError, ValueError) as e:
                    return Outcome(
                        error=TransientError(
                            f"Malformed JSON from {url}: {e}", url=url, status=response.status
                        )
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            return Outcome(error=TransientError(f"Request to {url} failed: {e!r}", url=url))
