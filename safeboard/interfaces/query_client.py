"""Query client protocol for the Safe Transaction Service abstraction."""
from typing import Any, Protocol

from ..deadline import Deadline


class QueryClient(Protocol):
    """Abstract interface for fetching JSON from the indexing service."""

    @staticmethod
    def safe_url(endpoint: str, address: str) -> str: ...

    @staticmethod
    def owner_safes_url(endpoint: str, owner: str) -> str: ...

    async def get_json(
        self,
        url: str,
        *,
        max_retries: int | None = None,
        retry_delay: float | None = None,
        deadline: Deadline | None = None,
    ) -> Any: ...
