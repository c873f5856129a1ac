"""Sample data and an in-memory query client shared by the tests."""
from __future__ import annotations

from typing import Any

from safeboard.errors import SafeNotFoundError
from safeboard.models import Network
from safeboard.safe_api import SafeApiClient

BASE_URL = "https://safe.example.com/tx-service"

# EIP-55 reference vectors, in checksummed form.
SAFE_ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
OWNER_A = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"
OWNER_B = "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB"
OTHER_SAFE = "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb"

TEST_NETWORKS = (
    Network(1, "eth", "Ethereum Mainnet", "https://etherscan.io"),
    Network(10, "oeth", "Optimism", "https://optimistic.etherscan.io"),
    Network(137, "pol", "Polygon", "https://polygonscan.com"),
    Network(8453, "base", "Base", "https://basescan.org"),
    Network(239, "tac", "TAC"),
)


def safe_url(code: str, address: str) -> str:
    return SafeApiClient.safe_url(f"{BASE_URL}/{code}", address)


def owner_url(code: str, owner: str) -> str:
    return SafeApiClient.owner_safes_url(f"{BASE_URL}/{code}", owner)


def safe_payload(address: str = SAFE_ADDRESS, owners: tuple[str, ...] = (OWNER_A, OWNER_B)) -> dict:
    return {
        "address": address,
        "nonce": 42,
        "threshold": 2,
        "owners": list(owners),
        "masterCopy": "0x0000000000000000000000000000000000000001",
        "fallbackHandler": None,
        "guard": None,
        "version": "1.3.0",
    }


class FakeQueryClient:
    """In-memory stand-in for SafeApiClient keyed by URL.

    URLs without a registered response answer with SafeNotFoundError.
    """

    safe_url = staticmethod(SafeApiClient.safe_url)
    owner_safes_url = staticmethod(SafeApiClient.owner_safes_url)

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[str] = []
        self.call_kwargs: list[dict[str, Any]] = []

    async def get_json(self, url: str, **kwargs: Any) -> Any:
        self.calls.append(url)
        self.call_kwargs.append(kwargs)
        outcome = self.responses.get(url)
        if outcome is None:
            raise SafeNotFoundError(f"Safe not found: {url}", url=url, status=404)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome
