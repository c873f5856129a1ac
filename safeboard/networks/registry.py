"""Immutable directory of networks served by the Safe Transaction Service."""
from __future__ import annotations

import logging
from typing import Iterable, Iterator

from ..config import DEFAULT_API_BASE_URL, NetworksConfig
from ..models import Network

logger = logging.getLogger(__name__)

DEFAULT_NETWORKS: tuple[Network, ...] = (
    Network(1, "eth", "Ethereum Mainnet", "https://etherscan.io"),
    Network(11155111, "sep", "Sepolia", "https://sepolia.etherscan.io"),
    Network(42161, "arb1", "Arbitrum", "https://arbiscan.io"),
    Network(10, "oeth", "Optimism", "https://optimistic.etherscan.io"),
    Network(8453, "base", "Base", "https://basescan.org"),
    Network(43114, "avax", "Avalanche", "https://snowtrace.io"),
    Network(137, "pol", "Polygon", "https://polygonscan.com"),
    Network(56, "bnb", "BSC", "https://bscscan.com"),
    Network(1101, "zkevm", "Polygon zkEVM", "https://zkevm.polygonscan.com"),
    Network(324, "zksync", "zkSync Era", "https://explorer.zksync.io"),
    Network(59144, "linea", "Linea", "https://lineascan.build"),
    Network(81457, "blast", "Blast", "https://blastscan.io"),
    Network(196, "okb", "X Layer", "https://xlayerscan.io"),
    Network(146, "sonic", "Sonic", "https://sonicscan.org"),
    Network(534352, "scroll", "Scroll", "https://scrollscan.com"),
    Network(100, "gno", "Gnosis", "https://gnosisscan.io"),
    Network(42220, "celo", "Celo", "https://celoscan.io"),
    Network(5000, "mantle", "Mantle", "https://mantlescan.info"),
    Network(1313161554, "aurora", "Aurora", "https://aurorascan.dev"),
    Network(80094, "berachain", "Berachain", "https://beratrail.io"),
    Network(57073, "ink", "Ink", "https://explorer.inkonchain.com"),
    Network(9745, "plasma", "Plasma", "https://plasmascan.to"),
    Network(2016, "stable", "Stable", "https://blockscan.com"),
    Network(999, "hyper-evm", "Hyper EVM", "https://hyperevmscan.io"),
    Network(6342, "mega", "MegaETH", "https://megaexplorer.xyz"),
    Network(130, "unichain", "Unichain", "https://unichain.blockscout.com"),
    Network(239, "tac", "TAC", "https://explorer.tac.build"),
)

# Names used by Safe web-app links and imported data that differ from the
# service's path code.
CODE_ALIASES: dict[str, str] = {
    "polygon": "pol",
    "matic": "pol",
    "xlayer": "okb",
    "scr": "scroll",
    "sepolia": "sep",
    "mnt": "mantle",
    "gnosis": "gno",
}


class NetworkRegistry:
    """Lookup table of networks, built once and never mutated."""

    def __init__(
        self,
        networks: Iterable[Network] = DEFAULT_NETWORKS,
        excluded: Iterable[int] = (),
        base_url: str = DEFAULT_API_BASE_URL,
    ) -> None:
        by_id: dict[int, Network] = {}
        for network in networks:
            if network.id in by_id:
                raise ValueError(f"Duplicate network id {network.id}")
            by_id[network.id] = network

        self._networks: tuple[Network, ...] = tuple(by_id.values())
        self._by_id = by_id
        self._by_code: dict[str, Network] = {}
        for network in self._networks:
            # First registration wins when networks share a code.
            self._by_code.setdefault(network.code.lower(), network)
        self._excluded = frozenset(excluded)
        self._base_url = base_url.rstrip("/")

    def __iter__(self) -> Iterator[Network]:
        return iter(self._networks)

    def __len__(self) -> int:
        return len(self._networks)

    def lookup_by_id(self, network_id: int) -> Network | None:
        return self._by_id.get(network_id)

    def lookup_by_code(self, code: str | None) -> Network | None:
        """Find a network by service code or known alias, case-insensitively."""
        if not code:
            return None
        normalized = code.strip().lower()
        normalized = CODE_ALIASES.get(normalized, normalized)
        return self._by_code.get(normalized)

    def network_name(self, network_id: int) -> str:
        network = self._by_id.get(network_id)
        return network.display_name if network else f"Chain {network_id}"

    def endpoint(self, network: Network) -> str:
        """Base URL of the Safe Transaction Service instance for ``network``."""
        if network.api_url:
            return network.api_url.rstrip("/")
        return f"{self._base_url}/{network.code}"

    def is_excluded(self, network_id: int) -> bool:
        return network_id in self._excluded

    def searchable(self) -> tuple[Network, ...]:
        """Registered networks minus the ones without a public endpoint."""
        return tuple(n for n in self._networks if n.id not in self._excluded)


def build_registry(config: NetworksConfig, base_url: str = DEFAULT_API_BASE_URL) -> NetworkRegistry:
    """Registry of the built-in networks plus any configured extras."""
    networks = list(DEFAULT_NETWORKS)
    known = {n.id for n in networks}
    for extra in config.extra:
        if extra.id in known:
            logger.warning("Extra network %s duplicates a built-in id, ignoring", extra.id)
            continue
        known.add(extra.id)
        networks.append(
            Network(
                id=extra.id,
                code=extra.code,
                display_name=extra.name or f"Chain {extra.id}",
                explorer_url=extra.explorer_url,
                api_url=extra.api_url,
            )
        )
    return NetworkRegistry(networks, excluded=config.excluded, base_url=base_url)
