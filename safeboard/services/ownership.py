"""Safe lookup: hinted network first, then sequential search."""
from __future__ import annotations

import logging

from ..addresses import canonicalize_address, format_address, parse_safe_link
from ..config import ResolverConfig
from ..deadline import Deadline, sleep
from ..errors import (
    ConfigurationError,
    DeadlineExceededError,
    ExpectedAbsence,
    InvalidAddressError,
    NoWalletFoundError,
    SafeApiError,
)
from ..interfaces.query_client import QueryClient
from ..models import Network, WalletSnapshot
from ..networks import NetworkRegistry
from ..safe_api.parser import parse_wallet_snapshot

logger = logging.getLogger(__name__)


class OwnershipResolver:
    """Find which network a Safe lives on and fetch its owners and threshold."""

    def __init__(
        self, client: QueryClient, registry: NetworkRegistry, config: ResolverConfig
    ) -> None:
        self._client = client
        self._registry = registry
        self._config = config

    def _hinted_network(
        self, network_id: int | None, network_code: str | None
    ) -> Network | None:
        network = None
        if network_id is not None:
            network = self._registry.lookup_by_id(network_id)
        if network is None and network_code:
            network = self._registry.lookup_by_code(network_code)

        if network is None:
            if network_id is not None or network_code:
                logger.debug("Unknown network hint id=%s code=%s", network_id, network_code)
            return None
        if self._registry.is_excluded(network.id):
            logger.debug("Hinted network %s has no public endpoint", network.display_name)
            return None
        return network

    async def resolve(
        self,
        address: str,
        network_id: int | None = None,
        network_code: str | None = None,
        deadline: Deadline | None = None,
    ) -> WalletSnapshot:
        """Return the Safe at ``address`` from the first network that has it.

        Raises:
            InvalidAddressError: ``address`` is not a hex address.
            ConfigurationError: API key missing.
            DeadlineExceededError: ran out of time while searching.
            NoWalletFoundError: every queried network reported "not found"
                or "not a Safe".
            SafeApiError: no network succeeded and at least one failed for an
                unexpected reason; the first such fault is raised.
        """
        canonical = canonicalize_address(address)
        if deadline is None:
            deadline = Deadline.after(self._config.timeout)

        faults: list[SafeApiError] = []
        hinted = self._hinted_network(network_id, network_code)
        requested = False

        if hinted is not None:
            snapshot = await self._try_network(hinted, canonical, deadline, faults)
            if snapshot is not None:
                return snapshot
            requested = True

        for network in self._registry.searchable():
            if hinted is not None and network.id == hinted.id:
                continue
            if requested:
                await sleep(self._config.lookup_delay, deadline)
            requested = True

            snapshot = await self._try_network(network, canonical, deadline, faults)
            if snapshot is not None:
                return snapshot

        if faults:
            logger.error(
                "Could not resolve %s: %d network(s) failed, first error: %s",
                canonical, len(faults), faults[0],
            )
            raise faults[0]
        raise NoWalletFoundError(f"No Safe found at {canonical} on any known network")

    async def resolve_link(self, url: str, deadline: Deadline | None = None) -> WalletSnapshot:
        """Resolve a Safe web-app link such as ``...?safe=arb1:0xAbC...``."""
        parsed = parse_safe_link(url)
        if parsed is None:
            raise InvalidAddressError(f"Not a Safe link: {url!r}")
        code, address = parsed
        return await self.resolve(address, network_code=code, deadline=deadline)

    async def _try_network(
        self,
        network: Network,
        address: str,
        deadline: Deadline,
        faults: list[SafeApiError],
    ) -> WalletSnapshot | None:
        url = self._client.safe_url(self._registry.endpoint(network), address)
        logger.debug("Querying %s for %s", network.display_name, format_address(address))
        try:
            data = await self._client.get_json(url, deadline=deadline)
            snapshot = parse_wallet_snapshot(data, network.id, address)
        except (ConfigurationError, DeadlineExceededError):
            raise
        except ExpectedAbsence as e:
            logger.debug("%s: %s", network.display_name, e)
            return None
        except SafeApiError as e:
            e.network_id = network.id
            logger.warning("%s (%d) lookup failed: %s", network.display_name, network.id, e)
            faults.append(e)
            return None

        logger.info(
            "Resolved %s on %s: %d/%d",
            format_address(snapshot.address),
            network.display_name,
            snapshot.threshold,
            snapshot.owner_count,
        )
        return snapshot
