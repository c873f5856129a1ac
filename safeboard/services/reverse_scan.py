"""Reverse lookup of every Safe an owner address belongs to, network by network."""
from __future__ import annotations

import logging
from typing import Iterable

from ..addresses import canonicalize_address, format_address
from ..config import ScannerConfig
from ..deadline import Deadline, sleep
from ..errors import (
    ConfigurationError,
    DeadlineExceededError,
    ExpectedAbsence,
    SafeApiError,
    TransientError,
)
from ..interfaces.query_client import QueryClient
from ..models import Network, OwnershipRecord, ScanResult
from ..networks import NetworkRegistry
from ..safe_api.parser import parse_owner_safes

logger = logging.getLogger(__name__)


class ReverseOwnershipScanner:
    """Collect Safes owned by an address across the networks in scope.

    One network failing never stops the others; its fault is reported in
    ``ScanResult.errors`` instead.
    """

    def __init__(
        self, client: QueryClient, registry: NetworkRegistry, config: ScannerConfig
    ) -> None:
        self._client = client
        self._registry = registry
        self._config = config

    def _scope(self, network_scope: Iterable[int] | None) -> list[Network]:
        if network_scope is None:
            return list(self._registry.searchable())

        networks: list[Network] = []
        seen: set[int] = set()
        for network_id in network_scope:
            if network_id in seen:
                continue
            seen.add(network_id)

            network = self._registry.lookup_by_id(network_id)
            if network is None:
                logger.debug("Skipping unknown network %s", network_id)
                continue
            if self._registry.is_excluded(network_id):
                logger.debug("Skipping %s: no public endpoint", network.display_name)
                continue
            networks.append(network)
        return networks

    async def scan(
        self,
        owner_address: str,
        network_scope: Iterable[int] | None = None,
        deadline: Deadline | None = None,
    ) -> ScanResult:
        """Scan the networks in ``network_scope`` (default: all searchable).

        Raises:
            InvalidAddressError: ``owner_address`` is not a hex address.
            ConfigurationError: API key missing.
        """
        owner = canonicalize_address(owner_address)
        if deadline is None:
            deadline = Deadline.after(self._config.timeout)
        networks = self._scope(network_scope)

        wallets: dict[int, tuple[OwnershipRecord, ...]] = {}
        errors: dict[int, SafeApiError] = {}
        unscanned: tuple[int, ...] = ()

        for index, network in enumerate(networks):
            try:
                if index:
                    await sleep(self._config.network_delay, deadline)
                records = await self._scan_network(network, owner, deadline)
            except ConfigurationError:
                raise
            except DeadlineExceededError as e:
                unscanned = tuple(n.id for n in networks[index:])
                logger.warning(
                    "Scan of %s stopped at %s, %d network(s) left: %s",
                    owner, network.display_name, len(unscanned), e,
                )
                break
            except ExpectedAbsence:
                continue
            except SafeApiError as e:
                e.network_id = network.id
                errors[network.id] = e
                logger.warning("%s (%d) scan failed: %s", network.display_name, network.id, e)
                continue

            if records:
                wallets[network.id] = tuple(records)

        logger.info(
            "Scanned %s: %d Safe(s) on %d network(s), %d failed",
            format_address(owner),
            sum(len(r) for r in wallets.values()),
            len(wallets),
            len(errors),
        )
        return ScanResult(owners=(owner,), wallets=wallets, errors=errors, unscanned=unscanned)

    async def scan_many(
        self,
        owner_addresses: Iterable[str],
        network_scope: Iterable[int] | None = None,
        deadline: Deadline | None = None,
    ) -> ScanResult:
        """Scan several addresses of one identity and merge the results.

        Per network, records are deduplicated by wallet address; the first
        occurrence wins and keeps its position.
        """
        owners = tuple(dict.fromkeys(canonicalize_address(a) for a in owner_addresses))
        scope = None if network_scope is None else tuple(network_scope)
        if deadline is None:
            deadline = Deadline.after(self._config.timeout)

        wallets: dict[int, dict[str, OwnershipRecord]] = {}
        errors: dict[int, SafeApiError] = {}
        unscanned: dict[int, None] = {}

        for index, owner in enumerate(owners):
            if index:
                try:
                    await sleep(self._config.network_delay, deadline)
                except DeadlineExceededError:
                    unscanned.update(dict.fromkeys(n.id for n in self._scope(scope)))
                    break

            result = await self.scan(owner, scope, deadline)
            for network_id, records in result.wallets.items():
                merged = wallets.setdefault(network_id, {})
                for record in records:
                    merged.setdefault(record.wallet_address, record)
            for network_id, error in result.errors.items():
                errors.setdefault(network_id, error)
            unscanned.update(dict.fromkeys(result.unscanned))

        return ScanResult(
            owners=owners,
            wallets={k: tuple(v.values()) for k, v in wallets.items()},
            errors=errors,
            unscanned=tuple(unscanned),
        )

    async def _scan_network(
        self, network: Network, owner: str, deadline: Deadline
    ) -> list[OwnershipRecord]:
        url: str | None = self._client.owner_safes_url(self._registry.endpoint(network), owner)
        records: list[OwnershipRecord] = []
        visited: set[str] = set()

        while url:
            if url in visited:
                raise TransientError(f"Pagination loop at {url}", url=url, network_id=network.id)
            visited.add(url)

            data = await self._client.get_json(
                url,
                max_retries=self._config.max_retries,
                retry_delay=self._config.retry_delay,
                deadline=deadline,
            )
            page, url = parse_owner_safes(data, network.id)
            records.extend(page)

        return records
