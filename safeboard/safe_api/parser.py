"""Pure parsing functions for Safe Transaction Service payloads."""
from __future__ import annotations

from typing import Any

from ..addresses import canonicalize_address
from ..errors import TransientError
from ..models import OwnershipRecord, WalletSnapshot


def _int(value: Any, default: int = 0) -> int:
    if value is None:
        return default
    return int(value)


def parse_wallet_snapshot(
    data: Any, network_id: int, requested_address: str
) -> WalletSnapshot:
    """Build a snapshot from a ``/api/v1/safes/{address}/`` body.

    Every address in the result is checksummed. The service's own
    ``address`` wins over the requested one when present.

    Raises:
        TransientError: the body does not have the expected shape.
    """
    try:
        owners = tuple(canonicalize_address(o) for o in data.get("owners") or ())
        return WalletSnapshot(
            address=canonicalize_address(data.get("address") or requested_address),
            network_id=network_id,
            threshold=_int(data.get("threshold")),
            owner_count=len(owners),
            owners=owners,
            nonce=_int(data.get("nonce")),
            master_copy=data.get("masterCopy"),
            fallback_handler=data.get("fallbackHandler"),
            guard=data.get("guard"),
            version=data.get("version"),
        )
    except (AttributeError, TypeError, ValueError) as e:
        raise TransientError(
            f"Malformed Safe payload for {requested_address}: {e}", network_id=network_id
        ) from e


def parse_owner_safes(data: Any, network_id: int) -> tuple[list[OwnershipRecord], str | None]:
    """Parse one page of ``/api/v2/owners/{address}/safes/``.

    Returns the records in service order and the ``next`` page URL, if any.

    Raises:
        TransientError: the body does not have the expected shape.
    """
    try:
        records: list[OwnershipRecord] = []
        for safe in data.get("results") or ():
            owners = safe.get("owners") or ()
            records.append(
                OwnershipRecord(
                    wallet_address=canonicalize_address(safe.get("address")),
                    network_id=network_id,
                    threshold=_int(safe.get("threshold")),
                    owner_count=len(owners),
                )
            )
        return records, data.get("next") or None
    except (AttributeError, TypeError, ValueError) as e:
        raise TransientError(
            f"Malformed owner Safes payload: {e}", network_id=network_id
        ) from e
