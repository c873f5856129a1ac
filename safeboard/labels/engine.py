"""Deterministic display labels for the addresses of one identity."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..models import IdentityAddress, ResolvedLabel
from .extract import ACCOUNT_PREFIX, extract_name_and_type, is_account_type


@dataclass(frozen=True)
class _Candidate:
    source: IdentityAddress
    sort_key: str
    name: str
    type: str | None


def _pair_key(name: str, display_type: str) -> tuple[str, str]:
    return name.lower(), display_type.lower()


def _sort_key(address: str | None) -> str:
    return str(address or "").lower()


def assign_labels(
    identity_base_name: str | None, addresses: Iterable[IdentityAddress]
) -> list[ResolvedLabel]:
    """Assign a unique ``(display_name, display_type)`` to every address.

    Names and types come from each address's ``raw_label`` first, then from
    the identity's own name. Addresses that end up with an explicit type
    (Hot Wallet, Ledger, ...) keep it, with `` Account N`` appended on a
    repeat. Everything else is numbered ``Account 1``, ``Account 2``, ... in
    address order. The account counter is shared by both steps and never
    reused. An account number found in the identity's own name is ignored.

    The result is sorted by address and depends only on the input.
    """
    base = extract_name_and_type(identity_base_name)
    base_name = base.name or str(identity_base_name or "").strip()
    base_type = None if base.is_account else base.type

    explicit: list[_Candidate] = []
    numbered: list[_Candidate] = []
    for addr in addresses:
        label = extract_name_and_type(addr.raw_label)
        candidate = _Candidate(
            source=addr,
            sort_key=_sort_key(addr.address),
            name=label.name or base_name,
            type=label.type or base_type,
        )
        if candidate.type and not is_account_type(candidate.type):
            explicit.append(candidate)
        else:
            numbered.append(candidate)

    used: set[tuple[str, str]] = set()
    counter = 0
    results: list[ResolvedLabel] = []

    for candidate in sorted(explicit, key=lambda c: c.sort_key):
        display_type = candidate.type
        while _pair_key(candidate.name, display_type) in used:
            counter += 1
            display_type = f"{candidate.type} {ACCOUNT_PREFIX}{counter}"
        used.add(_pair_key(candidate.name, display_type))
        results.append(_resolved(candidate, display_type))

    for candidate in sorted(numbered, key=lambda c: c.sort_key):
        counter += 1
        display_type = f"{ACCOUNT_PREFIX}{counter}"
        while _pair_key(candidate.name, display_type) in used:
            counter += 1
            display_type = f"{ACCOUNT_PREFIX}{counter}"
        used.add(_pair_key(candidate.name, display_type))
        results.append(_resolved(candidate, display_type))

    results.sort(key=lambda r: _sort_key(r.address))
    return results


def _resolved(candidate: _Candidate, display_type: str) -> ResolvedLabel:
    return ResolvedLabel(
        id=candidate.source.id,
        address=candidate.source.address,
        display_name=candidate.name,
        display_type=display_type,
    )
