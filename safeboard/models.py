"""Data models, all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass, field

from .errors import DeadlineExceededError, NoWalletsOwnedError, SafeApiError


@dataclass(frozen=True)
class Network:
    """A chain with its own Safe Transaction Service instance."""

    id: int
    code: str
    display_name: str
    explorer_url: str = ""
    api_url: str = ""


@dataclass(frozen=True)
class WalletSnapshot:
    """Owners and threshold of one Safe, as fetched on one network."""

    address: str
    network_id: int
    threshold: int
    owner_count: int
    owners: tuple[str, ...] = ()
    nonce: int = 0
    master_copy: str | None = None
    fallback_handler: str | None = None
    guard: str | None = None
    version: str | None = None


@dataclass(frozen=True)
class OwnershipRecord:
    """One Safe on one network where the queried address is an owner."""

    wallet_address: str
    network_id: int
    threshold: int
    owner_count: int


@dataclass(frozen=True)
class IdentityAddress:
    """An owner address attached to a signer, with an optional free-text label."""

    id: str
    address: str
    raw_label: str | None = None


@dataclass(frozen=True)
class ResolvedLabel:
    id: str
    address: str
    display_name: str
    display_type: str


@dataclass(frozen=True)
class ScanResult:
    """Outcome of a reverse ownership scan.

    ``wallets`` only holds networks where at least one Safe was found.
    ``errors`` holds networks whose lookup failed for a reason other than
    "no Safes here", so an empty network and an unreachable one never look
    the same. ``unscanned`` lists networks skipped because the deadline ran out.
    """

    owners: tuple[str, ...]
    wallets: dict[int, tuple[OwnershipRecord, ...]] = field(default_factory=dict)
    errors: dict[int, SafeApiError] = field(default_factory=dict)
    unscanned: tuple[int, ...] = ()

    @property
    def _owner_text(self) -> str:
        return ", ".join(self.owners) or "owner"

    @property
    def complete(self) -> bool:
        return not self.errors and not self.unscanned

    def records(self) -> list[OwnershipRecord]:
        """All records flattened, network by network."""
        return [record for records in self.wallets.values() for record in records]

    def raise_for_empty(self) -> None:
        """Raise when the scan found nothing.

        Raises:
            NoWalletsOwnedError: nothing found and every network answered.
            SafeApiError: nothing found and at least one network failed; the
                first failure is raised as the more actionable signal.
            DeadlineExceededError: nothing found before time ran out.
        """
        if self.wallets:
            return
        if self.errors:
            raise next(iter(self.errors.values()))
        if self.unscanned:
            raise DeadlineExceededError(
                f"Scan of {self._owner_text} stopped with {len(self.unscanned)} networks left"
            )
        raise NoWalletsOwnedError(f"{self._owner_text} owns no Safes on any scanned network")
