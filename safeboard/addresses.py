"""Address normalization and display helpers."""
from __future__ import annotations

import re
from urllib.parse import parse_qs, urlparse

from web3 import Web3

from .errors import InvalidAddressError

_HEX_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_hex_address(value: str | None) -> bool:
    return bool(value) and bool(_HEX_ADDRESS_RE.match(value.strip()))


def canonicalize_address(value: str | None) -> str:
    """Return the EIP-55 checksummed form of a 20-byte hex address.

    Raises:
        InvalidAddressError: if ``value`` is not ``0x`` followed by 40 hex chars.
    """
    candidate = str(value or "").strip()
    if not _HEX_ADDRESS_RE.match(candidate):
        raise InvalidAddressError(f"Not a hex address: {value!r}")
    return Web3.to_checksum_address(candidate.lower())


def format_address(address: str, start_chars: int = 6, end_chars: int = 4) -> str:
    """Truncate the middle of an address for display, e.g. ``0x1234...abcd``."""
    if len(address) <= start_chars + end_chars:
        return address
    return f"{address[:start_chars]}...{address[-end_chars:]}"


def explorer_address_url(explorer_url: str, address: str) -> str | None:
    """Block explorer page for ``address``, or None when no explorer is known."""
    if not explorer_url:
        return None
    return f"{explorer_url.rstrip('/')}/address/{address}"


def parse_safe_link(url: str) -> tuple[str, str] | None:
    """Extract ``(network_code, address)`` from a Safe web-app link.

    Links look like ``https://app.safe.global/transactions/tx?safe=eth:0xAbC...``.
    Any host is accepted as long as the ``safe`` query parameter has the
    ``<code>:<address>`` shape. Trailing characters after the 40 hex digits
    are ignored. Returns None when the link does not carry a usable address.
    """
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return None

    values = parse_qs(parsed.query).get("safe")
    if not values:
        return None

    code, _, address = values[0].partition(":")
    address = address[:42]
    if not code or not is_hex_address(address):
        return None
    return code.strip().lower(), canonicalize_address(address)
