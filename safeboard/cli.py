"""Command-line interface for safeboard."""
from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from typing import Any

from .addresses import explorer_address_url
from .config import AppConfig, load_config
from .errors import NoWalletFoundError, NoWalletsOwnedError, SafeApiError
from .labels import assign_labels
from .logging_setup import configure_logging
from .models import IdentityAddress, ScanResult, WalletSnapshot
from .networks import NetworkRegistry, build_registry
from .safe_api import SafeApiClient
from .services import OwnershipResolver, ReverseOwnershipScanner

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_NOT_FOUND = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="safeboard",
        description="Multisig wallet ownership lookup and signer labelling",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("networks", help="List registered networks")

    resolve_parser = sub.add_parser("resolve", help="Find a Safe and its owners")
    resolve_parser.add_argument("address", help="Safe address or Safe web-app link")
    resolve_parser.add_argument(
        "--network",
        default=None,
        help="Chain id or network code to try before searching",
    )

    scan_parser = sub.add_parser("scan", help="List Safes owned by one or more addresses")
    scan_parser.add_argument("owners", nargs="+", help="Owner address(es) of one identity")
    scan_parser.add_argument(
        "--network",
        dest="networks",
        action="append",
        type=int,
        default=None,
        help="Chain id to scan; repeatable (default: every network)",
    )

    labels_parser = sub.add_parser("labels", help="Assign display labels to a signer's addresses")
    labels_parser.add_argument("name", help="Signer name")
    labels_parser.add_argument(
        "addresses",
        nargs="+",
        metavar="ADDRESS[=LABEL]",
        help="Address, optionally followed by =free-text label",
    )

    return parser


def parse_identity_address(value: str) -> IdentityAddress:
    """``0xabc=Timo (Ledger)`` -> IdentityAddress with the address as id."""
    address, sep, label = value.partition("=")
    address = address.strip()
    return IdentityAddress(id=address, address=address, raw_label=label if sep else None)


def _explorer_link(registry: NetworkRegistry, network_id: int, address: str) -> str | None:
    network = registry.lookup_by_id(network_id)
    if network is None:
        return None
    return explorer_address_url(network.explorer_url, address)


def _snapshot_to_dict(snapshot: WalletSnapshot, registry: NetworkRegistry) -> dict[str, Any]:
    return {
        **dataclasses.asdict(snapshot),
        "network": registry.network_name(snapshot.network_id),
        "explorer": _explorer_link(registry, snapshot.network_id, snapshot.address),
        "owner_explorers": {
            owner: _explorer_link(registry, snapshot.network_id, owner)
            for owner in snapshot.owners
        },
    }


def _scan_to_dict(result: ScanResult, registry: NetworkRegistry) -> dict[str, Any]:
    return {
        "owners": list(result.owners),
        "wallets": {
            registry.network_name(network_id): [
                {
                    **dataclasses.asdict(r),
                    "explorer": _explorer_link(registry, network_id, r.wallet_address),
                }
                for r in records
            ]
            for network_id, records in result.wallets.items()
        },
        "errors": {
            registry.network_name(network_id): str(error)
            for network_id, error in result.errors.items()
        },
        "unscanned": [registry.network_name(n) for n in result.unscanned],
    }


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


async def _run(args: argparse.Namespace, config: AppConfig) -> None:
    """Execute the selected command."""
    registry = build_registry(config.networks, config.safe_api.base_url)
    client = SafeApiClient(config.safe_api)

    if args.command == "networks":
        _print_json(
            [
                {**dataclasses.asdict(n), "excluded": registry.is_excluded(n.id)}
                for n in registry
            ]
        )
    elif args.command == "resolve":
        resolver = OwnershipResolver(client, registry, config.resolver)
        if args.address.startswith(("http://", "https://")):
            snapshot = await resolver.resolve_link(args.address)
        elif args.network and args.network.isdigit():
            snapshot = await resolver.resolve(args.address, network_id=int(args.network))
        else:
            snapshot = await resolver.resolve(args.address, network_code=args.network)
        _print_json(_snapshot_to_dict(snapshot, registry))
    elif args.command == "scan":
        scanner = ReverseOwnershipScanner(client, registry, config.scanner)
        result = await scanner.scan_many(args.owners, args.networks)
        _print_json(_scan_to_dict(result, registry))
        result.raise_for_empty()


def main(argv: list[str] | None = None) -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(EXIT_FAILURE)

    configure_logging(args.log_level)

    if args.command == "labels":
        labels = assign_labels(args.name, [parse_identity_address(a) for a in args.addresses])
        _print_json([dataclasses.asdict(label) for label in labels])
        return

    try:
        config = load_config(args.config)
        asyncio.run(_run(args, config))
    except (NoWalletFoundError, NoWalletsOwnedError) as e:
        logger.info("%s", e)
        sys.exit(EXIT_NOT_FOUND)
    except (SafeApiError, ValueError, FileNotFoundError) as e:
        logger.error("%s", e)
        sys.exit(EXIT_FAILURE)
