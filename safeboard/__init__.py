"""Multisig wallet ownership lookup and signer labelling."""
from .labels import assign_labels
from .networks import NetworkRegistry, build_registry
from .safe_api import SafeApiClient
from .services import OwnershipResolver, ReverseOwnershipScanner

__version__ = "0.1.0"

__all__ = [
    "NetworkRegistry",
    "OwnershipResolver",
    "ReverseOwnershipScanner",
    "SafeApiClient",
    "assign_labels",
    "build_registry",
]
