"""Network directory for the Safe Transaction Service."""
from .registry import DEFAULT_NETWORKS, NetworkRegistry, build_registry

__all__ = ["DEFAULT_NETWORKS", "NetworkRegistry", "build_registry"]
