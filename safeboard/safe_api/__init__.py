"""Safe Transaction Service client."""
from .client import SafeApiClient
from .retry import RequestState

__all__ = ["RequestState", "SafeApiClient"]
