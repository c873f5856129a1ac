"""Protocol interfaces for safeboard."""
from .query_client import QueryClient

__all__ = ["QueryClient"]
