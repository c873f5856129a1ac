"""Identity label reconciliation."""
from .engine import assign_labels
from .extract import Extraction, extract_name_and_type

__all__ = ["Extraction", "assign_labels", "extract_name_and_type"]
