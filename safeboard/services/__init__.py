"""Service modules"""
from .ownership import OwnershipResolver
from .reverse_scan import ReverseOwnershipScanner

__all__ = ["OwnershipResolver", "ReverseOwnershipScanner"]
