"""Namespace filtering."""

from .patterns import matches
from .filter_engine import FilterEngine

__all__ = [
    "matches",
    "FilterEngine",
]
