"""Domain layer - core cutting-stock logic."""

from .services import (
    BinSearchEngine,
    SearchInvariantError,
    SearchResult,
    SubsetEnumerator,
    project_assignment,
)
from .value_objects import (
    LENGTH_TOLERANCE,
    Bin,
    PieceCatalog,
    PieceTooLongError,
    fits_within,
    lengths_equal,
)

__all__ = [
    "LENGTH_TOLERANCE",
    "Bin",
    "BinSearchEngine",
    "PieceCatalog",
    "PieceTooLongError",
    "SearchInvariantError",
    "SearchResult",
    "SubsetEnumerator",
    "fits_within",
    "lengths_equal",
    "project_assignment",
]
