"""Domain services for one-dimensional cutting plans.

This package provides the search engine:
- SubsetEnumerator: k-piece selections of the free pieces in sum order
- BinSearchEngine: backtracking over one enumerator per bin
- project_assignment: per-bin piece lists from the finished stack
"""

from .bin_search import BinSearchEngine, SearchInvariantError, SearchResult
from .result_projector import project_assignment
from .subset_enumerator import SubsetEnumerator

__all__ = [
    "BinSearchEngine",
    "SearchInvariantError",
    "SearchResult",
    "SubsetEnumerator",
    "project_assignment",
]
