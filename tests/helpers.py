"""Reference implementations used to check the search engine."""

from __future__ import annotations

import itertools
import math
from typing import Sequence

from plankcut.domain import LENGTH_TOLERANCE


def brute_force_min_bins(lengths: Sequence[float], capacity: float) -> int:
    """Fewest bins for lengths, found by trying every assignment.

    Pieces are placed longest first into an existing bin or one new bin, so
    each set partition is tried once; bins with equal loads are tried once
    between them. Only usable for small inputs (a dozen pieces or so).
    """
    pieces = sorted(lengths, reverse=True)
    if not pieces:
        return 0

    best = len(pieces)
    loads: list[float] = []

    def place(index: int) -> None:
        nonlocal best
        if len(loads) >= best:
            return
        if index == len(pieces):
            best = len(loads)
            return
        piece = pieces[index]
        tried: set[float] = set()
        for slot in range(len(loads)):
            if loads[slot] in tried:
                continue
            tried.add(loads[slot])
            if loads[slot] + piece <= capacity + LENGTH_TOLERANCE:
                loads[slot] += piece
                place(index + 1)
                loads[slot] -= piece
        loads.append(piece)
        place(index + 1)
        loads.pop()

    place(0)
    return best


def distinct_selections(values: Sequence[float], count: int) -> set[tuple[float, ...]]:
    """Every distinct multiset of count values drawn from values."""
    return {tuple(sorted(combo)) for combo in itertools.combinations(values, count)}


def assert_same_multiset(left: Sequence[float], right: Sequence[float]) -> None:
    """Assert two length lists hold the same values, ignoring order."""
    assert len(left) == len(right)
    for a, b in zip(sorted(left), sorted(right)):
        assert math.isclose(a, b, abs_tol=LENGTH_TOLERANCE)
