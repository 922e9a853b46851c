"""Branch-and-bound search for the fewest bins.

The engine keeps one SubsetEnumerator per bin on an explicit stack. Each
bin is opened around the longest piece still free, and its enumerator picks
that piece's companions from the rest, so bin i selects from the pieces
left free by bins 0..i-1. Because the opening piece is fixed, the same set
of bins is never reached again in a different order.

Only maximal bins are accepted: a bin is skipped while the shortest piece
it left free would still fit beside it. Moving that piece into the earlier
bin never costs a bin, so some minimal arrangement is made of maximal bins
opened around the longest free piece, and the search still finds it.

First-fit decreasing gives an upper bound and the Martello-Toth bound a
lower one. Targets between them are searched in increasing order. The
first target that succeeds is minimal; if none does, the first-fit
arrangement is.
"""

from __future__ import annotations

import bisect
import itertools
import logging
import math
import operator
from dataclasses import dataclass
from typing import Sequence

from plankcut.domain.services.subset_enumerator import SubsetEnumerator
from plankcut.domain.value_objects import (
    LENGTH_TOLERANCE,
    PieceCatalog,
    PieceTooLongError,
    fits_within,
)

logger = logging.getLogger(__name__)

# Subtracted before rounding a bin count up, so a quotient that lands a
# hair above a whole number after float division is not counted twice.
_BOUND_SLACK = 1e-9


class SearchInvariantError(AssertionError):
    """Raised when the bin-count bounds contradict each other.

    This cannot happen when every piece fits in the stock length; seeing it
    means the caller skipped that check.
    """


@dataclass(frozen=True)
class SearchResult:
    """Final state of a bin search.

    Attributes:
        masks: Cumulative inclusion mask of each bin, bottom of stack first.
        counts: Number of pieces in each bin.
        target_bins: Bin count the search converged on.
        states_visited: Number of stack states examined.
    """

    masks: tuple[int, ...]
    counts: tuple[int, ...]
    target_bins: int
    states_visited: int


def lower_bound(lengths: Sequence[float], capacity: float) -> int:
    """Martello-Toth bound on the bins needed for ascending lengths.

    For each threshold a taken from the pieces no longer than half the
    stock: pieces too long to share a bin with anything of length a or more
    need a bin each, so do the other pieces over half the stock, and the
    pieces of length a up to half the stock that do not fit in the room
    left beside those need fresh bins. Threshold 0 gives the plain
    total-length bound.
    """
    if not lengths:
        return 0

    limit = capacity + LENGTH_TOLERANCE
    prefix = [0.0, *itertools.accumulate(lengths)]
    size = len(lengths)
    split = bisect.bisect_right(lengths, limit / 2)

    best = 1
    for threshold in {0.0, *lengths[:split]}:
        start = bisect.bisect_left(lengths, threshold)
        cut = bisect.bisect_right(lengths, limit - threshold)
        alone = size - cut
        long_shared = cut - split
        short_total = prefix[split] - prefix[start]
        spare = long_shared * limit - (prefix[cut] - prefix[split])
        extra = max(0, math.ceil((short_total - spare) / limit - _BOUND_SLACK))
        best = max(best, alone + long_shared + extra)
    return best


def first_fit_decreasing(catalog: PieceCatalog, capacity: float) -> list[int]:
    """Place pieces longest first into the first bin with room.

    Returns:
        Positions in each bin as a bitmask, in the order bins were opened.
    """
    loads: list[float] = []
    masks: list[int] = []
    for position in reversed(range(len(catalog))):
        length = catalog[position]
        for slot, load in enumerate(loads):
            if fits_within(load + length, capacity):
                loads[slot] += length
                masks[slot] |= 1 << position
                break
        else:
            loads.append(length)
            masks.append(1 << position)
    return masks


@dataclass
class _OpenBin:
    """A bin on the search stack.

    Attributes:
        base_mask: Positions used by the bins below this one.
        room: Stock length left beside the opening piece.
        enumerator: Companion selections over the other free pieces.
    """

    base_mask: int
    room: float
    enumerator: SubsetEnumerator


class BinSearchEngine:
    """Finds the minimum number of bins for a piece catalog.

    Attributes:
        catalog: Pieces to assign.
        capacity: Stock length of every bin.
    """

    def __init__(self, catalog: PieceCatalog, capacity: float) -> None:
        """Initialize the engine.

        Args:
            catalog: Pieces to assign, ascending.
            capacity: Stock length.

        Raises:
            ValueError: If capacity is not a positive finite number.
            PieceTooLongError: If any piece is longer than capacity.
        """
        if not math.isfinite(capacity) or capacity <= 0:
            raise ValueError("Capacity must be a positive finite number")
        too_long = catalog.too_long_for(capacity)
        if too_long:
            raise PieceTooLongError(too_long, capacity)

        self.catalog = catalog
        self.capacity = capacity
        self._limit = capacity + LENGTH_TOLERANCE
        # Two of these never share a bin.
        self._long_mask = sum(
            1 << position
            for position, length in enumerate(catalog.lengths)
            if length > self._limit / 2
        )
        self._stack: list[_OpenBin] = []
        self._target = 0
        self._failed: set[tuple[int, int]] = set()
        self._states_visited = 0

    def solve(self) -> SearchResult:
        """Run the search to completion.

        Returns:
            SearchResult describing the accepted bins.

        Raises:
            SearchInvariantError: If the lower bound exceeds the first-fit
                arrangement.
        """
        if not len(self.catalog):
            return SearchResult(masks=(), counts=(), target_bins=0, states_visited=0)

        self._states_visited = 0
        fallback = first_fit_decreasing(self.catalog, self.capacity)
        lower = lower_bound(self.catalog.lengths, self.capacity)
        logger.debug(
            "Searching %d pieces: at least %d bins, first fit uses %d",
            len(self.catalog),
            lower,
            len(fallback),
        )
        if lower > len(fallback):
            raise SearchInvariantError(
                f"Lower bound of {lower} bins exceeds the first-fit arrangement "
                f"of {len(fallback)} bins"
            )

        for target in range(lower, len(fallback)):
            if self._search(target):
                bins = [
                    frame.enumerator.inclusion_mask & ~frame.base_mask for frame in self._stack
                ]
                return self._result(bins)
            logger.debug("No arrangement in %d bins", target)
        return self._result(fallback)

    def _result(self, bins: list[int]) -> SearchResult:
        logger.debug(
            "Search finished with %d bins after %d states",
            len(bins),
            self._states_visited,
        )
        return SearchResult(
            masks=tuple(itertools.accumulate(bins, operator.or_)),
            counts=tuple(bin(mask).count("1") for mask in bins),
            target_bins=len(bins),
            states_visited=self._states_visited,
        )

    def _search(self, target: int) -> bool:
        """Look for an arrangement in at most target bins.

        On success the stack holds the accepted bins.
        """
        self._target = target
        self._failed = set()
        self._stack = []
        self._open(0)

        while True:
            top = self._stack[-1]
            enumerator = top.enumerator
            depth = len(self._stack) - 1
            self._states_visited += 1

            if not enumerator.within_capacity(top.room):
                # Later selections of this size are no shorter.
                alive = self._shrink(top)
            elif not self._acceptable(top, depth):
                alive = self._step(top)
            elif enumerator.remaining_count == 0:
                return True
            elif self._can_open(enumerator.inclusion_mask, depth + 1):
                self._open(enumerator.inclusion_mask)
                continue
            else:
                alive = self._step(top)

            if not alive and not self._backtrack():
                return False

    def _open(self, base_mask: int) -> None:
        """Push a bin around the longest piece not in base_mask."""
        free = self.catalog.full_mask & ~base_mask
        pinned = free.bit_length() - 1
        prior = base_mask | 1 << pinned
        room = self.capacity - self.catalog[pinned]
        enumerator = SubsetEnumerator(self._most_that_fit(prior, room), prior, self.catalog)
        self._stack.append(_OpenBin(base_mask=base_mask, room=room, enumerator=enumerator))

    def _most_that_fit(self, prior_mask: int, room: float) -> int:
        """Number of the shortest free pieces that fit in room together."""
        total = 0.0
        count = 0
        for position, length in enumerate(self.catalog.lengths):
            if prior_mask >> position & 1:
                continue
            total += length
            if not fits_within(total, room):
                break
            count += 1
        return count

    def _acceptable(self, frame: _OpenBin, depth: int) -> bool:
        """Whether the current selection is maximal and leaves a solvable rest."""
        enumerator = frame.enumerator
        leftover = self.catalog.full_mask & ~enumerator.inclusion_mask
        if leftover:
            shortest = self.catalog[(leftover & -leftover).bit_length() - 1]
            if fits_within(enumerator.total + shortest, frame.room):
                return False

        bins_after = self._target - depth - 1
        if bin(leftover & self._long_mask).count("1") > bins_after:
            return False
        return enumerator.remaining_total <= bins_after * self._limit

    def _can_open(self, base_mask: int, depth: int) -> bool:
        """Whether the pieces outside base_mask might fit in the bins left."""
        bins_left = self._target - depth
        key = (base_mask, bins_left)
        if key in self._failed:
            return False
        rest = self.catalog.lengths_at(self.catalog.full_mask & ~base_mask)
        if lower_bound(rest, self.capacity) > bins_left:
            self._failed.add(key)
            return False
        return True

    def _shrink(self, frame: _OpenBin) -> bool:
        """Drop one companion from a bin, if it has any."""
        enumerator = frame.enumerator
        if enumerator.count == 0:
            return False
        enumerator.resize(enumerator.count - 1)
        return True

    def _step(self, frame: _OpenBin) -> bool:
        """Move a bin to its next untried selection."""
        if frame.enumerator.has_next():
            frame.enumerator.advance()
            return True
        return self._shrink(frame)

    def _backtrack(self) -> bool:
        """Discard exhausted bins until one below can move on.

        Returns:
            False when the whole stack is exhausted.
        """
        while self._stack:
            frame = self._stack.pop()
            self._failed.add((frame.base_mask, self._target - len(self._stack)))
            if self._stack and self._step(self._stack[-1]):
                return True
        return False
