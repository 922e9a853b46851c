"""Ordered enumeration of fixed-size piece selections.

A SubsetEnumerator walks every k-piece selection of the pieces that are
still free, cheapest total first. Pieces of equal length are
interchangeable, so selections are tracked per tie group: a group is always
filled from its left end, which makes "two of the three 0.45 pieces" a
single state instead of three.

States form a tree rooted at the leftmost (cheapest) selection. A child
moves one piece from a tie group to the next longer group; each state
accepts exactly one parent (the one reached by undoing its lowest-indexed
reversible move), so the frontier never sees a state twice and needs no
record of visited states.
"""

from __future__ import annotations

import heapq
import itertools
import math

from plankcut.domain.value_objects import PieceCatalog, fits_within, lengths_equal

# (total, tiebreak, fill, mask)
_FrontierEntry = tuple[float, int, tuple[int, ...], int]


def _tie_groups(
    positions: tuple[int, ...], catalog: PieceCatalog
) -> tuple[tuple[int, ...], ...]:
    """Split ascending positions into runs of equal length."""
    groups: list[list[int]] = []
    for position in positions:
        if groups and lengths_equal(catalog[groups[-1][0]], catalog[position]):
            groups[-1].append(position)
        else:
            groups.append([position])
    return tuple(tuple(group) for group in groups)


class SubsetEnumerator:
    """Enumerates k-piece selections of the free pieces in sum order.

    The enumerator owns its mask, usable list and frontier; the catalog is
    shared read-only. A new enumerator is created whenever the prior mask
    changes. Changing the target count goes through resize(), which
    discards the frontier and starts over.

    Attributes:
        catalog: Shared piece catalog.
        prior_mask: Positions committed to earlier bins (immutable snapshot).
    """

    def __init__(self, count: int, prior_mask: int, catalog: PieceCatalog) -> None:
        """Create an enumerator positioned on the cheapest selection.

        Args:
            count: Number of pieces to select.
            prior_mask: Bitset of catalog positions already used.
            catalog: Shared piece catalog.

        Raises:
            ValueError: If count exceeds the number of free pieces.
        """
        self.catalog = catalog
        self.prior_mask = prior_mask
        self._usable = tuple(
            position for position in range(len(catalog)) if not prior_mask >> position & 1
        )
        self._groups = _tie_groups(self._usable, catalog)
        self._free_total = math.fsum(catalog[position] for position in self._usable)
        self._count = 0
        self._fill: tuple[int, ...] = ()
        self._mask = prior_mask
        self._total = 0.0
        self._frontier: list[_FrontierEntry] = []
        self._tiebreak = itertools.count()
        self.resize(count)

    @property
    def count(self) -> int:
        """Target number of pieces in each selection."""
        return self._count

    @property
    def total(self) -> float:
        """Total length of the current selection."""
        return self._total

    @property
    def inclusion_mask(self) -> int:
        """Prior mask plus the currently selected positions."""
        return self._mask

    @property
    def usable_positions(self) -> tuple[int, ...]:
        """Catalog positions that were free when this enumerator was created."""
        return self._usable

    @property
    def selected_positions(self) -> tuple[int, ...]:
        """Currently selected catalog positions, ascending."""
        return tuple(
            position for group, taken in zip(self._groups, self._fill) for position in group[:taken]
        )

    @property
    def remaining_count(self) -> int:
        """Free pieces left over for later bins."""
        return len(self._usable) - self._count

    @property
    def remaining_total(self) -> float:
        """Total length of the free pieces left over for later bins."""
        if self.remaining_count == 0:
            return 0.0
        return self._free_total - self._total

    def resize(self, count: int) -> None:
        """Restart enumeration with a new target count.

        The selection becomes the leftmost count free pieces, which fills
        every tie group from its left end.

        Raises:
            ValueError: If count is negative or exceeds the free pieces.
        """
        if not 0 <= count <= len(self._usable):
            raise ValueError(
                f"Cannot select {count} pieces from {len(self._usable)} free pieces"
            )

        fill: list[int] = []
        left = count
        for group in self._groups:
            taken = min(left, len(group))
            fill.append(taken)
            left -= taken

        self._count = count
        self._fill = tuple(fill)
        selected = self._usable[:count]
        self._mask = self.prior_mask
        for position in selected:
            self._mask |= 1 << position
        self._total = math.fsum(self.catalog[position] for position in selected)
        self._frontier = []
        self._push_children()

    def has_next(self) -> bool:
        """True while there are selections left to visit."""
        return bool(self._frontier)

    def advance(self) -> None:
        """Move to the next selection in non-decreasing total order.

        Raises:
            IndexError: If the enumerator is exhausted.
        """
        if not self._frontier:
            raise IndexError("advance() called on an exhausted enumerator")
        self._total, _, self._fill, self._mask = heapq.heappop(self._frontier)
        self._push_children()

    def within_capacity(self, capacity: float) -> bool:
        """True when the current selection fits in one length of stock."""
        return fits_within(self._total, capacity)

    def _push_children(self) -> None:
        """Queue every move whose result names the current state as parent."""
        groups = self._groups
        fill = self._fill
        for index in range(len(groups) - 1):
            if fill[index] == 0 or fill[index + 1] == len(groups[index + 1]):
                continue
            child = list(fill)
            child[index] -= 1
            child[index + 1] += 1
            if self._parent_move(child) != index:
                continue

            removed = groups[index][fill[index] - 1]
            added = groups[index + 1][fill[index + 1]]
            total = self._total + (self.catalog[added] - self.catalog[removed])
            mask = (self._mask & ~(1 << removed)) | (1 << added)
            heapq.heappush(
                self._frontier, (total, next(self._tiebreak), tuple(child), mask)
            )

    def _parent_move(self, fill: list[int]) -> int:
        """Index of the lowest move that can be undone from fill."""
        groups = self._groups
        for index in range(len(groups) - 1):
            if fill[index + 1] > 0 and fill[index] < len(groups[index]):
                return index
        return -1
