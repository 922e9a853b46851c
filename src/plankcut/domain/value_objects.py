"""Value objects for one-dimensional cutting plans.

All value objects are frozen dataclasses so a catalog can be shared
read-only by every enumerator created during a solve.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

# Lengths closer than this are treated as equal, and a bin may exceed its
# capacity by at most this much. Absorbs floating-point rounding in sums.
LENGTH_TOLERANCE: float = 1e-9


def lengths_equal(a: float, b: float) -> bool:
    """Return True when two lengths are equal within LENGTH_TOLERANCE."""
    return abs(a - b) <= LENGTH_TOLERANCE


def fits_within(total: float, capacity: float) -> bool:
    """Return True when a total length fits in the given capacity."""
    return total <= capacity + LENGTH_TOLERANCE


class PieceTooLongError(ValueError):
    """Raised when pieces are longer than the stock they must be cut from.

    Attributes:
        lengths: Every distinct offending length, ascending.
        capacity: Stock length the pieces were checked against.
    """

    def __init__(self, lengths: Iterable[float], capacity: float) -> None:
        self.lengths = tuple(sorted(set(lengths)))
        self.capacity = capacity
        super().__init__("; ".join(self.messages))

    @property
    def messages(self) -> list[str]:
        """One message per offending length."""
        return [
            f"Piece length {length:g} exceeds stock length {self.capacity:g}"
            for length in self.lengths
        ]


@dataclass(frozen=True)
class PieceCatalog:
    """Immutable ascending sequence of piece lengths.

    Positions in the catalog are stable identifiers for pieces; inclusion
    masks refer to them by bit index.

    Attributes:
        lengths: Piece lengths in non-decreasing order.
    """

    lengths: tuple[float, ...]

    def __post_init__(self) -> None:
        for length in self.lengths:
            if not math.isfinite(length) or length <= 0:
                raise ValueError(f"Piece lengths must be positive and finite, got {length!r}")
        for previous, current in zip(self.lengths, self.lengths[1:]):
            if current < previous:
                raise ValueError("Piece lengths must be in ascending order")

    @classmethod
    def from_lengths(cls, lengths: Iterable[float]) -> "PieceCatalog":
        """Build a catalog from lengths in any order."""
        return cls(lengths=tuple(sorted(float(length) for length in lengths)))

    def __len__(self) -> int:
        return len(self.lengths)

    def __getitem__(self, position: int) -> float:
        return self.lengths[position]

    @property
    def total(self) -> float:
        """Sum of all piece lengths."""
        return math.fsum(self.lengths)

    @property
    def longest(self) -> float:
        """Length of the longest piece (0.0 for an empty catalog)."""
        return self.lengths[-1] if self.lengths else 0.0

    @property
    def full_mask(self) -> int:
        """Inclusion mask with every position set."""
        return (1 << len(self.lengths)) - 1

    def too_long_for(self, capacity: float) -> tuple[float, ...]:
        """Distinct lengths that do not fit in capacity, ascending."""
        return tuple(
            sorted({length for length in self.lengths if not fits_within(length, capacity)})
        )

    def lengths_at(self, mask: int) -> tuple[float, ...]:
        """Lengths at the positions set in mask, in ascending order."""
        return tuple(
            length for position, length in enumerate(self.lengths) if mask >> position & 1
        )


@dataclass(frozen=True)
class Bin:
    """Pieces assigned to one length of stock.

    Attributes:
        index: Zero-based position of this bin in the plan.
        lengths: Assigned piece lengths in ascending order.
        labels: Name of each piece, parallel to lengths; empty when the
            pieces were never named.
    """

    index: int
    lengths: tuple[float, ...]
    labels: tuple[str | None, ...] = ()

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError("Bin index must be non-negative")
        if self.labels and len(self.labels) != len(self.lengths):
            raise ValueError("Bin labels must match its pieces one to one")

    @property
    def piece_labels(self) -> tuple[str | None, ...]:
        """Label of each piece, None where a piece has no name."""
        return self.labels or (None,) * len(self.lengths)

    @property
    def total(self) -> float:
        """Total length of the pieces in this bin."""
        return math.fsum(self.lengths)

    @property
    def piece_count(self) -> int:
        return len(self.lengths)

    def offcut(self, capacity: float) -> float:
        """Unused stock left after cutting this bin's pieces."""
        return max(capacity - self.total, 0.0)
