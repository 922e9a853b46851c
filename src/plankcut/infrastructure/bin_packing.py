"""Cutting plan models and the service that runs the bin search.

This module provides the stock configuration, the finished cutting plan,
and CutPlanService, which validates pieces against the stock length before
handing them to the search engine.

All dataclasses are frozen (immutable) to ensure thread safety and
hashability.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict, deque
from dataclasses import dataclass, replace
from typing import Any, Sequence

from plankcut.domain import (
    Bin,
    BinSearchEngine,
    PieceCatalog,
    PieceTooLongError,
    project_assignment,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockConfig:
    """Configuration for the stock that pieces are cut from.

    Attributes:
        length: Length of one plank of stock.
    """

    length: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.length) or self.length <= 0:
            raise ValueError("Stock length must be a positive finite number")


@dataclass(frozen=True)
class CutPlan:
    """Complete result of a cutting plan optimization.

    Attributes:
        stock: Stock the plan was made for.
        bins: Planks with their assigned pieces, in cutting order.
        states_visited: Search states examined while planning.
    """

    stock: StockConfig
    bins: tuple[Bin, ...]
    states_visited: int = 0

    @property
    def bin_count(self) -> int:
        """Number of planks of stock needed."""
        return len(self.bins)

    @property
    def piece_count(self) -> int:
        """Total number of pieces across all planks."""
        return sum(plank.piece_count for plank in self.bins)

    @property
    def used_length(self) -> float:
        """Total length of all pieces."""
        return math.fsum(plank.total for plank in self.bins)

    @property
    def stock_length(self) -> float:
        """Total length of stock consumed."""
        return self.stock.length * self.bin_count

    @property
    def waste_length(self) -> float:
        """Stock length left over after cutting every piece."""
        return math.fsum(plank.offcut(self.stock.length) for plank in self.bins)

    @property
    def waste_percentage(self) -> float:
        """Percentage of consumed stock that is waste."""
        if self.stock_length == 0:
            return 0.0
        return self.waste_length / self.stock_length * 100

    def to_dict(self) -> dict[str, Any]:
        """Plain dictionary form for JSON output."""
        return {
            "stock_length": self.stock.length,
            "bin_count": self.bin_count,
            "piece_count": self.piece_count,
            "used_length": self.used_length,
            "waste_length": self.waste_length,
            "waste_percentage": round(self.waste_percentage, 2),
            "bins": [
                {
                    "index": plank.index,
                    "pieces": list(plank.lengths),
                    "labels": list(plank.piece_labels),
                    "total": plank.total,
                    "offcut": plank.offcut(self.stock.length),
                }
                for plank in self.bins
            ],
        }


class CutPlanService:
    """Plans how to cut a list of pieces from fixed-length stock.

    Attributes:
        stock: Stock configuration.
    """

    def __init__(self, stock: StockConfig) -> None:
        """Initialize the service with stock configuration.

        Args:
            stock: Stock the pieces will be cut from.
        """
        self.stock = stock

    def plan(
        self,
        lengths: Sequence[float],
        labels: Sequence[str | None] | None = None,
    ) -> CutPlan:
        """Assign every piece to a plank using as few planks as possible.

        Args:
            lengths: Piece lengths in any order.
            labels: Optional name for each piece, parallel to lengths.

        Returns:
            CutPlan with one Bin per plank.

        Raises:
            PieceTooLongError: If any piece is longer than the stock. Every
                offending length is reported.
            ValueError: If any length is not positive and finite, or labels
                do not match lengths one to one.
        """
        if labels is not None and len(labels) != len(lengths):
            raise ValueError(f"Expected {len(lengths)} piece labels, got {len(labels)}")
        if not lengths:
            return CutPlan(stock=self.stock, bins=())

        catalog = PieceCatalog.from_lengths(lengths)
        too_long = catalog.too_long_for(self.stock.length)
        if too_long:
            raise PieceTooLongError(too_long, self.stock.length)

        logger.debug(
            "Planning %d pieces (total %.4f) on stock of length %g",
            len(catalog),
            catalog.total,
            self.stock.length,
        )

        result = BinSearchEngine(catalog, self.stock.length).solve()
        bins = project_assignment(catalog, result.masks)
        if labels is not None and any(label is not None for label in labels):
            bins = _attach_labels(bins, lengths, labels)

        plan = CutPlan(stock=self.stock, bins=bins, states_visited=result.states_visited)
        logger.debug(
            "Plan uses %d planks, %.1f%% waste",
            plan.bin_count,
            plan.waste_percentage,
        )
        return plan


def _attach_labels(
    bins: tuple[Bin, ...],
    lengths: Sequence[float],
    labels: Sequence[str | None],
) -> tuple[Bin, ...]:
    """Hand each bin the labels of its pieces.

    Pieces of equal length are interchangeable, so the labels given for a
    length go to the bins holding that length in input order.
    """
    queues: dict[float, deque[str | None]] = defaultdict(deque)
    for length, label in zip(lengths, labels):
        queues[float(length)].append(label)
    return tuple(
        replace(plank, labels=tuple(queues[length].popleft() for length in plank.lengths))
        for plank in bins
    )
