"""Tests for cutting plan models and CutPlanService.

Tests cover:
- Stock configuration validation
- CutPlan totals, waste and dictionary form
- CutPlanService planning, ordering and error handling
"""

from __future__ import annotations

import pytest

from plankcut.domain import Bin, PieceTooLongError
from plankcut.infrastructure.bin_packing import CutPlan, CutPlanService, StockConfig


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def stock() -> StockConfig:
    """Stock of length 2.0."""
    return StockConfig(length=2.0)


@pytest.fixture
def service(stock: StockConfig) -> CutPlanService:
    """Service planning on 2.0 stock."""
    return CutPlanService(stock)


@pytest.fixture
def two_bin_plan(stock: StockConfig) -> CutPlan:
    """Hand-built plan with one full and one half-used plank."""
    return CutPlan(
        stock=stock,
        bins=(
            Bin(index=0, lengths=(0.5, 1.5)),
            Bin(index=1, lengths=(1.0,)),
        ),
        states_visited=7,
    )


# =============================================================================
# StockConfig Tests
# =============================================================================


class TestStockConfig:
    """Tests for StockConfig dataclass."""

    def test_valid_length(self) -> None:
        assert StockConfig(length=96.0).length == 96.0

    @pytest.mark.parametrize("length", [0.0, -3.0, float("inf"), float("nan")])
    def test_invalid_length_raises(self, length: float) -> None:
        with pytest.raises(ValueError, match="Stock length"):
            StockConfig(length=length)

    def test_is_frozen(self, stock: StockConfig) -> None:
        with pytest.raises(AttributeError):
            stock.length = 3.0  # type: ignore[misc]


# =============================================================================
# CutPlan Tests
# =============================================================================


class TestCutPlan:
    """Tests for CutPlan dataclass."""

    def test_counts(self, two_bin_plan: CutPlan) -> None:
        assert two_bin_plan.bin_count == 2
        assert two_bin_plan.piece_count == 3

    def test_lengths(self, two_bin_plan: CutPlan) -> None:
        assert two_bin_plan.used_length == pytest.approx(3.0)
        assert two_bin_plan.stock_length == pytest.approx(4.0)
        assert two_bin_plan.waste_length == pytest.approx(1.0)

    def test_waste_percentage(self, two_bin_plan: CutPlan) -> None:
        assert two_bin_plan.waste_percentage == pytest.approx(25.0)

    def test_empty_plan(self, stock: StockConfig) -> None:
        plan = CutPlan(stock=stock, bins=())
        assert plan.bin_count == 0
        assert plan.piece_count == 0
        assert plan.waste_percentage == 0.0

    def test_to_dict(self, two_bin_plan: CutPlan) -> None:
        data = two_bin_plan.to_dict()

        assert data["stock_length"] == 2.0
        assert data["bin_count"] == 2
        assert data["piece_count"] == 3
        assert data["waste_percentage"] == 25.0
        assert data["bins"][0] == {
            "index": 0,
            "pieces": [0.5, 1.5],
            "labels": [None, None],
            "total": 2.0,
            "offcut": 0.0,
        }
        assert data["bins"][1]["offcut"] == pytest.approx(1.0)


# =============================================================================
# CutPlanService Tests
# =============================================================================


class TestCutPlanService:
    """Tests for CutPlanService.plan."""

    def test_empty_input(self, service: CutPlanService) -> None:
        plan = service.plan([])
        assert plan.bins == ()
        assert plan.stock.length == 2.0

    def test_minimal_plan(self, service: CutPlanService) -> None:
        plan = service.plan([1.5, 0.45, 0.7, 0.2, 0.45, 1.1, 0.85, 0.3, 0.45])
        assert plan.bin_count == 3
        assert plan.piece_count == 9
        assert plan.waste_length == pytest.approx(0.0, abs=1e-6)

    def test_input_order_does_not_matter(self, service: CutPlanService) -> None:
        forward = service.plan([0.3, 0.6, 0.9, 1.2, 1.5])
        backward = service.plan([1.5, 1.2, 0.9, 0.6, 0.3])
        assert forward.bins == backward.bins

    def test_bins_sorted_and_indexed(self, service: CutPlanService) -> None:
        plan = service.plan([1.0, 0.25, 1.75, 0.5])
        for position, plank in enumerate(plan.bins):
            assert plank.index == position
            assert list(plank.lengths) == sorted(plank.lengths)

    def test_no_plank_overfilled(self, service: CutPlanService) -> None:
        plan = service.plan([0.9, 0.9, 0.9, 1.1, 1.1, 1.1])
        for plank in plan.bins:
            assert plank.total <= 2.0 + 1e-9
        assert plan.bin_count == 3

    def test_piece_at_stock_length_allowed(self, service: CutPlanService) -> None:
        plan = service.plan([2.0, 2.0])
        assert plan.bin_count == 2
        assert plan.waste_length == 0.0

    def test_piece_too_long(self, service: CutPlanService) -> None:
        with pytest.raises(PieceTooLongError, match="exceeds stock length 2"):
            service.plan([0.5, 2.5])

    def test_invalid_length(self, service: CutPlanService) -> None:
        with pytest.raises(ValueError):
            service.plan([0.5, -1.0])

    def test_every_too_long_piece_reported(self, service: CutPlanService) -> None:
        with pytest.raises(PieceTooLongError) as excinfo:
            service.plan([3.0, 0.5, 2.5, 3.0])
        assert excinfo.value.lengths == (2.5, 3.0)
        assert excinfo.value.messages == [
            "Piece length 2.5 exceeds stock length 2",
            "Piece length 3 exceeds stock length 2",
        ]

    def test_records_states_visited(self, service: CutPlanService) -> None:
        """First fit needs four planks here, so the search runs."""
        plan = service.plan([1.5, 0.45, 0.7, 0.2, 0.45, 1.1, 0.85, 0.3, 0.45])
        assert plan.states_visited > 0

    def test_first_fit_plan_needs_no_search(self, service: CutPlanService) -> None:
        plan = service.plan([1.0, 1.0, 1.0])
        assert plan.bin_count == 2
        assert plan.states_visited == 0


class TestPieceLabels:
    """Tests for carrying piece labels into the plan."""

    def test_labels_follow_their_pieces(self, service: CutPlanService) -> None:
        plan = service.plan([1.5, 0.5, 1.0], labels=["rail", "cleat", None])
        placed = {
            (length, label)
            for plank in plan.bins
            for length, label in zip(plank.lengths, plank.piece_labels)
        }
        assert placed == {(1.5, "rail"), (0.5, "cleat"), (1.0, None)}

    def test_equal_lengths_share_out_labels(self, service: CutPlanService) -> None:
        plan = service.plan([1.0, 1.0, 1.0], labels=["top", "side", "side"])
        labels = sorted(label for plank in plan.bins for label in plank.labels)
        assert labels == ["side", "side", "top"]

    def test_unlabelled_plan_has_empty_labels(self, service: CutPlanService) -> None:
        plan = service.plan([1.0, 0.5])
        assert plan.bins[0].labels == ()
        assert plan.bins[0].piece_labels == (None, None)

    def test_labels_in_dictionary_form(self, stock: StockConfig) -> None:
        plan = CutPlan(
            stock=stock,
            bins=(Bin(index=0, lengths=(0.5, 1.5), labels=("cleat", None)),),
        )
        assert plan.to_dict()["bins"][0]["labels"] == ["cleat", None]

    def test_label_count_mismatch(self, service: CutPlanService) -> None:
        with pytest.raises(ValueError, match="piece labels"):
            service.plan([1.0, 0.5], labels=["top"])
