"""Tests for BinSearchEngine and project_assignment.

Tests cover:
- Minimal bin count against a brute-force reference
- Lower bound and first-fit upper bound
- Realistic job sizes within a time limit
- Structure of the returned bin stack
- Every piece assigned exactly once within capacity
- Precondition errors
"""

from __future__ import annotations

import random
import time

import pytest

from helpers import assert_same_multiset, brute_force_min_bins
from plankcut.domain import (
    LENGTH_TOLERANCE,
    BinSearchEngine,
    PieceCatalog,
    PieceTooLongError,
    SearchResult,
    project_assignment,
)
from plankcut.domain.services.bin_search import first_fit_decreasing, lower_bound

# Generous: these jobs finish in well under a second.
TIME_LIMIT = 10.0


def solve(lengths: list[float], capacity: float) -> tuple[PieceCatalog, SearchResult]:
    catalog = PieceCatalog.from_lengths(lengths)
    return catalog, BinSearchEngine(catalog, capacity).solve()


def assert_valid_assignment(
    catalog: PieceCatalog, result: SearchResult, capacity: float
) -> None:
    """Every piece lands in exactly one bin and no bin overflows."""
    bins = project_assignment(catalog, result.masks)
    assert len(bins) == len(result.masks)
    placed = [length for plank in bins for length in plank.lengths]
    assert_same_multiset(placed, catalog.lengths)
    for plank in bins:
        assert plank.total <= capacity + LENGTH_TOLERANCE


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def shelf_pieces() -> list[float]:
    """Nine pieces that pack exactly into three lengths of 2.0."""
    return [0.2, 0.3, 0.45, 0.45, 0.45, 0.7, 0.85, 1.1, 1.5]


# =============================================================================
# Known Arrangement Tests
# =============================================================================


class TestKnownArrangements:
    """Inputs whose optimal arrangement is known in advance."""

    def test_exact_fit_partition(self, shelf_pieces: list[float]) -> None:
        """Three full planks with a single valid partition."""
        catalog, result = solve(shelf_pieces, 2.0)

        assert len(result.masks) == 3
        bins = project_assignment(catalog, result.masks)
        partition = {tuple(round(length, 6) for length in plank.lengths) for plank in bins}
        assert partition == {
            (0.2, 0.3, 1.5),
            (0.45, 0.45, 1.1),
            (0.45, 0.7, 0.85),
        }

    def test_single_piece(self) -> None:
        catalog, result = solve([3.0], 10.0)
        assert result.masks == (1,)
        assert result.counts == (1,)
        assert result.target_bins == 1

    def test_everything_fits_in_one_bin(self) -> None:
        catalog, result = solve([1.0, 2.0, 3.0, 4.0], 10.0)
        assert result.masks == (catalog.full_mask,)
        assert result.counts == (4,)

    def test_pieces_at_capacity_each_need_a_bin(self) -> None:
        catalog, result = solve([5.0, 5.0, 5.0], 5.0)
        assert result.counts == (1, 1, 1)
        assert_valid_assignment(catalog, result, 5.0)

    def test_halves_pair_up(self) -> None:
        catalog, result = solve([0.5] * 6, 1.0)
        assert len(result.masks) == 3
        assert result.counts == (2, 2, 2)

    def test_first_fit_would_use_more_bins(self) -> None:
        """Taking the shortest pieces first is not always optimal."""
        lengths = [2.0, 2.0, 3.0, 3.0, 5.0, 5.0]
        catalog, result = solve(lengths, 10.0)
        assert len(result.masks) == 2
        assert_valid_assignment(catalog, result, 10.0)

    def test_rounding_in_sums_tolerated(self) -> None:
        """Ten pieces of 0.1 fill exactly one length of 1.0."""
        catalog, result = solve([0.1] * 10, 1.0)
        assert len(result.masks) == 1

    def test_empty_catalog(self) -> None:
        result = BinSearchEngine(PieceCatalog(lengths=()), 4.0).solve()
        assert result.masks == ()
        assert result.counts == ()
        assert result.target_bins == 0


# =============================================================================
# Minimality Tests
# =============================================================================


class TestMinimality:
    """The engine never uses more bins than an exhaustive search."""

    @pytest.mark.parametrize("seed", range(40))
    def test_matches_brute_force(self, seed: int) -> None:
        rng = random.Random(seed)
        capacity = rng.choice((4.0, 6.0, 10.0))
        size = rng.randint(1, 12)
        lengths = [float(rng.randint(1, int(capacity))) for _ in range(size)]

        catalog, result = solve(lengths, capacity)

        assert len(result.masks) == brute_force_min_bins(lengths, capacity)
        assert_valid_assignment(catalog, result, capacity)

    @pytest.mark.parametrize("seed", range(20))
    def test_matches_brute_force_fractional(self, seed: int) -> None:
        """Decimal lengths with repeats, where rounding matters."""
        rng = random.Random(1000 + seed)
        choices = (0.15, 0.3, 0.45, 0.6, 0.75, 0.9, 1.05, 1.2)
        lengths = [rng.choice(choices) for _ in range(rng.randint(2, 12))]

        catalog, result = solve(lengths, 1.2)

        assert len(result.masks) == brute_force_min_bins(lengths, 1.2)
        assert_valid_assignment(catalog, result, 1.2)

    @pytest.mark.parametrize("seed", range(10))
    def test_matches_brute_force_two_decimals(self, seed: int) -> None:
        """Twelve lengths quoted to the centimetre on 2.44 m boards."""
        rng = random.Random(2000 + seed)
        lengths = [round(rng.uniform(0.1, 1.9), 2) for _ in range(12)]

        catalog, result = solve(lengths, 2.44)

        assert len(result.masks) == brute_force_min_bins(lengths, 2.44)
        assert_valid_assignment(catalog, result, 2.44)


# =============================================================================
# Bound Tests
# =============================================================================


class TestBounds:
    """Tests for the bin-count bounds the search runs between."""

    def test_lower_bound_empty(self) -> None:
        assert lower_bound((), 2.0) == 0

    def test_lower_bound_from_total_length(self) -> None:
        assert lower_bound((1.0,) * 5, 2.0) == 3

    def test_lower_bound_counts_long_pieces(self) -> None:
        """Pieces over half the stock never share a bin."""
        assert lower_bound((1.1,) * 4, 2.0) == 4

    def test_lower_bound_beats_length_and_long_count(self) -> None:
        """No 4 fits beside a 7, and only two 4s share a bin."""
        assert lower_bound((4.0, 4.0, 4.0, 7.0, 7.0, 7.0), 10.0) == 5

    @pytest.mark.parametrize("seed", range(10))
    def test_lower_bound_never_exceeds_optimum(self, seed: int) -> None:
        rng = random.Random(3000 + seed)
        lengths = sorted(round(rng.uniform(0.1, 1.9), 2) for _ in range(10))
        assert lower_bound(lengths, 2.44) <= brute_force_min_bins(lengths, 2.44)

    def test_first_fit_decreasing(self) -> None:
        catalog = PieceCatalog(lengths=(1.0, 2.0, 3.0))
        assert first_fit_decreasing(catalog, 4.0) == [0b101, 0b010]

    def test_first_fit_returned_when_bounds_meet(self) -> None:
        catalog, result = solve([1.0, 2.0, 3.0], 4.0)
        assert result.masks == (0b101, 0b111)
        assert result.states_visited == 0


# =============================================================================
# Large Job Tests
# =============================================================================


class TestLargeJobs:
    """Job sizes seen in practice finish promptly."""

    @pytest.mark.slow
    @pytest.mark.parametrize("size", [25, 28, 30])
    def test_random_job_within_time_limit(self, size: int) -> None:
        rng = random.Random(size)
        lengths = [round(rng.uniform(0.1, 1.9), 2) for _ in range(size)]

        started = time.perf_counter()
        catalog, result = solve(lengths, 2.44)
        elapsed = time.perf_counter() - started

        assert elapsed < TIME_LIMIT
        assert_valid_assignment(catalog, result, 2.44)
        assert len(result.masks) >= lower_bound(catalog.lengths, 2.44)
        assert len(result.masks) <= len(first_fit_decreasing(catalog, 2.44))

    @pytest.mark.slow
    def test_cabinet_cut_list_within_time_limit(self) -> None:
        """Thirty parts drawn from a handful of common lengths."""
        rng = random.Random(96)
        lengths = [rng.choice((11.25, 15.5, 22.75, 23.25, 30.0, 34.5, 46.5)) for _ in range(30)]

        started = time.perf_counter()
        catalog, result = solve(lengths, 96.0)
        elapsed = time.perf_counter() - started

        assert elapsed < TIME_LIMIT
        assert_valid_assignment(catalog, result, 96.0)
        assert len(result.masks) >= lower_bound(catalog.lengths, 96.0)


# =============================================================================
# Result Structure Tests
# =============================================================================


class TestResultStructure:
    """Shape of the bin stack returned by the engine."""

    @pytest.mark.parametrize("extra", [[], [0.3, 0.2, 1.9]], ids=["searched", "first-fit"])
    def test_each_bin_opens_with_longest_remaining_piece(
        self, shelf_pieces: list[float], extra: list[float]
    ) -> None:
        catalog, result = solve(shelf_pieces + extra, 2.0)
        previous = 0
        for mask in result.masks:
            free = catalog.full_mask & ~previous
            longest = free.bit_length() - 1
            assert mask >> longest & 1
            previous = mask

    @pytest.mark.parametrize("seed", range(10))
    def test_no_later_piece_fits_an_earlier_offcut(self, seed: int) -> None:
        rng = random.Random(500 + seed)
        lengths = [round(rng.uniform(0.1, 1.9), 2) for _ in range(12)]
        catalog, result = solve(lengths, 2.44)

        bins = project_assignment(catalog, result.masks)
        for position, plank in enumerate(bins):
            later = [length for other in bins[position + 1 :] for length in other.lengths]
            if later:
                assert plank.total + min(later) > 2.44 + LENGTH_TOLERANCE

    def test_masks_are_cumulative(self, shelf_pieces: list[float]) -> None:
        catalog, result = solve(shelf_pieces, 2.0)
        for previous, current in zip(result.masks, result.masks[1:]):
            assert current & previous == previous
            assert current != previous
        assert result.masks[-1] == catalog.full_mask

    def test_counts_match_mask_growth(self, shelf_pieces: list[float]) -> None:
        _, result = solve(shelf_pieces, 2.0)
        previous = 0
        for mask, count in zip(result.masks, result.counts):
            assert bin(mask & ~previous).count("1") == count
            previous = mask

    def test_target_matches_bin_count(self, shelf_pieces: list[float]) -> None:
        _, result = solve(shelf_pieces, 2.0)
        assert result.target_bins == len(result.masks)
        assert result.states_visited > 0


# =============================================================================
# Precondition Tests
# =============================================================================


class TestPreconditions:
    """Invalid engine inputs are rejected up front."""

    def test_piece_longer_than_capacity(self) -> None:
        catalog = PieceCatalog.from_lengths([1.0, 7.5])
        with pytest.raises(PieceTooLongError) as excinfo:
            BinSearchEngine(catalog, 6.0)
        assert excinfo.value.lengths == (7.5,)
        assert excinfo.value.capacity == 6.0

    def test_every_too_long_length_reported(self) -> None:
        catalog = PieceCatalog.from_lengths([9.0, 1.0, 7.5, 9.0])
        with pytest.raises(PieceTooLongError) as excinfo:
            BinSearchEngine(catalog, 6.0)
        assert excinfo.value.lengths == (7.5, 9.0)

    @pytest.mark.parametrize("capacity", [0.0, -1.0, float("inf"), float("nan")])
    def test_invalid_capacity(self, capacity: float) -> None:
        with pytest.raises(ValueError, match="Capacity"):
            BinSearchEngine(PieceCatalog.from_lengths([1.0]), capacity)


# =============================================================================
# Projection Tests
# =============================================================================


class TestProjectAssignment:
    """Tests for turning cumulative masks into bins."""

    def test_differences_become_bins(self) -> None:
        catalog = PieceCatalog(lengths=(1.0, 2.0, 3.0, 4.0))
        bins = project_assignment(catalog, [0b1001, 0b1111])
        assert [plank.lengths for plank in bins] == [(1.0, 4.0), (2.0, 3.0)]
        assert [plank.index for plank in bins] == [0, 1]

    def test_repeated_mask_skipped(self) -> None:
        catalog = PieceCatalog(lengths=(1.0, 2.0))
        bins = project_assignment(catalog, [0b01, 0b01, 0b11])
        assert [plank.lengths for plank in bins] == [(1.0,), (2.0,)]
        assert bins[1].index == 1

    def test_no_masks(self) -> None:
        assert project_assignment(PieceCatalog(lengths=()), []) == ()
