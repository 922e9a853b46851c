"""Conversion of a finished bin stack into per-bin piece lists."""

from __future__ import annotations

from typing import Sequence

from plankcut.domain.value_objects import Bin, PieceCatalog


def project_assignment(catalog: PieceCatalog, masks: Sequence[int]) -> tuple[Bin, ...]:
    """Turn cumulative inclusion masks into bins of piece lengths.

    Each mask includes every position committed to its bin and to all bins
    before it, so a bin's own pieces are the bits it adds over the previous
    mask.

    Args:
        catalog: Catalog the masks index into.
        masks: Cumulative inclusion mask of each bin, in stack order.

    Returns:
        One Bin per non-empty difference, lengths ascending.
    """
    bins: list[Bin] = []
    previous = 0
    for mask in masks:
        own = mask & ~previous
        previous = mask
        if not own:
            continue
        bins.append(Bin(index=len(bins), lengths=catalog.lengths_at(own)))
    return tuple(bins)
