"""Output formatters for cutting plans."""

from __future__ import annotations

import json

from plankcut.infrastructure.bin_packing import CutPlan


def _format_length(length: float) -> str:
    return f"{length:g}"


def _format_piece(length: float, label: str | None) -> str:
    if label:
        return f"{_format_length(length)} ({label})"
    return _format_length(length)


class CutPlanFormatter:
    """Formats a cutting plan as enumerated plank lines.

    Each plank is printed as ``Plank N: a, b, c`` with its pieces in
    ascending order. Labelled pieces are followed by their label in
    parentheses. A summary footer is added unless disabled.
    """

    def __init__(self, include_summary: bool = True) -> None:
        """Initialize formatter.

        Args:
            include_summary: Whether to append the header and totals.
        """
        self._include_summary = include_summary

    def format(self, plan: CutPlan) -> str:
        """Format the plan for display."""
        if not plan.bins:
            return "No pieces to cut."

        plank_lines = [
            f"Plank {plank.index + 1}: "
            + ", ".join(
                _format_piece(length, label)
                for length, label in zip(plank.lengths, plank.piece_labels)
            )
            for plank in plan.bins
        ]
        if not self._include_summary:
            return "\n".join(plank_lines)

        lines = [
            "CUT PLAN",
            "=" * 60,
            f"Stock length: {_format_length(plan.stock.length)}",
            "-" * 60,
            *plank_lines,
            "-" * 60,
            f"{plan.bin_count} planks, {plan.piece_count} pieces, "
            f"{plan.waste_percentage:.1f}% waste",
        ]
        return "\n".join(lines)


class JsonExporter:
    """Exports a cutting plan to JSON."""

    def export(self, plan: CutPlan) -> str:
        """Serialize the plan to an indented JSON string."""
        return json.dumps(plan.to_dict(), indent=2)
