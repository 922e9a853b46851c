"""Data Transfer Objects for the application layer."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from plankcut.infrastructure.bin_packing import CutPlan


@dataclass
class CutPlanInput:
    """Input DTO for a cutting plan request."""

    capacity: float
    lengths: list[float] = field(default_factory=list)
    labels: list[str | None] = field(default_factory=list)

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if not math.isfinite(self.capacity) or self.capacity <= 0:
            errors.append("Stock length must be a positive number")
        bad = [length for length in self.lengths if not math.isfinite(length) or length <= 0]
        if bad:
            errors.append(
                "Piece lengths must be positive numbers, got: "
                + ", ".join(f"{length:g}" for length in bad)
            )
        if self.labels and len(self.labels) != len(self.lengths):
            errors.append("Piece labels must match piece lengths one to one")
        return errors


@dataclass
class CutPlanOutput:
    """Output DTO containing the cutting plan.

    Attributes:
        plan: The finished plan, or None if planning failed.
        errors: List of error messages if planning failed.
    """

    plan: CutPlan | None
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if planning succeeded."""
        return not self.errors and self.plan is not None
