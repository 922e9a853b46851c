"""Validation of loaded cutting plan configurations.

Schema validation happens while loading; this module adds the checks that
need the whole configuration, such as pieces that cannot fit the stock.
"""

from dataclasses import dataclass, field
from typing import Any

from plankcut.application.config.schema import CutPlanConfiguration
from plankcut.domain import fits_within

# Pieces this close to the stock length leave almost no room for saw kerf.
TIGHT_FIT_RATIO = 0.98


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "pieces[2].length")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the configuration has no blocking errors."""
        return len(self.errors) == 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 clean, 1 errors, 2 warnings only."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self


def validate_config(config: CutPlanConfiguration) -> ValidationResult:
    """Check a loaded configuration for problems that block planning.

    Errors:
        - a piece longer than the stock length
    Warnings:
        - an empty piece list
        - a piece within 2% of the stock length

    Args:
        config: A configuration that passed schema validation.

    Returns:
        ValidationResult with any errors and warnings found.
    """
    result = ValidationResult()
    stock_length = config.stock.length

    if not config.pieces:
        result.add_warning("pieces", "No pieces listed; the plan will be empty")

    for index, piece in enumerate(config.pieces):
        path = f"pieces[{index}].length"
        if not fits_within(piece.length, stock_length):
            name = f" '{piece.label}'" if piece.label else ""
            result.add_error(
                path,
                f"Piece{name} of length {piece.length:g} exceeds stock length {stock_length:g}",
                piece.length,
            )
        elif piece.length >= stock_length * TIGHT_FIT_RATIO:
            result.add_warning(
                path,
                f"Piece of length {piece.length:g} nearly fills a plank of {stock_length:g}",
                "Allow for saw kerf when cutting",
            )

    return result
