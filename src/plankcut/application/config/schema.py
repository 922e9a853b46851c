"""Pydantic models for cutting plan configuration files.

A configuration file names the stock length and the pieces to cut. Pieces
may be written as bare numbers or as objects with a quantity and label:

    {
      "schema_version": "1.0",
      "stock": {"length": 96},
      "pieces": [30, {"length": 22.5, "quantity": 4, "label": "shelf"}]
    }
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Supported schema versions for configuration files
# Version 1.0: Initial schema with stock, pieces and output options
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class OutputFormat(str, Enum):
    """Output formats for a cutting plan."""

    TEXT = "text"
    JSON = "json"


class StockConfigSchema(BaseModel):
    """Stock the pieces are cut from.

    Attributes:
        length: Length of one plank of stock.
    """

    model_config = ConfigDict(extra="forbid")

    length: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Length of one plank of stock"
    )


class PieceConfig(BaseModel):
    """A required piece, optionally repeated.

    Attributes:
        length: Piece length, in the same unit as the stock.
        quantity: Number of identical pieces.
        label: Optional name for the piece.
    """

    model_config = ConfigDict(extra="forbid")

    length: float = Field(..., gt=0, allow_inf_nan=False, description="Piece length")
    quantity: int = Field(default=1, ge=1, description="Number of identical pieces")
    label: str | None = Field(default=None, description="Optional piece name")


class OutputConfig(BaseModel):
    """Output format configuration.

    Attributes:
        format: Output format, text or json.
        include_summary: Whether text output carries the header and totals.
    """

    model_config = ConfigDict(extra="forbid")

    format: OutputFormat = Field(default=OutputFormat.TEXT)
    include_summary: bool = Field(default=True)


class CutPlanConfiguration(BaseModel):
    """Root configuration model for a cutting plan.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        stock: Stock length configuration
        pieces: Pieces to cut
        output: Output format configuration

    Example:
        >>> config = CutPlanConfiguration(
        ...     schema_version="1.0",
        ...     stock=StockConfigSchema(length=2.0),
        ...     pieces=[0.5, {"length": 0.75, "quantity": 2}],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    stock: StockConfigSchema
    pieces: list[PieceConfig] = Field(default_factory=list)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported.

        Newer minor versions within a supported major version are accepted
        for forward compatibility.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @field_validator("pieces", mode="before")
    @classmethod
    def expand_bare_lengths(cls, v: Any) -> Any:
        """Accept bare numbers as single pieces."""
        if not isinstance(v, list):
            return v
        return [
            {"length": item}
            if isinstance(item, (int, float)) and not isinstance(item, bool)
            else item
            for item in v
        ]

    @property
    def piece_lengths(self) -> list[float]:
        """Every piece length, with quantities expanded."""
        return [piece.length for piece in self.pieces for _ in range(piece.quantity)]

    @property
    def piece_labels(self) -> list[str | None]:
        """Label of every piece, parallel to piece_lengths."""
        return [piece.label for piece in self.pieces for _ in range(piece.quantity)]
