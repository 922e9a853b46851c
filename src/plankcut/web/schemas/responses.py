"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class BinSchema(BaseModel):
    """One plank of stock and the pieces cut from it."""

    index: int = Field(..., description="Zero-based plank index")
    pieces: list[float] = Field(..., description="Piece lengths, ascending")
    labels: list[str | None] = Field(
        default_factory=list, description="Label of each piece, null where unnamed"
    )
    total: float = Field(..., description="Total length of the pieces")
    offcut: float = Field(..., description="Unused length left on the plank")


class CutPlanSchema(BaseModel):
    """Response for a cutting plan."""

    stock_length: float = Field(..., description="Stock length of one plank")
    bin_count: int = Field(..., description="Number of planks needed")
    piece_count: int = Field(..., description="Number of pieces placed")
    waste_percentage: float = Field(..., description="Waste as percent of stock used")
    bins: list[BinSchema] = Field(default_factory=list, description="Planks in cutting order")


class ValidationResultSchema(BaseModel):
    """Response for configuration validation."""

    is_valid: bool = Field(..., description="Whether configuration is valid")
    errors: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation errors"
    )
    warnings: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation warnings"
    )


class ErrorResponseSchema(BaseModel):
    """Error response body."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error category")
    details: Any = Field(default=None, description="Additional error details")
