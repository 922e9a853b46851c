"""Pydantic request schemas for the REST API."""

from typing import Annotated, Any

from pydantic import BaseModel, Field

PieceLength = Annotated[float, Field(gt=0, allow_inf_nan=False)]


class SolveRequest(BaseModel):
    """Request for planning a piece list."""

    capacity: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Stock length of one plank"
    )
    pieces: list[PieceLength] = Field(
        default_factory=list, description="Piece lengths, in any order"
    )


class SolveFromConfigRequest(BaseModel):
    """Request for planning from a full configuration."""

    config: dict[str, Any] = Field(..., description="Cutting plan configuration JSON")


class ConfigValidateRequest(BaseModel):
    """Request for validating a configuration."""

    config: dict[str, Any] = Field(..., description="Cutting plan configuration JSON")
