"""Pydantic schemas for the REST API."""

from plankcut.web.schemas.requests import (
    ConfigValidateRequest,
    SolveFromConfigRequest,
    SolveRequest,
)
from plankcut.web.schemas.responses import (
    BinSchema,
    CutPlanSchema,
    ErrorResponseSchema,
    ValidationResultSchema,
)

__all__ = [
    # Requests
    "ConfigValidateRequest",
    "SolveFromConfigRequest",
    "SolveRequest",
    # Responses
    "BinSchema",
    "CutPlanSchema",
    "ErrorResponseSchema",
    "ValidationResultSchema",
]
