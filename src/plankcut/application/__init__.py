"""Application layer - use cases and orchestration."""

from .commands import SolveCutPlanCommand
from .dtos import CutPlanInput, CutPlanOutput

__all__ = [
    "CutPlanInput",
    "CutPlanOutput",
    "SolveCutPlanCommand",
]
