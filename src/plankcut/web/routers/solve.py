"""Cutting plan endpoints."""

from fastapi import APIRouter

from plankcut.application.config import config_to_input, load_config_from_dict
from plankcut.application.dtos import CutPlanInput, CutPlanOutput
from plankcut.web.dependencies import SolveCommandDep
from plankcut.web.exceptions import CutPlanError
from plankcut.web.schemas.requests import SolveFromConfigRequest, SolveRequest
from plankcut.web.schemas.responses import BinSchema, CutPlanSchema

router = APIRouter(prefix="/solve", tags=["solve"])


def _output_to_schema(output: CutPlanOutput) -> CutPlanSchema:
    """Convert CutPlanOutput to response schema."""
    if not output.is_valid:
        raise CutPlanError(output.errors)

    plan = output.plan
    return CutPlanSchema(
        stock_length=plan.stock.length,
        bin_count=plan.bin_count,
        piece_count=plan.piece_count,
        waste_percentage=round(plan.waste_percentage, 2),
        bins=[
            BinSchema(
                index=plank.index,
                pieces=list(plank.lengths),
                labels=list(plank.piece_labels),
                total=plank.total,
                offcut=plank.offcut(plan.stock.length),
            )
            for plank in plan.bins
        ],
    )


# Plain def: the search is CPU-bound and runs in the threadpool.
@router.post("", response_model=CutPlanSchema)
def solve(request: SolveRequest, command: SolveCommandDep) -> CutPlanSchema:
    """Plan cutting a list of pieces from fixed-length stock.

    Raises:
        CutPlanError: If a piece is longer than the stock.
    """
    output = command.execute(
        CutPlanInput(capacity=request.capacity, lengths=list(request.pieces))
    )
    return _output_to_schema(output)


@router.post("/config", response_model=CutPlanSchema)
def solve_from_config(
    request: SolveFromConfigRequest, command: SolveCommandDep
) -> CutPlanSchema:
    """Plan cutting the pieces named in a configuration.

    Raises:
        ConfigError: If the configuration fails validation.
        CutPlanError: If a piece is longer than the stock.
    """
    config = load_config_from_dict(request.config)
    output = command.execute(config_to_input(config))
    return _output_to_schema(output)
