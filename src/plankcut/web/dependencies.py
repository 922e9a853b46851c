"""FastAPI dependency injection for planning services."""

from typing import Annotated

from fastapi import Depends

from plankcut.application.commands import SolveCutPlanCommand


def get_solve_command() -> SolveCutPlanCommand:
    """Dependency for SolveCutPlanCommand.

    Each request gets its own command, so solves share no state.
    """
    return SolveCutPlanCommand()


SolveCommandDep = Annotated[SolveCutPlanCommand, Depends(get_solve_command)]
