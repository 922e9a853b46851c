"""Application commands (use cases) for cutting plans."""

from __future__ import annotations

import logging
from typing import Callable

from plankcut.domain import PieceTooLongError
from plankcut.infrastructure.bin_packing import CutPlanService, StockConfig

from .dtos import CutPlanInput, CutPlanOutput

logger = logging.getLogger(__name__)


class SolveCutPlanCommand:
    """Command to plan cutting a piece list from fixed-length stock."""

    def __init__(
        self,
        service_factory: Callable[[StockConfig], CutPlanService] | None = None,
    ) -> None:
        self.service_factory = service_factory or CutPlanService

    def execute(self, plan_input: CutPlanInput) -> CutPlanOutput:
        """Execute the planning command.

        Input problems and pieces that do not fit the stock are reported in
        the output's error list rather than raised.

        Args:
            plan_input: Stock length and piece lengths.

        Returns:
            CutPlanOutput with the plan, or with errors.
        """
        errors = plan_input.validate()
        if errors:
            return CutPlanOutput(plan=None, errors=errors)

        stock = StockConfig(length=plan_input.capacity)
        service = self.service_factory(stock)
        try:
            plan = service.plan(plan_input.lengths, labels=plan_input.labels or None)
        except PieceTooLongError as e:
            return CutPlanOutput(plan=None, errors=e.messages)

        logger.info(
            "Planned %d pieces on %d planks of length %g",
            plan.piece_count,
            plan.bin_count,
            stock.length,
        )
        return CutPlanOutput(plan=plan)
