"""Conversion from configuration models to application input DTOs."""

from plankcut.application.config.schema import CutPlanConfiguration
from plankcut.application.dtos import CutPlanInput


def config_to_input(config: CutPlanConfiguration) -> CutPlanInput:
    """Build a planning request from a configuration.

    Quantities are expanded so each physical piece appears once, and
    carries its label when the configuration gave one.
    """
    labels = config.piece_labels
    return CutPlanInput(
        capacity=config.stock.length,
        lengths=config.piece_lengths,
        labels=labels if any(label is not None for label in labels) else [],
    )
