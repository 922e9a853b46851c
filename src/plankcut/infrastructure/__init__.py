"""Infrastructure layer - planning service, file reading and formatters."""

from .bin_packing import CutPlan, CutPlanService, StockConfig
from .formatters import CutPlanFormatter, JsonExporter
from .piece_reader import PieceFileError, PieceList, parse_lengths, read_piece_file

__all__ = [
    # Planning
    "CutPlan",
    "CutPlanService",
    "StockConfig",
    # Formatters
    "CutPlanFormatter",
    "JsonExporter",
    # Piece files
    "PieceFileError",
    "PieceList",
    "parse_lengths",
    "read_piece_file",
]
