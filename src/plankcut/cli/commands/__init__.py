"""CLI command implementations for the plankcut tool."""

from .solve import solve
from .validate import validate_command

__all__ = [
    "solve",
    "validate_command",
]
