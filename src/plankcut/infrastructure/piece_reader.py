"""Reading piece lengths from plain text.

Piece files hold whitespace-separated numbers. Tokens that are not positive
finite numbers are skipped, so comments and units scattered through a file
do not stop it from loading.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


class PieceFileError(Exception):
    """Raised when a piece file cannot be read or holds no usable numbers.

    Attributes:
        message: Human-readable error message.
        path: Path to the piece file.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)


@dataclass(frozen=True)
class PieceList:
    """Pieces read from a file.

    Attributes:
        capacity: Stock length taken from the file, if it carried one.
        lengths: Piece lengths, ascending.
        leading: First usable number in the file, in file order.
    """

    capacity: float | None
    lengths: tuple[float, ...]
    leading: float | None = None


def _parse_token(token: str) -> float | None:
    try:
        value = float(token)
    except ValueError:
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def parse_lengths(text: str) -> list[float]:
    """Parse whitespace-separated lengths, dropping unusable tokens.

    Args:
        text: Raw text to tokenize.

    Returns:
        Parsed lengths sorted ascending.

    Example:
        >>> parse_lengths("3 1.5 x 2")
        [1.5, 2.0, 3.0]
    """
    lengths: list[float] = []
    for token in text.split():
        value = _parse_token(token)
        if value is None:
            logger.debug("Skipping token %r: not a positive number", token)
            continue
        lengths.append(value)
    return sorted(lengths)


def read_piece_file(path: Path, capacity_from_file: bool = False) -> PieceList:
    """Read piece lengths from a text file.

    Args:
        path: File to read.
        capacity_from_file: Treat the first usable number in the file as the
            stock length instead of a piece.

    Returns:
        PieceList with the stock length (when requested) and the pieces.

    Raises:
        PieceFileError: If the file cannot be read, or capacity_from_file is
            set and the file holds no usable number.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise PieceFileError(f"Piece file not found: {path}", path=path)
    except OSError as e:
        raise PieceFileError(f"Error reading piece file: {path}: {e}", path=path)

    values = [value for value in map(_parse_token, content.split()) if value is not None]
    leading = values[0] if values else None
    if not capacity_from_file:
        return PieceList(capacity=None, lengths=tuple(sorted(values)), leading=leading)

    if leading is None:
        raise PieceFileError(f"No stock length found in piece file: {path}", path=path)
    return PieceList(capacity=leading, lengths=tuple(sorted(values[1:])), leading=leading)
