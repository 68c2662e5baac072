"""
utils.py - Constants, enumerations and helpers shared across ConnectX

This module provides the canonical board geometry, the cell mark and game
result enumerations, the exception hierarchy and ASCII rendering.
"""

from enum import Enum, auto
from typing import Optional

import numpy as np

# Canonical game geometry
DEFAULT_WIDTH = 7
DEFAULT_HEIGHT = 6
DEFAULT_RUN_LENGTH = 4  # Number of marks in a line to win


class Mark(Enum):
    """Tri-state value held by a board cell."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self) -> 'Mark':
        """Get the opposing mark (EMPTY has no opponent)."""
        if self == Mark.ONE:
            return Mark.TWO
        elif self == Mark.TWO:
            return Mark.ONE
        return Mark.EMPTY

    def __str__(self):
        if self == Mark.EMPTY:
            return "."
        elif self == Mark.ONE:
            return "X"
        else:
            return "O"


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != GameResult.IN_PROGRESS

    @classmethod
    def for_winner(cls, winner: Optional[Mark]) -> 'GameResult':
        if winner == Mark.ONE:
            return cls.PLAYER_ONE_WIN
        if winner == Mark.TWO:
            return cls.PLAYER_TWO_WIN
        raise ValueError(f"No game result for winner {winner!r}")


class Direction(Enum):
    """Line directions used by win detection and the evaluator."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()    # Bottom-left to top-right
    DIAGONAL_DOWN = auto()  # Top-left to bottom-right


# Direction vectors (row, col); row 0 is the bottom of the board
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_UP: (1, 1),
    Direction.DIAGONAL_DOWN: (-1, 1),
}


class ConnectXError(Exception):
    """Base class for all errors raised by the ConnectX core."""


class IllegalMoveError(ConnectXError):
    """A play was requested on a full or out-of-range column, or a finished board."""


class InvalidStateError(ConnectXError):
    """A search or turn was requested on a board that cannot accept one."""


class BoardConfigError(ConnectXError, ValueError):
    """Board or search parameters are malformed."""


class SearchAbortedError(ConnectXError):
    """The search was interrupted by its abort hook."""


def require_positive_int(name: str, value) -> int:
    """
    Validate a geometry or search parameter.

    Raises:
        BoardConfigError: if value is not a positive integer
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise BoardConfigError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise BoardConfigError(f"{name} must be positive, got {value}")
    return int(value)


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render a board grid as ASCII art, top row first.

    Args:
        grid: Array of shape (height, width) with row 0 at the bottom

    Returns:
        ASCII representation of the board
    """
    height, width = grid.shape
    cell_width = len(str(width - 1))
    inner = width * (cell_width + 1) - 1

    result = ["|" + "-" * inner + "|"]
    for row in range(height - 1, -1, -1):
        cells = [str(Mark(int(value))).rjust(cell_width) for value in grid[row]]
        result.append("|" + " ".join(cells) + "|")
    result.append("|" + "-" * inner + "|")
    result.append("|" + " ".join(str(col).rjust(cell_width) for col in range(width)) + "|")

    return "\n".join(result)
