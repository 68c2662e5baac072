"""
board.py - Board representation and core game mechanics for ConnectX

This module implements the Board class which holds the game grid for any
width, height and run length, validates and applies plays, and detects wins.
"""

from typing import Iterable, List, Optional, Tuple

import numpy as np

from connectx.debug import debug
from connectx.utils import (DEFAULT_WIDTH, DEFAULT_HEIGHT, DEFAULT_RUN_LENGTH,
                            DIRECTION_VECTORS, Mark, GameResult, IllegalMoveError,
                            require_positive_int, render_board_ascii)


class Board:
    """
    Represents a ConnectX game board.

    The grid is indexed ``grid[row, column]`` with row 0 at the bottom.
    ``heights[column]`` is the row the next play in that column lands on,
    which is also the number of marks already in the column.
    """

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                 run_length: int = DEFAULT_RUN_LENGTH):
        """
        Initialize an empty board.

        Raises:
            BoardConfigError: if any dimension is not a positive integer
        """
        self._width = require_positive_int("width", width)
        self._height = require_positive_int("height", height)
        self._run_length = require_positive_int("run_length", run_length)
        debug.trace(f"Initializing {self._width}x{self._height} board "
                    f"(run length {self._run_length})", "board")
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        self.grid = np.zeros((self._height, self._width), dtype=np.int8)
        self.heights = [0] * self._width
        self.moves: List[Tuple[Mark, int]] = []
        self.last_play: Optional[Tuple[int, int]] = None
        self._winner: Optional[Mark] = None

    @classmethod
    def from_moves(cls, columns: Iterable[int], width: int = DEFAULT_WIDTH,
                   height: int = DEFAULT_HEIGHT, run_length: int = DEFAULT_RUN_LENGTH,
                   first: Mark = Mark.ONE) -> 'Board':
        """
        Build a board by applying alternating plays, starting with ``first``.

        Raises:
            IllegalMoveError: if any play in the sequence is illegal
        """
        board = cls(width, height, run_length)
        mark = first
        for column in columns:
            board.apply_play(mark, column)
            mark = mark.other()
        return board

    def copy(self) -> 'Board':
        """Create an independent copy of this board."""
        new_board = Board.__new__(Board)
        new_board._width = self._width
        new_board._height = self._height
        new_board._run_length = self._run_length
        new_board.grid = self.grid.copy()
        new_board.heights = self.heights.copy()
        new_board.moves = self.moves.copy()
        new_board.last_play = self.last_play
        new_board._winner = self._winner
        return new_board

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def run_length(self) -> int:
        return self._run_length

    @property
    def winner(self) -> Optional[Mark]:
        return self._winner

    @property
    def game_result(self) -> GameResult:
        if self._winner is not None:
            return GameResult.for_winner(self._winner)
        if self.is_full():
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    @staticmethod
    def next_player(mark: Mark) -> Mark:
        return mark.other()

    def is_legal_play(self, column: int) -> bool:
        """Check that a column is on the board and not yet full."""
        return 0 <= column < self._width and self.heights[column] < self._height

    def legal_columns(self) -> List[int]:
        """Ascending list of playable columns (empty once the game is over)."""
        if self._winner is not None:
            return []
        return [col for col in range(self._width) if self.heights[col] < self._height]

    def is_full(self) -> bool:
        return all(h >= self._height for h in self.heights)

    def is_draw(self) -> bool:
        return self._winner is None and self.is_full()

    def is_terminal(self) -> bool:
        return self._winner is not None or self.is_full()

    def apply_play(self, mark: Mark, column: int) -> int:
        """
        Place a mark in the lowest empty cell of a column.

        Args:
            mark: The mark to place (ONE or TWO)
            column: The column to play in (0-indexed)

        Returns:
            The row the mark landed on

        Raises:
            IllegalMoveError: if the board is terminal or the column is not playable
            ValueError: if mark is EMPTY
        """
        if mark == Mark.EMPTY:
            raise ValueError("Cannot play an EMPTY mark")
        if self._winner is not None:
            raise IllegalMoveError(f"Game is already won by {self._winner.name}")
        if not self.is_legal_play(column):
            if 0 <= column < self._width:
                raise IllegalMoveError(f"Column {column} is full")
            raise IllegalMoveError(f"Column {column} is outside 0..{self._width - 1}")

        row = self.heights[column]
        self.grid[row, column] = mark.value
        self.heights[column] = row + 1
        self.last_play = (row, column)
        self.moves.append((mark, column))
        if debug.is_tracing("board"):
            debug.trace(f"{mark.name} plays ({row}, {column})", "board")

        if self._is_winning_play(row, column):
            self._winner = mark
            debug.debug(f"{mark.name} wins with play at ({row}, {column})", "board")

        return row

    def _count_direction(self, row: int, column: int, dr: int, dc: int, value: int) -> int:
        count = 0
        r, c = row + dr, column + dc
        while 0 <= r < self._height and 0 <= c < self._width and self.grid[r, c] == value:
            count += 1
            r += dr
            c += dc
        return count

    def _is_winning_play(self, row: int, column: int) -> bool:
        """Check the four lines through the placed cell only."""
        value = self.grid[row, column]
        for dr, dc in DIRECTION_VECTORS.values():
            count = (1 + self._count_direction(row, column, dr, dc, value)
                     + self._count_direction(row, column, -dr, -dc, value))
            if count >= self._run_length:
                return True
        return False

    def get_winning_line(self) -> List[Tuple[int, int]]:
        """
        Get the (row, column) cells of the winning line.

        Returns:
            The contiguous run through the last play, or [] if nobody has won
        """
        if self._winner is None or self.last_play is None:
            return []

        row, col = self.last_play
        value = self.grid[row, col]
        for dr, dc in DIRECTION_VECTORS.values():
            back = self._count_direction(row, col, -dr, -dc, value)
            forward = self._count_direction(row, col, dr, dc, value)
            if 1 + back + forward >= self._run_length:
                return [(row + i * dr, col + i * dc) for i in range(-back, forward + 1)]

        return []

    def _check_column(self, column: int):
        if not 0 <= column < self._width:
            raise IndexError(f"Column {column} is outside 0..{self._width - 1}")

    def cell(self, column: int, row: int) -> Mark:
        """Mark at (column, row); negative indices do not wrap."""
        self._check_column(column)
        if not 0 <= row < self._height:
            raise IndexError(f"Row {row} is outside 0..{self._height - 1}")
        return Mark(int(self.grid[row, column]))

    def column_height(self, column: int) -> int:
        self._check_column(column)
        return self.heights[column]

    def empty_cells(self) -> int:
        return self._width * self._height - sum(self.heights)

    def get_state(self) -> np.ndarray:
        """Copy of the grid for callers that must not touch the board."""
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (f"Board(width={self._width}, height={self._height}, "
                f"run_length={self._run_length}, moves={len(self.moves)})")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.grid.shape == other.grid.shape
                and self._run_length == other._run_length
                and bool(np.array_equal(self.grid, other.grid)))

    __hash__ = None
