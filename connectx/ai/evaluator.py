"""
evaluator.py - Heuristic position evaluation for ConnectX

Every straight line on the board that is at least ``run_length`` long is
scanned with a sliding window of exactly ``run_length`` cells. A window that
holds marks of only one player is still winnable for that player and scores

    weight(k) = 10 ** (k - 1)      (k = that player's marks in the window)

positive for the evaluated mark and negative for the opponent. Windows that
hold both marks, or no marks at all, score nothing.
"""

from functools import lru_cache
from typing import List, Tuple

from connectx.debug import debug
from connectx.utils import DIRECTION_VECTORS, Mark
from connectx.game.board import Board

Line = Tuple[Tuple[int, int], ...]

WEIGHT_BASE = 10


def window_weight(count: int) -> int:
    """Score for a live window holding ``count`` of one player's marks."""
    if count <= 0:
        return 0
    return WEIGHT_BASE ** (count - 1)


@lru_cache(maxsize=64)
def board_lines(width: int, height: int, run_length: int) -> Tuple[Line, ...]:
    """
    Enumerate every maximal line of (row, col) cells long enough to hold a run.

    A line starts at a cell whose predecessor in that direction is off the
    board, and extends until it leaves the board.
    """
    lines: List[Line] = []
    for dr, dc in DIRECTION_VECTORS.values():
        for row in range(height):
            for col in range(width):
                prev_r, prev_c = row - dr, col - dc
                if 0 <= prev_r < height and 0 <= prev_c < width:
                    continue
                cells = []
                r, c = row, col
                while 0 <= r < height and 0 <= c < width:
                    cells.append((r, c))
                    r += dr
                    c += dc
                if len(cells) >= run_length:
                    lines.append(tuple(cells))
    return tuple(lines)


def window_count(width: int, height: int, run_length: int) -> int:
    return sum(len(line) - run_length + 1 for line in board_lines(width, height, run_length))


class PositionEvaluator:
    """Scores non-terminal positions by counting live windows."""

    def __init__(self):
        self.evaluations = 0

    def evaluate(self, board: Board, mark: Mark) -> int:
        """
        Score a board from ``mark``'s perspective.

        Window counts are maintained incrementally along each line: the cell
        leaving the window is subtracted and the entering cell added.

        Args:
            board: A board without a winner
            mark: The mark to score for (ONE or TWO)

        Returns:
            Positive when ``mark`` has more winnable potential than its opponent
        """
        self.evaluations += 1
        k = board.run_length
        rows = board.grid.tolist()
        own = mark.value
        opp = mark.other().value
        score = 0

        for line in board_lines(board.width, board.height, k):
            values = [rows[r][c] for r, c in line]
            own_count = 0
            opp_count = 0
            for i, value in enumerate(values):
                if value == own:
                    own_count += 1
                elif value == opp:
                    opp_count += 1

                if i >= k:
                    leaving = values[i - k]
                    if leaving == own:
                        own_count -= 1
                    elif leaving == opp:
                        opp_count -= 1

                if i < k - 1:
                    continue
                if opp_count == 0:
                    score += window_weight(own_count)
                elif own_count == 0:
                    score -= window_weight(opp_count)

        return score

    def evaluate_naive(self, board: Board, mark: Mark) -> int:
        """Reference scorer that rescans every window from scratch."""
        k = board.run_length
        own = mark.value
        opp = mark.other().value
        score = 0

        for line in board_lines(board.width, board.height, k):
            for start in range(len(line) - k + 1):
                window = [int(board.grid[r, c]) for r, c in line[start:start + k]]
                own_count = window.count(own)
                opp_count = window.count(opp)
                if own_count and opp_count:
                    continue
                score += window_weight(own_count) - window_weight(opp_count)

        return score

    def score_bound(self, board: Board) -> int:
        """An integer strictly greater than any |evaluate| for this board geometry."""
        windows = window_count(board.width, board.height, board.run_length)
        bound = windows * window_weight(board.run_length) + 1
        debug.trace(f"Score bound {bound} over {windows} windows", "eval")
        return bound
