import random

import pytest

from connectx.debug import debug, DebugLevel
from connectx.game.board import Board
from connectx.utils import Mark


@pytest.fixture(autouse=True)
def quiet_logging():
    debug.configure(level=DebugLevel.WARNING, components=[])
    yield
    debug.configure(level=DebugLevel.WARNING, components=[])


@pytest.fixture
def make_position():
    """Build a reproducible non-terminal position from random legal plays."""

    def _make(seed, plies, width=7, height=6, run_length=4):
        rng = random.Random(seed)
        board = Board(width, height, run_length)
        mark = Mark.ONE
        for _ in range(plies):
            options = []
            for column in board.legal_columns():
                trial = board.copy()
                trial.apply_play(mark, column)
                if not trial.is_terminal():
                    options.append(column)
            if not options:
                break
            board.apply_play(mark, rng.choice(options))
            mark = mark.other()
        return board, mark

    return _make

