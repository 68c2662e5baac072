"""
config.py - Board and search configuration for ConnectX
"""

from dataclasses import dataclass
from typing import Optional

from connectx.utils import (DEFAULT_WIDTH, DEFAULT_HEIGHT, DEFAULT_RUN_LENGTH,
                            BoardConfigError, require_positive_int)


@dataclass(frozen=True)
class BoardConfig:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    run_length: int = DEFAULT_RUN_LENGTH

    def __post_init__(self):
        require_positive_int("width", self.width)
        require_positive_int("height", self.height)
        require_positive_int("run_length", self.run_length)

    @classmethod
    def from_args(cls, args) -> 'BoardConfig':
        return cls(
            width=getattr(args, 'width', DEFAULT_WIDTH),
            height=getattr(args, 'height', DEFAULT_HEIGHT),
            run_length=getattr(args, 'run_length', DEFAULT_RUN_LENGTH),
        )

    def create_board(self):
        from connectx.game.board import Board
        return Board(self.width, self.height, self.run_length)


@dataclass(frozen=True)
class SearchConfig:
    depth: Optional[int] = 6        # None searches until the game tree is exhausted
    workers: int = 1                # > 1 evaluates root columns in worker processes
    time_limit: Optional[float] = None  # seconds; None means depth-only

    def __post_init__(self):
        if self.depth is not None:
            require_positive_int("depth", self.depth)
        require_positive_int("workers", self.workers)
        if self.time_limit is not None and self.time_limit <= 0:
            raise BoardConfigError(f"time_limit must be positive, got {self.time_limit}")

    @classmethod
    def from_args(cls, args) -> 'SearchConfig':
        depth = getattr(args, 'depth', 6)
        return cls(
            depth=None if depth == 0 else depth,
            workers=getattr(args, 'workers', 1),
            time_limit=getattr(args, 'time_limit', None),
        )

    def create_engine(self):
        from connectx.ai.minimax import SearchEngine
        return SearchEngine(time_limit=self.time_limit, workers=self.workers)
