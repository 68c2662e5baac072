"""
minimax.py - Minimax search with alpha-beta pruning for ConnectX

This module provides the SearchEngine, which picks and applies a move for a
given mark by searching the game tree to a configurable depth, and the
AIPlayer agent that owns the search parameters for one side of a game.

Node values are from the agent's point of view:
- a won position scores ``bound + (limit - depth) + 1`` (negated for a loss),
  so faster wins and slower losses are preferred,
- a drawn position scores 0,
- a position at the depth limit is scored by the PositionEvaluator, whose
  scores always lie strictly inside ``(-bound, bound)``.
"""

import math
import time
from concurrent.futures import ProcessPoolExecutor
from typing import Callable, Dict, Optional, Tuple

from connectx.debug import debug
from connectx.utils import Mark, InvalidStateError, SearchAbortedError, require_positive_int
from connectx.game.board import Board
from connectx.ai.evaluator import PositionEvaluator

AbortCheck = Callable[[], bool]


def deadline_check(seconds: float) -> AbortCheck:
    """Build an abort hook that fires once ``seconds`` have elapsed."""
    deadline = time.perf_counter() + seconds
    return lambda: time.perf_counter() >= deadline


def _score_root_column(engine: 'SearchEngine', board: Board, agent: Mark, column: int,
                       limit: int, bound: int) -> Tuple[int, int]:
    """Worker entry point: exact value of one root column."""
    child = board.copy()
    child.apply_play(agent, column)
    value = engine._alphabeta(child, agent.other(), 1, -math.inf, math.inf, agent, limit, bound)
    return column, value


class SearchEngine:
    """
    Depth-bounded minimax search with alpha-beta pruning.

    Children are visited in ascending column order and every child is
    searched on its own copy of the board, so sibling branches never share
    state.

    Per-search state (``nodes_evaluated``, ``cutoffs`` and the active abort
    hook) lives on the engine, so one engine serves one search at a time.
    Give each thread its own engine.
    """

    def __init__(self, evaluator: Optional[PositionEvaluator] = None, prune: bool = True,
                 abort_check: Optional[AbortCheck] = None, time_limit: Optional[float] = None,
                 workers: int = 1):
        """
        Initialize the search engine.

        Args:
            evaluator: Scorer for positions at the depth limit
            prune: Disable to run plain minimax (same moves, more nodes)
            abort_check: Polled at every node; returning True aborts the search
            time_limit: Seconds per search before it aborts (None for no limit)
            workers: Processes used to score root columns in parallel
        """
        self.evaluator = evaluator or PositionEvaluator()
        self.prune = prune
        self.abort_check = abort_check
        self.time_limit = time_limit
        self.workers = require_positive_int("workers", workers)
        self.nodes_evaluated = 0
        self.cutoffs = 0
        self._abort: Optional[AbortCheck] = None

    def __getstate__(self):
        # Hooks are usually closures; worker processes run without them
        state = self.__dict__.copy()
        state['abort_check'] = None
        state['_abort'] = None
        state['time_limit'] = None
        return state

    def choose_move(self, board: Board, mark: Mark, search_limit: Optional[int] = None) -> int:
        """
        Pick the best column for ``mark`` and play it on ``board``.

        Args:
            board: The caller's board; it receives exactly one play
            mark: The mark to move
            search_limit: Maximum plies to search (None to exhaust the tree)

        Returns:
            The column that was played

        Raises:
            InvalidStateError: if the board is terminal
            SearchAbortedError: if the abort hook fired (board untouched)
        """
        column = self.best_column(board, mark, search_limit)
        board.apply_play(mark, column)
        return column

    def best_column(self, board: Board, mark: Mark, search_limit: Optional[int] = None) -> int:
        """Pick the best column for ``mark`` without touching ``board``."""
        return self._select(board, mark, search_limit, self._build_abort())

    def iterative_best_column(self, board: Board, mark: Mark,
                              search_limit: Optional[int] = None) -> int:
        """
        Deepen one ply at a time under a single abort budget.

        When the abort hook fires, the column from the deepest completed
        iteration is returned. If not even depth 1 finished, depth 1 is
        searched again without the hook, so a column is always produced.
        """
        limit, _ = self._prepare(board, mark, search_limit)
        abort = self._build_abort()
        best_column = None

        for depth in range(1, limit + 1):
            try:
                best_column = self._select(board, mark, depth, abort)
            except SearchAbortedError as e:
                debug.info(f"{e}; using depth {depth - 1} result", "search")
                if best_column is None:
                    best_column = self._select(board, mark, 1, None)
                break

        return best_column

    def _select(self, board: Board, mark: Mark, search_limit: Optional[int],
                abort: Optional[AbortCheck]) -> int:
        limit, bound = self._prepare(board, mark, search_limit)
        self._abort = abort
        debug.start_timer("search")

        if self.workers > 1:
            scores = self._score_parallel(board, mark, limit, bound)
            best_column = max(scores, key=lambda col: (scores[col], -col))
            best_value = scores[best_column]
        else:
            best_column, best_value = self._search_root(board, mark, limit, bound)

        elapsed = debug.end_timer("search", "search")
        debug.debug(f"{mark.name} picks column {best_column} (value {best_value}, "
                    f"limit {limit}, nodes {self.nodes_evaluated}, cutoffs {self.cutoffs}"
                    + (f", {elapsed:.3f}s" if elapsed is not None else "") + ")", "search")
        return best_column

    def score_moves(self, board: Board, mark: Mark,
                    search_limit: Optional[int] = None) -> Dict[int, int]:
        """
        Exact minimax value of every legal column, each searched with a full window.

        Returns:
            Mapping of column to value from ``mark``'s point of view
        """
        limit, bound = self._prepare(board, mark, search_limit)
        self._abort = self._build_abort()
        if self.workers > 1:
            return self._score_parallel(board, mark, limit, bound)
        return dict(_score_root_column(self, board, mark, column, limit, bound)
                    for column in board.legal_columns())

    @staticmethod
    def terminal_value(winner: Mark, agent: Mark, depth: int, limit: int, bound: int) -> int:
        """Value of a position won by ``winner`` reached ``depth`` plies below the root."""
        value = bound + (limit - depth) + 1
        return value if winner == agent else -value

    def _prepare(self, board: Board, mark: Mark, search_limit: Optional[int]) -> Tuple[int, int]:
        if mark == Mark.EMPTY:
            raise ValueError("Cannot search for an EMPTY mark")
        if board.is_terminal() or not board.legal_columns():
            raise InvalidStateError(f"Cannot choose a move on a finished board ({board.game_result.name})")

        remaining = board.empty_cells()
        if search_limit is None:
            limit = remaining
        else:
            limit = min(require_positive_int("search_limit", search_limit), remaining)

        self.nodes_evaluated = 0
        self.cutoffs = 0
        return limit, self.evaluator.score_bound(board)

    def _build_abort(self) -> Optional[AbortCheck]:
        if self.time_limit is None:
            return self.abort_check
        deadline = deadline_check(self.time_limit)
        if self.abort_check is None:
            return deadline
        external = self.abort_check
        return lambda: deadline() or external()

    def _search_root(self, board: Board, agent: Mark, limit: int, bound: int) -> Tuple[int, int]:
        """Root is a Max node; a later column only wins on strict improvement."""
        best_column = None
        best_value = -math.inf
        alpha = -math.inf

        for column in board.legal_columns():
            child = board.copy()
            child.apply_play(agent, column)
            value = self._alphabeta(child, agent.other(), 1, alpha, math.inf, agent, limit, bound)
            debug.trace(f"Root column {column}: {value}", "search")

            if best_column is None or value > best_value:
                best_column = column
                best_value = value
            if self.prune:
                alpha = max(alpha, best_value)

        return best_column, best_value

    def _score_parallel(self, board: Board, agent: Mark, limit: int, bound: int) -> Dict[int, int]:
        columns = board.legal_columns()
        with ProcessPoolExecutor(max_workers=min(self.workers, len(columns))) as pool:
            futures = [pool.submit(_score_root_column, self, board, agent, column, limit, bound)
                       for column in columns]
            return dict(future.result() for future in futures)

    def _alphabeta(self, board: Board, to_move: Mark, depth: int, alpha: float, beta: float,
                   agent: Mark, limit: int, bound: int) -> float:
        """
        Minimax with alpha-beta pruning.

        Args:
            board: Position at this node (owned by this call)
            to_move: Mark that moves next at this node
            depth: Plies from the root
            alpha: Best value the maximizer can already guarantee
            beta: Best value the minimizer can already guarantee
            agent: Mark the search is choosing a move for
            limit: Depth at which positions are scored heuristically
            bound: Score bound from the evaluator

        Returns:
            The value of this node for ``agent``
        """
        self.nodes_evaluated += 1
        if self._abort is not None and self._abort():
            raise SearchAbortedError(f"Search aborted after {self.nodes_evaluated} nodes")

        if board.winner is not None:
            return self.terminal_value(board.winner, agent, depth, limit, bound)

        if board.is_full():
            return 0

        if depth >= limit:
            return self.evaluator.evaluate(board, agent)

        maximizing = to_move == agent
        best = -math.inf if maximizing else math.inf

        for column in board.legal_columns():
            child = board.copy()
            child.apply_play(to_move, column)
            value = self._alphabeta(child, to_move.other(), depth + 1, alpha, beta,
                                    agent, limit, bound)

            if maximizing:
                best = max(best, value)
                if self.prune:
                    if best >= beta:
                        self.cutoffs += 1
                        break
                    alpha = max(alpha, best)
            else:
                best = min(best, value)
                if self.prune:
                    if best <= alpha:
                        self.cutoffs += 1
                        break
                    beta = min(beta, best)

        return best


class AIPlayer:
    """
    An automated player: a mark plus the search parameters used for it.
    """

    def __init__(self, mark: Mark, search_limit: Optional[int] = None,
                 engine: Optional[SearchEngine] = None):
        """
        Initialize the player.

        Args:
            mark: The mark this player plays
            search_limit: Plies to search (None searches until the tree is exhausted)
            engine: Search engine to use (a default one is created otherwise)
        """
        if mark == Mark.EMPTY:
            raise ValueError("AIPlayer needs a player mark")
        if search_limit is not None:
            require_positive_int("search_limit", search_limit)
        self.mark = mark
        self.search_limit = search_limit
        self.engine = engine or SearchEngine()

    @property
    def nodes_evaluated(self) -> int:
        return self.engine.nodes_evaluated

    def choose_move(self, board: Board) -> int:
        """
        Play this player's move on ``board`` and return the column.

        With a time limit or abort hook on the engine the search deepens
        iteratively, and an expired budget still yields a move.
        """
        if self.engine.time_limit is None and self.engine.abort_check is None:
            return self.engine.choose_move(board, self.mark, self.search_limit)

        column = self.engine.iterative_best_column(board, self.mark, self.search_limit)
        board.apply_play(self.mark, column)
        return column

    def __repr__(self) -> str:
        return f"AIPlayer(mark={self.mark.name}, search_limit={self.search_limit})"
