"""
connectx - Generalized Connect Four with an alpha-beta search opponent

This package provides a board for any width, height and run length, a
heuristic position evaluator, and a minimax search engine with alpha-beta
pruning that picks moves for the automated player.
"""

from connectx.utils import (Mark, GameResult, ConnectXError, IllegalMoveError,
                            InvalidStateError, BoardConfigError, SearchAbortedError)
from connectx.game.board import Board
from connectx.ai.evaluator import PositionEvaluator
from connectx.ai.minimax import SearchEngine, AIPlayer

# Version number
__version__ = '0.1.0'

__all__ = ['Board', 'Mark', 'GameResult', 'PositionEvaluator', 'SearchEngine', 'AIPlayer',
           'ConnectXError', 'IllegalMoveError', 'InvalidStateError', 'BoardConfigError',
           'SearchAbortedError']
