"""
connectx.game - Board state and game sessions for ConnectX

This package contains the board representation with its legality and win
rules, and the session manager that alternates turns on a board.
"""

from connectx.game.board import Board
from connectx.game.rules import ConnectXGame

__all__ = ['Board', 'ConnectXGame']
