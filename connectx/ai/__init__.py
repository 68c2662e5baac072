"""
connectx/ai/__init__.py - Automated opponent for ConnectX

This package provides the heuristic position evaluator and the alpha-beta
search engine that chooses moves for the automated player.
"""

from connectx.ai.evaluator import PositionEvaluator
from connectx.ai.minimax import SearchEngine, AIPlayer, deadline_check

__all__ = ['PositionEvaluator', 'SearchEngine', 'AIPlayer', 'deadline_check']
