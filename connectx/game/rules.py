"""
rules.py - Game session management for ConnectX

ConnectXGame owns a Board, tracks whose turn it is, applies human plays,
asks an AIPlayer for automated plays, and keeps snapshots for undo.
"""

from typing import List, Optional

from connectx.debug import debug
from connectx.config import BoardConfig
from connectx.utils import Mark, GameResult, InvalidStateError
from connectx.game.board import Board


class ConnectXGame:
    """
    High-level ConnectX game manager.

    The board is only ever changed through Board.apply_play, either directly
    for a human move or through the search engine for an automated move.
    """

    def __init__(self, config: Optional[BoardConfig] = None, first: Mark = Mark.ONE):
        """
        Initialize a new game.

        Args:
            config: Board geometry (canonical 7x6, four in a row by default)
            first: Mark that moves first
        """
        if first == Mark.EMPTY:
            raise ValueError("The first player must be ONE or TWO")
        self.config = config or BoardConfig()
        self.first = first
        debug.debug(f"Initializing ConnectXGame {self.config}", "game")
        self.reset()

    def reset(self) -> None:
        """Reset the game to its initial state."""
        self.board = self.config.create_board()
        self.current_player = self.first
        self.history: List[Board] = []

    def _commit(self, snapshot: Board) -> None:
        self.history.append(snapshot)
        if self.board.is_terminal():
            debug.info(f"Game over: {self.board.game_result.name}", "game")
        else:
            self.current_player = self.current_player.other()

    def make_move(self, column: int) -> int:
        """
        Play a column for the current player.

        Returns:
            The row the mark landed on

        Raises:
            IllegalMoveError: if the column cannot be played
        """
        snapshot = self.board.copy()
        row = self.board.apply_play(self.current_player, column)
        debug.debug(f"{self.current_player.name} plays column {column}", "game")
        self._commit(snapshot)
        return row

    def play_ai_move(self, player) -> int:
        """
        Let an automated player make the current move.

        Args:
            player: An AIPlayer whose mark must be the current player's

        Returns:
            The column the player chose

        Raises:
            InvalidStateError: if it is not the player's turn or the game is over
        """
        if player.mark != self.current_player:
            raise InvalidStateError(f"It is {self.current_player.name}'s turn, not {player.mark.name}'s")
        snapshot = self.board.copy()
        column = player.choose_move(self.board)
        self._commit(snapshot)
        return column

    def undo_move(self) -> bool:
        """
        Undo the last move.

        Returns:
            True if a move was undone, False if there was nothing to undo
        """
        if not self.history:
            debug.debug("No moves to undo", "game")
            return False

        self.board = self.history.pop()
        mover, _ = self.board.moves[-1] if self.board.moves else (None, None)
        self.current_player = mover.other() if mover is not None else self.first
        return True

    def is_game_over(self) -> bool:
        return self.board.is_terminal()

    def get_result(self) -> GameResult:
        return self.board.game_result

    def get_winner(self) -> Optional[Mark]:
        return self.board.winner

    def get_current_player(self) -> Mark:
        return self.current_player

    def get_valid_moves(self) -> List[int]:
        return self.board.legal_columns()

    def render(self) -> str:
        return self.board.render()
