"""
Tests for connectx.game.rules and connectx.config.
"""

import argparse

import pytest

from connectx.ai.minimax import AIPlayer
from connectx.config import BoardConfig, SearchConfig
from connectx.game.rules import ConnectXGame
from connectx.utils import Mark, GameResult, IllegalMoveError, InvalidStateError, BoardConfigError

X, O = Mark.ONE, Mark.TWO


class TestConnectXGame:
    def test_turns_alternate(self):
        game = ConnectXGame()
        assert game.get_current_player() == X
        game.make_move(3)
        assert game.get_current_player() == O
        game.make_move(3)
        assert game.board.moves == [(X, 3), (O, 3)]

    def test_second_player_can_start(self):
        game = ConnectXGame(first=O)
        game.make_move(0)
        assert game.board.cell(0, 0) == O

    def test_win_ends_game(self):
        game = ConnectXGame()
        for column in [0, 6, 1, 6, 2, 6, 3]:
            game.make_move(column)
        assert game.is_game_over()
        assert game.get_winner() == X
        assert game.get_result() == GameResult.PLAYER_ONE_WIN
        assert game.get_valid_moves() == []
        with pytest.raises(IllegalMoveError):
            game.make_move(4)

    def test_illegal_move_keeps_turn(self):
        game = ConnectXGame(BoardConfig(3, 2, 3))
        game.make_move(0)
        game.make_move(0)
        with pytest.raises(IllegalMoveError):
            game.make_move(0)
        assert game.get_current_player() == X
        assert len(game.history) == 2

    def test_undo_restores_board_and_turn(self):
        game = ConnectXGame()
        game.make_move(3)
        game.make_move(4)
        assert game.undo_move()
        assert game.board.moves == [(X, 3)]
        assert game.get_current_player() == O
        assert game.undo_move()
        assert game.board.moves == []
        assert game.get_current_player() == X
        assert not game.undo_move()

    def test_undo_after_win_reopens_game(self):
        game = ConnectXGame()
        for column in [0, 6, 1, 6, 2, 6, 3]:
            game.make_move(column)
        game.undo_move()
        assert not game.is_game_over()
        assert game.get_current_player() == X

    def test_ai_move(self):
        game = ConnectXGame()
        game.make_move(3)
        column = game.play_ai_move(AIPlayer(O, search_limit=2))
        assert game.board.moves[-1] == (O, column)
        assert game.get_current_player() == X

    def test_ai_out_of_turn(self):
        game = ConnectXGame()
        with pytest.raises(InvalidStateError):
            game.play_ai_move(AIPlayer(O, search_limit=2))

    def test_engine_self_play_finishes(self):
        game = ConnectXGame(BoardConfig(4, 4, 3))
        players = {X: AIPlayer(X, search_limit=3), O: AIPlayer(O, search_limit=3)}
        while not game.is_game_over():
            game.play_ai_move(players[game.get_current_player()])
        assert game.board.is_terminal()

    def test_reset(self):
        game = ConnectXGame()
        game.make_move(1)
        game.reset()
        assert game.board.moves == []
        assert game.history == []
        assert game.get_current_player() == X

    def test_empty_first_player_rejected(self):
        with pytest.raises(ValueError):
            ConnectXGame(first=Mark.EMPTY)


class TestConfig:
    def test_board_config_defaults(self):
        board = BoardConfig().create_board()
        assert (board.width, board.height, board.run_length) == (7, 6, 4)

    def test_board_config_validates(self):
        with pytest.raises(BoardConfigError):
            BoardConfig(width=0)

    def test_search_config_validates(self):
        with pytest.raises(BoardConfigError):
            SearchConfig(depth=-1)
        with pytest.raises(BoardConfigError):
            SearchConfig(time_limit=0)

    def test_search_config_from_args(self):
        args = argparse.Namespace(depth=0, workers=2, time_limit=1.5)
        config = SearchConfig.from_args(args)
        assert config.depth is None
        engine = config.create_engine()
        assert engine.workers == 2
        assert engine.time_limit == 1.5
