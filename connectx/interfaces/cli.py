"""
cli.py - Command-line interface for ConnectX

This module provides a CLI for playing against the search engine, analyzing
positions built from a list of columns, and benchmarking engine self-play.
"""

import argparse
import sys
from typing import List, Optional

from connectx.debug import debug
from connectx.config import BoardConfig, SearchConfig
from connectx.utils import (DEFAULT_WIDTH, DEFAULT_HEIGHT, DEFAULT_RUN_LENGTH,
                            Mark, ConnectXError, SearchAbortedError)
from connectx.game.board import Board
from connectx.game.rules import ConnectXGame
from connectx.ai.minimax import AIPlayer

# Special return codes from get_human_move
QUIT, UNDO, RESTART = -1, -2, -3


def parse_columns(text: str) -> List[int]:
    """Parse a comma-separated list of columns such as "3,3,4"."""
    text = text.strip()
    if not text:
        return []
    try:
        return [int(part) for part in text.split(',')]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid column list: {text!r}")


class SimpleCLI:
    """Simple command-line interface for ConnectX."""

    def __init__(self):
        self.args = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(prog='connectx', description='ConnectX CLI')
        parser.add_argument('--debug-level', default='warning',
                            choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                            help='Logging level')
        parser.add_argument('--log-file', default=None, help='Also write logs to this file')

        board_args = argparse.ArgumentParser(add_help=False)
        board_args.add_argument('--width', type=int, default=DEFAULT_WIDTH, help='Board width')
        board_args.add_argument('--height', type=int, default=DEFAULT_HEIGHT, help='Board height')
        board_args.add_argument('--run-length', type=int, default=DEFAULT_RUN_LENGTH,
                                help='Marks in a row needed to win')
        board_args.add_argument('--depth', type=int, default=6,
                                help='Search depth in plies (0 searches the whole tree)')
        board_args.add_argument('--workers', type=int, default=1,
                                help='Processes used to score root columns')
        board_args.add_argument('--time-limit', type=float, default=None,
                                help='Seconds per engine move; the deepest finished search is played')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', parents=[board_args],
                                            help='Play a game against the engine')
        play_parser.add_argument('--ai-first', action='store_true', help='Let the engine move first')

        analyze_parser = subparsers.add_parser('analyze', parents=[board_args],
                                               help='Score every column of a position')
        analyze_parser.add_argument('--moves', type=parse_columns, default=[],
                                    help='Comma-separated columns played so far, first player first')

        benchmark_parser = subparsers.add_parser('benchmark', parents=[board_args],
                                                 help='Time engine self-play')
        benchmark_parser.add_argument('--games', type=int, default=1, help='Number of games to play')

        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        self.args = self.build_parser().parse_args(argv)
        debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI and return a process exit code."""
        if not self.args:
            self.parse_args(argv)

        commands = {
            'play': self.play_game,
            'analyze': self.analyze,
            'benchmark': self.benchmark,
        }
        command = commands.get(self.args.command)
        if command is None:
            print("Please specify a command. Use --help for options.")
            return 1

        try:
            command()
        except ConnectXError as e:
            debug.error(str(e), "cli")
            print(f"Error: {e}")
            return 1
        return 0

    def _setup(self):
        board_config = BoardConfig.from_args(self.args)
        search_config = SearchConfig.from_args(self.args)
        return board_config, search_config

    def play_game(self) -> None:
        """Play a game interactively against the engine."""
        board_config, search_config = self._setup()
        human = Mark.TWO if self.args.ai_first else Mark.ONE
        ai = AIPlayer(human.other(), search_config.depth, search_config.create_engine())
        game = ConnectXGame(board_config)

        print("Starting a new ConnectX game!")
        print(f"Enter a column number (0-{board_config.width - 1}) to play.")
        print("Other commands: 'q' to quit, 'u' to undo, 'r' to restart.")
        print(game.render())

        while not game.is_game_over():
            if game.get_current_player() == ai.mark:
                print("AI is thinking...")
                column = game.play_ai_move(ai)
                print(f"AI plays column {column} ({ai.nodes_evaluated} nodes)")
                print(game.render())
                continue

            move = self.get_human_move(board_config.width)
            if move is None:
                continue
            if move == QUIT:
                print("Quitting game.")
                return
            if move == UNDO:
                # Take back the engine's reply too so it is the human's turn again
                undone = game.undo_move()
                while undone and game.get_current_player() != human and game.undo_move():
                    pass
                print("Move undone." if undone else "No moves to undo.")
                print(game.render())
                continue
            if move == RESTART:
                game.reset()
                print("Game restarted.")
                print(game.render())
                continue

            try:
                game.make_move(move)
            except ConnectXError as e:
                print(f"Invalid move: {e}")
                continue
            print(game.render())

        print("Game over!")
        winner = game.get_winner()
        if winner == human:
            print("You win! Congratulations!")
        elif winner == ai.mark:
            print("AI wins! Better luck next time.")
        else:
            print("It's a draw!")

    def get_human_move(self, width: int) -> Optional[int]:
        """
        Get a move from human player input.

        Returns:
            Column index, or special command code, or None if input was invalid
        """
        user_input = input(f"Your move (columns 0-{width - 1}, q/u/r): ").strip().lower()

        if user_input == 'q':
            return QUIT
        elif user_input == 'u':
            return UNDO
        elif user_input == 'r':
            return RESTART

        try:
            return int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or special command.")
            return None

    def analyze(self) -> None:
        """Print the scores the engine assigns to each column of a position."""
        board_config, search_config = self._setup()
        board = Board.from_moves(self.args.moves, board_config.width,
                                 board_config.height, board_config.run_length)
        mark = Mark.ONE if len(board.moves) % 2 == 0 else Mark.TWO
        print(board.render())

        if board.is_terminal():
            print(f"Position is finished: {board.game_result.name}")
            return

        engine = search_config.create_engine()
        print(f"{mark.name} to move, depth {search_config.depth or 'unbounded'}")
        try:
            scores = engine.score_moves(board, mark, search_config.depth)
        except SearchAbortedError:
            print("  column scores did not finish within the time limit")
        else:
            for column, score in sorted(scores.items()):
                print(f"  column {column}: {score}")
        best = engine.iterative_best_column(board, mark, search_config.depth)
        print(f"Best column: {best} ({engine.nodes_evaluated} nodes, {engine.cutoffs} cutoffs)")

    def benchmark(self) -> None:
        """Time engine self-play games."""
        board_config, search_config = self._setup()
        print(f"Running {self.args.games} self-play game(s) at depth {search_config.depth}...")

        total_moves = 0
        total_nodes = 0
        debug.start_timer("benchmark")
        for _ in range(self.args.games):
            board = board_config.create_board()
            players = [AIPlayer(Mark.ONE, search_config.depth, search_config.create_engine()),
                       AIPlayer(Mark.TWO, search_config.depth, search_config.create_engine())]
            turn = 0
            while not board.is_terminal():
                player = players[turn % 2]
                player.choose_move(board)
                total_nodes += player.nodes_evaluated
                turn += 1
            total_moves += turn
            print(f"  {board.game_result.name} after {turn} moves")
        elapsed = debug.end_timer("benchmark", "cli") or 0.0

        print(f"Played {total_moves} moves in {elapsed:.3f} seconds "
              f"({total_nodes} nodes, {elapsed / max(total_moves, 1) * 1000:.3f} ms per move)")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
