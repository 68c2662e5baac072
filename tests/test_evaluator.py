"""
Tests for connectx.ai.evaluator.
"""

import pytest

from connectx.ai.evaluator import PositionEvaluator, board_lines, window_count, window_weight
from connectx.game.board import Board
from connectx.utils import Mark

from tests.helpers import play

X, O = Mark.ONE, Mark.TWO


@pytest.fixture
def evaluator():
    return PositionEvaluator()


class TestWindows:
    def test_weights_grow_geometrically(self):
        assert window_weight(0) == 0
        assert [window_weight(k) for k in range(1, 5)] == [1, 10, 100, 1000]

    def test_canonical_window_count(self):
        assert window_count(7, 6, 4) == 69

    def test_lines_cover_all_directions(self):
        lines = board_lines(7, 6, 4)
        # 6 rows, 7 columns, 6 diagonals each way
        assert len(lines) == 6 + 7 + 6 + 6
        assert all(len(line) >= 4 for line in lines)

    def test_degenerate_geometry_has_no_windows(self):
        assert board_lines(3, 3, 5) == ()
        assert window_count(3, 3, 5) == 0


class TestEvaluate:
    def test_empty_board_is_neutral(self, evaluator):
        assert evaluator.evaluate(Board(), X) == 0

    def test_center_mark_counts_more_windows_than_corner(self, evaluator):
        center = play(Board(), (X, 3))
        corner = play(Board(), (X, 0))
        assert evaluator.evaluate(center, X) == 7
        assert evaluator.evaluate(corner, X) == 3

    def test_opponent_windows_count_against(self, evaluator):
        b = play(Board(), (O, 3))
        assert evaluator.evaluate(b, X) == -7

    def test_perspective_is_antisymmetric(self, evaluator, make_position):
        for seed in range(5):
            b, _ = make_position(seed, 12)
            assert evaluator.evaluate(b, X) == -evaluator.evaluate(b, O)

    def test_mixed_windows_score_nothing(self, evaluator):
        # Only the horizontal windows through (0,0) and (0,1) touch both marks
        b = play(Board(4, 1, 4), (X, 0), (O, 1))
        assert evaluator.evaluate(b, X) == 0

    def test_near_complete_run_dominates(self, evaluator):
        three = play(Board(), (X, 0), (X, 1), (X, 2))
        spread = play(Board(), (X, 0), (X, 3), (X, 6))
        assert evaluator.evaluate(three, X) > evaluator.evaluate(spread, X)

    @pytest.mark.parametrize("geometry", [(7, 6, 4), (5, 4, 3), (9, 7, 5), (4, 4, 4), (3, 3, 5)])
    def test_incremental_matches_naive(self, evaluator, make_position, geometry):
        width, height, run_length = geometry
        for seed in range(6):
            b, _ = make_position(seed, seed * 3, width, height, run_length)
            for mark in (X, O):
                assert evaluator.evaluate(b, mark) == evaluator.evaluate_naive(b, mark)

    def test_degenerate_geometry_scores_zero(self, evaluator):
        b = play(Board(3, 3, 5), (X, 0), (O, 1), (X, 1))
        assert evaluator.evaluate(b, X) == 0
        assert evaluator.score_bound(b) == 1

    def test_score_bound_exceeds_every_score(self, evaluator, make_position):
        for seed in range(8):
            b, _ = make_position(seed, 20)
            bound = evaluator.score_bound(b)
            assert abs(evaluator.evaluate(b, X)) < bound

    def test_counts_evaluations(self, evaluator):
        evaluator.evaluate(Board(), X)
        evaluator.evaluate(Board(), O)
        assert evaluator.evaluations == 2
