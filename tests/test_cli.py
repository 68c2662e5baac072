"""
Tests for the command-line interface and the debug manager.
"""

import logging

import pytest

from connectx.debug import DebugManager, DebugLevel
from connectx.interfaces.cli import main, parse_columns


class TestCLI:
    def test_analyze_prints_scores(self, capsys):
        assert main(['analyze', '--moves', '3,3,4', '--depth', '2']) == 0
        out = capsys.readouterr().out
        assert "TWO to move" in out
        assert "column 0:" in out
        assert "Best column:" in out

    def test_analyze_finished_position(self, capsys):
        assert main(['analyze', '--moves', '0,6,1,6,2,6,3', '--depth', '2']) == 0
        assert "PLAYER_ONE_WIN" in capsys.readouterr().out

    def test_bad_geometry_reports_error(self, capsys):
        assert main(['analyze', '--width', '0']) == 1
        assert "Error" in capsys.readouterr().out

    def test_illegal_move_list_reports_error(self, capsys):
        assert main(['analyze', '--moves', '9']) == 1
        assert "Column 9" in capsys.readouterr().out

    def test_unparseable_moves_exit(self):
        with pytest.raises(SystemExit):
            main(['analyze', '--moves', 'a,b'])

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_play_quit(self, monkeypatch, capsys):
        monkeypatch.setattr('builtins.input', lambda prompt: 'q')
        assert main(['play', '--depth', '2']) == 0
        assert "Quitting game." in capsys.readouterr().out

    def test_play_with_time_limit_still_moves(self, monkeypatch, capsys):
        monkeypatch.setattr('builtins.input', lambda prompt: 'q')
        assert main(['play', '--ai-first', '--depth', '8', '--time-limit', '0.05']) == 0
        out = capsys.readouterr().out
        assert "AI plays column" in out
        assert "Error" not in out

    def test_benchmark_with_time_limit(self, capsys):
        assert main(['benchmark', '--width', '4', '--height', '4', '--run-length', '3',
                     '--depth', '8', '--time-limit', '0.01']) == 0
        assert "Played" in capsys.readouterr().out

    def test_play_full_game_against_engine(self, monkeypatch, capsys):
        moves = iter(['x', '0', 'u', '0', '0', '0', '0', '0', '0', '0'])
        monkeypatch.setattr('builtins.input', lambda prompt: next(moves, 'q'))
        assert main(['play', '--width', '3', '--height', '3', '--run-length', '3', '--depth', '3']) == 0
        out = capsys.readouterr().out
        assert "Move undone." in out
        assert "AI plays column" in out

    def test_benchmark(self, capsys):
        assert main(['benchmark', '--width', '4', '--height', '4', '--run-length', '3',
                     '--depth', '2']) == 0
        assert "Played" in capsys.readouterr().out

    def test_parse_columns(self):
        assert parse_columns("3, 3,4") == [3, 3, 4]
        assert parse_columns("") == []


class TestDebugManager:
    def test_component_filter(self, caplog):
        manager = DebugManager("connectx.test.filter")
        manager.configure(level=DebugLevel.DEBUG, components=["search"])
        with caplog.at_level(logging.DEBUG, logger="connectx.test.filter"):
            manager.debug("board message", "board")
            manager.debug("search message", "search")
        assert "[search] search message" in caplog.text
        assert "board message" not in caplog.text

    def test_level_threshold(self, caplog):
        manager = DebugManager("connectx.test.level")
        manager.configure(level=DebugLevel.WARNING)
        with caplog.at_level(logging.DEBUG, logger="connectx.test.level"):
            manager.info("hidden")
            manager.warning("shown")
        assert "shown" in caplog.text
        assert "hidden" not in caplog.text

    def test_trace_gate(self):
        manager = DebugManager("connectx.test.trace")
        manager.configure(level=DebugLevel.DEBUG)
        assert not manager.is_tracing()
        manager.configure(level=DebugLevel.TRACE)
        assert manager.is_tracing()

    def test_timers(self):
        manager = DebugManager("connectx.test.timer")
        assert manager.end_timer("missing") is None
        manager.start_timer("work")
        assert manager.end_timer("work") >= 0.0

    def test_set_from_string(self):
        manager = DebugManager("connectx.test.string")
        manager.set_from_string("trace")
        assert manager.level == DebugLevel.TRACE
        manager.set_from_string("bogus")
        assert manager.level == DebugLevel.TRACE

    def test_log_file(self, tmp_path):
        manager = DebugManager("connectx.test.file")
        path = tmp_path / "connectx.log"
        manager.configure(level=DebugLevel.INFO, log_file=str(path))
        manager.info("to file", "cli")
        manager.configure(log_file="")
        assert "[cli] to file" in path.read_text()
