"""Tests for the text client command handling."""

import random

import pytest

from tongits.game.engine import GameEngine
from tongits.main import HELP_TEXT, apply_command


@pytest.fixture
def engine():
    return GameEngine(rng=random.Random(42))


class TestApplyCommand:
    """Tests for apply_command."""

    def test_draw_and_discard(self, engine):
        """Test d draws and x discards."""
        assert apply_command(engine, "d")
        assert engine.state.has_drawn_this_turn

        assert apply_command(engine, "x 0")
        assert engine.state.current_player_index == 1

    def test_quit(self, engine):
        """Test q asks to stop."""
        assert apply_command(engine, "q") is False

    def test_blank_line(self, engine):
        """Test an empty line does nothing."""
        before = engine.state
        assert apply_command(engine, "   ")
        assert engine.state is before

    def test_rejected_move(self, engine, capsys):
        """Test a rejected move is reported."""
        apply_command(engine, "c")
        assert "Move not allowed" in capsys.readouterr().out

    def test_unknown_command_prints_help(self, engine, capsys):
        """Test unknown commands print the help text."""
        apply_command(engine, "z")
        assert HELP_TEXT in capsys.readouterr().out

    def test_non_numeric_arguments(self, engine, capsys):
        """Test card arguments must be numbers."""
        before = engine.state
        apply_command(engine, "m a b c")

        assert engine.state is before
        assert "numbers" in capsys.readouterr().out
