"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from tongits.config import Config, GameConfig, load_config


class TestConfig:
    """Tests for Config defaults and loading."""

    def test_defaults(self):
        """Test the default table and bot settings."""
        config = load_config()

        assert config.game.player_names == ["You", "Bot 1", "Bot 2"]
        assert config.game.human_seat == 0
        assert config.game.seed is None
        assert config.bot.discard_draw_threshold == 0.2
        assert config.bot.excluded_sapaw_seats == [1]
        assert config.economy.entry_fee == 100
        assert config.economy.table_charge == 50
        assert config.logging.level == "INFO"
        assert not config.game_log.enabled

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test a missing path falls back to defaults."""
        assert load_config(tmp_path / "nope.yaml") == Config()

    def test_empty_file_uses_defaults(self, tmp_path):
        """Test an empty YAML file falls back to defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == Config()

    def test_load_yaml(self, tmp_path):
        """Test values are read from YAML and the rest default."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "game:\n"
            "  player_names: [Ana, Ben, Cy]\n"
            "  human_seat: null\n"
            "  seed: 7\n"
            "bot:\n"
            "  discard_draw_threshold: 0.5\n"
            "  excluded_sapaw_seats: []\n"
            "logging:\n"
            "  level: DEBUG\n"
        )

        config = load_config(str(path))

        assert config.game.player_names == ["Ana", "Ben", "Cy"]
        assert config.game.human_seat is None
        assert config.game.seed == 7
        assert config.bot.discard_draw_threshold == 0.5
        assert config.bot.excluded_sapaw_seats == []
        assert config.bot.turn_delay == 1.0
        assert config.logging.level == "DEBUG"

    def test_player_names_must_be_three(self):
        """Test the table always seats three players."""
        with pytest.raises(ValidationError):
            GameConfig(player_names=["Ana", "Ben"])
