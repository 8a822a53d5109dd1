"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator


class GameConfig(BaseModel):
    """Table configuration.

    The table size and hand size are fixed by the rules and are not
    configurable; only seating and randomness are.
    """

    player_names: list[str] = ["You", "Bot 1", "Bot 2"]
    human_seat: int | None = 0  # None = every seat is a bot
    seed: int | None = None

    @field_validator("player_names")
    @classmethod
    def _three_names(cls, names: list[str]) -> list[str]:
        if len(names) != 3:
            raise ValueError(f"Exactly 3 player names required, got {len(names)}")
        return names


class BotConfig(BaseModel):
    """Bot decision configuration."""

    discard_draw_threshold: float = 0.2
    excluded_sapaw_seats: list[int] = [1]  # Seats the bot never extends
    turn_delay: float = 1.0  # Seconds between bot turns (driver pacing only)


class EconomyConfig(BaseModel):
    """Stored token amounts (no settlement is performed)."""

    entry_fee: int = 100
    table_charge: int = 50


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    show_hands: bool = False


class GameLogFileConfig(BaseModel):
    """Game log (JSONL) configuration."""

    enabled: bool = False
    output_path: str = "logs"  # Directory; filename is generated per session


class Config(BaseModel):
    """Root configuration."""

    game: GameConfig = GameConfig()
    bot: BotConfig = BotConfig()
    economy: EconomyConfig = EconomyConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogFileConfig = GameLogFileConfig()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
