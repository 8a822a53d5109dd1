"""Game logger for detailed game replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from pydantic import BaseModel

from tongits.models.game_state import GameAction, GameState

from .formatters import format_card, format_cards, format_hands, format_melds


class GameLogConfig(BaseModel):
    """Configuration for game logging."""

    enabled: bool = False
    output_path: str = "game_log.jsonl"


class GameLogger:
    """Logger for game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    Action events mirror the engine's action log one-to-one, so a game can be
    replayed step by step from its initial hands.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        """Write an event to the log file.

        Args:
            event: Event dictionary to write as JSON.
        """
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_game_start(self, state: GameState) -> None:
        """Log game start with initial hands.

        Args:
            state: Freshly dealt game state.
        """
        self._write({
            "type": "game_start",
            "timestamp": datetime.now().isoformat(),
            "round": state.round_number,
            "players": [
                {"id": p.id, "name": p.name, "human": p.is_human}
                for p in state.players
            ],
            "hands": format_hands([p.hand for p in state.players]),
            "deck": len(state.deck),
            "first_player": state.current_player_index,
        })

    def log_action(self, round_number: int, action: GameAction) -> None:
        """Log a single committed action.

        Args:
            round_number: Round the action belongs to.
            action: Action as recorded by the engine.
        """
        record: dict[str, Any] = {
            "type": "action",
            "round": round_number,
            "kind": action.kind.value,
            "player": action.player,
            "details": action.details,
        }
        if action.card is not None:
            record["card"] = format_card(action.card)
        if action.cards is not None:
            record["cards"] = format_cards(action.cards)
        if action.from_discard is not None:
            record["from_discard"] = action.from_discard
        if action.target_player is not None:
            record["target"] = {
                "player": action.target_player,
                "meld": action.target_meld,
            }
        self._write(record)

    def log_game_end(self, state: GameState) -> None:
        """Log game end with results.

        Args:
            state: Final game state.
        """
        self._write({
            "type": "game_end",
            "round": state.round_number,
            "winner": state.winner.id if state.winner else None,
            "scores": {str(p.id): p.score for p in state.players},
            "consecutive_wins": {
                str(p.id): p.consecutive_wins for p in state.players
            },
            "melds": {str(p.id): format_melds(p.exposed_melds) for p in state.players},
        })
