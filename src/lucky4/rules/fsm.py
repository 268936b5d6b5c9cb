from __future__ import annotations
import logging
from dataclasses import replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence

from lucky4.config import DEFAULT_CONFIG, FullConfig
from lucky4.exceptions import GameRuleError, InvalidStateTransition, UnknownAction
from lucky4.generation.numbers import NumberGenerator
from lucky4.rules.engine import calculate_game_result
from lucky4.rules.validator import (
    ValidationResult,
    validate_game_creation,
    validate_game_playability,
    validate_player_numbers,
)
from lucky4.state import GameState, GameStatus, GameSummary

logger = logging.getLogger(__name__)

class Action(str, Enum):
    PLAY = "PLAY"
    COMPLETE = "COMPLETE"
    CANCEL = "CANCEL"

# COMPLETE is absent on purpose: it only runs as an administrative override.
TRANSITIONS: dict[GameStatus, frozenset[Action]] = {
    GameStatus.ACTIVE: frozenset({Action.PLAY, Action.CANCEL}),
    GameStatus.COMPLETED: frozenset(),
    GameStatus.CANCELLED: frozenset(),
}

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

def _raise_if_invalid(check: ValidationResult) -> None:
    if not check.is_valid:
        raise GameRuleError(check.error, check.code)

class GameStateManager:
    """
    Pure transitions over immutable GameState snapshots.

    Guarded path: transition_state checks PLAY and CANCEL against TRANSITIONS,
    and play_game runs its own playability check as well. complete_game and
    cancel_game called directly are unconditional administrative primitives.
    """

    def __init__(self, generator: Optional[NumberGenerator] = None, cfg: FullConfig = DEFAULT_CONFIG,
                 clock: Callable[[], datetime] = _utcnow):
        self.cfg = cfg
        self.generator = generator if generator is not None else NumberGenerator(cfg=cfg)
        self.clock = clock

    def create_game_state(self, player_name: str, game_id: Optional[str] = None) -> GameState:
        _raise_if_invalid(validate_game_creation({"player_name": player_name}, self.cfg))
        return GameState(id=game_id, player_name=player_name.strip(), created_at=self.clock())

    def play_game(self, s: GameState, player_numbers: Sequence[int]) -> GameState:
        _raise_if_invalid(validate_game_playability(s, self.cfg))
        _raise_if_invalid(validate_player_numbers(player_numbers, self.cfg))

        lucky = self.generator.generate_numbers()
        result = calculate_game_result(player_numbers, lucky, self.cfg)
        logger.info("Game %s played by %r: %d matches, score %d", s.id, s.player_name,
                    result.matches, result.score)
        return replace(
            s,
            player_numbers=result.player_numbers,
            lucky_numbers=result.lucky_numbers,
            matches=result.matches,
            score=result.score,
            status=GameStatus.COMPLETED,
            played_at=self.clock(),
            result=result,
        )

    def complete_game(self, s: GameState) -> GameState:
        return replace(s, status=GameStatus.COMPLETED, played_at=s.played_at or self.clock())

    def cancel_game(self, s: GameState) -> GameState:
        logger.info("Game %s cancelled (was %s)", s.id, s.status.value)
        return replace(s, status=GameStatus.CANCELLED)

    def validate_state_transition(self, s: GameState, action: Action | str) -> ValidationResult:
        try:
            action = Action(action)
        except ValueError:
            return ValidationResult(False, f"Unknown action: {action}")
        if action not in TRANSITIONS.get(s.status, frozenset()):
            return ValidationResult(False, f"Cannot perform {action.value} on game with status {s.status.value}")
        return ValidationResult(True)

    def transition_state(self, s: GameState, action: Action | str,
                         payload: Optional[Mapping[str, Any]] = None) -> GameState:
        try:
            action = Action(action)
        except ValueError:
            raise UnknownAction(action) from None
        payload = payload or {}

        if action is Action.COMPLETE:
            logger.warning("Administrative completion of game %s from status %s", s.id, s.status.value)
            return self.complete_game(s)

        if not self.validate_state_transition(s, action).is_valid:
            logger.warning("Rejected %s on game %s with status %s", action.value, s.id, s.status.value)
            raise InvalidStateTransition(action.value, s.status.value)
        if action is Action.PLAY:
            return self.play_game(s, payload.get("player_numbers"))
        return self.cancel_game(s)

    def get_game_summary(self, s: GameState) -> GameSummary:
        return GameSummary(
            id=s.id,
            player_name=s.player_name,
            status=s.status,
            score=s.score,
            matches=s.matches,
            is_completed=s.status == GameStatus.COMPLETED,
            has_played=s.player_numbers is not None,
        )
