from __future__ import annotations
from pydantic import BaseModel, model_validator
from typing import List, Optional
import yaml

from lucky4.constants import MAX_PLAYER_NAME_LENGTH, MAX_VALUE, MIN_VALUE, NUMBERS_PER_GAME

class NumberCfg(BaseModel):
    min_value: int = MIN_VALUE
    max_value: int = MAX_VALUE
    numbers_per_game: int = NUMBERS_PER_GAME

    @model_validator(mode="after")
    def _check_range(self) -> "NumberCfg":
        if self.max_value < self.min_value:
            raise ValueError(f"max_value {self.max_value} is below min_value {self.min_value}")
        if self.numbers_per_game < 1:
            raise ValueError("numbers_per_game must be at least 1")
        return self

    @property
    def total_possible_numbers(self) -> int:
        return self.max_value - self.min_value + 1

class PrizeTierCfg(BaseModel):
    matches: int
    score: int
    prize_tier: str
    message: str

def _default_prizes() -> List[PrizeTierCfg]:
    return [
        PrizeTierCfg(matches=4, score=1000, prize_tier="JACKPOT",
                     message="JACKPOT! All numbers matched!"),
        PrizeTierCfg(matches=3, score=100, prize_tier="MAJOR",
                     message="Amazing! You matched 3 numbers!"),
        PrizeTierCfg(matches=2, score=20, prize_tier="MINOR",
                     message="Nice! You matched 2 numbers!"),
        PrizeTierCfg(matches=1, score=5, prize_tier="CONSOLATION",
                     message="You matched 1 number."),
        PrizeTierCfg(matches=0, score=0, prize_tier="NONE",
                     message="No matches this time. Better luck next game!"),
    ]

MESSAGE_PLACEHOLDERS = frozenset({"max_length", "count", "min_value", "max_value"})

class MessagesCfg(BaseModel):
    invalid_player_name: str = "Player name is required"
    player_name_too_long: str = "Player name must be {max_length} characters or less"
    invalid_number_type: str = "Numbers must be a list of integers"
    invalid_number_count: str = "You must select exactly {count} numbers"
    invalid_number_range: str = "Each number must be between {min_value} and {max_value}"
    invalid_game_status: str = "Invalid game status"
    game_not_found: str = "Game not found"
    game_already_played: str = "This game has already been played"
    game_cancelled: str = "This game has been cancelled"

    @model_validator(mode="after")
    def _check_placeholders(self) -> "MessagesCfg":
        for name, template in self.model_dump().items():
            try:
                template.format(**{k: 0 for k in MESSAGE_PLACEHOLDERS})
            except (KeyError, IndexError, AttributeError, ValueError) as e:
                raise ValueError(
                    f"message {name!r} may only use the placeholders {sorted(MESSAGE_PLACEHOLDERS)}: {e}") from e
        return self

class FullConfig(BaseModel):
    seed: Optional[int] = None
    max_player_name_length: int = MAX_PLAYER_NAME_LENGTH
    numbers: NumberCfg = NumberCfg()
    prizes: List[PrizeTierCfg] = _default_prizes()
    messages: MessagesCfg = MessagesCfg()

    @model_validator(mode="after")
    def _check_prize_table(self) -> "FullConfig":
        counts = sorted(p.matches for p in self.prizes)
        expected = list(range(self.numbers.numbers_per_game + 1))
        if counts != expected:
            raise ValueError(f"prize table must define one tier per match count {expected}, got {counts}")
        return self

    def tier_for(self, matches: int) -> PrizeTierCfg:
        for tier in self.prizes:
            if tier.matches == matches:
                return tier
        raise KeyError(f"No prize tier for {matches} matches")

    def message(self, key: str) -> str:
        """User-facing message with the configured limits filled in."""
        template = getattr(self.messages, key)
        return template.format(
            max_length=self.max_player_name_length,
            count=self.numbers.numbers_per_game,
            min_value=self.numbers.min_value,
            max_value=self.numbers.max_value,
        )

DEFAULT_CONFIG = FullConfig()

def load_config(path: str) -> FullConfig:
    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}
    return FullConfig.model_validate(raw)
