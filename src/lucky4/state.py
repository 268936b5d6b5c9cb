from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional

from lucky4.config import DEFAULT_CONFIG, FullConfig
from lucky4.exceptions import InvalidGameRecord
from lucky4.generation.numbers import is_valid_number_sequence

class GameStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

@dataclass(frozen=True, slots=True)
class MatchDetail:
    position: int
    player_number: int
    lucky_number: int
    is_match: bool

@dataclass(frozen=True, slots=True)
class GameResult:
    player_numbers: tuple[int, ...]
    lucky_numbers: tuple[int, ...]
    matches: int
    score: int
    prize_tier: str
    is_winner: bool
    is_jackpot: bool
    message: str
    match_details: tuple[MatchDetail, ...]

@dataclass(frozen=True, slots=True)
class GameState:
    player_name: str
    created_at: datetime
    id: Optional[str] = None
    player_numbers: Optional[tuple[int, ...]] = None   # None until played
    lucky_numbers: Optional[tuple[int, ...]] = None    # None until played
    matches: int = 0
    score: int = 0
    status: GameStatus = GameStatus.ACTIVE
    played_at: Optional[datetime] = None
    result: Optional[GameResult] = None

    def __post_init__(self):
        if (self.player_numbers is None) != (self.lucky_numbers is None):
            raise ValueError("player_numbers and lucky_numbers must be set together")
        if self.player_numbers is not None and len(self.player_numbers) != len(self.lucky_numbers):
            raise ValueError("player_numbers and lucky_numbers differ in length")

    def is_active(self) -> bool:
        return self.status == GameStatus.ACTIVE

    def is_completed(self) -> bool:
        return self.status == GameStatus.COMPLETED

    def can_play(self) -> bool:
        return self.is_active()

@dataclass(frozen=True, slots=True)
class GameSummary:
    id: Optional[str]
    player_name: str
    status: GameStatus
    score: int
    matches: int
    is_completed: bool
    has_played: bool

# external camelCase key -> GameState attribute
RECORD_FIELDS = {
    "id": "id",
    "playerName": "player_name",
    "playerNumbers": "player_numbers",
    "luckyNumbers": "lucky_numbers",
    "matches": "matches",
    "score": "score",
    "status": "status",
    "createdAt": "created_at",
    "playedAt": "played_at",
}

def _parse_timestamp(value: Any, key: str) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError as e:
            raise InvalidGameRecord(f"{key}: not an ISO-8601 timestamp: {value!r}") from e
    raise InvalidGameRecord(f"{key}: unsupported timestamp type {type(value).__name__}")

def _parse_numbers(value: Any, key: str, cfg: FullConfig) -> Optional[tuple[int, ...]]:
    if value is None:
        return None
    if not is_valid_number_sequence(value, cfg):
        raise InvalidGameRecord(f"{key}: not a valid number sequence: {value!r}")
    return tuple(int(n) for n in value)

def _parse_count(value: Any, key: str) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError) as e:
        raise InvalidGameRecord(f"{key}: not an integer: {value!r}") from e

def game_state_from_record(record: Mapping[str, Any], cfg: FullConfig = DEFAULT_CONFIG) -> GameState:
    """
    Build a GameState from an external camelCase record.

    Numbers are only accepted on COMPLETED records; the result is rebuilt from
    them and must agree with the stored matches and score.
    """
    from lucky4.rules.engine import calculate_game_result  # avoid circular import
    from lucky4.rules.validator import validate_player_name

    unknown = set(record) - set(RECORD_FIELDS)
    if unknown:
        raise InvalidGameRecord(f"Unknown record fields: {sorted(unknown)}")
    name_check = validate_player_name(record.get("playerName"), cfg)
    if not name_check.is_valid:
        raise InvalidGameRecord(f"playerName: {name_check.error}")
    if record.get("createdAt") is None:
        raise InvalidGameRecord("createdAt is required")
    try:
        status = GameStatus(record.get("status", GameStatus.ACTIVE))
    except ValueError as e:
        raise InvalidGameRecord(f"status: unknown value {record.get('status')!r}") from e

    player_numbers = _parse_numbers(record.get("playerNumbers"), "playerNumbers", cfg)
    lucky_numbers = _parse_numbers(record.get("luckyNumbers"), "luckyNumbers", cfg)
    if (player_numbers is None) != (lucky_numbers is None):
        raise InvalidGameRecord("playerNumbers and luckyNumbers must both be present or both absent")
    matches = _parse_count(record.get("matches"), "matches")
    score = _parse_count(record.get("score"), "score")

    result = None
    if player_numbers is not None:
        if status != GameStatus.COMPLETED:
            raise InvalidGameRecord(f"A {status.value} game cannot carry numbers")
        result = calculate_game_result(player_numbers, lucky_numbers, cfg)
        if (matches, score) != (result.matches, result.score):
            raise InvalidGameRecord(
                f"matches/score {matches}/{score} disagree with the numbers ({result.matches}/{result.score})")

    return GameState(
        id=record.get("id"),
        player_name=record["playerName"].strip(),
        player_numbers=player_numbers,
        lucky_numbers=lucky_numbers,
        matches=matches,
        score=score,
        status=status,
        created_at=_parse_timestamp(record["createdAt"], "createdAt"),
        played_at=_parse_timestamp(record.get("playedAt"), "playedAt"),
        result=result,
    )

def game_state_to_record(state: GameState) -> dict[str, Any]:
    """
    Inverse of game_state_from_record; timestamps become ISO-8601 strings.
    `result` is not written: it is rebuilt from the numbers on the way back in.
    """
    out: dict[str, Any] = {}
    for key, attr in RECORD_FIELDS.items():
        value = getattr(state, attr)
        if isinstance(value, datetime):
            value = value.isoformat()
        elif isinstance(value, GameStatus):
            value = value.value
        elif isinstance(value, tuple):
            value = list(value)
        out[key] = value
    return out
