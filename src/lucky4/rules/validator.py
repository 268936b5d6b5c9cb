"""
Input and lifecycle validation for Lucky 4.

Every validator returns a ValidationResult and never raises; the state
manager turns failures into GameRuleError where a transition needs them.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

import numpy as np

from lucky4.config import DEFAULT_CONFIG, FullConfig
from lucky4.constants import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT
from lucky4.state import GameState, GameStatus

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    GAME_ALREADY_PLAYED = "GAME_ALREADY_PLAYED"
    GAME_CANCELLED = "GAME_CANCELLED"

@dataclass(frozen=True, slots=True)
class ValidationResult:
    is_valid: bool
    error: Optional[str] = None
    code: Optional[ErrorCode] = None
    sanitized: Optional[dict[str, int]] = None

OK = ValidationResult(True)

def _fail(cfg: FullConfig, message_key: str, code: ErrorCode = ErrorCode.VALIDATION_ERROR) -> ValidationResult:
    return ValidationResult(False, cfg.message(message_key), code)

def _is_int(n) -> bool:
    return isinstance(n, (int, np.integer)) and not isinstance(n, bool)

def parse_int(value: Any) -> Optional[int]:
    """Leading-integer parse of the value's text ("12.7" -> 12, "7abc" -> 7); None if there is none."""
    if value is None or isinstance(value, bool):
        return None
    m = _LEADING_INT.match(str(value))
    return int(m.group(1)) if m else None

def validate_player_name(name, cfg: FullConfig = DEFAULT_CONFIG) -> ValidationResult:
    if not name or not isinstance(name, str):
        return _fail(cfg, "invalid_player_name")
    trimmed = name.strip()
    if not trimmed:
        return _fail(cfg, "invalid_player_name")
    if len(trimmed) > cfg.max_player_name_length:
        return _fail(cfg, "player_name_too_long")
    return OK

def validate_player_numbers(numbers, cfg: FullConfig = DEFAULT_CONFIG) -> ValidationResult:
    if not isinstance(numbers, (list, tuple)):
        return _fail(cfg, "invalid_number_type")
    if len(numbers) != cfg.numbers.numbers_per_game:
        return _fail(cfg, "invalid_number_count")
    for n in numbers:
        if not _is_int(n):
            return _fail(cfg, "invalid_number_type")
        if n < cfg.numbers.min_value or n > cfg.numbers.max_value:
            return _fail(cfg, "invalid_number_range")
    return OK

def validate_game_status(status, cfg: FullConfig = DEFAULT_CONFIG) -> ValidationResult:
    try:
        GameStatus(status)
    except ValueError:
        return _fail(cfg, "invalid_game_status")
    return OK

def validate_game_playability(game: Optional[GameState], cfg: FullConfig = DEFAULT_CONFIG) -> ValidationResult:
    if game is None:
        return _fail(cfg, "game_not_found", ErrorCode.GAME_NOT_FOUND)
    if game.status == GameStatus.COMPLETED:
        return _fail(cfg, "game_already_played", ErrorCode.GAME_ALREADY_PLAYED)
    if game.status == GameStatus.CANCELLED:
        return _fail(cfg, "game_cancelled", ErrorCode.GAME_CANCELLED)
    return OK

def validate_pagination(page=None, limit=None) -> ValidationResult:
    page = max(1, parse_int(page) or DEFAULT_PAGE)
    limit = max(1, min(MAX_LIMIT, parse_int(limit) or DEFAULT_LIMIT))
    return ValidationResult(True, sanitized={"page": page, "limit": limit, "offset": (page - 1) * limit})

def validate_game_creation(data: Mapping[str, Any], cfg: FullConfig = DEFAULT_CONFIG) -> ValidationResult:
    return validate_player_name(data.get("player_name"), cfg)

def validate_game_play(data: Mapping[str, Any], game: Optional[GameState],
                       cfg: FullConfig = DEFAULT_CONFIG) -> ValidationResult:
    playable = validate_game_playability(game, cfg)
    if not playable.is_valid:
        return playable
    return validate_player_numbers(data.get("player_numbers"), cfg)

def sanitize_player_name(name, cfg: FullConfig = DEFAULT_CONFIG) -> str:
    if not isinstance(name, str):
        return ""
    return name.strip()[:cfg.max_player_name_length]

def sanitize_numbers(numbers, cfg: FullConfig = DEFAULT_CONFIG) -> Optional[list[int]]:
    if not isinstance(numbers, (list, tuple)):
        return None
    parsed = [p for p in (parse_int(n) for n in numbers) if p is not None]
    parsed = parsed[:cfg.numbers.numbers_per_game]
    if len(parsed) != cfg.numbers.numbers_per_game:
        return None
    return parsed

def create_validation_error(message: str, code: ErrorCode = ErrorCode.VALIDATION_ERROR) -> dict[str, Any]:
    return {"success": False, "error": message, "code": code.value}
