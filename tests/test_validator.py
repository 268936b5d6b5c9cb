from datetime import datetime, timezone

import pytest

from lucky4.rules.validator import (
    ErrorCode,
    create_validation_error,
    sanitize_numbers,
    sanitize_player_name,
    validate_game_creation,
    validate_game_play,
    validate_game_playability,
    validate_game_status,
    validate_pagination,
    validate_player_name,
    validate_player_numbers,
)
from lucky4.state import GameState, GameStatus

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_player_name_rules():
    assert validate_player_name("John Doe").is_valid
    assert validate_player_name("  x  ").is_valid
    for bad in (None, "", "   ", 42):
        r = validate_player_name(bad)
        assert not r.is_valid and r.code == ErrorCode.VALIDATION_ERROR
    long = validate_player_name("a" * 51)
    assert not long.is_valid and "50" in long.error
    assert validate_player_name("a" * 50 + "   ").is_valid


def test_player_numbers_accepts_well_formed():
    r = validate_player_numbers([1, 2, 3, 4])
    assert r.is_valid and r.error is None and r.code is None
    assert validate_player_numbers((0, 9, 0, 9)).is_valid


@pytest.mark.parametrize("numbers,message", [
    ("1234", "list of integers"),
    (None, "list of integers"),
    ([1, 2, 3], "exactly 4"),
    ([1, 2, 3, 4, 5], "exactly 4"),
    ([1, 2, 3, 4.5], "list of integers"),
    ([1, 2, "3", 4], "list of integers"),
    ([1, 2, 3, 10], "between 0 and 9"),
    ([-1, 2, 3, 4], "between 0 and 9"),
])
def test_player_numbers_rejections(numbers, message):
    r = validate_player_numbers(numbers)
    assert not r.is_valid
    assert r.code == ErrorCode.VALIDATION_ERROR
    assert message in r.error


def test_player_numbers_checks_type_before_range():
    # each element is type-checked then range-checked; the first failing element decides
    assert "between" in validate_player_numbers([10, 1.5, 1, 1]).error
    assert "integers" in validate_player_numbers([1.5, 10, 1, 1]).error


def test_game_status():
    for s in ("active", "completed", "cancelled", GameStatus.ACTIVE):
        assert validate_game_status(s).is_valid
    assert not validate_game_status("paused").is_valid


def test_playability():
    active = GameState("amy", NOW)
    assert validate_game_playability(active).is_valid
    assert validate_game_playability(None).code == ErrorCode.GAME_NOT_FOUND
    done = GameState("amy", NOW, status=GameStatus.COMPLETED)
    assert validate_game_playability(done).code == ErrorCode.GAME_ALREADY_PLAYED
    gone = GameState("amy", NOW, status=GameStatus.CANCELLED)
    assert validate_game_playability(gone).code == ErrorCode.GAME_CANCELLED


@pytest.mark.parametrize("page,limit,expected", [
    (None, None, (1, 10, 0)),
    (3, 20, (3, 20, 40)),
    ("2", "5", (2, 5, 5)),
    (0, 0, (1, 10, 0)),
    (-4, -5, (1, 1, 0)),
    ("abc", 500, (1, 100, 0)),
    ("2.9", 7.8, (2, 7, 7)),
])
def test_pagination(page, limit, expected):
    r = validate_pagination(page, limit)
    assert r.is_valid
    assert (r.sanitized["page"], r.sanitized["limit"], r.sanitized["offset"]) == expected


def test_composite_validations():
    assert validate_game_creation({"player_name": "bo"}).is_valid
    assert not validate_game_creation({}).is_valid

    active = GameState("bo", NOW)
    assert validate_game_play({"player_numbers": [1, 2, 3, 4]}, active).is_valid
    assert validate_game_play({"player_numbers": [1, 2, 3, 4]}, None).code == ErrorCode.GAME_NOT_FOUND
    bad = validate_game_play({"player_numbers": [1, 2]}, active)
    assert bad.code == ErrorCode.VALIDATION_ERROR


def test_sanitizers():
    assert sanitize_player_name("  Jane  ") == "Jane"
    assert sanitize_player_name("x" * 80) == "x" * 50
    assert sanitize_player_name(None) == ""
    assert sanitize_numbers(["1", 2, "3x", 4.7]) == [1, 2, 3, 4]
    assert sanitize_numbers([1, "a", 2, 3, 4, 5]) == [1, 2, 3, 4]
    assert sanitize_numbers([1, 2, "a"]) is None
    assert sanitize_numbers("1234") is None


def test_create_validation_error():
    assert create_validation_error("nope") == {"success": False, "error": "nope", "code": "VALIDATION_ERROR"}
