from pathlib import Path

import pytest
from pydantic import ValidationError

from lucky4.config import DEFAULT_CONFIG, FullConfig, NumberCfg, load_config


def test_defaults():
    assert DEFAULT_CONFIG.numbers.total_possible_numbers == 10
    assert DEFAULT_CONFIG.tier_for(4).prize_tier == "JACKPOT"
    assert DEFAULT_CONFIG.message("invalid_number_count") == "You must select exactly 4 numbers"


def test_load_yaml(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text(
        "seed: 3\n"
        "numbers:\n  min_value: 1\n  max_value: 6\n  numbers_per_game: 2\n"
        "prizes:\n"
        "  - {matches: 2, score: 50, prize_tier: TOP, message: top}\n"
        "  - {matches: 1, score: 5, prize_tier: MID, message: mid}\n"
        "  - {matches: 0, score: 0, prize_tier: NONE, message: none}\n"
    )
    cfg = load_config(str(p))
    assert cfg.seed == 3
    assert cfg.numbers.total_possible_numbers == 6
    assert cfg.tier_for(2).score == 50


def test_empty_yaml_gives_defaults(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("")
    assert load_config(str(p)) == FullConfig()


def test_invalid_configs():
    with pytest.raises(ValidationError):
        NumberCfg(min_value=5, max_value=1)
    with pytest.raises(ValidationError):
        FullConfig(numbers=NumberCfg(numbers_per_game=6))


def test_shipped_config_loads():
    cfg = load_config(str(Path(__file__).resolve().parents[1] / "configs" / "lucky4.yaml"))
    assert cfg.seed == 42
    assert cfg.numbers == NumberCfg()


@pytest.mark.parametrize("template", ["Game {game_id} not found", "Game {0} not found", "Bad {count:q}"])
def test_unknown_message_placeholders_rejected(template):
    with pytest.raises(ValidationError):
        FullConfig.model_validate({"messages": {"game_not_found": template}})


def test_custom_message_with_known_placeholder():
    cfg = FullConfig.model_validate({"messages": {"invalid_number_count": "Pick {count}!"}})
    assert cfg.message("invalid_number_count") == "Pick 4!"
