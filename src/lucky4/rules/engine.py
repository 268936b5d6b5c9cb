from __future__ import annotations
import logging
from dataclasses import dataclass
from math import comb
from typing import Any, Iterable, Mapping, Sequence

from lucky4.config import DEFAULT_CONFIG, FullConfig
from lucky4.state import GameResult, MatchDetail

logger = logging.getLogger(__name__)

@dataclass(frozen=True, slots=True)
class PerformanceSummary:
    total_games: int
    total_score: int
    average_score: float
    average_matches: float
    jackpots: int
    wins: int
    losses: int
    win_rate: float

@dataclass(frozen=True, slots=True)
class TierProbability:
    matches: int
    prize_tier: str
    score: int
    probability: float

def calculate_game_result(player_numbers: Sequence[int], lucky_numbers: Sequence[int],
                          cfg: FullConfig = DEFAULT_CONFIG) -> GameResult:
    """Score a play by positional equality; [1,2] vs [2,1] is zero matches."""
    if len(player_numbers) != len(lucky_numbers):
        raise ValueError(f"Cannot compare {len(player_numbers)} player numbers with {len(lucky_numbers)} lucky numbers")
    if len(player_numbers) != cfg.numbers.numbers_per_game:
        raise ValueError(f"Expected {cfg.numbers.numbers_per_game} numbers per side, got {len(player_numbers)}")
    details = tuple(
        MatchDetail(position=i, player_number=int(p), lucky_number=int(l), is_match=bool(p == l))
        for i, (p, l) in enumerate(zip(player_numbers, lucky_numbers))
    )
    matches = sum(d.is_match for d in details)
    tier = cfg.tier_for(matches)
    logger.debug("Scored %s vs %s: %d matches (%s)", list(player_numbers), list(lucky_numbers),
                 matches, tier.prize_tier)
    return GameResult(
        player_numbers=tuple(int(n) for n in player_numbers),
        lucky_numbers=tuple(int(n) for n in lucky_numbers),
        matches=matches,
        score=tier.score,
        prize_tier=tier.prize_tier,
        is_winner=tier.score > 0,
        is_jackpot=matches == cfg.numbers.numbers_per_game,
        message=tier.message,
        match_details=details,
    )

def _field(record: Any, name: str) -> int:
    if isinstance(record, Mapping):
        return int(record[name])
    return int(getattr(record, name))

def analyze_performance(history: Iterable[Any], cfg: FullConfig = DEFAULT_CONFIG) -> PerformanceSummary:
    """Aggregate stats over records (mappings or objects) carrying `matches` and `score`."""
    rows = [(_field(r, "matches"), _field(r, "score")) for r in history]
    n = len(rows)
    total_score = sum(s for _, s in rows)
    total_matches = sum(m for m, _ in rows)
    wins = sum(1 for _, s in rows if s > 0)
    return PerformanceSummary(
        total_games=n,
        total_score=total_score,
        average_score=total_score / n if n else 0.0,
        average_matches=total_matches / n if n else 0.0,
        jackpots=sum(1 for m, _ in rows if m == cfg.numbers.numbers_per_game),
        wins=wins,
        losses=n - wins,
        win_rate=wins / n if n else 0.0,
    )

def get_win_probabilities(cfg: FullConfig = DEFAULT_CONFIG) -> list[TierProbability]:
    """Exact binomial odds per tier when both sides draw uniformly and independently."""
    n = cfg.numbers.numbers_per_game
    p = 1.0 / cfg.numbers.total_possible_numbers
    out = []
    for k in range(n, -1, -1):
        tier = cfg.tier_for(k)
        out.append(TierProbability(
            matches=k,
            prize_tier=tier.prize_tier,
            score=tier.score,
            probability=comb(n, k) * p ** k * (1 - p) ** (n - k),
        ))
    return out
