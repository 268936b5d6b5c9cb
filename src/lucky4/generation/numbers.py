from __future__ import annotations
import logging
import math
from typing import Optional, Sequence

import numpy as np

from lucky4.config import DEFAULT_CONFIG, FullConfig
from lucky4.constants import SEEDED_SCALE
from lucky4.exceptions import GenerationError

logger = logging.getLogger(__name__)

def is_valid_number(n, cfg: FullConfig = DEFAULT_CONFIG) -> bool:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        return False
    return bool(cfg.numbers.min_value <= n <= cfg.numbers.max_value)

def is_valid_number_sequence(seq, cfg: FullConfig = DEFAULT_CONFIG) -> bool:
    return (
        isinstance(seq, (list, tuple))
        and len(seq) == cfg.numbers.numbers_per_game
        and all(is_valid_number(n, cfg) for n in seq)
    )

class NumberGenerator:
    """
    Draws Lucky 4 number sequences from an injected numpy Generator.
    Only generate_seeded ignores the generator, so its output is reproducible on its own.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None, cfg: FullConfig = DEFAULT_CONFIG):
        self.cfg = cfg
        self.rng = rng if rng is not None else np.random.default_rng(cfg.seed)

    @property
    def total_possible_numbers(self) -> int:
        return self.cfg.numbers.total_possible_numbers

    def random_in_range(self, low: Optional[int] = None, high: Optional[int] = None) -> int:
        low = self.cfg.numbers.min_value if low is None else low
        high = self.cfg.numbers.max_value if high is None else high
        if high < low:
            raise GenerationError(f"Empty range [{low}, {high}]")
        return int(self.rng.integers(low, high, endpoint=True))

    def generate_numbers(self, count: Optional[int] = None) -> list[int]:
        count = self.cfg.numbers.numbers_per_game if count is None else count
        nums = [self.random_in_range() for _ in range(count)]
        logger.debug("Drew numbers %s", nums)
        return nums

    def generate_unique_numbers(self, count: Optional[int] = None) -> list[int]:
        count = self.cfg.numbers.numbers_per_game if count is None else count
        lo, hi = self.cfg.numbers.min_value, self.cfg.numbers.max_value
        if count < 0 or count > self.total_possible_numbers:
            raise GenerationError(f"Cannot generate {count} unique numbers from range {lo}-{hi}")
        seen: dict[int, None] = {}  # keeps draw order
        while len(seen) < count:
            seen[self.random_in_range(lo, hi)] = None
        return list(seen)

    def generate_weighted(self, count: Optional[int] = None,
                          weights: Optional[Sequence[float]] = None) -> list[int]:
        """Draw values 0..total-1, picking the first index whose cumulative weight reaches the draw."""
        count = self.cfg.numbers.numbers_per_game if count is None else count
        total = self.total_possible_numbers
        w = np.ones(total, dtype=np.float64) if weights is None else np.asarray(weights, dtype=np.float64)
        if w.ndim != 1 or w.shape[0] != total:
            raise GenerationError(f"Weights array must have exactly {total} elements")
        if np.any(w < 0):
            raise GenerationError("Weights must be non-negative")
        cum = np.cumsum(w)
        total_weight = float(cum[-1])
        if total_weight <= 0:
            raise GenerationError("Weights must sum to a positive value")
        draws = self.rng.random(count) * total_weight
        idx = np.searchsorted(cum, draws, side="left")
        return [int(i) for i in idx]

    def generate_seeded(self, seed: int, count: Optional[int] = None) -> list[int]:
        count = self.cfg.numbers.numbers_per_game if count is None else count
        lo = self.cfg.numbers.min_value
        span = self.total_possible_numbers
        out = []
        for _ in range(count):
            x = math.sin(seed) * SEEDED_SCALE
            seed += 1
            out.append(math.floor((x - math.floor(x)) * span) + lo)
        return out

    def is_valid_number(self, n) -> bool:
        return is_valid_number(n, self.cfg)

    def is_valid_number_sequence(self, seq) -> bool:
        return is_valid_number_sequence(seq, self.cfg)
