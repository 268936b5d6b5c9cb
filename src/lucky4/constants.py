from __future__ import annotations

# Number range
MIN_VALUE = 0
MAX_VALUE = 9
NUMBERS_PER_GAME = 4

# Player input
MAX_PLAYER_NAME_LENGTH = 50

# Pagination
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# Seeded generator: sin(seed) is scaled before taking the fractional part
SEEDED_SCALE = 10_000
