"""Tunable constants for the board engine and the session layer."""

# Ordered tile palette. Lower levels only spawn a prefix of this list.
PALETTE = ('red', 'blue', 'green', 'yellow', 'purple', 'orange')

# Display colors per tile type (RGB). Must stay in sync with PALETTE.
TILE_COLORS = {
    'red':    (231, 76, 60),    # #E74C3C
    'blue':   (52, 152, 219),   # #3498DB
    'green':  (46, 204, 113),   # #2ECC71
    'yellow': (241, 196, 15),   # #F1C40F
    'purple': (155, 89, 182),   # #9B59B6
    'orange': (243, 156, 18),   # #F39C12
}

# Palette width grows by one type every PALETTE_LEVEL_STEP levels.
BASE_PALETTE_SIZE = 4
PALETTE_LEVEL_STEP = 10

MIN_MATCH_LENGTH = 3

# Candidate regenerations per cell during initial board generation.
MAX_SPAWN_ATTEMPTS = 10
# Safety bound on match -> clear -> refill rounds triggered by a single swap.
MAX_CASCADE_ITERATIONS = 20
# Shuffles tried before a deadlocked board is regenerated from scratch.
SHUFFLE_ATTEMPTS = 100

POINTS_PER_TILE = 10

# Board side length per level range: (last level of the range, side).
BOARD_SIZE_BREAKPOINTS = (
    (10, 4),
    (50, 5),
    (100, 6),
    (200, 7),
    (300, 8),
    (450, 9),
    (700, 10),
)
MAX_BOARD_SIDE = 11

MIN_MOVES = 15
MOVES_PER_CELL = 1.5
MOVE_PENALTY_LEVEL_STEP = 10

# Every COLLECT_LEVEL_INTERVAL-th level asks for colors instead of a clear board.
COLLECT_LEVEL_INTERVAL = 5
MIN_COLLECT_COLORS = 2
MAX_COLLECT_COLORS = 4
COLLECT_COLORS_LEVEL_STEP = 20
COLLECT_TARGET_CELL_RATIO = 0.4
COLLECT_TARGET_LEVEL_STEP = 5

STARTING_LEVEL = 1

# Seconds the session layer waits after each cascade snapshot.
BREAK_DELAY = 0.45
FALL_DELAY = 0.4
