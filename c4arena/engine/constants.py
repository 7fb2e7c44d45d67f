# c4arena/engine/constants.py

# --- Board Dimensions ---
ROWS = 6
COLS = 7
WIN_LENGTH = 4

# --- Cell Values ---
# Row 0 is the TOP of the board, row ROWS - 1 is the BOTTOM.
EMPTY = 0
PLAYER_1 = 1
PLAYER_2 = 2
FIRST_PLAYER = PLAYER_1

# Directions: Horizontal, Vertical, Diagonal /, Diagonal \
DIRECTIONS = ((0, 1), (1, 0), (1, -1), (1, 1))


def column_order(cols: int) -> list:
    """Columns sorted by distance from the center, ties to the left."""
    center = cols // 2
    return sorted(range(cols), key=lambda c: (abs(c - center), c))


def opponent_of(player: int) -> int:
    if player not in (PLAYER_1, PLAYER_2):
        raise ValueError(f"Not a player: {player}")
    return PLAYER_2 if player == PLAYER_1 else PLAYER_1
