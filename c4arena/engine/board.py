import logging
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from .constants import ROWS, COLS, WIN_LENGTH, EMPTY, PLAYER_1, PLAYER_2, DIRECTIONS

# Logger setup
logger = logging.getLogger(__name__)

Window = Tuple[int, ...]


@lru_cache(maxsize=None)
def _geometry(rows: int, cols: int, win_length: int) -> Tuple[Tuple[Window, ...], Tuple[Tuple[Window, ...], ...]]:
    """
    Every line segment of `win_length` cells, as flat indices, plus the
    segments passing through each cell. Immutable and shared per board size.
    """
    windows = []
    for r in range(rows):
        for c in range(cols):
            for dr, dc in DIRECTIONS:
                end_r = r + dr * (win_length - 1)
                end_c = c + dc * (win_length - 1)
                if 0 <= end_r < rows and 0 <= end_c < cols:
                    windows.append(tuple((r + dr * i) * cols + (c + dc * i) for i in range(win_length)))

    through = [[] for _ in range(rows * cols)]
    for window in windows:
        for idx in window:
            through[idx].append(window)

    return tuple(windows), tuple(tuple(w) for w in through)


class Board:
    """
    Board uses (row, col) indexing.
    Row 0 is the TOP of the board, row `rows - 1` is the BOTTOM.
    Values: 0=Empty, 1=Player1, 2=Player2

    Cells live in one flat list, so copy() is a single list copy and two
    boards never share storage.
    """

    __slots__ = ("rows", "cols", "win_length", "_cells", "_heights")

    def __init__(self, rows: int = ROWS, cols: int = COLS, win_length: int = WIN_LENGTH):
        if rows < 1 or cols < 1:
            raise ValueError(f"Board needs at least one row and column, got {rows}x{cols}")
        if win_length < 2 or win_length > max(rows, cols):
            raise ValueError(f"Win length {win_length} does not fit a {rows}x{cols} board")
        self.rows = rows
        self.cols = cols
        self.win_length = win_length
        self._cells = [EMPTY] * (rows * cols)
        self._heights = [0] * cols

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[int]], win_length: int = WIN_LENGTH) -> "Board":
        """
        Builds a board from the 2D matrix format (Row 0=Top).
        Rejects floating discs, since every placement must respect gravity.
        """
        rows = len(matrix)
        cols = len(matrix[0]) if rows else 0
        board = cls(rows, cols, win_length)
        for r, line in enumerate(matrix):
            if len(line) != cols:
                raise ValueError(f"Row {r} has {len(line)} cells, expected {cols}")
            for c, val in enumerate(line):
                if val not in (EMPTY, PLAYER_1, PLAYER_2):
                    raise ValueError(f"Invalid cell value {val} at ({r}, {c})")
                board._cells[r * cols + c] = int(val)

        for c in range(cols):
            height = 0
            # Scan from Bottom to Top, stop at first empty space
            for r in range(rows - 1, -1, -1):
                if board._cells[r * cols + c] == EMPTY:
                    break
                height += 1
            for r in range(rows - 1 - height, -1, -1):
                if board._cells[r * cols + c] != EMPTY:
                    raise ValueError(f"Floating disc at ({r}, {c})")
            board._heights[c] = height
        return board

    def to_matrix(self) -> List[List[int]]:
        return [self._cells[r * self.cols:(r + 1) * self.cols] for r in range(self.rows)]

    def copy(self) -> "Board":
        new_board = Board.__new__(Board)
        new_board.rows = self.rows
        new_board.cols = self.cols
        new_board.win_length = self.win_length
        new_board._cells = self._cells.copy()
        new_board._heights = self._heights.copy()
        return new_board

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.rows == other.rows
            and self.cols == other.cols
            and self.win_length == other.win_length
            and self._cells == other._cells
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"Board({self.rows}x{self.cols}, discs={self.disc_count()})"

    # --- Geometry ---

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def check_column(self, col: int) -> None:
        if not isinstance(col, int) or not 0 <= col < self.cols:
            raise ValueError(f"Column {col} out of range [0, {self.cols})")

    def check_position(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise ValueError(f"Position ({row}, {col}) outside the {self.rows}x{self.cols} board")

    def index(self, row: int, col: int) -> int:
        return row * self.cols + col

    def position(self, index: int) -> Tuple[int, int]:
        return divmod(index, self.cols)

    def height_of(self, row: int) -> int:
        """1-indexed height of a row, counted from the bottom."""
        return self.rows - row

    def windows(self) -> Tuple[Window, ...]:
        return _geometry(self.rows, self.cols, self.win_length)[0]

    def windows_through(self, row: int, col: int) -> Tuple[Window, ...]:
        return _geometry(self.rows, self.cols, self.win_length)[1][row * self.cols + col]

    def window_values(self, window: Window) -> List[int]:
        cells = self._cells
        return [cells[i] for i in window]

    # --- Queries ---

    def cell(self, row: int, col: int) -> int:
        self.check_position(row, col)
        return self._cells[row * self.cols + col]

    def cell_at(self, index: int) -> int:
        return self._cells[index]

    def drop_row(self, col: int) -> Optional[int]:
        """Lowest empty row in the column, or None if it is full."""
        self.check_column(col)
        height = self._heights[col]
        if height >= self.rows:
            return None
        return self.rows - 1 - height

    def column_height(self, col: int) -> int:
        self.check_column(col)
        return self._heights[col]

    def is_column_full(self, col: int) -> bool:
        return self.drop_row(col) is None

    def valid_moves(self) -> List[int]:
        """Returns a list of column indices that are not full."""
        return [c for c in range(self.cols) if self._heights[c] < self.rows]

    def disc_count(self) -> int:
        return sum(self._heights)

    def empty_count(self) -> int:
        return self.rows * self.cols - self.disc_count()

    def is_full(self) -> bool:
        return self.disc_count() == self.rows * self.cols

    def player_to_move(self) -> int:
        """Player 1 always opens, so the disc count decides whose turn it is."""
        return PLAYER_1 if self.disc_count() % 2 == 0 else PLAYER_2

    # --- Line scanning ---

    def scan_line(self, row: int, col: int, d_row: int, d_col: int, player: int) -> int:
        """
        Length of the run through (row, col) along one slope, treating
        (row, col) itself as `player`. Only the board edges cap the run.
        """
        cells = self._cells
        rows, cols = self.rows, self.cols
        count = 1
        # Check positive direction
        r, c = row + d_row, col + d_col
        while 0 <= r < rows and 0 <= c < cols and cells[r * cols + c] == player:
            count += 1
            r += d_row
            c += d_col
        # Check negative direction
        r, c = row - d_row, col - d_col
        while 0 <= r < rows and 0 <= c < cols and cells[r * cols + c] == player:
            count += 1
            r -= d_row
            c -= d_col
        return count

    def is_winning_placement(self, row: int, col: int, player: int) -> bool:
        """True if `player` holding (row, col) completes a run of win_length on any slope."""
        for dr, dc in DIRECTIONS:
            if self.scan_line(row, col, dr, dc, player) >= self.win_length:
                return True
        return False

    def winning_line(self, row: int, col: int, player: int) -> Optional[List[Tuple[int, int]]]:
        """Cells of the completed run through (row, col), for highlighting."""
        cells = self._cells
        for dr, dc in DIRECTIONS:
            line = [(row, col)]
            for sign in (1, -1):
                r, c = row + sign * dr, col + sign * dc
                while self.in_bounds(r, c) and cells[r * self.cols + c] == player:
                    line.append((r, c))
                    r += sign * dr
                    c += sign * dc
            if len(line) >= self.win_length:
                return sorted(line)
        return None

    # --- Mutation (gravity only) ---

    def place(self, col: int, player: int) -> Optional[int]:
        """Drops a disc into the column. Returns the landing row, or None if full."""
        if player not in (PLAYER_1, PLAYER_2):
            raise ValueError(f"Not a player: {player}")
        row = self.drop_row(col)
        if row is None:
            return None
        self._cells[row * self.cols + col] = player
        self._heights[col] += 1
        return row

    def remove_top(self, col: int) -> Optional[int]:
        """Lifts the top disc of a column. Returns its row, or None if empty."""
        self.check_column(col)
        height = self._heights[col]
        if height == 0:
            return None
        row = self.rows - height
        self._cells[row * self.cols + col] = EMPTY
        self._heights[col] -= 1
        return row

    # --- Formatting ---

    def get_visual_board(self) -> str:
        """Generates an ASCII grid representation."""
        symbols = {EMPTY: ".", PLAYER_1: "X", PLAYER_2: "O"}
        header = " " + " ".join([str(i) for i in range(self.cols)])
        rows_str = []
        for r in range(self.rows):
            row_cells = [symbols[self._cells[r * self.cols + c]] for c in range(self.cols)]
            rows_str.append("|" + "|".join(row_cells) + "|")
        return header + "\n" + "\n".join(rows_str)

    def get_textual_description(self) -> str:
        """
        Describes the board column by column, listing pieces from Bottom to Top.
        Example: 'Column 0: P1, P2'
        """
        lines = []
        for c in range(self.cols):
            pieces = []
            for r in range(self.rows - 1, -1, -1):
                val = self._cells[r * self.cols + c]
                if val == EMPTY:
                    break
                pieces.append("P1" if val == PLAYER_1 else "P2")

            desc = ", ".join(pieces) if pieces else "Empty"
            lines.append(f"Column {c}: {desc}")
        return "\n".join(lines)
