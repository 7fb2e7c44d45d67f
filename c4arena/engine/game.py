import logging
from typing import Iterable, List, Optional, Tuple

from c4arena.models.enums import Cell, MoveError, MoveResult
from c4arena.schemas.game_schema import MoveOutcome, MoveRecord
from .board import Board
from .constants import ROWS, COLS, WIN_LENGTH, FIRST_PLAYER, opponent_of

# Logger setup
logger = logging.getLogger(__name__)


class GameState:
    """
    Single source of truth for one game: the board, whose turn it is, the
    move history and the terminal status. The board only changes through
    commit() and undo(); everyone else gets a copy from board_snapshot().
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS, win_length: int = WIN_LENGTH):
        self._board = Board(rows, cols, win_length)
        self._current_player = FIRST_PLAYER
        self._winner: Optional[int] = None
        self._winning_line: Optional[List[Tuple[int, int]]] = None
        self._terminal = False
        self._history: List[MoveRecord] = []

    @classmethod
    def from_moves(cls, moves: Iterable[int], rows: int = ROWS, cols: int = COLS,
                   win_length: int = WIN_LENGTH) -> "GameState":
        """Reconstruct a game by replaying columns. Raises ValueError on an illegal move."""
        state = cls(rows, cols, win_length)
        for col in moves:
            outcome = state.commit(col)
            if not outcome.accepted:
                raise ValueError(f"Illegal move in replay: column {col} ({outcome.error})")
        return state

    # --- Read-only views ---

    @property
    def rows(self) -> int:
        return self._board.rows

    @property
    def cols(self) -> int:
        return self._board.cols

    @property
    def win_length(self) -> int:
        return self._board.win_length

    @property
    def current_player(self) -> int:
        return self._current_player

    @property
    def winner(self) -> Optional[Cell]:
        return Cell(self._winner) if self._winner is not None else None

    @property
    def winning_line(self) -> Optional[List[Tuple[int, int]]]:
        return list(self._winning_line) if self._winning_line else None

    @property
    def history(self) -> Tuple[MoveRecord, ...]:
        return tuple(self._history)

    @property
    def move_count(self) -> int:
        return len(self._history)

    def board_snapshot(self) -> Board:
        return self._board.copy()

    def is_terminal(self) -> bool:
        return self._terminal

    def is_draw(self) -> bool:
        """Returns True if the game ended on a full board without a winner."""
        return self._terminal and self._winner is None

    def valid_moves(self) -> List[int]:
        """Returns a list of column indices that are not full. Empty once the game is over."""
        if self._terminal:
            return []
        return self._board.valid_moves()

    def is_valid_move(self, col: int) -> bool:
        if self._terminal or not isinstance(col, int) or col < 0 or col >= self.cols:
            return False
        return not self._board.is_column_full(col)

    # --- Mutation ---

    def commit(self, col: int) -> MoveOutcome:
        """
        Drops the current player's disc into `col`.
        Rejected moves come back as a MoveOutcome with an error; the state is untouched.
        """
        if self._terminal:
            return self._reject(col, MoveError.GAME_ALREADY_OVER)
        if not isinstance(col, int) or col < 0 or col >= self.cols:
            return self._reject(col, MoveError.INVALID_COLUMN)

        player = self.current_player
        # Gravity: Find the lowest empty row
        row = self._board.place(col, player)
        if row is None:
            return self._reject(col, MoveError.COLUMN_FULL)

        self._history.append(MoveRecord(player=player, column=col, row=row))

        if self._board.is_winning_placement(row, col, player):
            self._terminal = True
            self._winner = player
            self._winning_line = self._board.winning_line(row, col, player)
            logger.debug("Player %s wins with column %s", player, col)
            return MoveOutcome(
                accepted=True, result=MoveResult.WIN, column=col, row=row, player=player,
                winner=player, winning_line=self._winning_line,
            )

        if self._board.is_full():
            self._terminal = True
            logger.debug("Board full after %s moves, game drawn", len(self._history))
            return MoveOutcome(accepted=True, result=MoveResult.DRAW, column=col, row=row, player=player)

        self._switch_turn()
        return MoveOutcome(accepted=True, result=MoveResult.CONTINUE, column=col, row=row, player=player)

    def undo(self) -> Optional[MoveError]:
        """Takes back the last move. Returns NO_MOVES_TO_UNDO when there is nothing to take back."""
        if not self._history:
            logger.warning("Undo requested with no moves played")
            return MoveError.NO_MOVES_TO_UNDO

        last = self._history.pop()
        self._board.remove_top(last.column)
        self._current_player = last.player
        self._terminal = False
        self._winner = None
        self._winning_line = None
        return None

    def _switch_turn(self):
        self._current_player = opponent_of(self._current_player)

    def _reject(self, col, error: MoveError) -> MoveOutcome:
        logger.warning("Rejected move in column %s: %s", col, error)
        return MoveOutcome(
            accepted=False, result=MoveResult.REJECTED,
            column=col if isinstance(col, int) else -1, error=error,
        )

    # --- Formatting ---

    def get_visual_board(self) -> str:
        return self._board.get_visual_board()


def new_game(rows: int = ROWS, cols: int = COLS, win_length: int = WIN_LENGTH) -> GameState:
    return GameState(rows, cols, win_length)
