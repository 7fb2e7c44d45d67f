"""
Threat analysis over a Board.

Every function here is read-only with respect to its board argument: it
either reads cells directly or works on a scratch copy. Callers holding a
GameState pass `state.board_snapshot()`.

A window is "viable" for a player when it holds no opposing disc. That is
the single definition behind offensive and defensive potential. A "threat
square" is an empty cell that completes a viable window already holding
win_length - 1 discs of the player; forks and parity are counted in those.
"""

import logging
from typing import List, Optional, Set, Tuple

from c4arena.models.enums import Parity
from c4arena.schemas.analysis_schema import EvenOddAnalysis, ForkOpportunity, ThreatSquare
from .board import Board
from .constants import EMPTY, FIRST_PLAYER, opponent_of

# Logger setup
logger = logging.getLogger(__name__)


def _mover(board: Board, player: Optional[int]) -> int:
    if player is None:
        return board.player_to_move()
    opponent_of(player)  # validates the player value
    return player


# --- Immediate tactics ---

def would_win_at(board: Board, col: int, player: int) -> bool:
    """True if `player` dropping a disc in `col` completes a line."""
    row = board.drop_row(col)
    if row is None:
        return False
    return board.is_winning_placement(row, col, player)


def winning_moves(board: Board, player: int) -> List[int]:
    return [col for col in board.valid_moves() if would_win_at(board, col, player)]


def is_move_unsafe(board: Board, col: int, player: Optional[int] = None) -> bool:
    """
    True if, after the mover plays `col`, the opponent can win on the very next move.
    A full column counts as unsafe; a move that wins on the spot never does.
    """
    player = _mover(board, player)
    row = board.drop_row(col)
    if row is None:
        return True
    if board.is_winning_placement(row, col, player):
        return False

    scratch = board.copy()
    scratch.place(col, player)
    opponent = opponent_of(player)
    return any(would_win_at(scratch, reply, opponent) for reply in scratch.valid_moves())


# --- Window scoring ---

def count_threats_for_player(board: Board, col: int, player: int) -> int:
    """
    Number of live windows through the cell where `player`'s disc would land
    in `col`. A live window holds no opposing disc, so it can still become four.
    """
    row = board.drop_row(col)
    if row is None:
        return 0
    opponent = opponent_of(player)
    live = 0
    for window in board.windows_through(row, col):
        if opponent not in board.window_values(window):
            live += 1
    return live


def offensive_potential(board: Board, col: int, player: int) -> int:
    return count_threats_for_player(board, col, player)


def defensive_potential(board: Board, col: int, player: int) -> int:
    """Opponent windows, already started and still viable for them, that a disc in `col` would cut."""
    row = board.drop_row(col)
    if row is None:
        return 0
    opponent = opponent_of(player)
    disrupted = 0
    for window in board.windows_through(row, col):
        values = board.window_values(window)
        if player not in values and opponent in values:
            disrupted += 1
    return disrupted


def evaluate_threat_at_position(board: Board, row: int, col: int, player: int) -> int:
    """
    Largest number of `player` discs, counting a hypothetical disc at (row, col),
    in any viable window through that cell. 0 below two discs or for an occupied
    cell; win_length means the cell completes a line.
    """
    board.check_position(row, col)
    opponent = opponent_of(player)
    if board.cell(row, col) != EMPTY:
        return 0

    best = 0
    for window in board.windows_through(row, col):
        values = board.window_values(window)
        if opponent in values:
            continue
        best = max(best, values.count(player) + 1)
    return best if best >= 2 else 0


def center_bonus(col: int, cols: int, k: float = 1.0) -> float:
    center = cols // 2
    return (center - abs(col - center)) * k


# --- Threat squares and parity ---

def threat_squares(board: Board, player: int) -> Set[Tuple[int, int]]:
    """Empty cells that would complete a line for `player`, reachable now or later."""
    opponent_of(player)
    need = board.win_length - 1
    squares = set()
    for window in board.windows():
        values = board.window_values(window)
        if values.count(player) == need and EMPTY in values:
            squares.add(board.position(window[values.index(EMPTY)]))
    return squares


def _natural_parity_is_odd(player: int) -> bool:
    # The opening player profits from odd squares, the other one from even squares
    return player == FIRST_PLAYER


def _good_threats(board: Board, own: Set[Tuple[int, int]], other: Set[Tuple[int, int]],
                  player: int) -> List[Tuple[int, int]]:
    wants_odd = _natural_parity_is_odd(player)
    good = []
    for row, col in own:
        if (board.height_of(row) % 2 == 1) != wants_odd:
            continue
        # An opposing threat lower in the same column gets filled first
        if any(o_col == col and o_row > row for o_row, o_col in other):
            continue
        good.append((row, col))
    return good


def _split_by_parity(board: Board, squares) -> Tuple[List[ThreatSquare], List[ThreatSquare]]:
    odd, even = [], []
    for row, col in sorted(squares, key=lambda sq: (sq[1], -sq[0])):
        square = ThreatSquare(row=row, column=col, height=board.height_of(row))
        (odd if square.is_odd else even).append(square)
    return odd, even


def analyze_even_odd_threats(board: Board, player: int) -> EvenOddAnalysis:
    """
    Odd/even classification of both sides' threat squares, heights counted
    from the bottom starting at 1. A side holds a good threat when the square
    has its natural parity and no opposing threat sits below it in the column.
    """
    opponent = opponent_of(player)
    own = threat_squares(board, player)
    other = threat_squares(board, opponent)

    good_own = _good_threats(board, own, other, player)
    good_other = _good_threats(board, other, own, opponent)

    if len(good_own) > len(good_other):
        parity = Parity.PLAYER_ADVANTAGE
    elif len(good_other) > len(good_own):
        parity = Parity.OPPONENT_ADVANTAGE
    else:
        parity = Parity.NEUTRAL

    player_odd, player_even = _split_by_parity(board, own)
    opponent_odd, opponent_even = _split_by_parity(board, other)

    return EvenOddAnalysis(
        parity=parity,
        affected_columns=sorted({col for _, col in good_own + good_other}),
        player_odd=player_odd,
        player_even=player_even,
        opponent_odd=opponent_odd,
        opponent_even=opponent_even,
    )


def good_threat_count(board: Board, player: int) -> int:
    own = threat_squares(board, player)
    other = threat_squares(board, opponent_of(player))
    return len(_good_threats(board, own, other, player))


def detect_zugzwang(board: Board, player: Optional[int] = None) -> List[int]:
    """
    Columns the mover should not touch: the disc would open the square above
    it to an opponent threat, or let the opponent's reply on top create a
    double threat.
    """
    player = _mover(board, player)
    opponent = opponent_of(player)
    opponent_squares = threat_squares(board, opponent)

    columns = []
    for col in board.valid_moves():
        row = board.drop_row(col)
        if row == 0 or board.is_winning_placement(row, col, player):
            continue
        if (row - 1, col) in opponent_squares:
            columns.append(col)
            continue

        scratch = board.copy()
        scratch.place(col, player)
        reply_row = scratch.place(col, opponent)
        if reply_row is None or scratch.is_winning_placement(reply_row, col, opponent):
            continue
        if len(winning_moves(scratch, opponent)) >= 2:
            columns.append(col)
    return columns


def analyze_fork_opportunities(board: Board, player: int) -> List[ForkOpportunity]:
    """Moves leaving `player` with two or more immediate winning replies, most threats first."""
    opponent_of(player)
    forks = []
    for col in board.valid_moves():
        if would_win_at(board, col, player):
            continue
        scratch = board.copy()
        scratch.place(col, player)
        threats = len(winning_moves(scratch, player))
        if threats >= 2:
            forks.append(ForkOpportunity(column=col, threats_created=threats))

    forks.sort(key=lambda f: (-f.threats_created, f.column))
    return forks
