"""
Player-assistance hints built on the threat analyzer.

Help levels stack:
- Level 0: own winning columns
- Level 1: columns that must be taken to stop an opponent win
- Level 2: trap avoidance, i.e. steer away from columns that hand over a win

The highest-priority forced set found becomes `required_moves`. General
threats, opportunities and suggestions are only reported when nothing is forced.
"""

import logging
from typing import List

from c4arena.models.enums import HintLevel, Parity
from c4arena.schemas.analysis_schema import Hint, HintReport, MoveConsequences, StrategicEvaluation
from . import threats
from .board import Board
from .constants import opponent_of
from .game import GameState

# Logger setup
logger = logging.getLogger(__name__)


def get_hints(state: GameState, level: HintLevel = HintLevel.TRAP_AVOIDANCE) -> HintReport:
    level = HintLevel(level)
    report = HintReport()
    if state.is_terminal():
        return report

    board = state.board_snapshot()
    player = state.current_player
    opponent = opponent_of(player)
    valid_moves = board.valid_moves()

    # Level 0: winning opportunities
    wins = [col for col in valid_moves if threats.would_win_at(board, col, player)]
    if wins:
        report.required_moves = wins
        report.opportunities = [
            Hint(column=col, row=board.drop_row(col), type="winning_opportunity",
                 message="You can WIN here!", priority="critical")
            for col in wins
        ]
        return report

    # Level 1: forced blocks
    if level >= HintLevel.FORCED_BLOCK:
        blocks = [col for col in valid_moves if threats.would_win_at(board, col, opponent)]
        if blocks:
            report.required_moves = blocks
            report.threats = [
                Hint(column=col, row=board.drop_row(col), type="forced_block",
                     message="You MUST play here to stop the opponent from winning!", priority="critical")
                for col in blocks
            ]
            return report

    # Level 2: trap avoidance
    if level >= HintLevel.TRAP_AVOIDANCE:
        dangerous = [col for col in valid_moves if threats.is_move_unsafe(board, col, player)]
        safe = [col for col in valid_moves if col not in dangerous]
        report.dangerous_columns = dangerous
        if not safe:
            logger.debug("Player %s is trapped, every column hands over a win", player)
            report.trapped = True
            report.suggestions.append(Hint(
                type="trapped", message="Every move lets the opponent win next turn.", priority="critical",
            ))
        elif dangerous:
            report.required_moves = safe
            report.suggestions.append(Hint(
                type="trap_avoidance",
                message=f"Avoid columns {', '.join(str(c) for c in dangerous)} - they hand the opponent a win.",
                priority="medium",
            ))
            return report

    report.threats.extend(_opponent_threats(board, opponent))
    report.suggestions.extend(_general_advice(board, state.move_count, player, opponent))
    return report


def _opponent_threats(board: Board, opponent: int) -> List[Hint]:
    hints = []
    for row, col in sorted(threats.threat_squares(board, opponent)):
        hints.append(Hint(
            column=col, row=row, type="latent_threat",
            message=f"Opponent threatens to complete a line at row {row}.", priority="medium",
        ))
    return hints


def _general_advice(board: Board, move_count: int, player: int, opponent: int) -> List[Hint]:
    advice = []
    center = board.cols // 2
    if move_count < 4 and center in board.valid_moves():
        advice.append(Hint(column=center, type="strategic_advice",
                           message="Play the center for better control.", priority="low"))
    elif 4 <= move_count < 12:
        advice.append(Hint(type="strategic_advice",
                           message="Build connections and avoid traps.", priority="low"))

    if threats.analyze_fork_opportunities(board, opponent):
        advice.append(Hint(type="warning", message="Watch out for opponent traps!", priority="medium"))
    return advice


def analyze_move_consequences(state: GameState, col: int) -> MoveConsequences:
    """What playing `col` would do for the current player."""
    board = state.board_snapshot()
    board.check_column(col)
    player = state.current_player
    opponent = opponent_of(player)
    analysis = MoveConsequences(column=col)

    if board.drop_row(col) is None:
        analysis.strategic_value = "invalid"
        return analysis

    if threats.would_win_at(board, col, player):
        analysis.is_winning = True
        analysis.strategic_value = "excellent"
        return analysis

    if threats.would_win_at(board, col, opponent):
        analysis.blocks_opponent = True
        analysis.strategic_value = "good"

    scratch = board.copy()
    scratch.place(col, player)
    analysis.threats_created = len(threats.winning_moves(scratch, player))
    if analysis.threats_created >= 2:
        analysis.strategic_value = "very good"

    if threats.is_move_unsafe(board, col, player):
        analysis.allows_opponent_win = True
        analysis.strategic_value = "poor"

    return analysis


def strategic_evaluation(state: GameState) -> StrategicEvaluation:
    """Combined fork / zugzwang / parity view with a recommended column."""
    board = state.board_snapshot()
    player = state.current_player
    opponent = opponent_of(player)

    even_odd = threats.analyze_even_odd_threats(board, player)
    forks = threats.analyze_fork_opportunities(board, player)
    # Columns the opponent must avoid once it is their turn
    opponent_zugzwang = threats.detect_zugzwang(board, opponent) if not state.is_terminal() else []
    own_zugzwang = set(threats.detect_zugzwang(board, player)) if not state.is_terminal() else set()

    evaluation = StrategicEvaluation(even_odd=even_odd, zugzwang=opponent_zugzwang, forks=forks)
    if state.is_terminal():
        return evaluation

    if forks:
        evaluation.recommended_move = forks[0].column
        evaluation.confidence = "high"
    elif even_odd.parity == Parity.PLAYER_ADVANTAGE:
        # Keep away from the columns holding our own good threats, let the opponent fill below them
        options = [c for c in board.valid_moves() if c not in even_odd.affected_columns and c not in own_zugzwang]
        if options:
            evaluation.recommended_move = min(options, key=lambda c: (abs(c - board.cols // 2), c))
            evaluation.confidence = "medium"

    return evaluation
