"""
Bot Engine - four-stage move selection shared by every personality.

Stage 1: Direct win possible - play the winning move
Stage 2: Always block - take any column where the opponent would win next
Stage 3: Drop columns that hand the opponent an immediate win
Stage 4: Personality-specific pick among the remaining columns

Stages 1-3 are identical for every personality; only Stage 4 differs.
"""

import logging
import random
from typing import Callable, Dict, List, Optional, Tuple

from c4arena.core.personality_registry import PersonalityRegistry, get_registry
from c4arena.models.enums import BotPersonality, DecisionStage
from c4arena.schemas.analysis_schema import BotDecision
from . import threats
from .board import Board
from .constants import column_order, opponent_of
from .game import GameState

# Logger setup
logger = logging.getLogger(__name__)

Selection = Tuple[int, Dict[int, float]]


class BotEngine:
    def __init__(self, rng: Optional[random.Random] = None, registry: Optional[PersonalityRegistry] = None):
        self.rng = rng if rng is not None else random.Random()
        self.registry = registry if registry is not None else get_registry()
        self._selectors: Dict[BotPersonality, Callable[[Board, int, List[int]], Selection]] = {
            BotPersonality.EASY: self._select_easy,
            BotPersonality.SMART_RANDOM: self._select_smart_random,
            BotPersonality.OFFENSIVE_MIXED: self._select_offensive_mixed,
            BotPersonality.DEFENSIVE_MIXED: self._select_defensive_mixed,
            BotPersonality.ENHANCED_SMART: self._select_enhanced_smart,
        }

    def best_move(self, state: GameState, personality: BotPersonality) -> Optional[int]:
        """Column to play, or None when the game is already over."""
        return self.decide(state, personality).column

    def decide(self, state: GameState, personality: BotPersonality) -> BotDecision:
        personality = BotPersonality(personality)
        if state.is_terminal():
            return BotDecision(stage=DecisionStage.NO_MOVE, personality=personality, reasoning="Game is over.")
        return self.decide_on_board(state.board_snapshot(), state.current_player, personality)

    def decide_on_board(self, board: Board, player: int, personality: BotPersonality) -> BotDecision:
        """Runs the four stages for `player` on `board`. The board is never modified."""
        personality = BotPersonality(personality)
        opponent = opponent_of(player)
        valid_moves = board.valid_moves()

        if not valid_moves:
            return BotDecision(stage=DecisionStage.NO_MOVE, personality=personality, reasoning="Board is full.")

        # 1. Immediate win, lowest column first
        for col in valid_moves:
            if threats.would_win_at(board, col, player):
                return BotDecision(
                    column=col, stage=DecisionStage.IMMEDIATE_WIN, personality=personality,
                    candidates=[col], reasoning=f"Column {col} wins immediately.",
                )

        # 2. Block whatever the opponent would complete next
        for col in valid_moves:
            if threats.would_win_at(board, col, opponent):
                return BotDecision(
                    column=col, stage=DecisionStage.BLOCK, personality=personality,
                    candidates=[col], reasoning=f"Column {col} blocks an opponent win.",
                )

        # 3. Safe columns, or every valid column when none is safe
        safe_columns = [col for col in valid_moves if not threats.is_move_unsafe(board, col, player)]
        if not safe_columns:
            logger.debug("No safe column for player %s, falling back to %s", player, valid_moves)
            safe_columns = list(valid_moves)

        # 4. Personality tie-break
        column, scores = self._selectors[personality](board, player, safe_columns)
        logger.debug("%s picked column %s from %s (scores=%s)", personality, column, safe_columns, scores)
        return BotDecision(
            column=column, stage=DecisionStage.PERSONALITY, personality=personality,
            candidates=safe_columns, scores=scores,
            reasoning=f"{self.registry.get(personality).label} chose column {column} from safe columns {safe_columns}.",
        )

    # --- Stage 4 selectors ---

    def _select_easy(self, board: Board, player: int, columns: List[int]) -> Selection:
        return self.rng.choice(columns), {}

    def _select_smart_random(self, board: Board, player: int, columns: List[int]) -> Selection:
        for col in column_order(board.cols):
            if col in columns:
                return col, {}
        return columns[0], {}

    def _select_offensive_mixed(self, board: Board, player: int, columns: List[int]) -> Selection:
        config = self.registry.get(BotPersonality.OFFENSIVE_MIXED)
        return self._pick_highest(columns, lambda col: (
            config.offensive_weight * threats.offensive_potential(board, col, player)
            + config.center_weight * self._center_bonus(board, col)
        ))

    def _select_defensive_mixed(self, board: Board, player: int, columns: List[int]) -> Selection:
        config = self.registry.get(BotPersonality.DEFENSIVE_MIXED)
        return self._pick_highest(columns, lambda col: (
            config.defensive_weight * threats.defensive_potential(board, col, player)
            + config.center_weight * self._center_bonus(board, col)
        ))

    def _select_enhanced_smart(self, board: Board, player: int, columns: List[int]) -> Selection:
        config = self.registry.get(BotPersonality.ENHANCED_SMART)
        forks = {f.column: f.threats_created for f in threats.analyze_fork_opportunities(board, player)}
        zugzwang = set(threats.detect_zugzwang(board, player))
        good_before = threats.good_threat_count(board, player)

        def score(col: int) -> float:
            value = (
                config.offensive_weight * threats.offensive_potential(board, col, player)
                + config.defensive_weight * threats.defensive_potential(board, col, player)
                + config.center_weight * self._center_bonus(board, col)
            )
            value += config.fork_weight * forks.get(col, 0)
            if col in zugzwang:
                value -= config.zugzwang_penalty
            if config.parity_weight:
                scratch = board.copy()
                scratch.place(col, player)
                gained = threats.good_threat_count(scratch, player) - good_before
                value += config.parity_weight * max(gained, 0)
            return value

        return self._pick_highest(columns, score)

    # --- Helpers ---

    def _center_bonus(self, board: Board, col: int) -> float:
        return threats.center_bonus(col, board.cols, self.registry.center_k)

    @staticmethod
    def _pick_highest(columns: List[int], score: Callable[[int], float]) -> Selection:
        """Highest score wins; ties keep the first column seen."""
        scores = {}
        best_col = None
        best_score = None
        for col in columns:
            value = round(score(col), 9)
            scores[col] = value
            if best_score is None or value > best_score:
                best_col, best_score = col, value
        return best_col, scores


def best_move(state: GameState, personality: BotPersonality, rng: Optional[random.Random] = None) -> Optional[int]:
    return BotEngine(rng=rng).best_move(state, personality)
