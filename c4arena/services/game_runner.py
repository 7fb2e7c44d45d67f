"""
Game Runner - scripted bot-vs-bot games.

Plays one game to completion on a fresh GameState, asking the bot engine
for every move and committing it exactly like a human move would be.
"""

import logging
import random
import time
from typing import Optional

from c4arena.engine.bot import BotEngine
from c4arena.engine.constants import ROWS, COLS, WIN_LENGTH, PLAYER_1, PLAYER_2
from c4arena.engine.game import GameState
from c4arena.models.enums import BotPersonality, GameStatus
from c4arena.schemas.game_schema import GameSummary, MoveRecord

# Logger setup
logger = logging.getLogger(__name__)


class GameRunner:
    def __init__(self, engine: Optional[BotEngine] = None, rows: int = ROWS, cols: int = COLS,
                 win_length: int = WIN_LENGTH):
        self.engine = engine if engine is not None else BotEngine()
        self.rows = rows
        self.cols = cols
        self.win_length = win_length

    def play(self, player_1: BotPersonality, player_2: BotPersonality, max_moves: Optional[int] = None,
             round_number: Optional[int] = None) -> GameSummary:
        """Plays until the game ends (or max_moves is reached) and returns the summary."""
        state = GameState(self.rows, self.cols, self.win_length)
        seats = {PLAYER_1: BotPersonality(player_1), PLAYER_2: BotPersonality(player_2)}
        history = []

        while not state.is_terminal():
            if max_moves is not None and state.move_count >= max_moves:
                break

            current = state.current_player
            start_time = time.perf_counter()
            decision = self.engine.decide(state, seats[current])
            duration = round(time.perf_counter() - start_time, 6)

            if decision.column is None:
                logger.error("Bot %s returned no move on a live board", seats[current])
                break

            outcome = state.commit(decision.column)
            if not outcome.accepted:
                # The engine only proposes valid columns, so this is a bug worth surfacing
                raise RuntimeError(f"Engine proposed illegal column {decision.column}: {outcome.error}")

            history.append(MoveRecord(
                player=current,
                column=decision.column,
                row=outcome.row,
                reasoning=decision.reasoning,
                duration=duration,
            ))

        if state.winner is not None:
            status = GameStatus.COMPLETED
        elif state.is_draw():
            status = GameStatus.DRAW
        else:
            status = GameStatus.IN_PROGRESS

        summary = GameSummary(
            player_1=seats[PLAYER_1],
            player_2=seats[PLAYER_2],
            status=status,
            winner=int(state.winner) if state.winner is not None else None,
            history=history,
            round_number=round_number,
        )
        logger.debug("Game %s vs %s finished: %s (winner=%s, moves=%s)",
                     summary.player_1, summary.player_2, status, summary.winner, summary.move_count)
        return summary


def play_game(player_1: BotPersonality, player_2: BotPersonality, seed: Optional[int] = None) -> GameSummary:
    return GameRunner(BotEngine(rng=random.Random(seed))).play(player_1, player_2)
