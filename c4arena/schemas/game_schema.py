from pydantic import BaseModel, ConfigDict
from typing import List, Optional, Tuple

from c4arena.models.enums import GameStatus, MoveError, MoveResult, BotPersonality


class MoveRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    player: int
    column: int
    row: int
    reasoning: Optional[str] = None
    duration: Optional[float] = 0.0


class MoveOutcome(BaseModel):
    """Result of GameState.commit. Rejected moves carry an error and leave the game untouched."""
    model_config = ConfigDict(frozen=True)

    accepted: bool
    result: MoveResult
    column: int
    row: Optional[int] = None
    player: Optional[int] = None
    error: Optional[MoveError] = None
    winner: Optional[int] = None
    winning_line: Optional[List[Tuple[int, int]]] = None

    @property
    def is_terminal(self) -> bool:
        return self.result in (MoveResult.WIN, MoveResult.DRAW)


class GameSummary(BaseModel):
    player_1: BotPersonality
    player_2: BotPersonality
    status: GameStatus
    winner: Optional[int] = None
    history: List[MoveRecord]
    round_number: Optional[int] = None

    @property
    def move_count(self) -> int:
        return len(self.history)
