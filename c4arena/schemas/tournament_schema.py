from pydantic import BaseModel, Field
from typing import Dict, List

from c4arena.models.enums import BotPersonality


class ScheduledGame(BaseModel):
    round_number: int
    player_1: BotPersonality
    player_2: BotPersonality


class Standing(BaseModel):
    personality: BotPersonality
    wins: int = 0
    losses: int = 0
    draws: int = 0
    matches_played: int = 0
    total_moves: int = 0
    total_duration_seconds: float = 0.0
    rating: float = 1200.0

    @property
    def win_rate(self) -> float:
        if not self.matches_played:
            return 0.0
        return self.wins / self.matches_played


class TournamentReport(BaseModel):
    rounds: int
    total_games: int
    standings: List[Standing]
    # head_to_head[a][b] = wins of a against b, regardless of seat
    head_to_head: Dict[str, Dict[str, int]] = Field(default_factory=dict)
    draws: int = 0
    first_player_wins: int = 0
    second_player_wins: int = 0
