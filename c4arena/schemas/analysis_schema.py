from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from c4arena.models.enums import BotPersonality, DecisionStage, Parity


class ThreatSquare(BaseModel):
    row: int
    column: int
    # 1-indexed, counted from the bottom row
    height: int

    @property
    def is_odd(self) -> bool:
        return self.height % 2 == 1


class EvenOddAnalysis(BaseModel):
    parity: Parity = Parity.NEUTRAL
    affected_columns: List[int] = Field(default_factory=list)
    player_odd: List[ThreatSquare] = Field(default_factory=list)
    player_even: List[ThreatSquare] = Field(default_factory=list)
    opponent_odd: List[ThreatSquare] = Field(default_factory=list)
    opponent_even: List[ThreatSquare] = Field(default_factory=list)


class ForkOpportunity(BaseModel):
    column: int
    threats_created: int

    @property
    def priority(self) -> str:
        return "critical" if self.threats_created >= 3 else "high"


class BotDecision(BaseModel):
    column: Optional[int] = None
    stage: DecisionStage
    personality: BotPersonality
    candidates: List[int] = Field(default_factory=list)
    scores: Dict[int, float] = Field(default_factory=dict)
    reasoning: str = ""


class Hint(BaseModel):
    column: Optional[int] = None
    row: Optional[int] = None
    type: str
    message: str
    priority: str


class HintReport(BaseModel):
    required_moves: List[int] = Field(default_factory=list)
    dangerous_columns: List[int] = Field(default_factory=list)
    trapped: bool = False
    threats: List[Hint] = Field(default_factory=list)
    opportunities: List[Hint] = Field(default_factory=list)
    suggestions: List[Hint] = Field(default_factory=list)

    @property
    def forced(self) -> bool:
        return bool(self.required_moves)


class MoveConsequences(BaseModel):
    column: int
    is_winning: bool = False
    blocks_opponent: bool = False
    threats_created: int = 0
    allows_opponent_win: bool = False
    strategic_value: str = "neutral"


class StrategicEvaluation(BaseModel):
    even_odd: EvenOddAnalysis
    zugzwang: List[int] = Field(default_factory=list)
    forks: List[ForkOpportunity] = Field(default_factory=list)
    recommended_move: Optional[int] = None
    confidence: str = "low"
