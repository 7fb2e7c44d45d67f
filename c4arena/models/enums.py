from enum import IntEnum, StrEnum


class Cell(IntEnum):
    EMPTY = 0
    PLAYER_1 = 1
    PLAYER_2 = 2


class GameStatus(StrEnum):
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    DRAW = "DRAW"


class MoveResult(StrEnum):
    CONTINUE = "CONTINUE"
    WIN = "WIN"
    DRAW = "DRAW"
    REJECTED = "REJECTED"


class MoveError(StrEnum):
    INVALID_COLUMN = "INVALID_COLUMN"
    COLUMN_FULL = "COLUMN_FULL"
    GAME_ALREADY_OVER = "GAME_ALREADY_OVER"
    NO_MOVES_TO_UNDO = "NO_MOVES_TO_UNDO"


class BotPersonality(StrEnum):
    EASY = "easy"
    SMART_RANDOM = "smart-random"
    OFFENSIVE_MIXED = "offensive-mixed"
    DEFENSIVE_MIXED = "defensive-mixed"
    ENHANCED_SMART = "enhanced-smart"


class DecisionStage(StrEnum):
    IMMEDIATE_WIN = "IMMEDIATE_WIN"
    BLOCK = "BLOCK"
    PERSONALITY = "PERSONALITY"
    NO_MOVE = "NO_MOVE"


class Parity(StrEnum):
    PLAYER_ADVANTAGE = "PLAYER_ADVANTAGE"
    OPPONENT_ADVANTAGE = "OPPONENT_ADVANTAGE"
    NEUTRAL = "NEUTRAL"


class HintLevel(IntEnum):
    WINNING = 0
    FORCED_BLOCK = 1
    TRAP_AVOIDANCE = 2
