"""
Pydantic models for the session layer.

This module contains the data models (players, stats, score records, results
and events) used by the session layer. The main logic classes (GameSession,
PowerupEngine, ScoreStore) remain in their respective files.
"""

from typing import Dict, List, Literal, Optional, Set, Union
from pydantic import BaseModel, ConfigDict, Field

from ..puzzle.models import CellPosition, Difficulty, Grid


# Type aliases
PowerupType = Literal["hint", "time-extension", "shuffle"]
SessionState = Literal["awaiting_player", "generating_puzzle", "active", "level_complete"]

POWERUP_TYPES = ("hint", "time-extension", "shuffle")


class Player(BaseModel):
    """The person driving a session."""
    name: str = Field(..., min_length=1)
    age: int = Field(default=0, ge=0)
    difficulty: Difficulty = "easy"
    preferences: Set[str] = Field(default_factory=set)


class SessionStats(BaseModel):
    """Score and progression counters for a player."""
    score: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1)
    combo: int = Field(default=0, ge=0)
    words_found: int = Field(default=0, ge=0)
    total_words_found: int = Field(default=0, ge=0)
    current_streak: int = Field(default=0, ge=0)
    best_streak: int = Field(default=0, ge=0)


class ScoreRecord(BaseModel):
    """One leaderboard entry, written on level completion."""
    name: str
    age: int = 0
    difficulty: Difficulty = "easy"
    score: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1)
    date: str = ""  # ISO-8601


class FoundWord(BaseModel):
    """A word the player revealed and the path that revealed it."""
    model_config = ConfigDict(frozen=True)

    word: str
    path: List[CellPosition] = Field(default_factory=list)


class SelectionResult(BaseModel):
    """Outcome of submitting a selection path."""
    accepted: bool
    word: Optional[str] = None
    points: Optional[int] = None
    combo: Optional[int] = None
    reason: Optional[str] = None  # rejection code when not accepted
    level_complete: bool = False


class PowerupConfig(BaseModel):
    """Cost and cooldown for one power-up type."""
    cost: int = Field(..., ge=0)
    cooldown_ms: int = Field(..., ge=0)


class PowerupState(BaseModel):
    """Cooldown and usage tracking for one power-up type."""
    type: PowerupType
    cooldown_end: float = 0.0  # ms timestamp
    usage_count: int = 0


class PowerupUsageEvent(BaseModel):
    """Record of a successful power-up use."""
    type: PowerupType
    timestamp: float
    level: int
    words_found_before: int


class HintEffect(BaseModel):
    """A random unfound word and a cell holding its first letter."""
    word: str
    position: Optional[CellPosition] = None


class TimeExtensionEffect(BaseModel):
    """Extra combo window granted, and the session's new total extension."""
    extension_ms: int
    total_extension_ms: int = 0


class ShuffleEffect(BaseModel):
    """The grid after letters were swapped."""
    grid: Grid


PowerupEffect = Union[HintEffect, TimeExtensionEffect, ShuffleEffect]


class PowerupResult(BaseModel):
    """Outcome of a power-up request."""
    success: bool
    type: Optional[PowerupType] = None
    effect: Optional[PowerupEffect] = None


class PowerupSnapshot(BaseModel):
    """Read-only view of the session state a power-up acts on."""
    grid: Grid
    words: List[str]
    found_words: List[str] = Field(default_factory=list)
    score: int = 0
    level: int = 1
    combo_extension_ms: int = 0


class UsageAnalytics(BaseModel):
    """Aggregate power-up usage across a session."""
    total_usage: int = 0
    usage_by_type: Dict[str, int] = Field(default_factory=dict)
    average_ms_between_usage: float = 0.0


# Events queued for the host to drain

class WordFoundEvent(BaseModel):
    kind: Literal["word_found"] = "word_found"
    word: str
    points: int
    combo: int


class LevelCompleteEvent(BaseModel):
    kind: Literal["level_complete"] = "level_complete"
    level: int  # the level just reached
    score: int
    difficulty: Difficulty
    promoted: bool = False


class PuzzleReadyEvent(BaseModel):
    kind: Literal["puzzle_ready"] = "puzzle_ready"
    theme: str
    difficulty: Difficulty
    word_count: int


SessionEvent = Union[WordFoundEvent, LevelCompleteEvent, PuzzleReadyEvent]
