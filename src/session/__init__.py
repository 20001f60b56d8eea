"""Game session layer for the word-search engine."""

from .models import (
    Player,
    SessionStats,
    ScoreRecord,
    FoundWord,
    SelectionResult,
    PowerupType,
    PowerupConfig,
    PowerupState,
    PowerupUsageEvent,
    PowerupResult,
    PowerupSnapshot,
    HintEffect,
    TimeExtensionEffect,
    ShuffleEffect,
    UsageAnalytics,
    WordFoundEvent,
    LevelCompleteEvent,
    PuzzleReadyEvent,
    SessionEvent,
    SessionState,
    POWERUP_TYPES,
)
from .config import GameConfig, load_config, POWERUP_CONFIGS
from .store import ScoreStore, JsonScoreStore
from .powerups import PowerupEngine
from .session import GameSession, SessionError, score_word

__all__ = [
    "Player",
    "SessionStats",
    "ScoreRecord",
    "FoundWord",
    "SelectionResult",
    "PowerupType",
    "PowerupConfig",
    "PowerupState",
    "PowerupUsageEvent",
    "PowerupResult",
    "PowerupSnapshot",
    "HintEffect",
    "TimeExtensionEffect",
    "ShuffleEffect",
    "UsageAnalytics",
    "WordFoundEvent",
    "LevelCompleteEvent",
    "PuzzleReadyEvent",
    "SessionEvent",
    "SessionState",
    "POWERUP_TYPES",
    "GameConfig",
    "load_config",
    "POWERUP_CONFIGS",
    "ScoreStore",
    "JsonScoreStore",
    "PowerupEngine",
    "GameSession",
    "SessionError",
    "score_word",
]
