"""Game configuration and YAML loading."""

from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field

from ..puzzle.generator import GRID_SIZE, MAX_PLACEMENT_ATTEMPTS, PACING_DELAY_SECONDS, WORD_COUNT
from .models import PowerupConfig, PowerupType


POWERUP_CONFIGS: Dict[str, PowerupConfig] = {
    "hint": PowerupConfig(cost=100, cooldown_ms=30_000),
    "time-extension": PowerupConfig(cost=150, cooldown_ms=45_000),
    "shuffle": PowerupConfig(cost=200, cooldown_ms=60_000),
}

COMBO_WINDOW_MS = 10_000
TIME_EXTENSION_MS = 5_000
SHUFFLE_RATIO = 0.3
LEADERBOARD_SIZE = 10
LEVELS_PER_PROMOTION = 3


class GameConfig(BaseModel):
    """Tunable parameters for a game session."""
    grid_size: int = Field(default=GRID_SIZE, ge=1)
    word_count: int = Field(default=WORD_COUNT, ge=1)
    max_placement_attempts: int = Field(default=MAX_PLACEMENT_ATTEMPTS, ge=1)
    combo_window_ms: int = Field(default=COMBO_WINDOW_MS, ge=0)
    time_extension_ms: int = Field(default=TIME_EXTENSION_MS, ge=0)
    shuffle_ratio: float = Field(default=SHUFFLE_RATIO, ge=0, le=1)
    leaderboard_size: int = Field(default=LEADERBOARD_SIZE, ge=1)
    levels_per_promotion: int = Field(default=LEVELS_PER_PROMOTION, ge=1)
    pacing_delay: float = Field(default=PACING_DELAY_SECONDS, ge=0)
    auto_advance: bool = True
    seed: Optional[int] = None
    powerups: Dict[PowerupType, PowerupConfig] = Field(
        default_factory=lambda: {k: v.model_copy() for k, v in POWERUP_CONFIGS.items()}
    )

    def model_post_init(self, __context) -> None:
        """Fill in defaults for power-up types the config left out."""
        for powerup_type, default in POWERUP_CONFIGS.items():
            self.powerups.setdefault(powerup_type, default.model_copy())


def load_config(config_path: str | Path) -> GameConfig:
    """Load game configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    return GameConfig(**(data or {}))
