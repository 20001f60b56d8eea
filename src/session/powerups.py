import logging
import math
import random
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..puzzle.grid import copy_grid, find_letter
from ..puzzle.models import Grid
from ..utils.clock import Clock, wall_clock_ms
from .config import POWERUP_CONFIGS, SHUFFLE_RATIO, TIME_EXTENSION_MS
from .models import (
    POWERUP_TYPES,
    HintEffect,
    PowerupConfig,
    PowerupResult,
    PowerupSnapshot,
    PowerupState,
    PowerupType,
    PowerupUsageEvent,
    ShuffleEffect,
    TimeExtensionEffect,
    UsageAnalytics,
)


logger = logging.getLogger(__name__)


class PowerupEngine(BaseModel):
    """
    Cooldown- and score-gated special actions.

    Each power-up type has a point cost and a cooldown. A type is usable
    when its cooldown has elapsed and the score covers its cost; using it
    never deducts score. The engine computes effects from a snapshot of
    session state; the session applies them.

    Attributes:
        configs: Cost and cooldown per power-up type
        time_extension_ms: Combo window granted by one time-extension
        shuffle_ratio: Fraction of grid cells swapped by one shuffle
        clock: Millisecond time source
        states: Cooldown end and usage count per type
        history: Every successful use, across puzzles
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    configs: Dict[PowerupType, PowerupConfig] = Field(
        default_factory=lambda: {k: v.model_copy() for k, v in POWERUP_CONFIGS.items()}
    )
    time_extension_ms: int = TIME_EXTENSION_MS
    shuffle_ratio: float = SHUFFLE_RATIO
    clock: Clock = Field(default=wall_clock_ms, exclude=True)
    seed: Optional[int] = None
    rng: Optional[random.Random] = Field(default=None, exclude=True)
    states: Dict[PowerupType, PowerupState] = Field(default_factory=dict)
    history: List[PowerupUsageEvent] = Field(default_factory=list)
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        """Initialize the random generator and per-type state."""
        self._rng = self.rng if self.rng is not None else random.Random(self.seed)
        if not self.states:
            self.reset()

    def reset(self) -> None:
        """Clear cooldowns and usage counts (history is kept)."""
        self.states = {t: PowerupState(type=t) for t in POWERUP_TYPES}

    def can_use(self, powerup_type: PowerupType, score: int) -> bool:
        """Check cooldown and cost against the current time and score."""
        config = self.configs.get(powerup_type)
        state = self.states.get(powerup_type)
        if config is None or state is None:
            return False
        return self.clock() >= state.cooldown_end and score >= config.cost

    def remaining_cooldown(self, powerup_type: PowerupType) -> float:
        """Milliseconds until the cooldown ends (0 when ready)."""
        state = self.states.get(powerup_type)
        if state is None:
            return 0.0
        return max(0.0, state.cooldown_end - self.clock())

    def get_states(self) -> Dict[PowerupType, PowerupState]:
        return {t: s.model_copy() for t, s in self.states.items()}

    def use(self, powerup_type: PowerupType, snapshot: PowerupSnapshot) -> PowerupResult:
        """
        Use a power-up against a snapshot of session state.

        A request that fails gating changes nothing and reports
        success=False.
        """
        if not self.can_use(powerup_type, snapshot.score):
            logger.debug("Power-up '%s' unavailable (score %d)", powerup_type, snapshot.score)
            return PowerupResult(success=False, type=powerup_type)

        now = self.clock()
        state = self.states[powerup_type]
        state.cooldown_end = now + self.configs[powerup_type].cooldown_ms
        state.usage_count += 1

        self.history.append(PowerupUsageEvent(
            type=powerup_type,
            timestamp=now,
            level=snapshot.level,
            words_found_before=len(snapshot.found_words),
        ))

        if powerup_type == "hint":
            effect = self._hint(snapshot)
        elif powerup_type == "time-extension":
            effect = TimeExtensionEffect(
                extension_ms=self.time_extension_ms,
                total_extension_ms=snapshot.combo_extension_ms + self.time_extension_ms,
            )
        else:
            effect = ShuffleEffect(grid=self._shuffle(snapshot.grid))

        logger.debug("Used power-up '%s'", powerup_type)
        return PowerupResult(success=True, type=powerup_type, effect=effect)

    def _hint(self, snapshot: PowerupSnapshot) -> Optional[HintEffect]:
        # The first matching cell need not belong to the word's placement
        found = set(snapshot.found_words)
        unfound = [w for w in snapshot.words if w not in found]
        if not unfound:
            return None

        word = self._rng.choice(unfound)
        return HintEffect(word=word, position=find_letter(snapshot.grid, word[0]))

    def _shuffle(self, grid: Grid) -> Grid:
        new_grid = copy_grid(grid)
        cells = [(r, c) for r, row in enumerate(new_grid) for c in range(len(row))]
        if not cells:
            return new_grid

        for _ in range(math.floor(len(cells) * self.shuffle_ratio)):
            r1, c1 = cells[self._rng.randrange(len(cells))]
            r2, c2 = cells[self._rng.randrange(len(cells))]
            new_grid[r1][c1], new_grid[r2][c2] = new_grid[r2][c2], new_grid[r1][c1]

        return new_grid

    def usage_analytics(self) -> UsageAnalytics:
        """Summarize power-up usage across the session."""
        by_type = {t: 0 for t in POWERUP_TYPES}
        for event in self.history:
            by_type[event.type] += 1

        total = len(self.history)
        average = 0.0
        if total > 1:
            average = (self.history[-1].timestamp - self.history[0].timestamp) / (total - 1)

        return UsageAnalytics(
            total_usage=total,
            usage_by_type=by_type,
            average_ms_between_usage=average,
        )
