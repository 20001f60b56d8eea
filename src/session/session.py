import logging
import math
import random
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, List, Optional, Sequence
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from ..matching import ALREADY_FOUND, NO_MATCH, NOT_ACTIVE, WordIndex, check_selection
from ..puzzle.generator import PuzzleGenerator
from ..puzzle.models import CellPosition, Difficulty, Puzzle
from ..utils.clock import Clock, wall_clock_ms
from .config import GameConfig
from .models import (
    FoundWord,
    LevelCompleteEvent,
    Player,
    PowerupResult,
    PowerupSnapshot,
    PowerupType,
    PuzzleReadyEvent,
    ScoreRecord,
    SelectionResult,
    SessionEvent,
    SessionState,
    SessionStats,
    ShuffleEffect,
    TimeExtensionEffect,
    WordFoundEvent,
)
from .powerups import PowerupEngine
from .store import ScoreStore


logger = logging.getLogger(__name__)

DIFFICULTY_MULTIPLIERS: Dict[str, float] = {"easy": 1.0, "medium": 1.5, "hard": 2.0}
NEXT_DIFFICULTY: Dict[str, Difficulty] = {"easy": "medium", "medium": "hard", "hard": "hard"}
DIFFICULTY_LABELS: Dict[str, str] = {"easy": "6-8 years", "medium": "9-12 years", "hard": "13+ years"}


class SessionError(ValueError):
    """Raised when a session operation is called out of order."""


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_word(word: str, difficulty: Difficulty, combo: int) -> int:
    """
    Points for finding `word` at a difficulty with the given combo.

    len(word) x 10, times the difficulty multiplier (1 / 1.5 / 2), times
    1 + 0.5 per combo step beyond the first, rounded half up.
    """
    base = len(word) * 10
    combo_multiplier = 1 + 0.5 * (max(combo, 1) - 1)
    return round_half_up(base * DIFFICULTY_MULTIPLIERS[difficulty] * combo_multiplier)


class GameSession(BaseModel):
    """
    One player's run through successive puzzles.

    Owns the player, the current puzzle and its word index, the found
    words, score/combo/streak counters and level progression. Notifications
    for the host UI are queued and collected with drain_events().

    States: awaiting_player -> generating_puzzle -> active
            -> (level_complete -> generating_puzzle)*

    Attributes:
        config: Session parameters
        store: Leaderboard and per-player stats persistence
        clock: Millisecond time source for combo windows and cooldowns
        generator: Puzzle generator
        powerups: Power-up engine
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: GameConfig = Field(default_factory=GameConfig)
    store: ScoreStore = Field(default_factory=ScoreStore)
    clock: Clock = Field(default=wall_clock_ms, exclude=True)
    rng: Optional[random.Random] = Field(default=None, exclude=True)
    generator: Optional[PuzzleGenerator] = None
    powerups: Optional[PowerupEngine] = None

    _state: SessionState = PrivateAttr(default="awaiting_player")
    _player: Optional[Player] = PrivateAttr(default=None)
    _puzzle: Optional[Puzzle] = PrivateAttr(default=None)
    _index: Optional[WordIndex] = PrivateAttr(default=None)
    _stats: SessionStats = PrivateAttr(default_factory=SessionStats)
    _found: Dict[str, FoundWord] = PrivateAttr(default_factory=dict)
    _events: List[SessionEvent] = PrivateAttr(default_factory=list)
    _combo_extension: int = PrivateAttr(default=0)
    _last_find: Optional[float] = PrivateAttr(default=None)
    _generation_id: int = PrivateAttr(default=0)

    def model_post_init(self, __context) -> None:
        """Build the generator and power-up engine from the config when not supplied."""
        rng = self.rng if self.rng is not None else random.Random(self.config.seed)
        if self.generator is None:
            self.generator = PuzzleGenerator(
                grid_size=self.config.grid_size,
                word_count=self.config.word_count,
                max_attempts=self.config.max_placement_attempts,
                pacing_delay=self.config.pacing_delay,
                rng=rng,
            )
        if self.powerups is None:
            self.powerups = PowerupEngine(
                configs=self.config.powerups,
                time_extension_ms=self.config.time_extension_ms,
                shuffle_ratio=self.config.shuffle_ratio,
                clock=self.clock,
                rng=rng,
            )

    @classmethod
    def create(
        cls,
        config: Optional[GameConfig] = None,
        store: Optional[ScoreStore] = None,
        clock: Optional[Clock] = None,
        **config_kwargs: Any
    ) -> "GameSession":
        """
        Factory method to create a session.

        Args:
            config: Optional GameConfig instance
            store: Optional score store (defaults to in-memory)
            clock: Optional millisecond clock (defaults to wall clock)
            **config_kwargs: Config parameters if config not provided

        Returns:
            A session awaiting a player
        """
        if config is None:
            config = GameConfig(**config_kwargs)

        kwargs: Dict[str, Any] = {"config": config}
        if store is not None:
            kwargs["store"] = store
        if clock is not None:
            kwargs["clock"] = clock
        return cls(**kwargs)

    # ---------- Transitions ----------

    def set_player(self, player: Player) -> Puzzle:
        """Start a run for `player` and generate the first puzzle."""
        self._begin(player)
        return self.new_puzzle()

    async def start_async(self, player: Player) -> Optional[Puzzle]:
        """Start a run for `player`, generating the first puzzle asynchronously."""
        self._begin(player)
        return await self.new_puzzle_async()

    def _begin(self, player: Player) -> None:
        self._player = player.model_copy(deep=True)
        self._puzzle = None
        self._index = None
        self._found = {}
        self._stats = self.store.load_stats(player.name) or SessionStats()
        self._state = "generating_puzzle"
        logger.debug("Player '%s' joined at level %d", player.name, self._stats.level)

    def new_puzzle(self) -> Puzzle:
        """Generate and install a puzzle at the player's current difficulty."""
        player = self._require_player()
        self._generation_id += 1
        self._state = "generating_puzzle"
        puzzle = self.generator.generate(player.difficulty, player.preferences)
        self.load_puzzle(puzzle)
        return self.get_puzzle()

    async def new_puzzle_async(self) -> Optional[Puzzle]:
        """
        Generate a puzzle through the generator's paced async path.

        Only the most recent request installs its puzzle; a completion
        that was overtaken by a newer request is discarded and None is
        returned.
        """
        player = self._require_player()
        self._generation_id += 1
        request_id = self._generation_id
        self._state = "generating_puzzle"

        puzzle = await self.generator.generate_async(player.difficulty, player.preferences)

        if request_id != self._generation_id:
            logger.debug("Discarding stale puzzle from request %d", request_id)
            return None

        self.load_puzzle(puzzle)
        return self.get_puzzle()

    def load_puzzle(self, puzzle: Puzzle) -> None:
        """
        Install a puzzle and make the session active.

        Builds the word index, clears found words and resets power-ups.
        Score and level carry over.
        """
        self._require_player()
        self._puzzle = puzzle.model_copy(deep=True)
        self._index = WordIndex.build(self._puzzle.words)
        self._found = {}
        self._stats.words_found = 0
        self._combo_extension = 0
        self._last_find = None
        self.powerups.reset()
        self._state = "active"

        self._events.append(PuzzleReadyEvent(
            theme=puzzle.theme,
            difficulty=puzzle.difficulty,
            word_count=len(puzzle.words),
        ))

    def submit_selection(self, path: Sequence[Sequence[int]]) -> SelectionResult:
        """
        Validate a selection path and score it.

        Invalid paths, non-words, words already found and selections made
        while no puzzle is active are rejected with a reason code; they
        never raise.

        Raises:
            SessionError: If no player has been set yet
        """
        self._require_player()
        if self._state != "active":
            return SelectionResult(accepted=False, reason=NOT_ACTIVE)
        puzzle = self._require_puzzle()

        check = check_selection(puzzle.grid, path)
        if not check.valid:
            return SelectionResult(accepted=False, reason=check.errors[0].code)

        word = self._index.match(check.letters)
        if word is None:
            return SelectionResult(accepted=False, reason=NO_MATCH)
        if word in self._found:
            return SelectionResult(accepted=False, word=word, reason=ALREADY_FOUND)

        now = self.clock()
        window = self.config.combo_window_ms + self._combo_extension
        if self._last_find is not None and now - self._last_find < window:
            combo = self._stats.combo + 1
        else:
            combo = 1

        points = score_word(word, self._player.difficulty, combo)

        self._found[word] = FoundWord(word=word, path=check.path)
        stats = self._stats
        stats.score += points
        stats.combo = combo
        stats.words_found += 1
        stats.total_words_found += 1
        stats.current_streak += 1
        stats.best_streak = max(stats.best_streak, stats.current_streak)
        self._last_find = now

        self.store.save_stats(self._player.name, stats)
        self._events.append(WordFoundEvent(word=word, points=points, combo=combo))
        logger.debug("Found '%s' for %d points (combo %d)", word, points, combo)

        level_complete = self.is_level_complete()
        if level_complete:
            self.complete_level()

        return SelectionResult(
            accepted=True,
            word=word,
            points=points,
            combo=combo,
            level_complete=level_complete,
        )

    def is_level_complete(self) -> bool:
        """Check whether every word of the current puzzle has been found."""
        if self._puzzle is None:
            return False
        return len(self._found) == len(self._puzzle.words)

    def complete_level(self) -> LevelCompleteEvent:
        """
        Finish the current level.

        Advances the level, resets combo state, promotes difficulty every
        `levels_per_promotion` levels, records a leaderboard entry, then
        generates the next puzzle when auto_advance is on.

        Raises:
            SessionError: If there is no active puzzle, including one that
                was already completed or is still being generated
        """
        player = self._require_player()
        self._require_puzzle()
        if self._state == "level_complete":
            raise SessionError("Level already completed. Call new_puzzle() to continue.")
        if self._state != "active":
            raise SessionError(f"No active puzzle (session is {self._state}).")

        stats = self._stats
        stats.level += 1
        self._reset_combo_state()

        promoted = False
        if stats.level % self.config.levels_per_promotion == 0:
            next_difficulty = NEXT_DIFFICULTY[player.difficulty]
            promoted = next_difficulty != player.difficulty
            player.difficulty = next_difficulty

        self.store.add_score(ScoreRecord(
            name=player.name,
            age=player.age,
            difficulty=player.difficulty,
            score=stats.score,
            level=stats.level,
            date=self._now_iso(),
        ), limit=self.config.leaderboard_size)
        self.store.save_stats(player.name, stats)

        event = LevelCompleteEvent(
            level=stats.level,
            score=stats.score,
            difficulty=player.difficulty,
            promoted=promoted,
        )
        self._events.append(event)
        self._state = "level_complete"
        logger.info(
            "'%s' reached level %d with %d points (%s)",
            player.name, stats.level, stats.score, player.difficulty,
        )

        if self.config.auto_advance:
            self.new_puzzle()

        return event

    def reset_combo(self) -> None:
        """Clear combo, streak and combo-window extension without changing level."""
        self._reset_combo_state()

    def _reset_combo_state(self) -> None:
        self._stats.combo = 0
        self._stats.current_streak = 0
        self._combo_extension = 0
        self._last_find = None

    # ---------- Power-ups ----------

    def can_use_powerup(self, powerup_type: PowerupType) -> bool:
        if self._state != "active":
            return False
        return self.powerups.can_use(powerup_type, self._stats.score)

    def use_powerup(self, powerup_type: PowerupType) -> PowerupResult:
        """
        Use a power-up and apply its effect to the session.

        Outside an active puzzle the request fails without starting a
        cooldown.

        Raises:
            SessionError: If no player has been set yet
        """
        self._require_player()
        if self._state != "active":
            return PowerupResult(success=False, type=powerup_type)
        puzzle = self._require_puzzle()

        snapshot = PowerupSnapshot(
            grid=puzzle.grid,
            words=puzzle.words,
            found_words=list(self._found),
            score=self._stats.score,
            level=self._stats.level,
            combo_extension_ms=self._combo_extension,
        )
        result = self.powerups.use(powerup_type, snapshot)

        if result.success:
            if isinstance(result.effect, TimeExtensionEffect):
                self._combo_extension = result.effect.total_extension_ms
            elif isinstance(result.effect, ShuffleEffect):
                puzzle.grid = [list(row) for row in result.effect.grid]

        return result

    # ---------- Accessors ----------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def combo_extension(self) -> int:
        """Extra combo window (ms) granted by time-extension power-ups."""
        return self._combo_extension

    def get_player(self) -> Optional[Player]:
        return self._player.model_copy(deep=True) if self._player else None

    def get_puzzle(self) -> Optional[Puzzle]:
        return self._puzzle.model_copy(deep=True) if self._puzzle else None

    def get_stats(self) -> SessionStats:
        return self._stats.model_copy()

    def get_found_words(self) -> FrozenSet[str]:
        return frozenset(self._found)

    def get_found_paths(self) -> Dict[str, List[CellPosition]]:
        return {word: list(found.path) for word, found in self._found.items()}

    def get_leaderboard(self) -> List[ScoreRecord]:
        return self.store.leaderboard()

    def drain_events(self) -> List[SessionEvent]:
        """Return queued notifications in order and clear the queue."""
        events, self._events = self._events, []
        return events

    def progress_percentage(self) -> float:
        """Share of the current puzzle's words already found, 0-100."""
        if self._puzzle is None or not self._puzzle.words:
            return 0.0
        return len(self._found) / len(self._puzzle.words) * 100

    def difficulty_label(self) -> str:
        """Age range shown for the player's difficulty."""
        if self._player is None:
            return "Unknown"
        return DIFFICULTY_LABELS.get(self._player.difficulty, "Unknown")

    def get_state(self) -> Dict:
        """
        Get the current session state as a dictionary.

        Useful for serialization and logging.
        """
        return {
            "state": self._state,
            "player": self._player.model_dump() if self._player else None,
            "stats": self._stats.model_dump(),
            "theme": self._puzzle.theme if self._puzzle else None,
            "words": list(self._puzzle.words) if self._puzzle else [],
            "found_words": list(self._found),
            "combo_extension_ms": self._combo_extension,
            "powerups": {t: s.model_dump() for t, s in self.powerups.get_states().items()},
        }

    # ---------- Internals ----------

    def _require_player(self) -> Player:
        if self._player is None:
            raise SessionError("No player set. Call set_player() first.")
        return self._player

    def _require_puzzle(self) -> Puzzle:
        self._require_player()
        if self._puzzle is None or self._index is None:
            raise SessionError("No puzzle loaded. Call set_player() or load_puzzle() first.")
        return self._puzzle

    def _now_iso(self) -> str:
        return datetime.fromtimestamp(self.clock() / 1000, tz=timezone.utc).isoformat()
