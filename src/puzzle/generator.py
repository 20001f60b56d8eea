import asyncio
import logging
import random
import string
from typing import Iterable, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from .grid import DIRECTIONS, EMPTY, can_place_word, create_empty_grid, place_word, render_grid
from .models import DIFFICULTIES, CellPosition, Difficulty, Grid, Puzzle, WordPlacement
from .wordbank import THEMES, TIER_MIX, get_theme, themes_for_preferences


logger = logging.getLogger(__name__)

GRID_SIZE = 12
WORD_COUNT = 12
MAX_PLACEMENT_ATTEMPTS = 100
PACING_DELAY_SECONDS = 0.5


class PuzzleGenerator(BaseModel):
    """
    Builds word-search puzzles from the theme catalogue.

    Picks a theme from the player's preferences, draws a mix of words from
    the theme's tiers, and places them into a square grid by randomized
    retry. Remaining cells are filled with random letters.

    Attributes:
        grid_size: Side length of generated grids
        word_count: Maximum number of words requested per puzzle
        max_attempts: Placement retries per word before it is dropped
        pacing_delay: Seconds generate_async waits before generating
        seed: Optional random seed for reproducibility
        rng: Optional shared random source (takes precedence over seed)
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    grid_size: int = Field(default=GRID_SIZE, ge=1)
    word_count: int = Field(default=WORD_COUNT, ge=1)
    max_attempts: int = Field(default=MAX_PLACEMENT_ATTEMPTS, ge=1)
    pacing_delay: float = Field(default=PACING_DELAY_SECONDS, ge=0)
    seed: Optional[int] = None
    rng: Optional[random.Random] = Field(default=None, exclude=True)
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = self.rng if self.rng is not None else random.Random(self.seed)

    def generate(self, difficulty: Difficulty, preferences: Iterable[str] = ()) -> Puzzle:
        """
        Generate a puzzle for a difficulty and set of preference tags.

        Never fails: words that cannot be placed are dropped, so the
        returned word list may be shorter than word_count.

        Args:
            difficulty: Tier mix to draw words with
            preferences: Player preference tags steering theme choice

        Returns:
            A new Puzzle whose word list holds exactly the placed words
        """
        theme = self.select_theme(preferences)
        words = self.select_words(theme, difficulty)
        grid, placements = self.place_words(words)
        self.fill_empty(grid)

        placed = [p.word for p in placements]
        logger.info(
            "Generated %s puzzle on theme '%s' with %d/%d words",
            difficulty, theme, len(placed), len(words),
        )
        logger.debug("Grid:\n%s", render_grid(grid))

        return Puzzle(
            grid=grid,
            words=placed,
            theme=theme.capitalize(),
            difficulty=difficulty,
            placements=placements,
        )

    async def generate_async(self, difficulty: Difficulty, preferences: Iterable[str] = ()) -> Puzzle:
        """Generate a puzzle after the configured pacing delay."""
        preferences = tuple(preferences)
        if self.pacing_delay:
            await asyncio.sleep(self.pacing_delay)
        return self.generate(difficulty, preferences)

    def select_theme(self, preferences: Iterable[str] = ()) -> str:
        """Pick a theme matching the preferences, or any theme if none match."""
        candidates = themes_for_preferences(preferences)
        if not candidates:
            candidates = list(THEMES)
        return self._rng.choice(candidates)

    def select_words(self, theme: str, difficulty: Difficulty) -> List[str]:
        """
        Draw the word list for a theme at a difficulty.

        Each tier is sampled without replacement (capped at the tier size),
        the combined list is shuffled, uppercased and de-duplicated.
        """
        if difficulty not in TIER_MIX:
            raise ValueError(f"Unknown difficulty: {difficulty!r}")

        source = get_theme(theme)
        selected: List[str] = []
        for tier, count in zip(DIFFICULTIES, TIER_MIX[difficulty]):
            candidates = source.tier(tier)
            selected.extend(self._rng.sample(candidates, min(count, len(candidates))))

        self._rng.shuffle(selected)

        words: List[str] = []
        for word in selected:
            word = word.upper()
            if word not in words:
                words.append(word)

        return words[:self.word_count]

    def place_words(self, words: List[str]) -> Tuple[Grid, List[WordPlacement]]:
        """
        Place words into a fresh empty grid.

        Returns:
            The partially filled grid and the placements that succeeded
        """
        grid = create_empty_grid(self.grid_size)
        placements: List[WordPlacement] = []

        for word in words:
            placement = self._try_place(grid, word)
            if placement is None:
                logger.warning(
                    "Dropped '%s' after %d placement attempts", word, self.max_attempts
                )
                continue
            placements.append(placement)

        return grid, placements

    def _try_place(self, grid: Grid, word: str) -> Optional[WordPlacement]:
        for _ in range(self.max_attempts):
            direction = self._rng.choice(DIRECTIONS)
            origin = CellPosition(
                self._rng.randrange(self.grid_size),
                self._rng.randrange(self.grid_size),
            )
            if can_place_word(grid, word, origin, direction):
                place_word(grid, word, origin, direction)
                return WordPlacement(
                    word=word, row=origin.row, col=origin.col, direction=direction
                )
        return None

    def fill_empty(self, grid: Grid) -> None:
        """Fill every empty cell with a random uppercase letter."""
        for row in grid:
            for col, cell in enumerate(row):
                if cell == EMPTY:
                    row[col] = self._rng.choice(string.ascii_uppercase)
