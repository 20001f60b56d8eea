"""
Test suite for puzzle generation.

Covers:
- Theme selection from preference tags
- Tier mix of the drawn word list
- Placement correctness and overlap rules
- Dropping words that cannot be placed
- Random fill and reproducibility
"""

import asyncio
import string

import pytest

from src.puzzle import (
    DIFFICULTIES,
    THEMES,
    CellPosition,
    Direction,
    PuzzleGenerator,
    can_place_word,
    create_empty_grid,
    get_theme,
    render_grid,
    themes_for_preferences,
)


class TestThemeSelection:
    """Test cases for picking a theme."""

    def test_single_preference_picks_its_theme(self):
        """A tag mapping to one theme always picks it."""
        generator = PuzzleGenerator(seed=1)
        for _ in range(20):
            assert generator.select_theme({"space"}) == "space"

    def test_preference_with_several_themes(self):
        """A tag mapping to several themes picks among them."""
        generator = PuzzleGenerator(seed=2)
        picked = {generator.select_theme({"vacation"}) for _ in range(50)}
        assert picked <= {"transportation", "nature"}
        assert len(picked) == 2

    def test_unknown_preferences_fall_back_to_all_themes(self):
        """Unmatched tags behave like no preferences."""
        generator = PuzzleGenerator(seed=3)
        picked = {generator.select_theme({"cooking"}) for _ in range(200)}
        assert picked <= set(THEMES)
        assert len(picked) > 1

    def test_themes_listed_once(self):
        """A theme unlocked by two tags is not duplicated."""
        assert themes_for_preferences({"sports", "hobby"}) == ["sports", "colors"]

    def test_preferences_are_case_insensitive(self):
        assert themes_for_preferences({"SPACE"}) == ["space"]

    def test_get_theme(self):
        assert get_theme("Animals") is THEMES["animals"]
        assert all(get_theme(name).tier(d) for name in THEMES for d in DIFFICULTIES)
        with pytest.raises(KeyError):
            get_theme("dinosaurs")


class TestWordSelection:
    """Test cases for drawing words from a theme."""

    @pytest.mark.parametrize("difficulty,mix", [
        ("easy", (8, 3, 1)),
        ("medium", (4, 6, 2)),
        ("hard", (2, 4, 6)),
    ])
    def test_tier_mix(self, difficulty, mix):
        """Word counts per tier follow the difficulty ratios."""
        generator = PuzzleGenerator(seed=4)
        words = generator.select_words("animals", difficulty)
        theme = THEMES["animals"]

        counts = tuple(
            sum(1 for w in words if w.lower() in theme.tier(tier))
            for tier in ("easy", "medium", "hard")
        )
        assert counts == mix
        assert len(words) == 12

    def test_words_are_uppercase_and_unique(self):
        """Duplicates across tiers collapse to one entry."""
        generator = PuzzleGenerator(seed=5)
        for _ in range(20):
            words = generator.select_words("transportation", "medium")
            assert all(w.isupper() for w in words)
            assert len(words) == len(set(words))

    def test_order_is_shuffled(self):
        """Display order is not grouped by tier."""
        generator = PuzzleGenerator(seed=6)
        easy = set(w.upper() for w in THEMES["animals"].easy)
        orders = [generator.select_words("animals", "easy") for _ in range(10)]
        grouped = [all(w in easy for w in words[:8]) for words in orders]
        assert not all(grouped)

    def test_unknown_difficulty_raises(self):
        generator = PuzzleGenerator(seed=7)
        with pytest.raises(ValueError):
            generator.select_words("animals", "expert")


class TestPlacement:
    """Test cases for writing words into the grid."""

    def test_render_grid(self):
        grid = create_empty_grid(2)
        grid[0][0] = "C"
        assert render_grid(grid) == "C .\n. ."
        assert render_grid([]) == ""

    def test_same_letter_overlap_allowed(self):
        grid = create_empty_grid(5)
        grid[0][2] = "T"
        assert can_place_word(grid, "CAT", CellPosition(0, 0), Direction(0, 1))

    def test_conflicting_overlap_rejected(self):
        grid = create_empty_grid(5)
        grid[0][1] = "X"
        assert not can_place_word(grid, "CAT", CellPosition(0, 0), Direction(0, 1))

    def test_out_of_bounds_rejected(self):
        grid = create_empty_grid(3)
        assert not can_place_word(grid, "CAT", CellPosition(0, 1), Direction(0, 1))
        assert not can_place_word(grid, "CAT", CellPosition(1, 0), Direction(-1, 0))

    def test_placed_letters_match_words(self):
        """Every covered cell holds the word's letter in reading order."""
        generator = PuzzleGenerator(seed=8)
        for difficulty in ("easy", "medium", "hard"):
            puzzle = generator.generate(difficulty)
            for placement in puzzle.placements:
                letters = "".join(puzzle.letter_at(cell) for cell in placement.cells())
                assert letters == placement.word

    def test_uses_all_eight_directions(self):
        generator = PuzzleGenerator(seed=9)
        directions = set()
        for _ in range(10):
            directions.update(p.direction for p in generator.generate("easy").placements)
        assert len(directions) == 8

    def test_unplaceable_word_is_dropped(self):
        """A word longer than the grid never fits and is skipped."""
        generator = PuzzleGenerator(grid_size=3, seed=10)
        grid, placements = generator.place_words(["ELEPHANT", "CAT"])
        assert [p.word for p in placements] == ["CAT"]

    def test_dropped_words_are_not_listed(self):
        """The puzzle lists exactly the words that were placed."""
        generator = PuzzleGenerator(grid_size=4, seed=11)
        puzzle = generator.generate("hard", {"animals"})
        assert puzzle.words == [p.word for p in puzzle.placements]
        assert len(puzzle.words) < 12
        assert all(len(w) <= 4 for w in puzzle.words)


class TestGenerate:
    """Test cases for whole-puzzle generation."""

    def test_grid_shape_and_fill(self):
        """Every cell is a single uppercase ASCII letter."""
        puzzle = PuzzleGenerator(seed=12).generate("medium", {"food"})
        assert puzzle.size == 12
        for row in puzzle.grid:
            assert len(row) == 12
            for cell in row:
                assert len(cell) == 1
                assert cell in string.ascii_uppercase

    def test_metadata(self):
        puzzle = PuzzleGenerator(seed=13).generate("hard", {"space"})
        assert puzzle.theme == "Space"
        assert puzzle.difficulty == "hard"
        assert 0 < len(puzzle.words) <= 12

    def test_seed_is_reproducible(self):
        first = PuzzleGenerator(seed=14).generate("easy", {"colors"})
        second = PuzzleGenerator(seed=14).generate("easy", {"colors"})
        assert first == second

    def test_generate_async(self):
        """The async path returns a puzzle after the pacing delay."""
        generator = PuzzleGenerator(seed=15, pacing_delay=0.01)
        puzzle = asyncio.run(generator.generate_async("easy", ["school"]))
        assert puzzle.theme == "School"
