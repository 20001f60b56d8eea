"""Puzzle generation for the word-search engine."""

from .models import CellPosition, Difficulty, Direction, Grid, Puzzle, Theme, WordPlacement, DIFFICULTIES
from .wordbank import THEMES, PREFERENCE_THEMES, TIER_MIX, get_theme, themes_for_preferences
from .grid import (
    DIRECTIONS,
    can_place_word,
    create_empty_grid,
    find_letter,
    is_straight_line,
    letters_along,
    render_grid,
)
from .generator import PuzzleGenerator, GRID_SIZE, WORD_COUNT, MAX_PLACEMENT_ATTEMPTS

__all__ = [
    # Models
    "CellPosition",
    "Difficulty",
    "Direction",
    "Grid",
    "Puzzle",
    "Theme",
    "WordPlacement",
    "DIFFICULTIES",
    # Word bank
    "THEMES",
    "PREFERENCE_THEMES",
    "TIER_MIX",
    "get_theme",
    "themes_for_preferences",
    # Grid utilities
    "DIRECTIONS",
    "can_place_word",
    "create_empty_grid",
    "find_letter",
    "is_straight_line",
    "letters_along",
    "render_grid",
    # Generation
    "PuzzleGenerator",
    "GRID_SIZE",
    "WORD_COUNT",
    "MAX_PLACEMENT_ATTEMPTS",
]
