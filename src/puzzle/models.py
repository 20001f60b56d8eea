"""Data models for puzzle generation."""

from typing import List, Literal, NamedTuple, Tuple
from pydantic import BaseModel, ConfigDict, Field


# Type aliases
Difficulty = Literal["easy", "medium", "hard"]
Grid = List[List[str]]

DIFFICULTIES: Tuple[str, ...] = ("easy", "medium", "hard")


class CellPosition(NamedTuple):
    """A single grid cell, 0-indexed."""
    row: int
    col: int


class Direction(NamedTuple):
    """Step applied between consecutive letters of a placed word."""
    d_row: int
    d_col: int


class Theme(BaseModel):
    """A named category supplying candidate words across three tiers."""
    model_config = ConfigDict(frozen=True)

    name: str
    easy: Tuple[str, ...]
    medium: Tuple[str, ...]
    hard: Tuple[str, ...]

    def tier(self, difficulty: Difficulty) -> Tuple[str, ...]:
        """Candidate words for one tier."""
        return getattr(self, difficulty)


class WordPlacement(BaseModel):
    """Where a word was written into the grid."""
    word: str = Field(..., min_length=1, pattern=r'^[A-Z]+$')
    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)
    direction: Direction

    def cells(self) -> List[CellPosition]:
        """Cells covered by the word, in reading order."""
        return [
            CellPosition(self.row + i * self.direction.d_row, self.col + i * self.direction.d_col)
            for i in range(len(self.word))
        ]


class Puzzle(BaseModel):
    """One generated grid plus the words hidden in it."""
    grid: Grid
    words: List[str] = Field(default_factory=list)
    theme: str = ""
    difficulty: Difficulty = "easy"
    placements: List[WordPlacement] = Field(default_factory=list)

    @property
    def size(self) -> int:
        """Side length of the (square) grid."""
        return len(self.grid)

    def letter_at(self, position: CellPosition) -> str:
        return self.grid[position.row][position.col]
