"""Data models for selection matching."""

from typing import List, Optional
from pydantic import BaseModel, Field

from ..puzzle.models import CellPosition


# Rejection codes
EMPTY_PATH = "EMPTY_PATH"
OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
NOT_STRAIGHT = "NOT_STRAIGHT"
NO_MATCH = "NO_MATCH"
ALREADY_FOUND = "ALREADY_FOUND"
NOT_ACTIVE = "NOT_ACTIVE"


class SelectionError(BaseModel):
    """A single reason a selection was rejected."""
    code: str
    message: str
    position: Optional[CellPosition] = None


class SelectionCheck(BaseModel):
    """Result of checking a selection path against a grid."""
    valid: bool
    errors: List[SelectionError] = Field(default_factory=list)
    path: List[CellPosition] = Field(default_factory=list)
    letters: str = ""
