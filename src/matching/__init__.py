"""Selection matching for the word-search engine."""

from .index import WordIndex
from .selection import check_selection
from .models import (
    SelectionCheck,
    SelectionError,
    EMPTY_PATH,
    OUT_OF_BOUNDS,
    NOT_STRAIGHT,
    NO_MATCH,
    ALREADY_FOUND,
    NOT_ACTIVE,
)

__all__ = [
    # Index
    "WordIndex",
    # Selection checking
    "check_selection",
    # Models
    "SelectionCheck",
    "SelectionError",
    # Rejection codes
    "EMPTY_PATH",
    "OUT_OF_BOUNDS",
    "NOT_STRAIGHT",
    "NO_MATCH",
    "ALREADY_FOUND",
    "NOT_ACTIVE",
]
