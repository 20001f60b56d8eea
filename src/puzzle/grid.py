"""Grid building and rendering utilities."""

from typing import List, Optional, Sequence

from .models import CellPosition, Direction, Grid


# The four axis directions and the four diagonals
DIRECTIONS: List[Direction] = [
    Direction(0, 1),    # right
    Direction(1, 0),    # down
    Direction(1, 1),    # down-right
    Direction(0, -1),   # left
    Direction(-1, 0),   # up
    Direction(-1, -1),  # up-left
    Direction(1, -1),   # down-left
    Direction(-1, 1),   # up-right
]

EMPTY = ""


def create_empty_grid(size: int) -> Grid:
    """Create a size x size grid of empty cells."""
    return [[EMPTY for _ in range(size)] for _ in range(size)]


def copy_grid(grid: Grid) -> Grid:
    return [list(row) for row in grid]


def in_bounds(grid: Grid, position: CellPosition) -> bool:
    """Check a position lies inside the grid."""
    row, col = position
    return 0 <= row < len(grid) and 0 <= col < len(grid[row])


def path_cells(origin: CellPosition, direction: Direction, length: int) -> List[CellPosition]:
    """Cells visited when walking `length` steps from `origin` along `direction`."""
    return [
        CellPosition(origin.row + i * direction.d_row, origin.col + i * direction.d_col)
        for i in range(length)
    ]


def can_place_word(grid: Grid, word: str, origin: CellPosition, direction: Direction) -> bool:
    """
    Check whether `word` fits at `origin` along `direction`.

    Every cell must be in bounds, and an occupied cell must already hold
    the same letter.
    """
    for letter, cell in zip(word, path_cells(origin, direction, len(word))):
        if not in_bounds(grid, cell):
            return False
        existing = grid[cell.row][cell.col]
        if existing != EMPTY and existing != letter:
            return False
    return True


def place_word(grid: Grid, word: str, origin: CellPosition, direction: Direction) -> None:
    """Write `word` into the grid. Call can_place_word first."""
    for letter, cell in zip(word, path_cells(origin, direction, len(word))):
        grid[cell.row][cell.col] = letter


def step_of(path: Sequence[CellPosition]) -> Optional[Direction]:
    """
    Return the constant step of a straight-line path, or None.

    Each step component must be in {-1, 0, 1} and not both zero. A single
    cell is treated as a degenerate straight line with step (0, 0).
    """
    if not path:
        return None
    if len(path) == 1:
        return Direction(0, 0)

    d_row = path[1][0] - path[0][0]
    d_col = path[1][1] - path[0][1]
    if (d_row, d_col) == (0, 0) or abs(d_row) > 1 or abs(d_col) > 1:
        return None

    for prev, cur in zip(path, path[1:]):
        if (cur[0] - prev[0], cur[1] - prev[1]) != (d_row, d_col):
            return None

    return Direction(d_row, d_col)


def is_straight_line(path: Sequence[CellPosition]) -> bool:
    return step_of(path) is not None


def letters_along(grid: Grid, path: Sequence[CellPosition]) -> str:
    """Read the letters under a path, in path order."""
    return "".join(grid[row][col] for row, col in path)


def find_letter(grid: Grid, letter: str) -> Optional[CellPosition]:
    """First cell (row-major) holding `letter`, or None."""
    letter = letter.upper()
    for row, cells in enumerate(grid):
        for col, value in enumerate(cells):
            if value == letter:
                return CellPosition(row, col)
    return None


def render_grid(grid: Grid) -> str:
    """Render the grid to a string, one row per line, empty cells as '.'."""
    if not grid:
        return ""

    return "\n".join(
        " ".join(cell or "." for cell in row)
        for row in grid
    )
