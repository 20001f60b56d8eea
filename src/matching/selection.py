"""
Selection checking for player drag gestures.

Validates:
1. The path is not empty
2. Every cell lies inside the grid
3. The cells form a straight line (constant step, each component in {-1, 0, 1})

and reads the letters under the path when all checks pass.
"""

from typing import List, Sequence

from ..puzzle.grid import in_bounds, letters_along, step_of
from ..puzzle.models import CellPosition, Grid
from .models import EMPTY_PATH, NOT_STRAIGHT, OUT_OF_BOUNDS, SelectionCheck, SelectionError


def check_selection(grid: Grid, path: Sequence[Sequence[int]]) -> SelectionCheck:
    """
    Check a selection path against a grid.

    Returns a SelectionCheck with:
    - valid: True if the path can be read
    - errors: every reason the path was rejected
    - path: the path as CellPositions
    - letters: the letters along the path (empty when invalid)
    """
    cells: List[CellPosition] = [CellPosition(int(r), int(c)) for r, c in path]
    errors: List[SelectionError] = []

    if not cells:
        errors.append(SelectionError(
            code=EMPTY_PATH,
            message="Selection is empty",
        ))
        return SelectionCheck(valid=False, errors=errors)

    for cell in cells:
        if not in_bounds(grid, cell):
            errors.append(SelectionError(
                code=OUT_OF_BOUNDS,
                message=f"Cell {tuple(cell)} is outside the {len(grid)}x{len(grid)} grid",
                position=cell,
            ))

    if step_of(cells) is None:
        errors.append(SelectionError(
            code=NOT_STRAIGHT,
            message="Selection is not a straight line of adjacent cells",
        ))

    if errors:
        return SelectionCheck(valid=False, errors=errors, path=cells)

    return SelectionCheck(
        valid=True,
        path=cells,
        letters=letters_along(grid, cells),
    )
