"""Data models supporting the sudoku generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .constants import BOX_SIZE, CELL_COUNT, EMPTY, GRID_SIZE
from .exceptions import InvalidGridError


Grid = List[List[int]]
Cell = Tuple[int, int]


@dataclass
class PuzzleResult:
    """A generated puzzle together with the solution it was masked from."""

    solution: Grid
    puzzle: Grid
    given_count: int
    seed: Optional[str] = None
    attempts: int = 1
    validation_messages: List[str] = field(default_factory=list)


def empty_grid() -> Grid:
    return [[EMPTY] * GRID_SIZE for _ in range(GRID_SIZE)]


def copy_grid(grid: Grid) -> Grid:
    return [list(row) for row in grid]


def box_index(row: int, col: int) -> int:
    return (row // BOX_SIZE) * BOX_SIZE + col // BOX_SIZE


def box_origin(row: int, col: int) -> Cell:
    return (row // BOX_SIZE) * BOX_SIZE, (col // BOX_SIZE) * BOX_SIZE


def box_cells(row: int, col: int) -> Iterator[Cell]:
    """Yield every cell of the box containing ``(row, col)``, row-major."""

    top, left = box_origin(row, col)
    for r in range(top, top + BOX_SIZE):
        for c in range(left, left + BOX_SIZE):
            yield r, c


def iter_cells() -> Iterator[Cell]:
    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            yield r, c


def count_givens(grid: Grid) -> int:
    return sum(1 for r, c in iter_cells() if grid[r][c] != EMPTY)


def is_complete(grid: Grid) -> bool:
    return count_givens(grid) == CELL_COUNT


def ensure_grid_shape(grid: Grid) -> None:
    """Raise :class:`InvalidGridError` unless ``grid`` is 9 rows of 9 digits in 0..9."""

    if not isinstance(grid, list) or len(grid) != GRID_SIZE:
        raise InvalidGridError(f"Grid must be a list of {GRID_SIZE} rows")
    for r, row in enumerate(grid):
        if not isinstance(row, list) or len(row) != GRID_SIZE:
            raise InvalidGridError(f"Row {r} must be a list of {GRID_SIZE} cells")
        for c, value in enumerate(row):
            # bool is an int subclass but never a digit
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidGridError(f"Cell ({r},{c}) holds non-integer value {value!r}")
            if not EMPTY <= value <= GRID_SIZE:
                raise InvalidGridError(f"Cell ({r},{c}) value {value} outside 0..{GRID_SIZE}")
