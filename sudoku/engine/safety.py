"""Placement legality checks shared by the filler and the solution counter."""

from __future__ import annotations

from typing import List

from ..core.constants import EMPTY, FULL_MASK, GRID_SIZE
from ..core.models import Grid, box_cells, box_index, ensure_grid_shape, iter_cells


def is_safe(grid: Grid, row: int, col: int, value: int) -> bool:
    """Return ``True`` when ``value`` may occupy ``(row, col)``.

    The placement is unsafe iff ``value`` already appears among the nonzero
    cells of the row, the column or the 3x3 box containing the cell. The
    grid is never modified. Raises :class:`InvalidGridError` for a malformed
    grid and ``ValueError`` for a cell or digit out of range.
    """

    ensure_grid_shape(grid)
    if not (0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE):
        raise ValueError(f"Cell ({row},{col}) is outside the grid")
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= GRID_SIZE:
        raise ValueError(f"Digit must be in 1..{GRID_SIZE}, got {value!r}")

    if value in grid[row]:
        return False
    if any(grid[r][col] == value for r in range(GRID_SIZE)):
        return False
    return all(grid[r][c] != value for r, c in box_cells(row, col))


def _bit(value: int) -> int:
    return 1 << (value - 1)


def mask_digits(mask: int) -> List[int]:
    """Digits whose bits are set in ``mask``, ascending."""

    return [value for value in range(1, GRID_SIZE + 1) if mask & _bit(value)]


POPCOUNT = [bin(mask).count("1") for mask in range(FULL_MASK + 1)]


class PlacementTracker:
    """Row, column and box occupancy as 9-bit masks.

    ``can_place`` answers exactly what :func:`is_safe` answers for the grid
    the tracker mirrors, but placement and undo are constant time, which the
    backtracking searches rely on.
    """

    def __init__(self) -> None:
        self.rows = [0] * GRID_SIZE
        self.cols = [0] * GRID_SIZE
        self.boxes = [0] * GRID_SIZE
        self.consistent = True

    @classmethod
    def from_grid(cls, grid: Grid) -> "PlacementTracker":
        ensure_grid_shape(grid)
        tracker = cls()
        for r, c in iter_cells():
            value = grid[r][c]
            if value == EMPTY:
                continue
            if not tracker.can_place(r, c, value):
                tracker.consistent = False
            tracker.place(r, c, value)
        return tracker

    def candidate_mask(self, row: int, col: int) -> int:
        used = self.rows[row] | self.cols[col] | self.boxes[box_index(row, col)]
        return FULL_MASK & ~used

    def can_place(self, row: int, col: int, value: int) -> bool:
        return bool(self.candidate_mask(row, col) & _bit(value))

    def place(self, row: int, col: int, value: int) -> None:
        bit = _bit(value)
        self.rows[row] |= bit
        self.cols[col] |= bit
        self.boxes[box_index(row, col)] |= bit

    def remove(self, row: int, col: int, value: int) -> None:
        bit = ~_bit(value)
        self.rows[row] &= bit
        self.cols[col] &= bit
        self.boxes[box_index(row, col)] &= bit


def is_valid_grid(grid: Grid) -> bool:
    """Whether the nonzero cells of every row, column and box are distinct."""

    return PlacementTracker.from_grid(grid).consistent
