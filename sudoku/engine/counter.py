"""Exhaustive solution counting used as the uniqueness oracle."""

from __future__ import annotations

from typing import List, Optional

from ..core.constants import EMPTY
from ..core.models import Cell, Grid, copy_grid, ensure_grid_shape, iter_cells
from .safety import POPCOUNT, PlacementTracker, mask_digits


def count_solutions(grid: Grid, limit: Optional[int] = None) -> int:
    """Count every valid completion of ``grid``.

    Args:
        grid: 9x9 grid, ``0`` marking empty cells. It is not modified.
        limit: Stop as soon as this many completions have been found and
            return ``limit``. ``None`` returns the exact count.

    Returns:
        Number of completions; ``0`` when the givens already conflict.
    """
    ensure_grid_shape(grid)
    if limit is not None and limit < 1:
        raise ValueError("limit must be >= 1")

    work = copy_grid(grid)
    tracker = PlacementTracker.from_grid(work)
    if not tracker.consistent:
        return 0
    empties = [(r, c) for r, c in iter_cells() if work[r][c] == EMPTY]
    return _count(work, tracker, empties, limit)


def has_unique_solution(grid: Grid) -> bool:
    return count_solutions(grid, limit=2) == 1


def _count(grid: Grid, tracker: PlacementTracker, empties: List[Cell], limit: Optional[int]) -> int:
    # Branch on the most constrained empty cell; the total does not depend on
    # the order cells are expanded in.
    best: Optional[Cell] = None
    best_mask = 0
    best_size = 10
    for row, col in empties:
        if grid[row][col] != EMPTY:
            continue
        mask = tracker.candidate_mask(row, col)
        size = POPCOUNT[mask]
        if size == 0:
            return 0
        if size < best_size:
            best, best_mask, best_size = (row, col), mask, size
            if size == 1:
                break

    if best is None:
        return 1

    row, col = best
    total = 0
    for value in mask_digits(best_mask):
        grid[row][col] = value
        tracker.place(row, col, value)
        total += _count(grid, tracker, empties, None if limit is None else limit - total)
        tracker.remove(row, col, value)
        grid[row][col] = EMPTY
        if limit is not None and total >= limit:
            return limit
    return total
