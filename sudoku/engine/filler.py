"""Random completely filled grid generation."""

from __future__ import annotations

import random
from typing import List

from ..core.constants import BOX_SIZE, DIAGONAL_BOX_OFFSETS, DIGITS, EMPTY
from ..core.exceptions import UnfillableGridError
from ..core.models import Cell, Grid, empty_grid, ensure_grid_shape, iter_cells
from ..utils.logger import get_logger
from .safety import PlacementTracker


LOGGER = get_logger(__name__)


def generate_filled_grid(rng: random.Random) -> Grid:
    """Return a random, valid and completely filled grid.

    The three boxes on the main diagonal share no row, column or box, so they
    are seeded with independent permutations first. The remaining cells are
    completed by depth-first backtracking in row-major order, trying digits in
    a fresh random order at every cell; the first completion wins.
    """

    grid = empty_grid()
    seed_diagonal_boxes(grid, rng)

    tracker = PlacementTracker.from_grid(grid)
    empties = [(r, c) for r, c in iter_cells() if grid[r][c] == EMPTY]
    stats = {"backtracks": 0}
    if not _fill(grid, tracker, empties, 0, rng, stats):
        raise UnfillableGridError("Unable to complete a grid seeded with diagonal boxes")

    LOGGER.debug("Filled grid after %d backtracks", stats["backtracks"])
    return grid


def seed_diagonal_boxes(grid: Grid, rng: random.Random) -> None:
    ensure_grid_shape(grid)
    for offset in DIAGONAL_BOX_OFFSETS:
        digits = list(DIGITS)
        rng.shuffle(digits)
        for index, digit in enumerate(digits):
            grid[offset + index // BOX_SIZE][offset + index % BOX_SIZE] = digit


def _fill(
    grid: Grid,
    tracker: PlacementTracker,
    empties: List[Cell],
    index: int,
    rng: random.Random,
    stats: dict,
) -> bool:
    if index == len(empties):
        return True

    row, col = empties[index]
    digits = list(DIGITS)
    rng.shuffle(digits)
    for digit in digits:
        if not tracker.can_place(row, col, digit):
            continue
        grid[row][col] = digit
        tracker.place(row, col, digit)
        if _fill(grid, tracker, empties, index + 1, rng, stats):
            return True
        tracker.remove(row, col, digit)
        grid[row][col] = EMPTY

    stats["backtracks"] += 1
    return False
