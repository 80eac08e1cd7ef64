"""Random removal-candidate selection for the masker."""

from __future__ import annotations

import random

from ..core.constants import EMPTY, GRID_SIZE, JITTER_RADIUS
from ..core.models import Cell, Grid, ensure_grid_shape, iter_cells


class CellSelector:
    """Rejection-samples unmasked cells and their jittered mirrors.

    Mirroring a candidate through the grid centre, with a little random
    jitter, biases removals towards balanced patterns, which fail the
    uniqueness check less often than fully independent picks.
    """

    def __init__(self, rng: random.Random, jitter_radius: int = JITTER_RADIUS) -> None:
        self.rng = rng
        self.jitter_radius = jitter_radius

    def random_unmasked_cell(self, grid: Grid) -> Cell:
        ensure_grid_shape(grid)
        if all(grid[r][c] == EMPTY for r, c in iter_cells()):
            raise ValueError("Grid has no unmasked cell to select")
        while True:
            row = self.rng.randrange(GRID_SIZE)
            col = self.rng.randrange(GRID_SIZE)
            if grid[row][col] != EMPTY:
                return row, col

    def jittered_mirror_cell(self, grid: Grid, row: int, col: int) -> Cell:
        """Return an unmasked cell near the point-symmetric mirror of ``(row, col)``.

        Each coordinate of the mirror is offset by a uniform value in
        ``[-jitter_radius, jitter_radius]`` and wrapped around the grid edge
        until the resulting cell is unmasked.
        """

        ensure_grid_shape(grid)
        mirror_row = GRID_SIZE - 1 - row
        mirror_col = GRID_SIZE - 1 - col
        radius = self.jitter_radius
        offsets = range(-radius, radius + 1)
        if all(
            grid[(mirror_row + dr) % GRID_SIZE][(mirror_col + dc) % GRID_SIZE] == EMPTY
            for dr in offsets
            for dc in offsets
        ):
            raise ValueError(f"No unmasked cell within {radius} of mirror ({mirror_row},{mirror_col})")

        while True:
            new_row = (mirror_row + self.rng.randint(-radius, radius)) % GRID_SIZE
            new_col = (mirror_col + self.rng.randint(-radius, radius)) % GRID_SIZE
            if grid[new_row][new_col] != EMPTY:
                return new_row, new_col
