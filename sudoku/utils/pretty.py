"""Pretty-print helpers for sudoku grids."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List, Optional

from ..core.constants import BOX_SIZE, EMPTY, GRID_SIZE
from ..core.models import box_cells, count_givens, ensure_grid_shape

if TYPE_CHECKING:
    from ..core.models import Grid, PuzzleResult


EMPTY_SYMBOL = "."


def cell_symbol(value: int) -> str:
    return EMPTY_SYMBOL if value == EMPTY else str(value)


def format_grid(grid: Grid) -> str:
    """Render a grid with a blank column and line between boxes."""

    ensure_grid_shape(grid)
    lines: List[str] = []
    for r, row in enumerate(grid):
        if r and r % BOX_SIZE == 0:
            lines.append("")
        groups = [
            " ".join(cell_symbol(value) for value in row[c:c + BOX_SIZE])
            for c in range(0, GRID_SIZE, BOX_SIZE)
        ]
        lines.append("  ".join(groups))
    return "\n".join(lines)


def pretty_print_grid(grid: Grid, *, label: Optional[str] = None, stream=None) -> None:
    """Print the grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def print_puzzle_stats(result: PuzzleResult, *, show_solution: bool = False, stream=None) -> None:
    """Print the puzzle (optionally its solution) and givens statistics."""

    stream = stream or sys.stdout
    pretty_print_grid(result.puzzle, label="Puzzle:", stream=stream)
    if show_solution:
        print(file=stream)
        pretty_print_grid(result.solution, label="Solution:", stream=stream)

    puzzle = result.puzzle
    givens = count_givens(puzzle)
    row_givens = [sum(1 for value in row if value != EMPTY) for row in puzzle]
    col_givens = [sum(1 for row in puzzle if row[c] != EMPTY) for c in range(GRID_SIZE)]
    box_givens = [
        sum(1 for r, c in box_cells(top, left) if puzzle[r][c] != EMPTY)
        for top in range(0, GRID_SIZE, BOX_SIZE)
        for left in range(0, GRID_SIZE, BOX_SIZE)
    ]

    print(file=stream)
    print(f"Givens:          {givens} / {GRID_SIZE * GRID_SIZE}", file=stream)
    print(f"Cells to fill:   {GRID_SIZE * GRID_SIZE - givens}", file=stream)
    print(f"Givens per row:  {row_givens}", file=stream)
    print(f"Givens per col:  {col_givens}", file=stream)
    print(f"Givens per box:  {box_givens}", file=stream)
    print(f"Attempts:        {result.attempts}", file=stream)
    if result.seed:
        print(f"Seed:            {result.seed}", file=stream)
