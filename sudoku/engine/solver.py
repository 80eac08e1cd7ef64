"""CP-SAT sudoku solver using OR-Tools.

Serves as an independent cross-check of the backtracking counter: a puzzle is
unique when CP-SAT finds one solution and the model that forbids that
solution is infeasible.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ortools.sat.python import cp_model

from ..core.constants import BOX_SIZE, EMPTY, GRID_SIZE
from ..core.exceptions import SolverError
from ..core.models import Grid, ensure_grid_shape, iter_cells
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


def solve_grid(
    grid: Grid,
    timeout: float = 10.0,
    forbidden: Optional[Grid] = None,
) -> Optional[Grid]:
    """Complete ``grid`` via CP-SAT.

    Args:
        grid: 9x9 grid with ``0`` for empty cells.
        timeout: Solver time limit in seconds.
        forbidden: A completion the result must differ from in at least one
            empty cell.

    Returns:
        The completed grid, or ``None`` if no (other) completion exists.

    Raises:
        SolverError: the solver stopped without proving either outcome.
    """
    ensure_grid_shape(grid)
    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: Cell variables, givens fixed by their domain
    # ------------------------------------------------------------------
    cell_vars: Dict[Tuple[int, int], cp_model.IntVar] = {}
    for r, c in iter_cells():
        value = grid[r][c]
        if value == EMPTY:
            cell_vars[(r, c)] = model.new_int_var(1, GRID_SIZE, f"V_{r}_{c}")
        else:
            cell_vars[(r, c)] = model.new_int_var(value, value, f"V_{r}_{c}")

    # ------------------------------------------------------------------
    # Step 2: Row, column and box distinctness
    # ------------------------------------------------------------------
    for index in range(GRID_SIZE):
        model.add_all_different([cell_vars[(index, c)] for c in range(GRID_SIZE)])
        model.add_all_different([cell_vars[(r, index)] for r in range(GRID_SIZE)])
    for top in range(0, GRID_SIZE, BOX_SIZE):
        for left in range(0, GRID_SIZE, BOX_SIZE):
            model.add_all_different(
                [
                    cell_vars[(top + dr, left + dc)]
                    for dr in range(BOX_SIZE)
                    for dc in range(BOX_SIZE)
                ]
            )

    # ------------------------------------------------------------------
    # Step 3: Exclude a known completion
    # ------------------------------------------------------------------
    if forbidden is not None:
        if not _forbid_solution(model, cell_vars, grid, forbidden):
            return None

    # ------------------------------------------------------------------
    # Step 4: Solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = 4

    status = solver.solve(model)
    if status == cp_model.INFEASIBLE:
        LOGGER.debug("CP-SAT: infeasible in %.2fs", solver.wall_time)
        return None
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        raise SolverError(f"CP-SAT ended with status {solver.status_name(status)}")

    LOGGER.debug("CP-SAT: solution found in %.2fs", solver.wall_time)
    return [[solver.value(cell_vars[(r, c)]) for c in range(GRID_SIZE)] for r in range(GRID_SIZE)]


def has_unique_solution(grid: Grid, timeout: float = 10.0) -> bool:
    first = solve_grid(grid, timeout=timeout)
    if first is None:
        return False
    return solve_grid(grid, timeout=timeout, forbidden=first) is None


def _forbid_solution(model, cell_vars, grid: Grid, forbidden: Grid) -> bool:
    """Require at least one empty cell to differ from ``forbidden``.

    Returns ``False`` when the grid has no empty cell, so nothing can differ.
    """
    diffs: List[cp_model.IntVar] = []
    for r, c in iter_cells():
        if grid[r][c] != EMPTY:
            continue
        b = model.new_bool_var(f"ne_{r}_{c}")
        model.add(cell_vars[(r, c)] != forbidden[r][c]).only_enforce_if(b)
        model.add(cell_vars[(r, c)] == forbidden[r][c]).only_enforce_if(~b)
        diffs.append(b)
    if not diffs:
        return False
    model.add_bool_or(diffs)
    return True
