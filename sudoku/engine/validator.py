"""Deterministic rule validation for generated puzzles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..core.constants import EMPTY
from ..core.exceptions import InvalidGridError, SolverError, ValidationError
from ..core.models import Grid, count_givens, ensure_grid_shape, is_complete, iter_cells
from ..utils.logger import get_logger
from . import solver
from .counter import count_solutions
from .safety import is_valid_grid


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class PuzzleValidator:
    """Runs deterministic validation over a puzzle and its solution."""

    def __init__(self, use_cpsat: bool = False, cpsat_timeout: float = 10.0) -> None:
        self.use_cpsat = use_cpsat
        self.cpsat_timeout = cpsat_timeout

    def validate(
        self,
        puzzle: Grid,
        solution: Grid,
        expected_given_count: Optional[int] = None,
    ) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_shapes(puzzle, solution)
            self._check_solution(solution)
            self._check_agreement(puzzle, solution)
            if expected_given_count is not None:
                self._check_given_count(puzzle, expected_given_count)
            self._check_unique(puzzle)
            if self.use_cpsat:
                self._check_cpsat_unique(puzzle, solution)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    @staticmethod
    def _check_shapes(puzzle: Grid, solution: Grid) -> None:
        for label, grid in (("puzzle", puzzle), ("solution", solution)):
            try:
                ensure_grid_shape(grid)
            except InvalidGridError as exc:
                raise ValidationError(f"Malformed {label}: {exc}") from exc

    @staticmethod
    def _check_solution(solution: Grid) -> None:
        if not is_complete(solution):
            raise ValidationError("Solution has empty cells")
        if not is_valid_grid(solution):
            raise ValidationError("Solution repeats a digit in a row, column or box")

    @staticmethod
    def _check_agreement(puzzle: Grid, solution: Grid) -> None:
        for r, c in iter_cells():
            value = puzzle[r][c]
            if value != EMPTY and value != solution[r][c]:
                raise ValidationError(
                    f"Given {value} at ({r},{c}) differs from solution digit {solution[r][c]}"
                )

    @staticmethod
    def _check_given_count(puzzle: Grid, expected: int) -> None:
        actual = count_givens(puzzle)
        if actual != expected:
            raise ValidationError(f"Puzzle has {actual} givens, expected {expected}")

    @staticmethod
    def _check_unique(puzzle: Grid) -> None:
        count = count_solutions(puzzle, limit=2)
        if count != 1:
            raise ValidationError(
                "Puzzle has no solution" if count == 0 else "Puzzle has more than one solution"
            )

    def _check_cpsat_unique(self, puzzle: Grid, solution: Grid) -> None:
        try:
            found = solver.solve_grid(puzzle, timeout=self.cpsat_timeout)
            if found != solution:
                raise ValidationError("CP-SAT completion differs from the expected solution")
            if solver.solve_grid(puzzle, timeout=self.cpsat_timeout, forbidden=solution) is not None:
                raise ValidationError("CP-SAT found a second completion")
        except SolverError as exc:
            raise ValidationError(f"CP-SAT cross-check inconclusive: {exc}") from exc
        LOGGER.info("CP-SAT confirmed a unique completion")
