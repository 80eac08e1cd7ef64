"""Cell removal down to a target number of givens.

Removals happen in three phases: quads, pairs, then singles. Every removal
group is applied to the working puzzle, checked with the exhaustive counter
and either kept (exactly one completion) or restored from the filled grid.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Set

from ..core.constants import (
    CELL_COUNT,
    DEFAULT_MAX_FAILED_ATTEMPTS,
    EMPTY,
    MIN_GIVEN_COUNT,
    PAIR_PHASE_LIMIT,
    QUAD_PHASE_LIMIT,
    MaskPhase,
)
from ..core.exceptions import GivenCountError, InvalidGridError, MaskingExhaustedError
from ..core.models import Cell, Grid, copy_grid, ensure_grid_shape, is_complete, iter_cells
from ..utils.logger import get_logger
from .counter import has_unique_solution
from .safety import is_valid_grid
from .selector import CellSelector


LOGGER = get_logger(__name__)


@dataclass
class MaskerConfig:
    """Removal schedule and liveness guard for :class:`GridMasker`."""

    quad_phase_limit: int = QUAD_PHASE_LIMIT
    pair_phase_limit: int = PAIR_PHASE_LIMIT
    # Rejected proposals tolerated per phase; ``None`` retries forever.
    max_failed_attempts: Optional[int] = DEFAULT_MAX_FAILED_ATTEMPTS


@dataclass
class MaskProgress:
    to_remove: int
    removed: int = 0
    # Cells whose lone removal already broke uniqueness. Givens only ever
    # shrink, so these can never be removed later either.
    dead_cells: Set[Cell] = field(default_factory=set)


def validate_given_count(given_count: int) -> None:
    if isinstance(given_count, bool) or not isinstance(given_count, int):
        raise GivenCountError(f"given_count must be an integer, got {given_count!r}")
    if given_count < MIN_GIVEN_COUNT:
        raise GivenCountError(
            f"given_count must be at least {MIN_GIVEN_COUNT} for a unique solution, got {given_count}"
        )
    if given_count > CELL_COUNT:
        raise GivenCountError(f"given_count cannot exceed {CELL_COUNT}, got {given_count}")


def ensure_filled_grid(grid: Grid) -> None:
    ensure_grid_shape(grid)
    if not is_complete(grid):
        raise InvalidGridError("Expected a completely filled grid")
    if not is_valid_grid(grid):
        raise InvalidGridError("Filled grid repeats a digit in a row, column or box")


class GridMasker:
    """Masks a filled grid while keeping its solution unique."""

    def __init__(
        self,
        rng: random.Random,
        config: Optional[MaskerConfig] = None,
        selector: Optional[CellSelector] = None,
    ) -> None:
        self.rng = rng
        self.config = config or MaskerConfig()
        self.selector = selector or CellSelector(rng)

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def mask(self, filled: Grid, given_count: int) -> Grid:
        validate_given_count(given_count)
        ensure_filled_grid(filled)

        puzzle = copy_grid(filled)
        progress = MaskProgress(to_remove=CELL_COUNT - given_count)
        LOGGER.info("Masking %d cells to leave %d givens", progress.to_remove, given_count)

        self._run_phase(MaskPhase.QUADS, puzzle, filled, progress, self.config.quad_phase_limit)
        self._run_phase(MaskPhase.PAIRS, puzzle, filled, progress, self.config.pair_phase_limit)
        self._run_phase(MaskPhase.SINGLES, puzzle, filled, progress, None)
        return puzzle

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------
    def _run_phase(
        self,
        phase: MaskPhase,
        puzzle: Grid,
        filled: Grid,
        progress: MaskProgress,
        removal_limit: Optional[int],
    ) -> None:
        size = phase.group_size
        cap = self.config.max_failed_attempts
        failures = 0
        while progress.to_remove >= size and (removal_limit is None or progress.removed < removal_limit):
            if phase == MaskPhase.SINGLES and self._only_dead_cells_left(puzzle, progress):
                raise MaskingExhaustedError(
                    f"No given can be removed without losing uniqueness at {CELL_COUNT - progress.removed} givens",
                    phase=phase.value,
                    given_count=CELL_COUNT - progress.removed,
                )

            cells = self._propose(phase, puzzle)
            if cells is not None and progress.dead_cells.intersection(cells):
                # Known-dead cells never reach the counter; draw again.
                continue
            if cells is not None and self._try_remove(puzzle, filled, cells, progress):
                progress.to_remove -= size
                progress.removed += size
                LOGGER.debug("Removed %s %s, %d left to remove", phase.value.lower(), cells, progress.to_remove)
                continue

            failures += 1
            if cap is not None and failures > cap:
                raise MaskingExhaustedError(
                    f"Phase {phase.value} exceeded {cap} failed attempts at "
                    f"{CELL_COUNT - progress.removed} givens",
                    phase=phase.value,
                    given_count=CELL_COUNT - progress.removed,
                )

        LOGGER.info(
            "Phase %s finished: %d removed in total, %d rejected proposals",
            phase.value,
            progress.removed,
            failures,
        )

    def _propose(self, phase: MaskPhase, puzzle: Grid) -> Optional[List[Cell]]:
        select = self.selector
        try:
            if phase == MaskPhase.QUADS:
                first = select.random_unmasked_cell(puzzle)
                second = select.random_unmasked_cell(puzzle)
                return [
                    first,
                    second,
                    select.jittered_mirror_cell(puzzle, *first),
                    select.jittered_mirror_cell(puzzle, *second),
                ]
            if phase == MaskPhase.PAIRS:
                cell = select.random_unmasked_cell(puzzle)
                return [cell, select.jittered_mirror_cell(puzzle, *cell)]
            return [select.random_unmasked_cell(puzzle)]
        except ValueError as exc:
            LOGGER.debug("No %s proposal available: %s", phase.value.lower(), exc)
            return None

    @staticmethod
    def _try_remove(puzzle: Grid, filled: Grid, cells: List[Cell], progress: MaskProgress) -> bool:
        if len(set(cells)) != len(cells):
            return False

        for row, col in cells:
            puzzle[row][col] = EMPTY
        if has_unique_solution(puzzle):
            return True

        for row, col in cells:
            puzzle[row][col] = filled[row][col]
        if len(cells) == 1:
            progress.dead_cells.add(cells[0])
        LOGGER.debug("Restored %s, removal left several solutions", cells)
        return False

    @staticmethod
    def _only_dead_cells_left(puzzle: Grid, progress: MaskProgress) -> bool:
        return all(
            (r, c) in progress.dead_cells for r, c in iter_cells() if puzzle[r][c] != EMPTY
        )
