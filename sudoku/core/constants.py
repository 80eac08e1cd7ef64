"""Shared constants and enumerations for the sudoku generator."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


GRID_SIZE = 9
BOX_SIZE = 3
CELL_COUNT = GRID_SIZE * GRID_SIZE
DIGITS: Tuple[int, ...] = tuple(range(1, GRID_SIZE + 1))
EMPTY = 0
FULL_MASK = (1 << GRID_SIZE) - 1

# Fewest givens any uniquely solvable 9x9 puzzle can have.
MIN_GIVEN_COUNT = 17

# Total removals (across the whole run) after which the masker stops
# removing quads, then pairs.
QUAD_PHASE_LIMIT = 20
PAIR_PHASE_LIMIT = 30

JITTER_RADIUS = 3

DEFAULT_MAX_FAILED_ATTEMPTS = 2000

# Top-left corners of the boxes on the main diagonal.
DIAGONAL_BOX_OFFSETS: Tuple[int, ...] = (0, 3, 6)


class MaskPhase(str, Enum):
    """Removal schedule stages used by the masker."""

    QUADS = "QUADS"
    PAIRS = "PAIRS"
    SINGLES = "SINGLES"

    @property
    def group_size(self) -> int:
        return {MaskPhase.QUADS: 4, MaskPhase.PAIRS: 2, MaskPhase.SINGLES: 1}[self]
