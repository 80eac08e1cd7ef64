"""Main sudoku generator orchestration.

Two-phase approach:
  1. Fill: build a random, completely filled grid by backtracking.
  2. Mask: remove cells in quads, pairs and singles while an exhaustive
     solution count proves the puzzle still has exactly one completion.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.constants import DEFAULT_MAX_FAILED_ATTEMPTS, PAIR_PHASE_LIMIT, QUAD_PHASE_LIMIT
from ..core.exceptions import MaskingExhaustedError, SudokuError, ValidationError
from ..core.models import Grid, PuzzleResult
from ..utils.logger import get_logger
from .filler import generate_filled_grid
from .masker import GridMasker, MaskerConfig, validate_given_count
from .validator import PuzzleValidator


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    given_count: int
    seed: Optional[str] = None
    retry_limit: int = 3
    max_failed_attempts: Optional[int] = DEFAULT_MAX_FAILED_ATTEMPTS
    quad_phase_limit: int = QUAD_PHASE_LIMIT
    pair_phase_limit: int = PAIR_PHASE_LIMIT
    verify_with_cpsat: bool = False
    cpsat_timeout_seconds: float = 10.0

    def to_masker_config(self) -> MaskerConfig:
        return MaskerConfig(
            quad_phase_limit=self.quad_phase_limit,
            pair_phase_limit=self.pair_phase_limit,
            max_failed_attempts=self.max_failed_attempts,
        )

    def make_rng(self) -> random.Random:
        # An empty seed is treated like no seed at all.
        return random.Random(self.seed) if self.seed else random.Random()


class SudokuGenerator:
    """High-level orchestrator: random fill, unique-solution masking, validation."""

    def __init__(
        self,
        config: GeneratorConfig,
        validator: Optional[PuzzleValidator] = None,
    ) -> None:
        validate_given_count(config.given_count)
        if config.retry_limit < 1:
            raise ValueError("retry_limit must be at least 1")
        self.config = config
        self.rng = config.make_rng()
        self.masker = GridMasker(self.rng, config.to_masker_config())
        self.validator = validator or PuzzleValidator(
            use_cpsat=config.verify_with_cpsat,
            cpsat_timeout=config.cpsat_timeout_seconds,
        )

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self) -> PuzzleResult:
        for attempt in range(1, self.config.retry_limit + 1):
            LOGGER.info("Generation attempt %s/%s", attempt, self.config.retry_limit)
            try:
                solution = self.fill()
                puzzle = self.masker.mask(solution, self.config.given_count)
                validation = self.validator.validate(puzzle, solution, self.config.given_count)
                if not validation.ok:
                    raise ValidationError(f"Puzzle validation failed: {validation.messages}")
                LOGGER.info("Sudoku generation completed with %s givens", self.config.given_count)
                return PuzzleResult(
                    solution=solution,
                    puzzle=puzzle,
                    given_count=self.config.given_count,
                    seed=self.config.seed,
                    attempts=attempt,
                    validation_messages=validation.messages,
                )
            except (MaskingExhaustedError, ValidationError) as exc:
                LOGGER.warning("Generation attempt failed: %s", exc)
                continue
        raise SudokuError(
            f"Unable to generate a puzzle with {self.config.given_count} givens "
            f"after {self.config.retry_limit} attempts"
        )

    def fill(self) -> Grid:
        return generate_filled_grid(self.rng)


def generate(seed: Optional[str], given_count: int) -> Tuple[Grid, Grid]:
    """Return ``(solution, puzzle)`` for a puzzle with ``given_count`` givens.

    Equal non-empty seeds always produce the same pair.
    """

    result = SudokuGenerator(GeneratorConfig(given_count=given_count, seed=seed)).generate()
    return result.solution, result.puzzle
