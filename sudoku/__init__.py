"""Sudoku puzzle generator with guaranteed unique solutions.

This package exposes the public API surface via:

- ``sudoku.engine.generator.generate``: ``(seed, given_count) -> (solution, puzzle)``.
- ``sudoku.engine.generator.SudokuGenerator``: configurable fill/mask/validate run.
- ``sudoku.engine.counter.count_solutions``: exhaustive completion counting.
- ``sudoku.engine.safety.is_safe``: the placement legality predicate.
"""

from .core.models import PuzzleResult
from .engine.counter import count_solutions
from .engine.generator import GeneratorConfig, SudokuGenerator, generate
from .engine.masker import GridMasker, MaskerConfig
from .engine.safety import is_safe

__all__ = [
    "GeneratorConfig",
    "GridMasker",
    "MaskerConfig",
    "PuzzleResult",
    "SudokuGenerator",
    "count_solutions",
    "generate",
    "is_safe",
]

__version__ = "0.1.0"
