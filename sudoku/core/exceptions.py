"""Custom exception hierarchy for sudoku generation."""

from __future__ import annotations

from typing import Optional


class SudokuError(Exception):
    """Base exception for generator failures."""


class InvalidGridError(SudokuError):
    """Raised when a grid does not have the expected shape or contents."""


class GivenCountError(SudokuError):
    """Raised when the requested number of givens is outside the supported range."""


class UnfillableGridError(SudokuError):
    """Raised when backtracking cannot complete a seeded grid."""


class MaskingExhaustedError(SudokuError):
    """Raised when the masker cannot reach the requested given count."""

    def __init__(self, message: str, phase: Optional[str] = None, given_count: Optional[int] = None) -> None:
        super().__init__(message)
        self.phase = phase
        self.given_count = given_count


class ValidationError(SudokuError):
    """Raised when the puzzle integrity checks fail."""


class SolverError(SudokuError):
    """Raised when the CP-SAT solver ends without a definitive answer."""
