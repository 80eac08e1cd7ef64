"""Convenience entrypoint with predefined generator settings for debugging.

Usage in a Python console (Jupyter-style)::

    import debug_main
    state = debug_main.prepare_state(given_count=28, seed="demo")
    debug_main.step_fill(state)
    debug_main.step_mask(state)
    debug_main.step_validate(state)
    result = debug_main.build_result(state)

Call :func:`run_debug` for a one-liner, or execute the functions above one by
one to inspect intermediate state.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, Optional

from sudoku.core.exceptions import MaskingExhaustedError, SudokuError, ValidationError
from sudoku.core.models import PuzzleResult
from sudoku.engine.generator import GeneratorConfig, SudokuGenerator
from sudoku.utils.logger import configure_logging
from sudoku.utils.pretty import pretty_print_grid, print_puzzle_stats

DEFAULT_DEBUG_ARGS: Dict[str, Any] = {
    "given_count": 28,
    "seed": None,
    "retry_limit": 1,
    "max_failed_attempts": 2000,
    "verify_with_cpsat": True,
}

LOGGER = logging.getLogger(__name__)


def prepare_state(**overrides: Any) -> Dict[str, Any]:
    """Return a mutable state dictionary used by the step helpers."""

    args = {**DEFAULT_DEBUG_ARGS, **overrides}
    configure_logging(args.pop("log_level", logging.INFO))
    config = GeneratorConfig(**args)
    return {
        "config": config,
        "generator": SudokuGenerator(config),
        "solution": None,
        "puzzle": None,
        "validation": None,
    }


def step_fill(state: Dict[str, Any]):
    state["solution"] = state["generator"].fill()
    state["puzzle"] = None
    state["validation"] = None
    return state["solution"]


def step_mask(state: Dict[str, Any]):
    if state["solution"] is None:
        raise RuntimeError("State has no solution yet. Call step_fill() first.")
    state["puzzle"] = state["generator"].masker.mask(state["solution"], state["config"].given_count)
    return state["puzzle"]


def step_validate(state: Dict[str, Any]):
    if state["puzzle"] is None:
        raise RuntimeError("State has no puzzle yet. Call step_mask() first.")
    state["validation"] = state["generator"].validator.validate(
        state["puzzle"], state["solution"], state["config"].given_count
    )
    return state["validation"]


def build_result(state: Dict[str, Any]) -> PuzzleResult:
    messages = state["validation"].messages if state["validation"] else []
    return PuzzleResult(
        solution=state["solution"],
        puzzle=state["puzzle"],
        given_count=state["config"].given_count,
        seed=state["config"].seed,
        validation_messages=messages,
    )


def run_debug(**overrides: Any) -> PuzzleResult:
    """Execute the pipeline step by step, reseeding after every failed run."""

    max_runs = int(overrides.pop("max_runs", 5))
    requested_seed = overrides.pop("seed", DEFAULT_DEBUG_ARGS["seed"])
    last_error: Optional[Exception] = None

    for attempt_no in range(1, max_runs + 1):
        seed = (
            requested_seed
            if requested_seed is not None and attempt_no == 1
            else str(random.randint(0, 1_000_000))
        )
        state = prepare_state(seed=seed, **overrides)
        try:
            step_fill(state)
            pretty_print_grid(state["solution"], label=f"Filled grid (seed {seed}):")
            step_mask(state)
            validation = step_validate(state)
            if not validation.ok:
                pretty_print_grid(state["puzzle"])
                raise ValidationError(f"Validation failed: {validation.messages}")
        except (MaskingExhaustedError, ValidationError) as exc:
            LOGGER.warning("Attempt %s/%s failed with seed %s: %s", attempt_no, max_runs, seed, exc)
            last_error = exc
            continue
        result = build_result(state)
        print_puzzle_stats(result)
        return result

    raise SudokuError("Unable to generate puzzle after retries") from last_error


def main() -> None:  # pragma: no cover - manual helper
    result = run_debug()
    print(f"Seed: {result.seed}")
    print(f"Validation: {result.validation_messages or 'ok'}")


if __name__ == "__main__":
    main()
