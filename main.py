"""CLI entrypoint for the sudoku puzzle generator."""

from __future__ import annotations

import argparse
from typing import List, Optional

from sudoku.core.constants import DEFAULT_MAX_FAILED_ATTEMPTS, MIN_GIVEN_COUNT
from sudoku.core.exceptions import SudokuError
from sudoku.engine.generator import GeneratorConfig, SudokuGenerator
from sudoku.utils.logger import configure_logging
from sudoku.utils.pretty import pretty_print_grid, print_puzzle_stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a 9x9 sudoku puzzle with exactly one solution",
    )
    parser.add_argument(
        "--given-count",
        type=int,
        default=30,
        help=f"Number of given cells left in the puzzle ({MIN_GIVEN_COUNT}-81, default 30)",
    )
    parser.add_argument("--seed", type=str, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--retry-limit",
        type=int,
        default=3,
        help="Fresh grids to try before giving up (default 3)",
    )
    parser.add_argument(
        "--max-failed-attempts",
        type=int,
        default=DEFAULT_MAX_FAILED_ATTEMPTS,
        help="Rejected removal proposals tolerated per masking phase; 0 or less means unlimited",
    )
    parser.add_argument(
        "--verify-cpsat",
        action="store_true",
        help="Cross-check uniqueness with the OR-Tools CP-SAT solver",
    )
    parser.add_argument(
        "--show-solution",
        action="store_true",
        help="Also print the solved grid",
    )
    parser.add_argument(
        "--no-stats",
        action="store_true",
        help="Print only the puzzle grid",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        parser.error(str(exc))

    max_failed = args.max_failed_attempts if args.max_failed_attempts > 0 else None
    config = GeneratorConfig(
        given_count=args.given_count,
        seed=args.seed,
        retry_limit=args.retry_limit,
        max_failed_attempts=max_failed,
        verify_with_cpsat=args.verify_cpsat,
    )

    try:
        result = SudokuGenerator(config).generate()
    except (SudokuError, ValueError) as exc:
        raise SystemExit(f"Error: {exc}")

    if args.no_stats:
        pretty_print_grid(result.puzzle)
        if args.show_solution:
            print()
            pretty_print_grid(result.solution)
    else:
        print_puzzle_stats(result, show_solution=args.show_solution)


if __name__ == "__main__":  # pragma: no cover
    main()
