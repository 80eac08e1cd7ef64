import unittest
from unittest.mock import MagicMock, patch

from sudoku import generate
from sudoku.core.exceptions import GivenCountError, MaskingExhaustedError, SolverError, SudokuError
from sudoku.core.models import count_givens, iter_cells
from sudoku.engine import solver
from sudoku.engine.counter import count_solutions
from sudoku.engine.generator import GeneratorConfig, SudokuGenerator
from sudoku.engine.masker import GridMasker
from sudoku.engine.safety import is_valid_grid
from sudoku.engine.validator import ValidationResult


class GenerateTests(unittest.TestCase):
    def test_returns_solution_and_unique_puzzle(self) -> None:
        solution, puzzle = generate("round-trip", 32)
        self.assertTrue(is_valid_grid(solution))
        self.assertTrue(all(all(row) for row in solution))
        self.assertEqual(count_givens(puzzle), 32)
        self.assertEqual(count_solutions(puzzle), 1)
        for r, c in iter_cells():
            if puzzle[r][c]:
                self.assertEqual(puzzle[r][c], solution[r][c])

    def test_seed_makes_generation_reproducible(self) -> None:
        self.assertEqual(generate("seed-1", 40), generate("seed-1", 40))
        self.assertNotEqual(generate("seed-1", 40)[0], generate("seed-2", 40)[0])

    def test_too_few_givens_is_rejected_up_front(self) -> None:
        with patch("sudoku.engine.generator.generate_filled_grid") as filler:
            with self.assertRaises(GivenCountError):
                generate("x", 16)
        filler.assert_not_called()


class SudokuGeneratorTests(unittest.TestCase):
    def test_result_metadata(self) -> None:
        result = SudokuGenerator(GeneratorConfig(given_count=45, seed="meta")).generate()
        self.assertEqual(result.given_count, 45)
        self.assertEqual(result.seed, "meta")
        self.assertEqual(result.attempts, 1)
        self.assertEqual(result.validation_messages, [])

    def test_retries_after_failed_validation(self) -> None:
        validator = MagicMock()
        validator.validate.side_effect = [
            ValidationResult(ok=False, messages=["bad"]),
            ValidationResult(ok=True, messages=[]),
        ]
        generator = SudokuGenerator(GeneratorConfig(given_count=50, seed="retry"), validator=validator)
        result = generator.generate()
        self.assertEqual(result.attempts, 2)
        self.assertEqual(validator.validate.call_count, 2)

    def test_retries_after_exhausted_masking(self) -> None:
        real_mask = GridMasker.mask
        outcomes = [MaskingExhaustedError("stuck", phase="SINGLES", given_count=20)]

        def flaky_mask(masker, filled, given_count):
            if outcomes:
                raise outcomes.pop()
            return real_mask(masker, filled, given_count)

        with patch.object(GridMasker, "mask", autospec=True, side_effect=flaky_mask):
            result = SudokuGenerator(GeneratorConfig(given_count=50, seed="flaky")).generate()
        self.assertEqual(result.attempts, 2)
        self.assertEqual(count_givens(result.puzzle), 50)

    def test_gives_up_after_retry_limit(self) -> None:
        config = GeneratorConfig(given_count=30, seed="stuck", retry_limit=2)
        with patch.object(GridMasker, "mask", side_effect=MaskingExhaustedError("stuck")) as mask:
            with self.assertRaises(SudokuError):
                SudokuGenerator(config).generate()
        self.assertEqual(mask.call_count, 2)

    def test_empty_seed_is_unseeded(self) -> None:
        unseeded = [GeneratorConfig(given_count=30, seed="").make_rng().getrandbits(64) for _ in range(2)]
        self.assertNotEqual(unseeded[0], unseeded[1])
        rng_a = GeneratorConfig(given_count=30, seed="abc").make_rng()
        rng_b = GeneratorConfig(given_count=30, seed="abc").make_rng()
        self.assertEqual(rng_a.random(), rng_b.random())

    def test_invalid_retry_limit(self) -> None:
        with self.assertRaises(ValueError):
            SudokuGenerator(GeneratorConfig(given_count=30, retry_limit=0))

    def test_cpsat_verification(self) -> None:
        config = GeneratorConfig(given_count=35, seed="cpsat", verify_with_cpsat=True)
        result = SudokuGenerator(config).generate()
        self.assertEqual(count_givens(result.puzzle), 35)

    def test_inconclusive_cpsat_check_triggers_retry(self) -> None:
        config = GeneratorConfig(given_count=45, seed="timeout", verify_with_cpsat=True)
        real_solve = solver.solve_grid
        outcomes = [SolverError("CP-SAT ended with status UNKNOWN")]

        def flaky_solve(grid, timeout=10.0, forbidden=None):
            if outcomes:
                raise outcomes.pop()
            return real_solve(grid, timeout=timeout, forbidden=forbidden)

        with patch("sudoku.engine.validator.solver.solve_grid", side_effect=flaky_solve):
            result = SudokuGenerator(config).generate()
        self.assertEqual(result.attempts, 2)
        self.assertEqual(count_givens(result.puzzle), 45)

    def test_masker_config_is_forwarded(self) -> None:
        config = GeneratorConfig(
            given_count=30,
            quad_phase_limit=8,
            pair_phase_limit=12,
            max_failed_attempts=None,
        )
        masker_config = SudokuGenerator(config).masker.config
        self.assertEqual(masker_config.quad_phase_limit, 8)
        self.assertEqual(masker_config.pair_phase_limit, 12)
        self.assertIsNone(masker_config.max_failed_attempts)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
