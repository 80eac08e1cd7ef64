import unittest

from sudoku.core.exceptions import InvalidGridError
from sudoku.core.models import copy_grid, empty_grid
from sudoku.engine.counter import count_solutions, has_unique_solution


UNIQUE_GRID = [
    [0, 1, 0, 0, 2, 0, 3, 0, 4],
    [0, 0, 2, 0, 0, 5, 6, 1, 0],
    [7, 0, 0, 0, 0, 3, 0, 8, 0],
    [5, 0, 6, 0, 4, 0, 0, 0, 1],
    [0, 0, 1, 0, 0, 0, 2, 0, 0],
    [9, 0, 0, 0, 7, 0, 4, 0, 5],
    [0, 4, 0, 6, 0, 0, 0, 0, 9],
    [0, 6, 7, 2, 0, 0, 5, 0, 0],
    [2, 0, 8, 0, 1, 0, 0, 3, 0],
]

# Checked against third-party solvers: exactly five completions.
FIVE_SOLUTION_GRID = [
    [0, 0, 0, 0, 2, 0, 3, 0, 4],
    [0, 0, 2, 0, 0, 5, 6, 1, 0],
    [7, 0, 0, 0, 0, 3, 0, 8, 0],
    [5, 0, 6, 0, 0, 0, 0, 0, 1],
    [0, 0, 1, 0, 0, 0, 2, 0, 0],
    [9, 0, 0, 0, 7, 0, 4, 0, 5],
    [0, 4, 0, 0, 0, 0, 0, 0, 9],
    [0, 6, 7, 0, 0, 0, 5, 0, 0],
    [2, 0, 8, 0, 1, 0, 0, 0, 0],
]


def pattern_grid():
    return [[(r * 3 + r // 3 + c) % 9 + 1 for c in range(9)] for r in range(9)]


class CountSolutionsTests(unittest.TestCase):
    def test_single_solution_grid(self) -> None:
        self.assertEqual(count_solutions(UNIQUE_GRID), 1)

    def test_many_solutions_grid(self) -> None:
        self.assertEqual(count_solutions(FIVE_SOLUTION_GRID), 5)

    def test_limit_stops_early(self) -> None:
        self.assertEqual(count_solutions(FIVE_SOLUTION_GRID, limit=2), 2)
        self.assertEqual(count_solutions(FIVE_SOLUTION_GRID, limit=10), 5)
        self.assertEqual(count_solutions(UNIQUE_GRID, limit=2), 1)

    def test_filled_grid_counts_once(self) -> None:
        self.assertEqual(count_solutions(pattern_grid()), 1)

    def test_single_hole_has_one_completion(self) -> None:
        grid = pattern_grid()
        grid[4][7] = 0
        self.assertEqual(count_solutions(grid), 1)

    def test_empty_grid_respects_limit(self) -> None:
        self.assertEqual(count_solutions(empty_grid(), limit=50), 50)

    def test_conflicting_givens_have_no_completion(self) -> None:
        grid = copy_grid(UNIQUE_GRID)
        grid[0][0] = 1  # duplicates the 1 at (0, 1)
        self.assertEqual(count_solutions(grid), 0)

    def test_dead_end_has_no_completion(self) -> None:
        grid = empty_grid()
        grid[0] = [0, 2, 3, 4, 5, 6, 7, 8, 0]
        grid[1][0] = 1
        grid[2][8] = 9
        grid[3][8] = 1
        # (0,0) can only be 1 or 9 by its row; 1 is blocked by its column,
        # 9 then forces (0,8) to 1, which its column blocks.
        self.assertEqual(count_solutions(grid), 0)

    def test_input_is_not_mutated(self) -> None:
        grid = copy_grid(FIVE_SOLUTION_GRID)
        count_solutions(grid)
        self.assertEqual(grid, FIVE_SOLUTION_GRID)

    def test_has_unique_solution(self) -> None:
        self.assertTrue(has_unique_solution(UNIQUE_GRID))
        self.assertFalse(has_unique_solution(FIVE_SOLUTION_GRID))

    def test_rejects_malformed_grids(self) -> None:
        with self.assertRaises(InvalidGridError):
            count_solutions([[0] * 9] * 8)
        bad = empty_grid()
        bad[3][3] = 10
        with self.assertRaises(InvalidGridError):
            count_solutions(bad)
        with self.assertRaises(ValueError):
            count_solutions(UNIQUE_GRID, limit=0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
