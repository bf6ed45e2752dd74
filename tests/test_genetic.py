"""Tests for the genetic algorithm and its operators."""

from pathlib import Path
import random
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from queens.board import BoardState, is_valid_solution
from queens.genetic import (
    GeneticAlgorithm,
    GeneticConfig,
    crossover,
    elite_count,
    mutate,
    next_generation,
    ring_crossover,
)


def _population(size, count, seed):
    rng = random.Random(seed)
    boards = [BoardState.random_permutation(size, rng) for _ in range(count)]
    boards.sort(key=lambda board: board.score())
    return boards


class OperatorTests(unittest.TestCase):
    def test_elite_count(self):
        self.assertEqual(elite_count(0.0, 10), 0)
        self.assertEqual(elite_count(0.1, 10), 1)
        self.assertEqual(elite_count(0.15, 10), 2)
        self.assertEqual(elite_count(0.5, 3), 2)
        self.assertEqual(elite_count(1.0, 10), 10)
        self.assertEqual(elite_count(1.0, 0), 0)

    def test_crossover_exchanges_prefix_and_keeps_permutations(self):
        first = BoardState(5, [0, 1, 2, 3, 4])
        second = BoardState(5, [4, 3, 2, 1, 0])
        crossover(first, second, 2)
        self.assertEqual(first.rows[:2], [4, 3])
        self.assertEqual(second.rows[:2], [0, 1])
        self.assertEqual(sorted(first.rows), list(range(5)))
        self.assertEqual(sorted(second.rows), list(range(5)))

    def test_crossover_at_zero_is_a_no_op(self):
        first = BoardState(4, [1, 3, 0, 2])
        second = BoardState(4, [2, 0, 3, 1])
        crossover(first, second, 0)
        self.assertEqual(first.rows, [1, 3, 0, 2])
        self.assertEqual(second.rows, [2, 0, 3, 1])

    def test_random_crossovers_keep_permutations(self):
        rng = random.Random(6)
        for _ in range(50):
            first = BoardState.random_permutation(9, rng)
            second = BoardState.random_permutation(9, rng)
            expected_first, expected_second = second.rows[:], first.rows[:]
            split = rng.randrange(9)
            crossover(first, second, split)
            self.assertEqual(first.rows[:split], expected_first[:split])
            self.assertEqual(second.rows[:split], expected_second[:split])
            self.assertEqual(sorted(first.rows), list(range(9)))
            self.assertEqual(sorted(second.rows), list(range(9)))

    def test_mutation(self):
        rng = random.Random(2)
        board = BoardState(6, [0, 2, 4, 1, 3, 5])
        mutate(board, 0.0, rng)
        self.assertEqual(board.rows, [0, 2, 4, 1, 3, 5])
        mutate(board, 1.0, rng)
        self.assertEqual(sorted(board.rows), list(range(6)))
        single = BoardState(1, [0])
        mutate(single, 1.0, rng)
        self.assertEqual(single.rows, [0])

    def test_ring_crossover_with_certain_probability(self):
        rng = random.Random(12)
        offspring = [BoardState.random_permutation(6, rng) for _ in range(5)]
        ring_crossover(offspring, 1.0, rng)
        for board in offspring:
            self.assertEqual(sorted(board.rows), list(range(6)))

    def test_ring_crossover_never_fires_at_zero_probability(self):
        rng = random.Random(12)
        offspring = [BoardState.random_permutation(6, rng) for _ in range(4)]
        before = [board.snapshot() for board in offspring]
        ring_crossover(offspring, 0.0, rng)
        self.assertEqual([board.snapshot() for board in offspring], before)


class NextGenerationTests(unittest.TestCase):
    def test_full_elitism_keeps_generation_unchanged(self):
        population = _population(8, 12, seed=1)
        scores = [board.score() for board in population]
        config = GeneticConfig(
            generation_size=12,
            elitism=1.0,
            crossover_probability=1.0,
            mutation_probability=1.0,
            generation_count=10,
        )
        following = next_generation(population, scores, config, random.Random(0))
        self.assertEqual([board.rows for board in following], [board.rows for board in population])
        for new, old in zip(following, population):
            self.assertIsNot(new, old)

    def test_elite_prefix_is_copied(self):
        population = _population(8, 10, seed=4)
        scores = [board.score() for board in population]
        config = GeneticConfig(generation_size=10, elitism=0.3, crossover_probability=1.0, mutation_probability=0.5)
        following = next_generation(population, scores, config, random.Random(4))
        self.assertEqual(len(following), 10)
        self.assertEqual([b.rows for b in following[:3]], [b.rows for b in population[:3]])
        for board in following:
            self.assertEqual(sorted(board.rows), list(range(8)))

    def test_uniform_scores_sample_uniformly(self):
        population = [BoardState(4, [1, 3, 0, 2]), BoardState(4, [2, 0, 3, 1])]
        config = GeneticConfig(generation_size=2, elitism=0.0, crossover_probability=0.0, mutation_probability=0.0)
        following = next_generation(population, [0, 0], config, random.Random(0))
        self.assertEqual(len(following), 2)
        for board in following:
            self.assertIn(board.rows, ([1, 3, 0, 2], [2, 0, 3, 1]))

    def test_worst_individual_is_never_selected(self):
        best = BoardState(4, [1, 3, 0, 2])
        worst = BoardState(4, [0, 1, 2, 3])
        config = GeneticConfig(generation_size=2, elitism=0.0, crossover_probability=0.0, mutation_probability=0.0)
        following = next_generation([best, worst], [best.score(), worst.score()], config, random.Random(3))
        # Selection weight is max_score - score, which is 0 for the worst board.
        self.assertEqual([board.rows for board in following], [[1, 3, 0, 2], [1, 3, 0, 2]])


class GeneticAlgorithmTests(unittest.TestCase):
    def test_degenerate_configurations(self):
        self.assertEqual(GeneticAlgorithm.create(0, GeneticConfig()).solve().assignment, ())
        calls = []
        empty = GeneticAlgorithm.create(8, GeneticConfig(generation_size=0)).solve_with_callback(
            lambda rows, score: calls.append(score)
        )
        self.assertEqual((empty.assignment, empty.score), ((), 0))
        self.assertEqual(calls, [])

    def test_unsolvable_board_runs_every_generation(self):
        calls = []
        config = GeneticConfig(generation_size=10, elitism=0.2, generation_count=5)
        solution = GeneticAlgorithm.create(3, config, random.Random(5)).solve_with_callback(
            lambda rows, score: calls.append(score)
        )
        self.assertEqual(len(calls), 6)
        self.assertEqual(solution.steps, 5)
        self.assertTrue(solution.exhausted)
        self.assertGreater(solution.score, 0)
        self.assertEqual(solution.score, calls[-1])

    def test_zero_generations_reports_initial_population(self):
        calls = []
        config = GeneticConfig(generation_size=20, generation_count=0)
        solution = GeneticAlgorithm.create(8, config, random.Random(9)).solve_with_callback(
            lambda rows, score: calls.append(score)
        )
        self.assertEqual(len(calls), 1)
        self.assertEqual(solution.steps, 0)
        self.assertEqual(solution.exhausted, solution.score != 0)

    def test_result_is_consistent(self):
        config = GeneticConfig(generation_size=40, elitism=0.1, generation_count=60)
        solution = GeneticAlgorithm.create(8, config, random.Random(17)).solve()
        self.assertEqual(sorted(solution.assignment), list(range(8)))
        self.assertEqual(BoardState(8, solution.assignment).score(), solution.score)
        if solution.success:
            self.assertTrue(is_valid_solution(solution.assignment))

    def test_seeded_runs_are_reproducible(self):
        config = GeneticConfig(generation_size=30, generation_count=20)
        first = GeneticAlgorithm.create(10, config, random.Random(8)).solve()
        second = GeneticAlgorithm.create(10, config, random.Random(8)).solve()
        self.assertEqual(first, second)

    def test_config_validation(self):
        with self.assertRaises(ValueError):
            GeneticConfig(elitism=1.5)
        with self.assertRaises(ValueError):
            GeneticConfig(crossover_probability=-0.1)
        with self.assertRaises(ValueError):
            GeneticConfig(mutation_probability=2.0)
        with self.assertRaises(ValueError):
            GeneticConfig(generation_size=-1)
        with self.assertRaises(ValueError):
            GeneticConfig(generation_count=-1)
        with self.assertRaises(ValueError):
            GeneticConfig(generation_size=10.0)
        with self.assertRaises(ValueError):
            GeneticConfig(generation_count=True)


if __name__ == "__main__":
    unittest.main()
