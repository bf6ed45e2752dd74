"""Genetic Algorithm solver for the N-Queens problem.

Individuals are permutation boards (``rows[col] = row``), so the only
conflicts left to remove are diagonal ones. Every operator below keeps the
permutation property.

Generation loop
---------------
1. Sort the population by conflict score (ascending) and report the best
   individual. Stop if it scores 0.
2. Elitism: the first ``ceil(elitism * generation_size)`` individuals are
   copied unchanged.
3. The remaining slots are filled by fitness-proportional sampling with
   weight ``max_score - score``; when every weight is 0 the draw is uniform.
4. Crossover: the sampled (non-elite) individuals form a ring; each
   individual is paired with the next one and the last with the first. With
   probability ``crossover_probability`` a split column is drawn uniformly in
   ``[0, N)`` and the partners exchange the rows of every column before it.
5. Mutation: every non-elite individual runs N Bernoulli trials at
   ``mutation_probability``; each success swaps two random distinct columns.

After ``generation_count`` replacements the best individual of the final
population is returned (``exhausted=True`` unless it scores 0).

Determinism
-----------
The algorithm is stochastic. Pass a seeded ``random.Random`` for
reproducible experiments.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .board import BoardState
from .strategy import (
    EMPTY_SOLUTION,
    ProgressCallback,
    Solution,
    check_count,
    check_probability,
    check_size,
    make_rng,
    no_progress,
)


@dataclass(frozen=True)
class GeneticConfig:
    generation_size: int = 100
    elitism: float = 0.1
    crossover_probability: float = 0.8
    mutation_probability: float = 0.05
    generation_count: int = 1000

    def __post_init__(self) -> None:
        check_count("generation_size", self.generation_size)
        check_count("generation_count", self.generation_count)
        check_probability("elitism", self.elitism)
        check_probability("crossover_probability", self.crossover_probability)
        check_probability("mutation_probability", self.mutation_probability)


def elite_count(elitism: float, population_size: int) -> int:
    """Return the smallest prefix length whose share of the population reaches ``elitism``."""
    count = 0
    while count < population_size and count / population_size < elitism:
        count += 1
    return count


def _move_row_to(rows: List[int], column: int, row: int) -> None:
    """Swap ``row`` into ``column`` inside the permutation ``rows``."""
    current = rows.index(row)
    rows[column], rows[current] = rows[current], rows[column]


def crossover(first: BoardState, second: BoardState, split: int) -> None:
    """Exchange the rows of columns ``[0, split)`` between two permutations.

    Afterwards ``first`` holds the old prefix of ``second`` and vice versa.
    Each placement is a swap inside the receiving board, so both stay
    permutations; the columns after ``split`` absorb the displaced rows.
    """
    original_first = first.snapshot()
    original_second = second.snapshot()
    for column in range(split):
        _move_row_to(first.rows, column, original_second[column])
        _move_row_to(second.rows, column, original_first[column])


def mutate(board: BoardState, probability: float, rng: random.Random) -> None:
    """Run one swap trial per column, each succeeding with ``probability``."""
    if len(board) < 2:
        return
    for _ in range(board.size):
        if rng.random() < probability:
            first, second = board.pick_two_distinct_columns(rng)
            board.swap(first, second)


def ring_crossover(offspring: List[BoardState], probability: float, rng: random.Random) -> None:
    """Apply crossover to every neighbouring pair of a ring of individuals."""
    count = len(offspring)
    if count < 2:
        return
    # Two members form a single pair; larger rings close last -> first.
    pairs = count if count > 2 else 1
    for index in range(pairs):
        if rng.random() < probability:
            split = rng.randrange(offspring[index].size)
            crossover(offspring[index], offspring[(index + 1) % count], split)


def next_generation(
    population: Sequence[BoardState],
    scores: Sequence[int],
    config: GeneticConfig,
    rng: random.Random,
) -> List[BoardState]:
    """Build the next population from one sorted by ascending score.

    Parameters
    ----------
    population : Sequence[BoardState]
        Current individuals, best first.
    scores : Sequence[int]
        Conflict score of each individual, aligned with ``population``.
    config : GeneticConfig
        Elitism, crossover and mutation parameters.
    rng : random.Random
        Source of every random draw.

    Returns
    -------
    List[BoardState]
        Fresh boards; the input population is left untouched.
    """
    size = len(population)
    elite = elite_count(config.elitism, size)
    generation = [board.copy() for board in population[:elite]]

    remaining = size - elite
    if remaining == 0:
        return generation

    max_score = max(scores)
    weights = [max_score - score for score in scores]
    if sum(weights) == 0:
        chosen = rng.choices(population, k=remaining)
    else:
        chosen = rng.choices(population, weights=weights, k=remaining)

    offspring = [board.copy() for board in chosen]
    ring_crossover(offspring, config.crossover_probability, rng)
    for board in offspring:
        mutate(board, config.mutation_probability, rng)

    generation.extend(offspring)
    return generation


class GeneticAlgorithm:
    """Population-based search with elitism, roulette selection, crossover and swap mutation."""

    def __init__(self, size: int, config: GeneticConfig, rng: Optional[random.Random] = None):
        check_size(size)
        self.size = size
        self.config = config
        self.rng = make_rng(rng)

    @classmethod
    def create(
        cls,
        size: int,
        config: Optional[GeneticConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> "GeneticAlgorithm":
        return cls(size, config if config is not None else GeneticConfig(), rng)

    def solve(self) -> Solution:
        return self.solve_with_callback(no_progress)

    def solve_with_callback(self, callback: ProgressCallback) -> Solution:
        config = self.config
        if self.size == 0 or config.generation_size == 0:
            return EMPTY_SOLUTION

        population = [
            BoardState.random_permutation(self.size, self.rng) for _ in range(config.generation_size)
        ]
        evaluations = 0
        generation = 0
        remaining_generations = config.generation_count

        while True:
            scored = sorted(((board.score(), board) for board in population), key=lambda item: item[0])
            evaluations += len(scored)
            best_score, best = scored[0]
            callback(best.snapshot(), best_score)

            if best_score == 0:
                return Solution(best.snapshot(), 0, steps=generation, evaluations=evaluations)
            if remaining_generations == 0:
                break

            population = next_generation(
                [board for _, board in scored],
                [score for score, _ in scored],
                config,
                self.rng,
            )
            remaining_generations -= 1
            generation += 1

        return Solution(best.snapshot(), best_score, steps=generation, evaluations=evaluations, exhausted=True)
