"""Simulated Annealing solver for the N-Queens problem.

Same move generator as hill climbing (swap two random distinct columns of a
permutation board), with a temperature controlling the acceptance of moves
that do not improve the score.

Contract (public API)
---------------------
- Config: ``starting_temperature`` (float >= 0) and ``cooling_factor``
  (0 < c < 1). A cooling factor of 0 would keep the temperature constant and
  the run might never end, so it is rejected.
- Acceptance: strictly improving moves are always kept. While
  ``temperature > 1`` any other move is kept with probability
  ``exp(-(new - old) / temperature)`` (moves of equal score are therefore
  always kept); at or below 1 only strict improvements survive.
- Cooling: after every iteration ``temperature *= (1 - cooling_factor)``.
- Termination: score 0, or ``temperature < 1`` with more than
  ``max_iterations_without_improvement`` consecutive non-improving
  iterations.
- Result: the best board observed during the run.

Callback: once with the initial board, then after every accepted move with
the current (not best) score.

Determinism
-----------
SA is stochastic. Pass a seeded ``random.Random`` for reproducibility.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Optional

from .board import BoardState
from .hill_climbing import MAX_ITERATIONS_WITHOUT_IMPROVEMENT
from .strategy import (
    EMPTY_SOLUTION,
    ProgressCallback,
    Solution,
    check_count,
    check_size,
    make_rng,
    no_progress,
)


@dataclass(frozen=True)
class SimulatedAnnealingConfig:
    starting_temperature: float = 100.0
    cooling_factor: float = 0.001
    max_iterations_without_improvement: int = MAX_ITERATIONS_WITHOUT_IMPROVEMENT

    def __post_init__(self) -> None:
        if self.starting_temperature < 0:
            raise ValueError(f"starting_temperature must be >= 0, got {self.starting_temperature}")
        if not 0.0 < self.cooling_factor < 1.0:
            raise ValueError(f"cooling_factor must be within (0, 1), got {self.cooling_factor}")
        check_count("max_iterations_without_improvement", self.max_iterations_without_improvement)


class SimulatedAnnealing:
    """Hill climbing with Metropolis acceptance and geometric cooling."""

    def __init__(self, size: int, config: SimulatedAnnealingConfig, rng: Optional[random.Random] = None):
        check_size(size)
        self.size = size
        self.config = config
        self.rng = make_rng(rng)

    @classmethod
    def create(
        cls,
        size: int,
        config: Optional[SimulatedAnnealingConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> "SimulatedAnnealing":
        return cls(size, config if config is not None else SimulatedAnnealingConfig(), rng)

    def _accepts(self, delta: int, temperature: float) -> bool:
        if delta < 0:
            return True
        if temperature > 1.0:
            return self.rng.random() < math.exp(-delta / temperature)
        return False

    def solve(self) -> Solution:
        return self.solve_with_callback(no_progress)

    def solve_with_callback(self, callback: ProgressCallback) -> Solution:
        if self.size == 0:
            return EMPTY_SOLUTION

        limit = self.config.max_iterations_without_improvement
        cooling = 1.0 - self.config.cooling_factor
        temperature = float(self.config.starting_temperature)

        board = BoardState.random_permutation(self.size, self.rng)
        current_score = board.score()
        best_rows = board.snapshot()
        best_score = current_score
        evaluations = 1
        iterations = 0
        iterations_without_improvement = 0

        callback(board.snapshot(), current_score)

        while current_score != 0:
            if temperature < 1.0 and iterations_without_improvement > limit:
                break

            iterations += 1
            first, second = board.pick_two_distinct_columns(self.rng)
            board.swap(first, second)

            score = board.score()
            evaluations += 1
            delta = score - current_score

            if delta < 0:
                iterations_without_improvement = 0
            else:
                iterations_without_improvement += 1

            if self._accepts(delta, temperature):
                current_score = score
                callback(board.snapshot(), current_score)
                if current_score < best_score:
                    best_score = current_score
                    best_rows = board.snapshot()
            else:
                board.swap(first, second)

            # Geometric cooling schedule
            temperature *= cooling

        return Solution(
            best_rows,
            best_score,
            steps=iterations,
            evaluations=evaluations,
            exhausted=best_score != 0,
        )
