"""Stochastic, swap-based hill climbing for N-Queens.

The board starts as a random permutation. Each iteration swaps two random
distinct columns and keeps the swap only when the conflict score strictly
drops; otherwise the swap is undone. The run stops at score 0 or once more
than ``max_iterations_without_improvement`` consecutive swaps failed to
improve, returning the current (best-known) board.

Callback: once with the initial board, then once per accepted swap.

Determinism
-----------
Pass a seeded ``random.Random`` to ``create`` for reproducible runs.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from .board import BoardState
from .strategy import EMPTY_SOLUTION, ProgressCallback, Solution, check_count, check_size, make_rng, no_progress

MAX_ITERATIONS_WITHOUT_IMPROVEMENT = 1000


@dataclass(frozen=True)
class HillClimbingConfig:
    max_iterations_without_improvement: int = MAX_ITERATIONS_WITHOUT_IMPROVEMENT

    def __post_init__(self) -> None:
        check_count("max_iterations_without_improvement", self.max_iterations_without_improvement)


class HillClimbing:
    """First-improvement local search over column swaps."""

    def __init__(self, size: int, config: Optional[HillClimbingConfig] = None, rng: Optional[random.Random] = None):
        check_size(size)
        self.size = size
        self.config = config if config is not None else HillClimbingConfig()
        self.rng = make_rng(rng)

    @classmethod
    def create(
        cls,
        size: int,
        config: Optional[HillClimbingConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> "HillClimbing":
        return cls(size, config, rng)

    def solve(self) -> Solution:
        return self.solve_with_callback(no_progress)

    def solve_with_callback(self, callback: ProgressCallback) -> Solution:
        if self.size == 0:
            return EMPTY_SOLUTION

        limit = self.config.max_iterations_without_improvement
        board = BoardState.random_permutation(self.size, self.rng)
        current_score = board.score()
        evaluations = 1
        iterations = 0
        iterations_without_improvement = 0

        callback(board.snapshot(), current_score)

        while current_score != 0 and iterations_without_improvement <= limit:
            iterations += 1
            first, second = board.pick_two_distinct_columns(self.rng)
            board.swap(first, second)

            score = board.score()
            evaluations += 1
            if score < current_score:
                iterations_without_improvement = 0
                current_score = score
                callback(board.snapshot(), current_score)
            else:
                iterations_without_improvement += 1
                board.swap(first, second)

        return Solution(
            board.snapshot(),
            current_score,
            steps=iterations,
            evaluations=evaluations,
            exhausted=current_score != 0,
        )
