"""Local beam search over permutation boards.

``state_count`` (k) random permutations form the beam. Every round:

1. the first board of the beam is reported, together with every board that
   already scores 0;
2. if a board scores 0 it is returned;
3. otherwise every board is expanded into all of its pairwise-swap
   neighbours (N*(N-1)/2 each), the k*N*(N-1)/2 neighbours are scored and
   stably sorted, and the k best become the next beam.

Nothing in the problem guarantees that a zero-score board ever shows up (N=2
and N=3 have no solution at all), so the number of rounds is bounded by
``max_rounds``. When the bound is hit, the best board of the beam is returned
with ``exhausted=True``. ``max_rounds=None`` removes the bound.

With ``state_count=1`` this is steepest descent: each round moves to the best
single swap, even when it is not an improvement.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .board import BoardState
from .strategy import (
    EMPTY_SOLUTION,
    ProgressCallback,
    Solution,
    check_count,
    check_size,
    make_rng,
    no_progress,
)

ScoredBoard = Tuple[int, BoardState]

DEFAULT_MAX_ROUNDS = 1000


@dataclass(frozen=True)
class LocalBeamSearchConfig:
    state_count: int = 4
    max_rounds: Optional[int] = DEFAULT_MAX_ROUNDS

    def __post_init__(self) -> None:
        check_count("state_count", self.state_count)
        if self.max_rounds is not None:
            check_count("max_rounds", self.max_rounds)


def swap_neighbours(board: BoardState) -> List[BoardState]:
    """Return every board reachable from ``board`` with one column swap.

    Neighbours are ordered by ``(i, j)`` with ``i < j``.
    """
    neighbours: List[BoardState] = []
    for i in range(len(board)):
        for j in range(i + 1, len(board)):
            neighbour = board.copy()
            neighbour.swap(i, j)
            neighbours.append(neighbour)
    return neighbours


class LocalBeamSearch:
    """Keep the k best boards among all neighbours of the current beam."""

    def __init__(self, size: int, config: LocalBeamSearchConfig, rng: Optional[random.Random] = None):
        check_size(size)
        self.size = size
        self.config = config
        self.rng = make_rng(rng)

    @classmethod
    def create(
        cls,
        size: int,
        config: Optional[LocalBeamSearchConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> "LocalBeamSearch":
        return cls(size, config if config is not None else LocalBeamSearchConfig(), rng)

    def solve(self) -> Solution:
        return self.solve_with_callback(no_progress)

    def solve_with_callback(self, callback: ProgressCallback) -> Solution:
        state_count = self.config.state_count
        if self.size == 0 or state_count == 0:
            return EMPTY_SOLUTION

        max_rounds = self.config.max_rounds
        beam: List[ScoredBoard] = []
        for _ in range(state_count):
            board = BoardState.random_permutation(self.size, self.rng)
            beam.append((board.score(), board))
        evaluations = state_count
        rounds = 0

        while True:
            first_score, first = beam[0]
            callback(first.snapshot(), first_score)

            solved: Optional[BoardState] = None
            for score, board in beam:
                if score != 0:
                    continue
                if board is not first:
                    callback(board.snapshot(), score)
                if solved is None:
                    solved = board
            if solved is not None:
                return Solution(solved.snapshot(), 0, steps=rounds, evaluations=evaluations)

            if max_rounds is not None and rounds >= max_rounds:
                break

            rounds += 1
            candidates: List[ScoredBoard] = []
            for _, board in beam:
                for neighbour in swap_neighbours(board):
                    candidates.append((neighbour.score(), neighbour))
            evaluations += len(candidates)
            # list.sort is stable: ties keep generation order.
            candidates.sort(key=lambda item: item[0])
            beam = candidates[:state_count]

        best_score, best = min(beam, key=lambda item: item[0])
        return Solution(best.snapshot(), best_score, steps=rounds, evaluations=evaluations, exhausted=True)
