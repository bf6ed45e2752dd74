"""Incremental (constraint-propagation) backtracking for N-Queens.

Columns are filled left to right. For the next free column the rows are
scanned upward from a cursor and the first row compatible with every placed
queen is committed. When a column has no compatible row left, the previous
queen is removed and its column resumes scanning just above the row it held.

Contract (public API)
---------------------
- ``N == 0``: empty, zero-score solution.
- ``N == 1`` or ``N >= 4``: the lexicographically first solution, score 0.
- ``N in {2, 3}``: the search space is exhausted. The deepest conflict-free
  prefix reached is completed with the unused rows (ascending) and returned
  with its real, nonzero score and ``exhausted=True``.

The callback receives the partial placement after every push and every pop.
Its score argument is always 0, as a committed prefix never holds an attack.
The search is deterministic.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .board import BoardState
from .strategy import EMPTY_SOLUTION, ProgressCallback, Solution, check_size, no_progress


@dataclass(frozen=True)
class BacktrackingConfig:
    """Backtracking takes no parameters."""


def _complete_prefix(prefix: Sequence[int], size: int) -> BoardState:
    """Fill the columns after ``prefix`` with the unused rows in ascending order."""
    used = set(prefix)
    rows: List[int] = list(prefix) + [row for row in range(size) if row not in used]
    return BoardState(size, rows)


class ConstraintPropagation:
    """Deterministic, complete backtracking search."""

    def __init__(self, size: int, config: Optional[BacktrackingConfig] = None):
        check_size(size)
        self.size = size
        self.config = config if config is not None else BacktrackingConfig()

    @classmethod
    def create(
        cls,
        size: int,
        config: Optional[BacktrackingConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> "ConstraintPropagation":
        # The search never draws random numbers; ``rng`` is accepted for a uniform signature.
        return cls(size, config)

    def _next_row_from(self, board: BoardState, row: int) -> Optional[int]:
        """Return the first safe row >= ``row`` for the next free column."""
        column = len(board)
        while row < self.size:
            if board.can_place(column, row):
                return row
            row += 1
        return None

    def solve(self) -> Solution:
        return self.solve_with_callback(no_progress)

    def solve_with_callback(self, callback: ProgressCallback) -> Solution:
        if self.size == 0:
            return EMPTY_SOLUTION

        board = BoardState(self.size)
        deepest: List[int] = []
        start_search_at = 0
        placements = 0

        while len(board) != self.size:
            row = self._next_row_from(board, start_search_at)
            if row is not None:
                board.push(row)
                placements += 1
                if len(board) > len(deepest):
                    deepest = list(board.rows)
                callback(board.snapshot(), 0)
                start_search_at = 0
                continue

            previous_row = board.pop()
            if previous_row is None:
                # Column 0 ran out of rows: no placement exists.
                break
            callback(board.snapshot(), 0)
            start_search_at = previous_row + 1

        if len(board) == self.size:
            return Solution(board.snapshot(), board.score(), steps=placements, evaluations=1)

        best = _complete_prefix(deepest, self.size)
        return Solution(best.snapshot(), best.score(), steps=placements, evaluations=1, exhausted=True)
