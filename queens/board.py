"""Board representation and conflict primitives for the N-Queens strategies.

Boards are encoded as a 1D list where ``rows[col] = row``. Two shapes occur:

- *partial*: fewer than ``size`` entries, only the prefix columns are placed
  (incremental backtracking);
- *permutation*: exactly ``size`` entries forming a bijection onto
  ``0..size-1`` (every local-search strategy). Permutation boards are only
  ever mutated through :meth:`BoardState.swap`, so no two columns can share a
  row.

The module also provides two independent conflict counters (an O(N) counter
based one and the O(N^2) reference) used to cross-check scores.
"""

from __future__ import annotations

import enum
import random
from collections import Counter
from typing import List, Optional, Sequence, Tuple

Placement = Tuple[int, int]


class Attack(enum.Enum):
    """Reason two placements cannot coexist."""

    MATCH = "match"
    COLUMN = "column"
    ROW = "row"
    DIAGONAL = "diagonal"


def attack_between(first: Placement, second: Placement) -> Optional[Attack]:
    """Classify the attack between two ``(column, row)`` placements.

    Returns ``None`` when the queens do not attack each other.
    """
    column_a, row_a = first
    column_b, row_b = second

    if column_a == column_b and row_a == row_b:
        return Attack.MATCH
    if column_a == column_b:
        return Attack.COLUMN
    if row_a == row_b:
        return Attack.ROW
    if abs(column_a - column_b) == abs(row_a - row_b):
        return Attack.DIAGONAL
    return None


def attacks(first: Placement, second: Placement) -> bool:
    """Return True if the two placements attack each other."""
    return attack_between(first, second) is not None


def conflicts(rows: Sequence[int]) -> int:
    """Compute the number of conflicting queen pairs in O(N).

    Counts queens per row and per diagonal and adds up the pairs inside each
    group. Independent of :meth:`BoardState.score`, which makes it suitable to
    cross-check the pairwise count.
    """
    row_count: Counter[int] = Counter()
    diag1: Counter[int] = Counter()
    diag2: Counter[int] = Counter()

    for column, row in enumerate(rows):
        row_count[row] += 1
        diag1[row - column] += 1
        diag2[row + column] += 1

    def _pairs(counter: Counter[int]) -> int:
        total = 0
        for count in counter.values():
            if count > 1:
                total += count * (count - 1) // 2
        return total

    return _pairs(row_count) + _pairs(diag1) + _pairs(diag2)


def conflicts_on2(rows: Sequence[int]) -> int:
    """Compute the number of conflicting queen pairs in O(N^2)."""
    n = len(rows)
    count = 0
    for i in range(n):
        for j in range(i + 1, n):
            if rows[i] == rows[j] or abs(rows[i] - rows[j]) == abs(i - j):
                count += 1
    return count


def is_valid_solution(rows: Sequence[int]) -> bool:
    """Return True if ``rows`` is a complete, conflict-free placement.

    Contract
    - Input: sequence of length N where rows[col] = row (0-based indices)
    - Valid if: all 0 <= row < N and no pairs of queens attack each other
    - The empty board is not considered a solution.
    """
    n = len(rows)
    if n == 0:
        return False
    for row in rows:
        if not isinstance(row, int):
            return False
        if row < 0 or row >= n:
            return False
    return conflicts(rows) == 0


class BoardState:
    """Mutable board shared by composition across all strategies.

    Parameters
    ----------
    size : int
        Board dimension N.
    rows : Sequence[int] | None
        Initial placement, ``rows[col] = row``. Defaults to an empty (partial)
        board.
    """

    __slots__ = ("size", "rows")

    def __init__(self, size: int, rows: Optional[Sequence[int]] = None):
        if size < 0:
            raise ValueError(f"Board size must be >= 0, got {size}")
        self.size = size
        self.rows: List[int] = list(rows) if rows is not None else []
        if len(self.rows) > size:
            raise ValueError(f"{len(self.rows)} placements do not fit a board of size {size}")

    @classmethod
    def random_permutation(cls, size: int, rng: random.Random) -> "BoardState":
        """Build a uniformly random permutation board.

        Rows are drawn one at a time from a pool of pending rows; the row
        removed while ``k`` rows are still pending lands in column ``k - 1``.
        """
        pending = list(range(size))
        rows = [0] * size
        while pending:
            chosen = rng.randrange(len(pending))
            row = pending.pop(chosen)
            rows[len(pending)] = row
        return cls(size, rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __repr__(self) -> str:
        return f"BoardState(size={self.size}, rows={self.rows!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return self.size == other.size and self.rows == other.rows

    def copy(self) -> "BoardState":
        return BoardState(self.size, self.rows)

    def snapshot(self) -> Tuple[int, ...]:
        """Return an immutable view of the current placement."""
        return tuple(self.rows)

    def score(self) -> int:
        """Return the number of attacking pairs among the placed queens."""
        rows = self.rows
        total = 0
        for i in range(len(rows)):
            for j in range(i + 1, len(rows)):
                if attacks((i, rows[i]), (j, rows[j])):
                    total += 1
        return total

    def can_place(self, column: int, row: int) -> bool:
        """Return True if a queen at ``(column, row)`` attacks no placed queen."""
        for placed_column, placed_row in enumerate(self.rows):
            if attack_between((column, row), (placed_column, placed_row)) is not None:
                return False
        return True

    def is_solved(self) -> bool:
        """Return True when every column is placed and no pair attacks."""
        return len(self.rows) == self.size and self.score() == 0

    def push(self, row: int) -> None:
        """Place a queen on the next free column."""
        if len(self.rows) >= self.size:
            raise IndexError("Board is already complete")
        self.rows.append(row)

    def pop(self) -> Optional[int]:
        """Remove the last placed queen and return its row, or None if empty."""
        if not self.rows:
            return None
        return self.rows.pop()

    def swap(self, first: int, second: int) -> None:
        """Exchange the rows of two columns. Applying it twice is a no-op."""
        rows = self.rows
        rows[first], rows[second] = rows[second], rows[first]

    def pick_two_distinct_columns(self, rng: random.Random) -> Tuple[int, int]:
        """Sample two distinct column indices uniformly.

        The second column is resampled until it differs from the first, so the
        board must hold at least two columns.
        """
        if len(self.rows) < 2:
            raise ValueError("At least two columns are required to pick a pair")
        first = rng.randrange(len(self.rows))
        second = rng.randrange(len(self.rows))
        while first == second:
            second = rng.randrange(len(self.rows))
        return first, second
