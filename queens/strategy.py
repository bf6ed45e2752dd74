"""Common contract shared by every N-Queens strategy.

Contract (public API)
---------------------
- ``Strategy.create(size, config, rng=None)`` builds a solvable instance. The
  config is consumed once; the random source is owned by the instance.
- ``instance.solve_with_callback(callback)`` runs the search and returns a
  :class:`Solution`. ``callback(assignment, score)`` is invoked synchronously
  whenever the strategy commits a state change worth reporting.
- ``instance.solve()`` is the same search without progress reporting.

"No solution" and "search exhausted" are not errors: they come back as a
regular :class:`Solution` with a nonzero score and/or ``exhausted=True``.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, Sequence, Tuple

ProgressCallback = Callable[[Sequence[int], int], None]


def no_progress(assignment: Sequence[int], score: int) -> None:
    """Callback used by ``solve()``; ignores every snapshot."""


@dataclass(frozen=True)
class Solution:
    """Final placement produced by one solve call.

    Attributes
    ----------
    assignment : tuple[int, ...]
        ``assignment[col] = row``.
    score : int
        Number of attacking pairs in ``assignment``; 0 is a valid placement.
    steps : int
        Iterations, rounds, generations or placements executed.
    evaluations : int
        Number of full board scorings performed.
    exhausted : bool
        True when the search stopped on a bound or ran out of candidates
        instead of reaching score 0.
    """

    assignment: Tuple[int, ...]
    score: int
    steps: int = 0
    evaluations: int = 0
    exhausted: bool = False

    @property
    def success(self) -> bool:
        return self.score == 0 and not self.exhausted

    def as_list(self) -> list:
        return list(self.assignment)


EMPTY_SOLUTION = Solution((), 0)


def make_rng(rng: Optional[random.Random]) -> random.Random:
    """Return ``rng`` or a fresh OS-seeded generator when it is None."""
    return rng if rng is not None else random.Random()


class NQueensStrategy(Protocol):
    """Structural type implemented by every strategy class."""

    size: int

    @classmethod
    def create(cls, size: int, config: Any, rng: Optional[random.Random] = None) -> "NQueensStrategy":
        ...

    def solve_with_callback(self, callback: ProgressCallback) -> Solution:
        ...

    def solve(self) -> Solution:
        ...


def check_probability(name: str, value: float) -> None:
    """Raise ``ValueError`` unless ``0 <= value <= 1``."""
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value}")


def check_count(name: str, value: int) -> None:
    """Raise ``ValueError`` unless ``value`` is a non-negative int."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an int, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")


def check_size(size: int) -> None:
    if size < 0:
        raise ValueError(f"Board size must be >= 0, got {size}")
