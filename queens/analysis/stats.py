"""Typed result shapes and statistics helpers for the comparison pipeline.

Defines ``TypedDict`` structures for experiment outputs and provides utilities
to compute aggregate statistics across run records.
"""
from __future__ import annotations

import statistics
from typing import Any, Dict, List, Optional, TypedDict

METRICS = ["time", "steps", "evals", "score"]


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class RunRecord(TypedDict, total=False):
    algorithm: str
    n: int
    seed: Optional[int]
    success: bool
    exhausted: bool
    steps: int
    time: float
    score: int
    evals: int
    assignment: List[int]
    trace: List[int]


class AlgorithmEntry(TypedDict, total=False):
    success_rate: float
    exhausted_rate: float
    total_runs: int
    successes: int
    failures: int
    parameters: Dict[str, Any]
    success_time: StatsSummary
    success_steps: StatsSummary
    success_evals: StatsSummary
    all_time: StatsSummary
    all_steps: StatsSummary
    all_evals: StatsSummary
    all_score: StatsSummary
    failure_score: StatsSummary
    raw_runs: List[RunRecord]


# results[label][N] -> AlgorithmEntry
ExperimentResults = Dict[str, Dict[int, AlgorithmEntry]]


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Parameters
    ----------
    total : int
        Total number of steps expected. Values <= 0 are coerced to 1.
    label : str
        Short label printed in front of the counters.
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label

    def update(self, index: int, detail: str = "") -> None:
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def compute_detailed_statistics(values: List[float]) -> StatsSummary:
    """Compute summary statistics for a numeric sequence.

    Returns
    -------
    StatsSummary
        count, mean, median, population std, min, max, q25, q75 and range.
        When ``values`` is empty every numeric field is ``None`` and ``count``
        is 0, so CSV and plot generation do not need special cases.
    """
    if not values:
        return {
            "count": 0,
            "mean": None,
            "median": None,
            "std": None,
            "min": None,
            "max": None,
            "q25": None,
            "q75": None,
            "range": None,
        }

    sorted_vals = sorted(values)
    n = len(values)

    min_val = sorted_vals[0]
    max_val = sorted_vals[-1]
    q25 = sorted_vals[n // 4] if n >= 4 else min_val
    q75 = sorted_vals[3 * n // 4] if n >= 4 else max_val

    return {
        "count": n,
        "mean": statistics.mean(values),
        "median": statistics.median(values),
        "std": statistics.pstdev(values) if n > 1 else 0,
        "min": min_val,
        "max": max_val,
        "q25": q25,
        "q75": q75,
        "range": max_val - min_val,
    }


def compute_grouped_statistics(records: List[RunRecord]) -> Dict[str, Any]:
    """Aggregate run records by outcome (success or failure).

    Rates and counters are always present; ``all_<metric>``,
    ``success_<metric>`` and ``failure_<metric>`` summaries are added for
    every metric in ``METRICS`` found in the corresponding group.
    """
    successes = [r for r in records if r.get("success", False)]
    failures = [r for r in records if not r.get("success", False)]
    exhausted = [r for r in records if r.get("exhausted", False)]
    total = len(records)

    stats: Dict[str, Any] = {
        "total_runs": total,
        "successes": len(successes),
        "failures": len(failures),
        "success_rate": len(successes) / total if total else 0.0,
        "exhausted_rate": len(exhausted) / total if total else 0.0,
    }

    for prefix, group in (("all", records), ("success", successes), ("failure", failures)):
        for metric in METRICS:
            values = [r[metric] for r in group if metric in r]
            if values:
                stats[f"{prefix}_{metric}"] = compute_detailed_statistics(values)

    return stats


def best_so_far(trace: List[int]) -> List[int]:
    """Return the running minimum of a score trace."""
    result: List[int] = []
    best: Optional[int] = None
    for score in trace:
        best = score if best is None else min(best, score)
        result.append(best)
    return result
