"""
Comparison and reporting package for the N-Queens strategies.

This package contains:
- settings: global defaults for experiment batches
- stats: typed run records and aggregation helpers
- experiments: repeated seeded runs per algorithm and N (sequential and parallel)
- reporting: CSV exports of aggregates and raw runs
- plots: comparison and convergence charts
- pipeline: configuration-driven end-to-end comparison
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    AlgorithmEntry,
    ExperimentResults,
    ProgressPrinter,
    RunRecord,
    StatsSummary,
    best_so_far,
    compute_detailed_statistics,
    compute_grouped_statistics,
)

__all__ = [
    # types
    "StatsSummary",
    "RunRecord",
    "AlgorithmEntry",
    "ExperimentResults",
    # utils
    "compute_detailed_statistics",
    "compute_grouped_statistics",
    "best_so_far",
    "ProgressPrinter",
    # settings module
    "settings",
]
