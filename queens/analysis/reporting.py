"""CSV export utilities for comparison outputs (aggregates and raw runs).

These helpers materialize a concise per-(algorithm, N) summary as well as
full per-run raw data for downstream analysis or spreadsheet inspection.
"""
from __future__ import annotations

import csv
import os
from typing import Any, Dict, List, Optional

from . import settings
from .stats import ExperimentResults


def _build_suffix() -> str:
    """Return ``_<RUN_TAG>_<RUN_ID>`` according to settings, or an empty string."""
    parts: List[str] = []
    if settings.RUN_TAG:
        parts.append(str(settings.RUN_TAG))
    if settings.DATE_IN_FILENAMES and settings.RUN_ID:
        parts.append(str(settings.RUN_ID))
    return ("_" + "_".join(parts)) if parts else ""


def _stat(entry: Dict[str, Any], key: str, field: str) -> Optional[float]:
    return entry.get(key, {}).get(field)


def save_results_to_csv(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    """Write one aggregate row per (algorithm, N) and return the file path."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"results{_build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "algorithm",
            "n",
            "total_runs",
            "successes",
            "failures",
            "success_rate",
            "exhausted_rate",
            "success_time_mean",
            "success_time_median",
            "success_steps_mean",
            "success_steps_median",
            "success_evals_mean",
            "success_evals_median",
            "all_time_mean",
            "all_score_mean",
            "all_score_min",
            "failure_score_mean",
            "parameters",
        ])

        for label, per_n in results.items():
            for N in N_values:
                if N not in per_n:
                    continue
                entry: Dict[str, Any] = dict(per_n[N])
                params = entry.get("parameters", {})
                writer.writerow([
                    label,
                    N,
                    entry.get("total_runs", 0),
                    entry.get("successes", 0),
                    entry.get("failures", 0),
                    entry.get("success_rate", 0.0),
                    entry.get("exhausted_rate", 0.0),
                    _stat(entry, "success_time", "mean"),
                    _stat(entry, "success_time", "median"),
                    _stat(entry, "success_steps", "mean"),
                    _stat(entry, "success_steps", "median"),
                    _stat(entry, "success_evals", "mean"),
                    _stat(entry, "success_evals", "median"),
                    _stat(entry, "all_time", "mean"),
                    _stat(entry, "all_score", "mean"),
                    _stat(entry, "all_score", "min"),
                    _stat(entry, "failure_score", "mean"),
                    ";".join(f"{key}={value}" for key, value in sorted(params.items())),
                ])

    print(f"Aggregate results saved to {filename}")
    return filename


def save_raw_data_to_csv(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    """Write every individual run record and return the file path.

    Assignments are written as space-separated rows (``assignment[col] = row``).
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"raw_runs{_build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "algorithm",
            "n",
            "run",
            "seed",
            "success",
            "exhausted",
            "steps",
            "time_seconds",
            "score",
            "evals",
            "assignment",
        ])
        for label, per_n in results.items():
            for N in N_values:
                if N not in per_n:
                    continue
                for index, run in enumerate(per_n[N].get("raw_runs", [])):
                    writer.writerow([
                        label,
                        N,
                        index,
                        "" if run.get("seed") is None else run["seed"],
                        int(run["success"]),
                        int(run["exhausted"]),
                        run["steps"],
                        run["time"],
                        run["score"],
                        run["evals"],
                        " ".join(str(row) for row in run.get("assignment", [])),
                    ])

    print(f"Raw run data saved to {filename}")
    return filename
