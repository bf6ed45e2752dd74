"""Charts for the N-Queens strategy comparison.

Files written to ``out_dir`` (suffix from ``settings.RUN_TAG``/``RUN_ID``):

- 01_success_rate_vs_N.png: fraction of runs reaching score 0, per algorithm.
  X: N (board size). Y: success rate.
- 02_time_vs_N_log_scale.png: mean wall time of all runs (log scale).
- 03_final_score_vs_N.png: mean final score, i.e. how far failing runs stay
  from a solution.
- convergence_<label>_N{N}.png: best-so-far score across the progress
  callbacks of every run that kept a trace.
"""
from __future__ import annotations

import os
from typing import Dict, List, Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from .reporting import _build_suffix  # noqa: E402
from .stats import ExperimentResults, best_so_far  # noqa: E402

DISPLAY_NAMES: Dict[str, str] = {
    "backtracking": "Backtracking",
    "hill_climbing": "Hill Climbing",
    "simulated_annealing": "Simulated Annealing",
    "beam_search": "Local Beam Search",
    "genetic": "Genetic Algorithm",
}

MARKERS = ["o", "s", "^", "D", "v", "P"]


def _series(results: ExperimentResults, label: str, N_values: List[int], key: str, field: Optional[str] = None) -> np.ndarray:
    """Extract one value per N, NaN where the entry or statistic is missing."""
    values = []
    for N in N_values:
        entry = results.get(label, {}).get(N)
        if entry is None:
            values.append(np.nan)
            continue
        value = entry.get(key)
        if field is not None:
            value = (value or {}).get(field)
        values.append(np.nan if value is None else float(value))
    return np.asarray(values, dtype=float)


def plot_comparison(results: ExperimentResults, N_values: List[int], out_dir: str) -> List[str]:
    """Write the per-N comparison charts and return their paths."""
    os.makedirs(out_dir, exist_ok=True)
    suffix = _build_suffix()
    saved: List[str] = []

    charts = [
        ("success_rate", None, "Success rate", "Success Rate vs Problem Size", "01_success_rate_vs_N", False),
        ("all_time", "mean", "Average time [s] (log scale)", "Execution Time vs Problem Size", "02_time_vs_N_log_scale", True),
        ("all_score", "mean", "Mean final score", "Final Conflict Score vs Problem Size", "03_final_score_vs_N", False),
    ]

    for key, field, ylabel, title, stem, log_scale in charts:
        plt.figure(figsize=(12, 8))
        for index, label in enumerate(results):
            series = _series(results, label, N_values, key, field)
            if log_scale:
                series = np.maximum(series, 1e-6)
            plt.plot(
                N_values,
                series,
                marker=MARKERS[index % len(MARKERS)],
                linewidth=2,
                markersize=8,
                label=DISPLAY_NAMES.get(label, label),
            )
        if log_scale:
            plt.yscale("log")
        if key == "success_rate":
            plt.ylim(-0.05, 1.05)
        plt.xlabel("N (board size)", fontsize=12)
        plt.ylabel(ylabel, fontsize=12)
        plt.title(title, fontsize=14)
        plt.legend(fontsize=11)
        plt.grid(True, alpha=0.7)
        plt.xticks(N_values)

        fname = os.path.join(out_dir, f"{stem}{suffix}.png")
        plt.savefig(fname, bbox_inches="tight", dpi=150)
        plt.close()
        print(f"Saved chart: {fname}")
        saved.append(fname)

    return saved


def plot_convergence(traces: List[List[int]], title: str, out_path: str) -> str:
    """Plot the best-so-far score of each trace against the callback index."""
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    plt.figure(figsize=(12, 8))
    for trace in traces:
        if not trace:
            continue
        curve = np.asarray(best_so_far(trace))
        plt.step(np.arange(len(curve)), curve, where="post", alpha=0.6)
    plt.xlabel("Reported step", fontsize=12)
    plt.ylabel("Best conflict score so far", fontsize=12)
    plt.title(title, fontsize=14)
    plt.grid(True, alpha=0.7)
    plt.savefig(out_path, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved convergence chart: {out_path}")
    return out_path


def plot_all_convergence(results: ExperimentResults, N_values: List[int], out_dir: str) -> List[str]:
    """Write one convergence chart per (algorithm, N) that recorded traces."""
    suffix = _build_suffix()
    saved: List[str] = []
    for label, per_n in results.items():
        for N in N_values:
            runs = per_n.get(N, {}).get("raw_runs", [])
            traces = [run["trace"] for run in runs if run.get("trace")]
            if not traces:
                continue
            out_path = os.path.join(out_dir, f"convergence_{label}_N{N}{suffix}.png")
            title = f"{DISPLAY_NAMES.get(label, label)} convergence, N={N}"
            saved.append(plot_convergence(traces, title, out_path))
    return saved


def plot_and_save(results: ExperimentResults, N_values: List[int], out_dir: str) -> List[str]:
    """Generate every chart for a finished comparison."""
    return plot_comparison(results, N_values, out_dir) + plot_all_convergence(results, N_values, out_dir)
