"""Repeated-run comparison of the N-Queens strategies (sequential and parallel).

For every board size and algorithm label, these routines execute a batch of
independent seeded runs, collect one ``RunRecord`` per run and aggregate the
batch with ``compute_grouped_statistics``. Backtracking is deterministic and
runs ``settings.RUNS_BACKTRACKING`` times per N regardless of the requested
run count.

Outputs are structured dictionaries ``results[label][N]`` suitable for CSV
export and plotting.
"""
from __future__ import annotations

import random
from concurrent.futures import ProcessPoolExecutor
from time import perf_counter
from typing import Any, Dict, List, Optional, Tuple

from . import settings
from .stats import (
    AlgorithmEntry,
    ExperimentResults,
    ProgressPrinter,
    RunRecord,
    compute_grouped_statistics,
)
from queens.board import is_valid_solution
from queens.solver import get_strategy, make_config
from queens.strategy import no_progress

RunParams = Tuple[str, int, Dict[str, Any], Optional[int], bool]


def run_single(
    label: str,
    size: int,
    params: Dict[str, Any],
    seed: Optional[int] = None,
    keep_trace: bool = False,
) -> RunRecord:
    """Run one timed solve and return its record.

    Parameters
    ----------
    label : str
        Algorithm label (see ``queens.solver.STRATEGIES``).
    size : int
        Board dimension N.
    params : dict
        Keyword parameters for the algorithm's config.
    seed : int | None
        Seed of the run's private ``random.Random``.
    keep_trace : bool
        When True, the scores passed to the progress callback are stored in
        ``record["trace"]``.
    """
    config = make_config(label, **params)
    rng = random.Random(seed)
    trace: List[int] = []

    def on_progress(assignment, score) -> None:
        trace.append(score)

    instance = get_strategy(label).create(size, config, rng)
    start = perf_counter()
    solution = instance.solve_with_callback(on_progress if keep_trace else no_progress)
    elapsed = perf_counter() - start

    record: RunRecord = {
        "algorithm": label,
        "n": size,
        "seed": seed,
        "success": solution.success,
        "exhausted": solution.exhausted,
        "steps": solution.steps,
        "time": elapsed,
        "score": solution.score,
        "evals": solution.evaluations,
        "assignment": solution.as_list(),
    }
    if keep_trace:
        record["trace"] = trace
    return record


def _run_single_params(params: RunParams) -> RunRecord:
    """Worker wrapper to invoke a single run (for parallel mapping)."""
    label, size, algorithm_params, seed, keep_trace = params
    return run_single(label, size, algorithm_params, seed, keep_trace)


def _seeds(runs: int, base_seed: Optional[int]) -> List[Optional[int]]:
    if base_seed is None:
        return [None] * runs
    return [base_seed + index for index in range(runs)]


def _runs_for(label: str, runs: int) -> int:
    return settings.RUNS_BACKTRACKING if label == "backtracking" else runs


def _validate_records(records: List[RunRecord]) -> None:
    for index, record in enumerate(records):
        if record["success"] and not (record["n"] == 0 or is_valid_solution(record["assignment"])):
            raise AssertionError(
                f"Validation failed for {record['algorithm']} N={record['n']}, run {index}: "
                f"reported success with assignment {record['assignment']}"
            )
        if record["success"] and record["score"] != 0:
            raise AssertionError(
                f"Validation failed for {record['algorithm']} N={record['n']}, run {index}: "
                f"success but score={record['score']}"
            )


def _summarize(records: List[RunRecord], params: Dict[str, Any]) -> AlgorithmEntry:
    stats = compute_grouped_statistics(records)
    entry: AlgorithmEntry = {
        "success_rate": stats["success_rate"],
        "exhausted_rate": stats["exhausted_rate"],
        "total_runs": stats["total_runs"],
        "successes": stats["successes"],
        "failures": stats["failures"],
        "parameters": dict(params),
        "success_time": stats.get("success_time", {}),
        "success_steps": stats.get("success_steps", {}),
        "success_evals": stats.get("success_evals", {}),
        "all_time": stats.get("all_time", {}),
        "all_steps": stats.get("all_steps", {}),
        "all_evals": stats.get("all_evals", {}),
        "all_score": stats.get("all_score", {}),
        "failure_score": stats.get("failure_score", {}),
        "raw_runs": records.copy(),
    }
    return entry


def _resolve_parameters(
    algorithms: List[str], parameters: Optional[Dict[str, Dict[str, Any]]]
) -> Dict[str, Dict[str, Any]]:
    resolved: Dict[str, Dict[str, Any]] = {}
    for label in algorithms:
        get_strategy(label)
        merged = dict(settings.ALGORITHM_PARAMETERS.get(label, {}))
        if parameters and label in parameters:
            merged.update(parameters[label])
        resolved[label] = merged
    return resolved


def run_experiments(
    N_values: List[int],
    runs: int,
    algorithms: List[str],
    parameters: Optional[Dict[str, Dict[str, Any]]] = None,
    base_seed: Optional[int] = None,
    keep_traces: bool = False,
    validate: bool = False,
    progress_label: Optional[str] = None,
) -> ExperimentResults:
    """Run sequential comparison batches.

    For each N in ``N_values`` and each label in ``algorithms``, ``runs``
    seeded runs are executed (one for backtracking). Run ``i`` uses seed
    ``base_seed + i``; with ``base_seed=None`` runs are OS-seeded.
    """
    resolved = _resolve_parameters(algorithms, parameters)
    results: ExperimentResults = {label: {} for label in algorithms}
    progress = ProgressPrinter(len(N_values), progress_label) if progress_label else None

    for index, N in enumerate(N_values, start=1):
        try:
            if progress:
                progress.update(index, f"N={N}")
            print(f"=== N = {N}, " + "+".join(algorithms) + " ===")

            for label in algorithms:
                seeds = _seeds(_runs_for(label, runs), base_seed)
                records = [run_single(label, N, resolved[label], seed, keep_traces) for seed in seeds]
                if validate:
                    _validate_records(records)
                results[label][N] = _summarize(records, resolved[label])
        except KeyboardInterrupt:
            print("\nInterrupted by user (sequential). Returning partial results...")
            break

    return results


def run_experiments_parallel(
    N_values: List[int],
    runs: int,
    algorithms: List[str],
    parameters: Optional[Dict[str, Dict[str, Any]]] = None,
    base_seed: Optional[int] = None,
    keep_traces: bool = False,
    validate: bool = False,
    progress_label: Optional[str] = None,
    processes: Optional[int] = None,
) -> ExperimentResults:
    """Same as :func:`run_experiments` with runs spread over a process pool.

    Every worker builds its own ``random.Random`` from the run's seed, so the
    records match the sequential runner for equal seeds (timings aside).
    """
    resolved = _resolve_parameters(algorithms, parameters)
    results: ExperimentResults = {label: {} for label in algorithms}
    progress = ProgressPrinter(len(N_values), progress_label) if progress_label else None
    workers = processes if processes is not None else settings.NUM_PROCESSES

    with ProcessPoolExecutor(max_workers=workers) as executor:
        for index, N in enumerate(N_values, start=1):
            if progress:
                progress.update(index, f"N={N}")
            print(f"=== (parallel) N = {N}, " + "+".join(algorithms) + " ===")

            for label in algorithms:
                seeds = _seeds(_runs_for(label, runs), base_seed)
                params_list: List[RunParams] = [
                    (label, N, resolved[label], seed, keep_traces) for seed in seeds
                ]
                records = list(executor.map(_run_single_params, params_list))
                if validate:
                    _validate_records(records)
                results[label][N] = _summarize(records, resolved[label])

    return results
