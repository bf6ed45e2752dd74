"""High-level comparison pipeline driven by the JSON configuration.

Wires together configuration loading, the experiment runners, CSV export and
charts. Argument parsing is left to the caller.
"""
from __future__ import annotations

from time import perf_counter
from typing import List, Optional

from . import settings
from .experiments import run_experiments, run_experiments_parallel
from .plots import plot_and_save
from .reporting import save_raw_data_to_csv, save_results_to_csv
from .stats import ExperimentResults
from config_manager import ConfigManager


def apply_configuration(config_path: str, algorithm_filter: Optional[List[str]] = None):
    """Load configuration into ``settings`` and return ``(manager, algorithms)``.

    Every selected algorithm's parameters are validated here, so a bad file
    fails before any run starts.
    """
    config_mgr = ConfigManager(config_path)

    experiment_settings = config_mgr.get_experiment_settings()
    n_values = experiment_settings.get("N_values")
    runs = experiment_settings.get("runs")

    configured = config_mgr.get_algorithms() or list(settings.ALGORITHM_PARAMETERS)
    if algorithm_filter:
        unknown = set(algorithm_filter).difference(configured)
        if unknown:
            raise ValueError("Unknown algorithms requested: " + ", ".join(sorted(unknown)))
        selected = [label for label in configured if label in algorithm_filter]
    else:
        selected = configured

    for label in selected:
        config_mgr.get_algorithm_config(label)

    settings.set_defaults(
        n_values=[int(n) for n in n_values] if n_values is not None else None,
        runs=int(runs) if runs is not None else None,
        base_seed=experiment_settings.get("base_seed"),
        out_dir=experiment_settings.get("output_dir"),
        algorithm_parameters={label: config_mgr.get_algorithm_parameters(label) for label in selected},
    )
    return config_mgr, selected


def run_comparison(
    config_path: str,
    algorithm_filter: Optional[List[str]] = None,
    parallel: Optional[bool] = None,
    plots: bool = True,
) -> ExperimentResults:
    """Run the full comparison described by ``config_path`` and export outputs."""
    config_mgr, algorithms = apply_configuration(config_path, algorithm_filter)
    experiment_settings = config_mgr.get_experiment_settings()
    if parallel is None:
        parallel = bool(experiment_settings.get("parallel", False))
    keep_traces = bool(experiment_settings.get("keep_traces", plots))

    runner = run_experiments_parallel if parallel else run_experiments
    start = perf_counter()
    results = runner(
        settings.N_VALUES,
        settings.RUNS_PER_ALGORITHM,
        algorithms,
        base_seed=settings.BASE_SEED,
        keep_traces=keep_traces,
        validate=True,
        progress_label="parallel" if parallel else "sequential",
    )
    print(f"Comparison finished in {perf_counter() - start:.2f}s")

    save_results_to_csv(results, settings.N_VALUES, settings.OUT_DIR)
    save_raw_data_to_csv(results, settings.N_VALUES, settings.OUT_DIR)
    if plots:
        plot_and_save(results, settings.N_VALUES, settings.OUT_DIR)
    return results
