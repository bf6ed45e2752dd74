"""Global settings for the N-Queens strategy comparison pipeline.

This module centralizes tunable constants used across the orchestration code.
Values are overridden at runtime with :func:`set_defaults`, which is also how
``pipeline.apply_configuration`` applies the JSON file handled by
``config_manager.ConfigManager``.
"""
from __future__ import annotations

import multiprocessing
from datetime import datetime
from typing import Any, Dict, List, Optional

# Board sizes to evaluate (in ascending order)
N_VALUES: List[int] = [4, 8, 12, 16, 24]

# Independent runs per stochastic strategy and N
RUNS_PER_ALGORITHM: int = 20
# Backtracking is deterministic; one run per N is sufficient
RUNS_BACKTRACKING: int = 1

# Base seed for experiment runs; run i uses BASE_SEED + i (None = OS entropy)
BASE_SEED: Optional[int] = 12345

# Output directory for CSV and charts
OUT_DIR: str = "results_queens"

# Default parameters per algorithm label
ALGORITHM_PARAMETERS: Dict[str, Dict[str, Any]] = {
    "backtracking": {},
    "hill_climbing": {"max_iterations_without_improvement": 1000},
    "simulated_annealing": {"starting_temperature": 100.0, "cooling_factor": 0.001},
    "beam_search": {"state_count": 4, "max_rounds": 200},
    "genetic": {
        "generation_size": 100,
        "elitism": 0.1,
        "crossover_probability": 0.8,
        "mutation_probability": 0.05,
        "generation_count": 500,
    },
}

# Number of worker processes to use (leave one core for the OS)
NUM_PROCESSES: int = max(1, multiprocessing.cpu_count() - 1)

# When True, results and plots carry a datestamp suffix (e.g., _20251113-142530)
DATE_IN_FILENAMES: bool = True

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional run label appended to output filenames
RUN_TAG: Optional[str] = None


def set_defaults(
    n_values: Optional[List[int]] = None,
    runs: Optional[int] = None,
    base_seed: Optional[int] = None,
    out_dir: Optional[str] = None,
    algorithm_parameters: Optional[Dict[str, Dict[str, Any]]] = None,
) -> None:
    """Override the experiment defaults and print the active values.

    Arguments left as None keep their current value. Parameters given for an
    algorithm are merged into its existing defaults.
    """
    global N_VALUES, RUNS_PER_ALGORITHM, BASE_SEED, OUT_DIR
    if n_values is not None:
        N_VALUES = list(n_values)
    if runs is not None:
        RUNS_PER_ALGORITHM = runs
    if base_seed is not None:
        BASE_SEED = base_seed
    if out_dir is not None:
        OUT_DIR = out_dir
    if algorithm_parameters:
        for label, params in algorithm_parameters.items():
            ALGORITHM_PARAMETERS.setdefault(label, {}).update(params)

    print("Experiment settings configured:")
    print(f"   - N values: {N_VALUES}")
    print(f"   - Runs per algorithm: {RUNS_PER_ALGORITHM}")
    print(f"   - Base seed: {BASE_SEED}" if BASE_SEED is not None else "   - Base seed: OS entropy")
    print(f"   - Output directory: {OUT_DIR}")
