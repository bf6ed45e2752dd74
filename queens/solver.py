"""Entry points that pick a strategy from its configuration or label."""

from __future__ import annotations

import random
from typing import Any, Dict, Optional, Type, Union

from .backtracking import BacktrackingConfig, ConstraintPropagation
from .beam_search import LocalBeamSearch, LocalBeamSearchConfig
from .genetic import GeneticAlgorithm, GeneticConfig
from .hill_climbing import HillClimbing, HillClimbingConfig
from .simulated_annealing import SimulatedAnnealing, SimulatedAnnealingConfig
from .strategy import NQueensStrategy, ProgressCallback, Solution, no_progress

AlgorithmConfig = Union[
    BacktrackingConfig,
    HillClimbingConfig,
    SimulatedAnnealingConfig,
    LocalBeamSearchConfig,
    GeneticConfig,
]

STRATEGIES: Dict[str, Type[Any]] = {
    "backtracking": ConstraintPropagation,
    "hill_climbing": HillClimbing,
    "simulated_annealing": SimulatedAnnealing,
    "beam_search": LocalBeamSearch,
    "genetic": GeneticAlgorithm,
}

CONFIGS: Dict[str, Type[Any]] = {
    "backtracking": BacktrackingConfig,
    "hill_climbing": HillClimbingConfig,
    "simulated_annealing": SimulatedAnnealingConfig,
    "beam_search": LocalBeamSearchConfig,
    "genetic": GeneticConfig,
}

_LABEL_BY_CONFIG = {config_type: label for label, config_type in CONFIGS.items()}


def get_strategy(label: str) -> Type[Any]:
    """Return a strategy class by label.

    Parameters
    ----------
    label : str
        One of ``"backtracking"``, ``"hill_climbing"``,
        ``"simulated_annealing"``, ``"beam_search"``, ``"genetic"``.
    """
    try:
        return STRATEGIES[label]
    except KeyError as exc:
        raise ValueError(f"Unknown algorithm: {label}. Available: {', '.join(sorted(STRATEGIES))}") from exc


def make_config(label: str, **params: Any) -> AlgorithmConfig:
    """Build the typed configuration of ``label`` from plain keyword parameters."""
    try:
        config_type = CONFIGS[label]
    except KeyError as exc:
        raise ValueError(f"Unknown algorithm: {label}. Available: {', '.join(sorted(CONFIGS))}") from exc
    try:
        return config_type(**params)
    except TypeError as exc:
        raise ValueError(f"Invalid parameters for {label}: {params}") from exc


def label_for(config: AlgorithmConfig) -> str:
    """Return the algorithm label matching a configuration instance."""
    try:
        return _LABEL_BY_CONFIG[type(config)]
    except KeyError as exc:
        raise ValueError(f"Unsupported configuration type: {type(config).__name__}") from exc


def create(size: int, config: AlgorithmConfig, rng: Optional[random.Random] = None) -> NQueensStrategy:
    """Instantiate the strategy that consumes ``config``."""
    strategy = get_strategy(label_for(config))
    return strategy.create(size, config, rng)


def solve(
    size: int,
    config: AlgorithmConfig,
    on_progress: Optional[ProgressCallback] = None,
    rng: Optional[random.Random] = None,
) -> Solution:
    """Solve an N-Queens instance with the strategy selected by ``config``.

    Parameters
    ----------
    size : int
        Board dimension N.
    config : AlgorithmConfig
        Configuration of the chosen strategy; its type selects the algorithm.
    on_progress : callable | None
        ``on_progress(assignment, score)`` called synchronously on every
        reported step. ``assignment[col] = row``.
    rng : random.Random | None
        Random source for stochastic strategies. A fresh OS-seeded generator
        is used when omitted.

    Returns
    -------
    Solution
        Final assignment and score; see :class:`queens.strategy.Solution`.
    """
    instance = create(size, config, rng)
    return instance.solve_with_callback(on_progress if on_progress is not None else no_progress)
