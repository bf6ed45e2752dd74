"""N-Queens search strategies over a shared board representation."""

from .backtracking import BacktrackingConfig, ConstraintPropagation
from .beam_search import LocalBeamSearch, LocalBeamSearchConfig
from .board import Attack, BoardState, attack_between, conflicts, conflicts_on2, is_valid_solution
from .genetic import GeneticAlgorithm, GeneticConfig
from .hill_climbing import HillClimbing, HillClimbingConfig
from .simulated_annealing import SimulatedAnnealing, SimulatedAnnealingConfig
from .solver import AlgorithmConfig, create, get_strategy, make_config, solve
from .strategy import NQueensStrategy, ProgressCallback, Solution

__all__ = [
    "Attack",
    "BoardState",
    "attack_between",
    "conflicts",
    "conflicts_on2",
    "is_valid_solution",
    "Solution",
    "NQueensStrategy",
    "ProgressCallback",
    "AlgorithmConfig",
    "BacktrackingConfig",
    "ConstraintPropagation",
    "HillClimbingConfig",
    "HillClimbing",
    "SimulatedAnnealingConfig",
    "SimulatedAnnealing",
    "LocalBeamSearchConfig",
    "LocalBeamSearch",
    "GeneticConfig",
    "GeneticAlgorithm",
    "create",
    "get_strategy",
    "make_config",
    "solve",
]
