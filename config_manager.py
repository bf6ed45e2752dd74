"""Configuration management for the N-Queens strategy comparison.

This module provides a thin, explicit wrapper around a JSON configuration file
to centralize experiment settings and per-algorithm parameters.

File format (high-level)
------------------------
- experiment_settings: board sizes (``N_values``), ``runs``, ``base_seed``,
  ``output_dir``, ``parallel``, ``keep_traces``.
- algorithms: mapping label -> {parameter: value}, where label is one of
  ``backtracking``, ``hill_climbing``, ``simulated_annealing``,
  ``beam_search``, ``genetic``. Only the listed algorithms are compared.

Accessors return Python native types; typed configs are built on demand with
``get_algorithm_config``, which is where parameter ranges get validated.
"""
import json
from pathlib import Path

from queens.solver import make_config


class ConfigManager:
    """Load, query, and persist the comparison configuration.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file."""
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or copy config.example.json"
            )

        with open(self.config_path, 'r') as f:
            return json.load(f)

    def save_config(self):
        """Persist the current in-memory configuration to disk."""
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get_experiment_settings(self):
        """Return high-level experiment settings (sizes, runs, seed, output dir)."""
        return self.config.get("experiment_settings", {})

    def get_algorithms(self):
        """Return the configured algorithm labels, in file order."""
        return list(self.config.get("algorithms", {}).keys())

    def get_algorithm_parameters(self, label=None):
        """Return raw parameters for ``label``, or the whole mapping when None."""
        algorithms = self.config.get("algorithms", {})
        if label:
            return dict(algorithms.get(label) or {})
        return algorithms

    def get_algorithm_config(self, label):
        """Build the typed configuration for ``label``.

        Raises
        ------
        ValueError
            If the label is unknown or a parameter is out of range.
        """
        return make_config(label, **self.get_algorithm_parameters(label))

    def save_algorithm_parameters(self, label, parameters):
        """Persist parameters for one algorithm after checking they are valid."""
        make_config(label, **parameters)
        self.config.setdefault("algorithms", {})[label] = dict(parameters)
        self.save_config()
        print(f"Parameters for {label} saved to {self.config_path}")

    def update_setting(self, section, key, value):
        """Update a specific setting and persist the change immediately."""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value
        self.save_config()
