"""Tests for statistics, experiment runners, CSV export, charts and configuration."""

from pathlib import Path
import csv
import json
import os
import sys
import tempfile
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config_manager import ConfigManager
from queens import GeneticConfig
from queens.analysis import settings
from queens.analysis.experiments import run_experiments, run_experiments_parallel, run_single
from queens.analysis.plots import plot_convergence
from queens.analysis.reporting import save_raw_data_to_csv, save_results_to_csv
from queens.analysis.stats import best_so_far, compute_detailed_statistics, compute_grouped_statistics


class StatisticsTests(unittest.TestCase):
    def test_detailed_statistics(self):
        summary = compute_detailed_statistics([4, 1, 3, 2])
        self.assertEqual(summary["count"], 4)
        self.assertEqual(summary["mean"], 2.5)
        self.assertEqual(summary["median"], 2.5)
        self.assertEqual(summary["min"], 1)
        self.assertEqual(summary["max"], 4)
        self.assertEqual(summary["q25"], 2)
        self.assertEqual(summary["q75"], 4)
        self.assertEqual(summary["range"], 3)

    def test_detailed_statistics_empty(self):
        summary = compute_detailed_statistics([])
        self.assertEqual(summary["count"], 0)
        self.assertIsNone(summary["mean"])

    def test_grouped_statistics(self):
        records = [
            {"success": True, "exhausted": False, "time": 0.1, "steps": 10, "evals": 11, "score": 0},
            {"success": False, "exhausted": True, "time": 0.3, "steps": 30, "evals": 31, "score": 2},
        ]
        stats = compute_grouped_statistics(records)
        self.assertEqual(stats["total_runs"], 2)
        self.assertEqual(stats["success_rate"], 0.5)
        self.assertEqual(stats["exhausted_rate"], 0.5)
        self.assertEqual(stats["success_steps"]["mean"], 10)
        self.assertEqual(stats["failure_score"]["mean"], 2)
        self.assertEqual(stats["all_time"]["count"], 2)

    def test_best_so_far(self):
        self.assertEqual(best_so_far([5, 3, 4, 1, 2]), [5, 3, 3, 1, 1])
        self.assertEqual(best_so_far([]), [])


class ExperimentTests(unittest.TestCase):
    def test_run_single_is_reproducible(self):
        first = run_single("hill_climbing", 6, {}, seed=3, keep_trace=True)
        second = run_single("hill_climbing", 6, {}, seed=3, keep_trace=True)
        for key in ("assignment", "score", "steps", "evals", "trace", "success"):
            self.assertEqual(first[key], second[key])
        self.assertEqual(first["trace"][-1], first["score"])
        self.assertNotIn("trace", run_single("hill_climbing", 6, {}, seed=3))

    def test_run_experiments_shapes_results(self):
        results = run_experiments(
            [4, 5],
            2,
            ["backtracking", "hill_climbing"],
            parameters={"hill_climbing": {"max_iterations_without_improvement": 200}},
            base_seed=1,
            validate=True,
        )
        self.assertEqual(set(results), {"backtracking", "hill_climbing"})
        self.assertEqual(results["backtracking"][4]["total_runs"], settings.RUNS_BACKTRACKING)
        self.assertEqual(results["backtracking"][4]["success_rate"], 1.0)
        self.assertEqual(results["hill_climbing"][5]["total_runs"], 2)
        self.assertEqual(results["hill_climbing"][5]["parameters"]["max_iterations_without_improvement"], 200)
        seeds = [run["seed"] for run in results["hill_climbing"][5]["raw_runs"]]
        self.assertEqual(seeds, [1, 2])

    def test_parallel_runner_matches_sequential(self):
        arguments = ([4, 5], 2, ["backtracking", "hill_climbing"])
        sequential = run_experiments(*arguments, base_seed=1)
        parallel = run_experiments_parallel(*arguments, base_seed=1, processes=2)

        def without_timing(results):
            return {
                label: {
                    N: [{key: value for key, value in run.items() if key != "time"} for run in entry["raw_runs"]]
                    for N, entry in per_n.items()
                }
                for label, per_n in results.items()
            }

        self.assertEqual(without_timing(parallel), without_timing(sequential))
        self.assertEqual(parallel["hill_climbing"][5]["total_runs"], 2)
        self.assertEqual(parallel["backtracking"][4]["success_rate"], 1.0)

    def test_unknown_algorithm_is_rejected(self):
        with self.assertRaises(ValueError):
            run_experiments([4], 1, ["tabu_search"])


class ReportingTests(unittest.TestCase):
    def test_csv_exports(self):
        results = run_experiments([4], 2, ["backtracking", "beam_search"], base_seed=5)
        with tempfile.TemporaryDirectory() as tmp:
            summary_path = save_results_to_csv(results, [4], tmp)
            raw_path = save_raw_data_to_csv(results, [4], tmp)

            with open(summary_path, newline="") as f:
                rows = list(csv.DictReader(f))
            self.assertEqual([row["algorithm"] for row in rows], ["backtracking", "beam_search"])
            self.assertEqual(rows[0]["n"], "4")

            with open(raw_path, newline="") as f:
                raw_rows = list(csv.DictReader(f))
            self.assertEqual(len(raw_rows), settings.RUNS_BACKTRACKING + 2)
            self.assertEqual(raw_rows[0]["assignment"], "1 3 0 2")

    def test_convergence_chart(self):
        with tempfile.TemporaryDirectory() as tmp:
            out_path = os.path.join(tmp, "convergence.png")
            plot_convergence([[6, 4, 3, 1], [5, 5, 2]], "test", out_path)
            self.assertTrue(os.path.exists(out_path))


class ConfigManagerTests(unittest.TestCase):
    def _write(self, tmp, payload):
        path = os.path.join(tmp, "config.json")
        with open(path, "w") as f:
            json.dump(payload, f)
        return path

    def test_typed_configs(self):
        payload = {
            "experiment_settings": {"N_values": [4, 6], "runs": 3},
            "algorithms": {"genetic": {"generation_size": 10, "generation_count": 5}, "backtracking": {}},
        }
        with tempfile.TemporaryDirectory() as tmp:
            manager = ConfigManager(self._write(tmp, payload))
            self.assertEqual(manager.get_algorithms(), ["genetic", "backtracking"])
            self.assertEqual(manager.get_experiment_settings()["runs"], 3)
            config = manager.get_algorithm_config("genetic")
            self.assertEqual(config, GeneticConfig(generation_size=10, generation_count=5))

    def test_invalid_parameters_are_not_saved(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, {"algorithms": {}})
            manager = ConfigManager(path)
            with self.assertRaises(ValueError):
                manager.save_algorithm_parameters("simulated_annealing", {"cooling_factor": 0.0})
            manager.save_algorithm_parameters("beam_search", {"state_count": 2})
            self.assertEqual(ConfigManager(path).get_algorithm_parameters("beam_search"), {"state_count": 2})

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileNotFoundError):
                ConfigManager(os.path.join(tmp, "absent.json"))


if __name__ == "__main__":
    unittest.main()
