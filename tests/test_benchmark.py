"""
Tests for the benchmark and plotting scripts
"""

import json
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import benchmark
import plot_results


def test_build_inputs_is_deterministic():
    first = benchmark.build_inputs(3, words_per_input=50)
    second = benchmark.build_inputs(3, words_per_input=50)

    assert first == second
    assert len(first) == 3
    assert all(len(content.split()) == 50 for content in first.values())


def test_run_benchmark_records_metrics():
    config = {"name": "inputs_2", "inputs": 2, "reduce_workers": 0,
              "description": "2 inputs", "words_per_input": 100}

    result = benchmark.run_benchmark(config)

    assert result["success"]
    assert result["intermediate_pairs"] == 200
    assert result["num_keys"] <= len(benchmark.VOCABULARY)


def test_save_and_plot(tmp_path):
    results = [
        benchmark.run_benchmark({"name": f"inputs_{n}", "inputs": n, "reduce_workers": 0,
                                 "description": f"{n} inputs", "words_per_input": 50})
        for n in (1, 2)
    ]
    results.append(benchmark.run_benchmark({"name": "reduce_workers_2", "inputs": 2,
                                            "reduce_workers": 2, "description": "2 threads",
                                            "words_per_input": 50}))

    json_file, csv_file = benchmark.save_results(results, "test", results_dir=tmp_path)
    assert csv_file.exists()

    aggregated = plot_results.aggregate_runs(plot_results.load_results(json_file))
    assert set(aggregated) == {"inputs_1", "inputs_2", "reduce_workers_2"}
    assert aggregated["inputs_2"]["num_runs"] == 1

    assert plot_results.plot_input_scaling(aggregated, tmp_path / "scaling.png")
    assert plot_results.plot_reduce_modes(aggregated, tmp_path / "modes.png")
    plot_results.generate_summary_table(aggregated, tmp_path / "table.md")
    assert (tmp_path / "scaling.png").exists()
    assert "inputs_1" in (tmp_path / "table.md").read_text()


def test_aggregate_skips_failed_runs():
    results = [{"benchmark_name": "inputs_1", "success": False}]

    assert plot_results.aggregate_runs(results) == {}
