#!/usr/bin/env python3
"""
Automated benchmarking script for the in-process MapReduce engine.
Runs the word count job over synthetic input sets and collects performance metrics.
"""

import csv
import json
import random
import sys
import time
from datetime import datetime
from pathlib import Path

from localmr import wordcount
from localmr.coordinator import Coordinator

# Configuration
RESULTS_DIR = Path("benchmark_results")
WORDS_PER_INPUT = 20000
VOCABULARY = [
    "the", "quick", "brown", "fox", "jumps", "over", "lazy", "dog",
    "map", "reduce", "shuffle", "key", "value", "worker", "barrier", "lock",
    "alpha", "beta", "gamma", "delta", "epsilon", "zeta", "eta", "theta",
]

# Benchmark configurations
BENCHMARKS = [
    # Experiment 1: Input count scaling (sequential reduce)
    {"name": "inputs_1", "inputs": 1, "reduce_workers": 0, "description": "1 input"},
    {"name": "inputs_4", "inputs": 4, "reduce_workers": 0, "description": "4 inputs"},
    {"name": "inputs_16", "inputs": 16, "reduce_workers": 0, "description": "16 inputs"},
    {"name": "inputs_64", "inputs": 64, "reduce_workers": 0, "description": "64 inputs"},

    # Experiment 2: Reduce mode (fixed input count)
    {"name": "reduce_workers_0", "inputs": 16, "reduce_workers": 0, "description": "Sequential reduce"},
    {"name": "reduce_workers_2", "inputs": 16, "reduce_workers": 2, "description": "2 reduce threads"},
    {"name": "reduce_workers_8", "inputs": 16, "reduce_workers": 8, "description": "8 reduce threads"},
]


def build_inputs(num_inputs, words_per_input=WORDS_PER_INPUT, seed=0):
    """Generate a deterministic synthetic Input Set."""
    rng = random.Random(seed)
    return {
        f"input_{i}.txt": " ".join(rng.choice(VOCABULARY) for _ in range(words_per_input))
        for i in range(num_inputs)
    }


def run_benchmark(config, run_number=1):
    """Run a single benchmark configuration."""
    print(f"\n{'='*70}")
    print(f"Benchmark: {config['name']} (Run {run_number})")
    print(f"Description: {config['description']}")
    print(f"Config: {config['inputs']} inputs, {config['reduce_workers']} reduce workers")
    print(f"{'='*70}")

    inputs = build_inputs(config['inputs'], config.get('words_per_input', WORDS_PER_INPUT))
    input_size = sum(len(content.encode('utf-8')) for content in inputs.values())

    coordinator = Coordinator(inputs, wordcount.map_function, wordcount.reduce_function,
                              reduce_workers=config['reduce_workers'])
    start_time = time.time()
    try:
        coordinator.run()
        success = True
    except Exception as e:
        print(f"  ❌ Run failed: {e}")
        success = False
    duration = time.time() - start_time

    metrics = coordinator.metrics
    print(f"  {'✓' if success else '✗'} Finished in {duration:.3f}s")

    return {
        "benchmark_name": config["name"],
        "description": config["description"],
        "run_number": run_number,
        "timestamp": datetime.now().isoformat(),
        "num_inputs": config["inputs"],
        "reduce_workers": config["reduce_workers"],
        "input_size_bytes": input_size,
        "input_size_mb": round(input_size / 1024 / 1024, 2),
        "success": success,
        "total_runtime_seconds": round(duration, 4),
        "map_phase_seconds": round(metrics.map_phase_time_seconds, 4) if success else 0,
        "reduce_phase_seconds": round(metrics.reduce_phase_time_seconds, 4) if success else 0,
        "intermediate_pairs": metrics.num_intermediate_pairs,
        "num_keys": metrics.num_keys,
        "peak_memory_mb": round(metrics.peak_memory_bytes / 1024 / 1024, 2),
        "throughput_mbps": round((input_size / 1024 / 1024) / duration, 3) if duration > 0 else 0,
    }


def save_results(results, timestamp, results_dir=RESULTS_DIR):
    """Save results to JSON and CSV files."""
    results_dir.mkdir(parents=True, exist_ok=True)

    json_file = results_dir / f"benchmark_results_{timestamp}.json"
    with open(json_file, 'w') as f:
        json.dump(results, f, indent=2)
    print(f"\n✓ Results saved to: {json_file}")

    csv_file = results_dir / f"benchmark_results_{timestamp}.csv"
    if results:
        fieldnames = list(results[0].keys())
        with open(csv_file, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(results)
        print(f"✓ Results saved to: {csv_file}")

    return json_file, csv_file


def print_summary(results):
    """Print a summary table of results."""
    print(f"\n{'='*70}")
    print("BENCHMARK SUMMARY")
    print(f"{'='*70}")
    print(f"{'Benchmark':<25} {'Inputs':>6} {'Reducers':>8} {'Runtime':>10} {'Status':>8}")
    print(f"{'-'*70}")

    for r in results:
        print(f"{r['benchmark_name']:<25} {r['num_inputs']:>6} "
              f"{r['reduce_workers']:>8} {r['total_runtime_seconds']:>9.3f}s "
              f"{'✓' if r['success'] else '✗':>8}")

    print(f"{'='*70}")

    successful = sum(1 for r in results if r['success'])
    print(f"Total: {len(results)} runs, {successful} successful, "
          f"{len(results) - successful} failed")


def main():
    """Main benchmarking workflow."""
    print("=" * 70)
    print("MapReduce Performance Benchmark Suite")
    print("=" * 70)

    runs_per_benchmark = 3
    if "--runs" in sys.argv:
        try:
            runs_per_benchmark = max(1, int(sys.argv[sys.argv.index("--runs") + 1]))
        except (IndexError, ValueError):
            print("Usage: python benchmark.py [--runs N]")
            return 1

    print(f"\nRunning {len(BENCHMARKS)} benchmarks × {runs_per_benchmark} runs = "
          f"{len(BENCHMARKS) * runs_per_benchmark} total runs")

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    all_results = []

    for config in BENCHMARKS:
        for run in range(1, runs_per_benchmark + 1):
            all_results.append(run_benchmark(config, run_number=run))

    json_file, _ = save_results(all_results, timestamp)
    print_summary(all_results)

    print(f"\n{'='*70}")
    print("Next steps:")
    print(f"  1. Review results: cat {json_file}")
    print(f"  2. Generate plots: python plot_results.py {json_file}")
    print(f"{'='*70}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
