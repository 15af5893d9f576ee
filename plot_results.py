#!/usr/bin/env python3
"""
Generate plots from benchmark results.
"""

import json
import sys
from collections import defaultdict
from pathlib import Path

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

# Configuration
PLOTS_DIR = Path("benchmark_results/plots")


def load_results(json_file):
    """Load benchmark results from JSON file."""
    with open(json_file, 'r') as f:
        return json.load(f)


def aggregate_runs(results):
    """
    Aggregate multiple runs of the same benchmark.
    Returns dict: benchmark_name -> {avg_runtime, std_runtime, config, ...}
    """
    by_benchmark = defaultdict(list)

    for r in results:
        if r['success']:  # Only include successful runs
            by_benchmark[r['benchmark_name']].append(r)

    aggregated = {}
    for name, runs in by_benchmark.items():
        runtimes = [r['total_runtime_seconds'] for r in runs]
        throughputs = [r['throughput_mbps'] for r in runs]
        memory = [r['peak_memory_mb'] for r in runs]

        # Use first run for configuration data
        first = runs[0]

        aggregated[name] = {
            'benchmark_name': name,
            'description': first['description'],
            'num_inputs': first['num_inputs'],
            'reduce_workers': first['reduce_workers'],
            'input_size_mb': first['input_size_mb'],
            'avg_runtime': float(np.mean(runtimes)),
            'std_runtime': float(np.std(runtimes)),
            'min_runtime': float(np.min(runtimes)),
            'max_runtime': float(np.max(runtimes)),
            'avg_throughput': float(np.mean(throughputs)),
            'peak_memory_mb': float(np.max(memory)),
            'num_runs': len(runs)
        }

    return aggregated


def plot_input_scaling(aggregated, output_file):
    """Plot runtime vs number of inputs (one map task each)."""
    data = [(v['num_inputs'], v['avg_runtime'], v['std_runtime'])
            for k, v in aggregated.items()
            if k.startswith('inputs_')]

    if not data:
        print("⚠️  No input scaling data found")
        return False

    data.sort()
    counts, runtimes, stds = zip(*data)

    plt.figure(figsize=(10, 6))
    plt.errorbar(counts, runtimes, yerr=stds, marker='o', capsize=5,
                 linewidth=2, markersize=8)
    plt.xlabel('Number of Inputs (map tasks)', fontsize=12)
    plt.ylabel('Runtime (seconds)', fontsize=12)
    plt.title('MapReduce Performance: Input Count Scaling\n(sequential reduce)',
              fontsize=14, fontweight='bold')
    plt.xscale('log', base=2)
    plt.xticks(counts, [str(c) for c in counts])
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(output_file, dpi=150, bbox_inches='tight')
    print(f"✓ Saved: {output_file}")
    plt.close()
    return True


def plot_reduce_modes(aggregated, output_file):
    """Bar chart of runtime per reduce worker count."""
    data = [(v['reduce_workers'], v['avg_runtime'], v['std_runtime'])
            for k, v in aggregated.items()
            if k.startswith('reduce_workers_')]

    if not data:
        print("⚠️  No reduce mode data found")
        return False

    data.sort()
    workers, runtimes, stds = zip(*data)
    labels = ['sequential' if w == 0 else f'{w} threads' for w in workers]

    plt.figure(figsize=(10, 6))
    plt.bar(labels, runtimes, yerr=stds, capsize=5, color='green', alpha=0.8)
    plt.xlabel('Reduce Mode', fontsize=12)
    plt.ylabel('Runtime (seconds)', fontsize=12)
    plt.title('MapReduce Performance: Reduce Phase Parallelism',
              fontsize=14, fontweight='bold')
    plt.grid(True, axis='y', alpha=0.3)
    plt.tight_layout()
    plt.savefig(output_file, dpi=150, bbox_inches='tight')
    print(f"✓ Saved: {output_file}")
    plt.close()
    return True


def generate_summary_table(aggregated, output_file):
    """Generate a markdown table summarizing all results."""
    lines = [
        "# Benchmark Results Summary\n",
        "| Benchmark | Inputs | Reduce Workers | Input (MB) | Avg Runtime (s) | Std Dev | Throughput (MB/s) | Peak Memory (MB) |",
        "|-----------|--------|----------------|------------|-----------------|---------|-------------------|------------------|"
    ]

    for name in sorted(aggregated.keys()):
        v = aggregated[name]
        lines.append(
            f"| {v['benchmark_name']:<17} | {v['num_inputs']:>6} | "
            f"{v['reduce_workers']:>14} | {v['input_size_mb']:>10.2f} | "
            f"{v['avg_runtime']:>15.3f} | {v['std_runtime']:>7.3f} | "
            f"{v['avg_throughput']:>17.3f} | {v['peak_memory_mb']:>16.1f} |"
        )

    with open(output_file, 'w') as f:
        f.write('\n'.join(lines))

    print(f"✓ Saved: {output_file}")


def main():
    """Generate all plots from benchmark results."""
    if len(sys.argv) < 2:
        print("Usage: python plot_results.py <results.json>")
        print("\nExample:")
        print("  python plot_results.py benchmark_results/benchmark_results_20250113_120000.json")
        sys.exit(1)

    json_file = sys.argv[1]

    if not Path(json_file).exists():
        print(f"❌ File not found: {json_file}")
        sys.exit(1)

    print(f"Loading results from: {json_file}")
    results = load_results(json_file)
    print(f"✓ Loaded {len(results)} benchmark results")

    aggregated = aggregate_runs(results)
    print(f"✓ Aggregated into {len(aggregated)} unique benchmarks")

    PLOTS_DIR.mkdir(parents=True, exist_ok=True)

    print("\nGenerating plots...")
    plot_input_scaling(aggregated, PLOTS_DIR / "1_input_scaling.png")
    plot_reduce_modes(aggregated, PLOTS_DIR / "2_reduce_modes.png")

    generate_summary_table(aggregated, PLOTS_DIR / "results_table.md")

    print(f"\n{'='*70}")
    print(f"All plots saved to: {PLOTS_DIR}/")
    print(f"{'='*70}")


if __name__ == "__main__":
    main()
