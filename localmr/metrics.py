"""
Performance metrics collection for MapReduce runs.
"""

import time
import json
from dataclasses import dataclass, asdict
from typing import Dict, Optional

import psutil


@dataclass
class RunMetrics:
    """Metrics for a single Coordinator.run() execution."""

    run_id: str
    start_time: float
    end_time: float
    map_phase_start: float
    map_phase_end: float
    reduce_phase_start: float
    reduce_phase_end: float
    num_map_tasks: int
    reduce_workers: int
    num_intermediate_pairs: int = 0
    num_keys: int = 0
    peak_memory_bytes: int = 0

    @property
    def total_time_seconds(self) -> float:
        """Total run time in seconds."""
        return self.end_time - self.start_time

    @property
    def map_phase_time_seconds(self) -> float:
        """Map phase time in seconds, barrier included."""
        return self.map_phase_end - self.map_phase_start

    @property
    def reduce_phase_time_seconds(self) -> float:
        """Reduce phase time in seconds."""
        return self.reduce_phase_end - self.reduce_phase_start

    def to_dict(self) -> dict:
        """Convert metrics to dictionary, derived timings included."""
        data = asdict(self)
        data['total_time_seconds'] = self.total_time_seconds
        data['map_phase_time_seconds'] = self.map_phase_time_seconds
        data['reduce_phase_time_seconds'] = self.reduce_phase_time_seconds
        return data

    def save_to_file(self, filepath: str):
        """Save metrics to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


class MetricsCollector:
    """Collects metrics for Coordinator runs, keyed by run id."""

    def __init__(self):
        self.run_metrics: Dict[str, RunMetrics] = {}
        self.process = psutil.Process()

    def _sample_memory(self, run_id: str):
        rss = self.process.memory_info().rss
        metrics = self.run_metrics[run_id]
        metrics.peak_memory_bytes = max(metrics.peak_memory_bytes, rss)

    def start_run(self, run_id: str, num_map_tasks: int, reduce_workers: int) -> RunMetrics:
        """Initialize metrics tracking for a new run."""
        now = time.time()
        # Only the latest run is kept
        self.run_metrics.clear()
        self.run_metrics[run_id] = RunMetrics(
            run_id=run_id,
            start_time=now,
            end_time=0,
            map_phase_start=now,
            map_phase_end=0,
            reduce_phase_start=0,
            reduce_phase_end=0,
            num_map_tasks=num_map_tasks,
            reduce_workers=reduce_workers
        )
        self._sample_memory(run_id)
        return self.run_metrics[run_id]

    def end_map_phase(self, run_id: str, num_intermediate_pairs: int):
        """Mark the end of the map phase (the barrier has been passed)."""
        if run_id in self.run_metrics:
            self.run_metrics[run_id].map_phase_end = time.time()
            self.run_metrics[run_id].num_intermediate_pairs = num_intermediate_pairs
            self._sample_memory(run_id)

    def start_reduce_phase(self, run_id: str, num_keys: int):
        """Mark the start of the reduce phase."""
        if run_id in self.run_metrics:
            self.run_metrics[run_id].reduce_phase_start = time.time()
            self.run_metrics[run_id].num_keys = num_keys
            self._sample_memory(run_id)

    def end_run(self, run_id: str):
        """Mark run completion."""
        if run_id in self.run_metrics:
            now = time.time()
            self.run_metrics[run_id].reduce_phase_end = now
            self.run_metrics[run_id].end_time = now
            self._sample_memory(run_id)

    def get_metrics(self, run_id: str) -> Optional[RunMetrics]:
        """Retrieve metrics for a specific run."""
        return self.run_metrics.get(run_id)
