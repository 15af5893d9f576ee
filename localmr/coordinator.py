"""
Coordinator for the in-process MapReduce engine.
Fans the map phase out over one thread per input, waits at a barrier,
groups the intermediate pairs by key and drives the reduce phase.
"""

import uuid
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, FIRST_EXCEPTION, wait
from typing import Dict, List, Optional

from localmr import settings
from localmr.buffer import IntermediateBuffer
from localmr.metrics import MetricsCollector, RunMetrics
from localmr.shuffle import count_values, group_by_key
from localmr.types import (
    InputSet, JobStatus, KeyValue, MapFunc, MapTask, ReduceFunc, TaskStatus
)

logger = logging.getLogger(__name__)


class Coordinator:
    """Runs map -> group -> reduce over an in-memory Input Set."""

    def __init__(self, inputs: InputSet, map_fn: MapFunc, reduce_fn: ReduceFunc,
                 reduce_workers: Optional[int] = None):
        """
        Args:
            inputs: Mapping of input identifier to input content (may be empty)
            map_fn: map_fn(input_id, content) -> iterable of (key, value)
            reduce_fn: reduce_fn(key, values) -> value
            reduce_workers: Threads for the reduce phase; 0 runs it sequentially,
                None uses LOCALMR_REDUCE_WORKERS

        Raises:
            ValueError: If inputs is None or reduce_workers is negative
        """
        if inputs is None:
            raise ValueError("Coordinator requires an input set (may be empty)")
        if reduce_workers is None:
            reduce_workers = settings.REDUCE_WORKERS
        if reduce_workers < 0:
            raise ValueError(f"reduce_workers must be >= 0, got {reduce_workers}")

        # Private copy: the input set stays read-only for every run
        self.inputs: Dict[str, str] = dict(inputs)
        self.map_fn = map_fn
        self.reduce_fn = reduce_fn
        self.reduce_workers = reduce_workers

        self.status = JobStatus.PENDING
        self.map_tasks: List[MapTask] = []
        self.metrics: Optional[RunMetrics] = None
        self.metrics_collector = MetricsCollector()

        self._num_keys = 0
        self._reduced_keys = 0
        self.lock = threading.Lock()
        self._run_lock = threading.Lock()

    def run(self) -> Dict[str, str]:
        """
        Execute the full pipeline once and return the Result Map.

        Faults raised by map_fn or reduce_fn propagate unchanged; no partial
        result is returned.
        """
        with self._run_lock:
            run_id = uuid.uuid4().hex[:8]
            self._reset()
            self.metrics = self.metrics_collector.start_run(
                run_id, len(self.inputs), self.reduce_workers)

            try:
                buffer = self._run_map_phase(run_id)
                groups = self._group(run_id, buffer)
                result = self._run_reduce_phase(run_id, groups)
            except Exception:
                self._set_status(JobStatus.FAILED)
                raise

            self.metrics_collector.end_run(run_id)
            self._set_status(JobStatus.COMPLETED)
            logger.info(f"Run {run_id} completed: {len(result)} keys from "
                        f"{len(self.inputs)} inputs in {self.metrics.total_time_seconds:.3f}s")
            return result

    def get_status(self) -> Dict:
        """Get current run status with progress"""
        with self.lock:
            map_completed = sum(1 for t in self.map_tasks if t.status == TaskStatus.COMPLETED)
            total = len(self.map_tasks) + self._num_keys
            done = map_completed + self._reduced_keys

            if self.status == JobStatus.COMPLETED:
                progress = 100
            else:
                # Reduce work is unknown until grouping, so never report 100 early
                progress = min(int(done / total * 100), 99) if total > 0 else 0

            return {
                'status': self.status.value,
                'progress': progress,
                'map_completed': map_completed,
                'map_total': len(self.map_tasks),
                'reduce_completed': self._reduced_keys,
                'reduce_total': self._num_keys
            }

    def _reset(self):
        with self.lock:
            self.status = JobStatus.PENDING
            self.map_tasks = [
                MapTask(task_id=i, input_id=input_id)
                for i, input_id in enumerate(self.inputs)
            ]
            self._num_keys = 0
            self._reduced_keys = 0

    def _set_status(self, status: JobStatus):
        with self.lock:
            self.status = status

    def _set_task_status(self, task: MapTask, status: TaskStatus, **fields):
        with self.lock:
            task.status = status
            for name, value in fields.items():
                setattr(task, name, value)

    def _execute_map_task(self, task: MapTask, buffer: IntermediateBuffer) -> int:
        """Run map_fn for one input and append its pairs to the shared buffer."""
        self._set_task_status(task, TaskStatus.RUNNING)
        try:
            content = self.inputs[task.input_id]
            pairs = [KeyValue(key, value) for key, value in self.map_fn(task.input_id, content)]
            num_pairs = buffer.extend(pairs)
        except Exception as e:
            self._set_task_status(task, TaskStatus.FAILED, error=str(e))
            logger.error(f"Map task {task.task_id} failed on input {task.input_id!r}: {e}")
            raise

        self._set_task_status(task, TaskStatus.COMPLETED, num_pairs=num_pairs)
        logger.debug(f"Map task {task.task_id}: appended {num_pairs} pairs")
        return num_pairs

    def _run_map_phase(self, run_id: str) -> IntermediateBuffer:
        """Fan out one map task per input and block until all of them finish."""
        buffer = IntermediateBuffer()
        self._set_status(JobStatus.MAP_PHASE)
        logger.info(f"Run {run_id} started MAP phase with {len(self.map_tasks)} tasks")

        emitted = 0
        if self.map_tasks:
            # One thread per input, no throttling
            with ThreadPoolExecutor(max_workers=len(self.map_tasks),
                                    thread_name_prefix=f"map-{run_id}") as executor:
                futures = [
                    executor.submit(self._execute_map_task, task, buffer)
                    for task in self.map_tasks
                ]
            # Leaving the executor block joins every task: this is the barrier
            failures = [f.exception() for f in futures if f.exception() is not None]
            if failures:
                logger.error(f"Run {run_id} failed: {len(failures)} of "
                             f"{len(futures)} map tasks raised")
                raise failures[0]
            emitted = sum(f.result() for f in futures)

        buffer.seal()
        if len(buffer) != emitted:
            raise RuntimeError(f"Intermediate buffer holds {len(buffer)} pairs, "
                               f"map tasks emitted {emitted}")

        self.metrics_collector.end_map_phase(run_id, emitted)
        logger.info(f"Run {run_id} finished MAP phase: {emitted} intermediate pairs")
        return buffer

    def _group(self, run_id: str, buffer: IntermediateBuffer) -> Dict[str, List[str]]:
        self._set_status(JobStatus.SHUFFLE_PHASE)
        groups = group_by_key(buffer.pairs())

        if count_values(groups) != len(buffer):
            raise RuntimeError("Grouping lost or duplicated intermediate values")

        with self.lock:
            self._num_keys = len(groups)
        logger.info(f"Run {run_id} grouped pairs into {len(groups)} keys")
        return groups

    def _reduce_key(self, key: str, values: List[str]) -> str:
        try:
            output = self.reduce_fn(key, values)
        except Exception as e:
            logger.error(f"Reduce failed for key {key!r}: {e}")
            raise

        with self.lock:
            self._reduced_keys += 1
        return output

    def _run_reduce_phase(self, run_id: str, groups: Dict[str, List[str]]) -> Dict[str, str]:
        self._set_status(JobStatus.REDUCE_PHASE)
        self.metrics_collector.start_reduce_phase(run_id, len(groups))
        mode = 'sequential' if self.reduce_workers == 0 else f"{self.reduce_workers} workers"
        logger.info(f"Run {run_id} started REDUCE phase ({mode})")

        result: Dict[str, str] = {}
        if self.reduce_workers == 0 or not groups:
            for key, values in groups.items():
                result[key] = self._reduce_key(key, values)
            return result

        with ThreadPoolExecutor(max_workers=self.reduce_workers,
                                thread_name_prefix=f"reduce-{run_id}") as executor:
            futures = {
                executor.submit(self._reduce_key, key, values): key
                for key, values in groups.items()
            }
            _, not_done = wait(futures, return_when=FIRST_EXCEPTION)
            for future in not_done:
                future.cancel()

        for future in futures:
            if not future.cancelled() and future.exception() is not None:
                raise future.exception()
        for future, key in futures.items():
            result[key] = future.result()
        return result
