"""
Core data structures for the in-process MapReduce engine
"""

from enum import Enum
from dataclasses import dataclass
from typing import Callable, Iterable, List, Mapping, NamedTuple, Optional, Tuple


class KeyValue(NamedTuple):
    """A single intermediate pair emitted by a map task"""
    key: str
    value: str


# input identifier -> input content
InputSet = Mapping[str, str]

MapFunc = Callable[[str, str], Iterable[Tuple[str, str]]]
ReduceFunc = Callable[[str, List[str]], str]


class JobStatus(Enum):
    """Status of a MapReduce run"""
    PENDING = "pending"
    MAP_PHASE = "map_phase"
    SHUFFLE_PHASE = "shuffle_phase"
    REDUCE_PHASE = "reduce_phase"
    COMPLETED = "completed"
    FAILED = "failed"


class TaskStatus(Enum):
    """Status of an individual map task"""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class MapTask:
    """Represents a single map task, one per input"""
    task_id: int
    input_id: str
    status: TaskStatus = TaskStatus.PENDING
    num_pairs: int = 0
    error: Optional[str] = None
