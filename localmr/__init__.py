"""
localmr: in-process concurrent MapReduce.
"""

from localmr.coordinator import Coordinator
from localmr.types import JobStatus, KeyValue, MapTask, TaskStatus

__all__ = ['Coordinator', 'JobStatus', 'KeyValue', 'MapTask', 'TaskStatus']
__version__ = '0.1.0'
