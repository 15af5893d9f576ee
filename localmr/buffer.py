"""
Intermediate buffer shared by concurrently running map tasks.
"""

import threading
from typing import Iterable, Tuple

from localmr.types import KeyValue


class IntermediateBuffer:
    """Lock-protected collection of KeyValue pairs.

    Map tasks append whole batches with extend(); the coordinator seals the
    buffer once every map task has finished and only then reads it back.
    """

    def __init__(self):
        self._pairs = []
        self._sealed = False
        self._lock = threading.Lock()

    def extend(self, pairs: Iterable[KeyValue]) -> int:
        """Append a batch of pairs atomically and return the batch size."""
        batch = list(pairs)
        with self._lock:
            if self._sealed:
                raise RuntimeError("Cannot append to a sealed intermediate buffer")
            self._pairs.extend(batch)
        return len(batch)

    def seal(self):
        """Mark the map phase as finished; no further appends are accepted."""
        with self._lock:
            self._sealed = True

    @property
    def sealed(self) -> bool:
        with self._lock:
            return self._sealed

    def pairs(self) -> Tuple[KeyValue, ...]:
        """Return the buffered pairs. Only valid after seal()."""
        with self._lock:
            if not self._sealed:
                raise RuntimeError("Intermediate buffer read before map phase barrier")
            return tuple(self._pairs)

    def __len__(self):
        with self._lock:
            return len(self._pairs)
