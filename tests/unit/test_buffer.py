"""
Unit tests for IntermediateBuffer
"""

import threading

import pytest

from localmr.buffer import IntermediateBuffer
from localmr.types import KeyValue


class TestIntermediateBufferWrites:
    """Tests for appending to the buffer"""

    def test_starts_empty(self):
        assert len(IntermediateBuffer()) == 0

    def test_extend_returns_batch_size(self):
        buffer = IntermediateBuffer()

        added = buffer.extend([KeyValue('a', '1'), KeyValue('b', '1')])

        assert added == 2
        assert len(buffer) == 2

    def test_extend_accepts_generators(self):
        buffer = IntermediateBuffer()

        added = buffer.extend(KeyValue(w, '1') for w in 'abc')

        assert added == 3

    def test_extend_after_seal_raises(self):
        buffer = IntermediateBuffer()
        buffer.seal()

        with pytest.raises(RuntimeError, match="sealed"):
            buffer.extend([KeyValue('a', '1')])

    def test_concurrent_extends_lose_nothing(self):
        """Many writers appending at once never lose an update"""
        buffer = IntermediateBuffer()
        start = threading.Barrier(32)

        def writer(n):
            start.wait()
            for i in range(50):
                buffer.extend([KeyValue(f"k{n}", str(i)), KeyValue(f"k{n}", str(i))])

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(32)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(buffer) == 32 * 50 * 2

    def test_batches_are_not_split(self):
        """A single extend() lands contiguously even under contention"""
        buffer = IntermediateBuffer()
        start = threading.Barrier(8)

        def writer(n):
            start.wait()
            buffer.extend([KeyValue(f"w{n}", str(i)) for i in range(200)])

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        buffer.seal()

        pairs = buffer.pairs()
        for block_start in range(0, len(pairs), 200):
            block = pairs[block_start:block_start + 200]
            assert len({kv.key for kv in block}) == 1
            assert [kv.value for kv in block] == [str(i) for i in range(200)]


class TestIntermediateBufferReads:
    """Tests for reading the buffer back"""

    def test_read_before_seal_raises(self):
        buffer = IntermediateBuffer()
        buffer.extend([KeyValue('a', '1')])

        with pytest.raises(RuntimeError, match="barrier"):
            buffer.pairs()

    def test_read_after_seal_returns_pairs(self):
        buffer = IntermediateBuffer()
        buffer.extend([KeyValue('a', '1'), KeyValue('b', '2')])
        buffer.seal()

        assert buffer.sealed
        assert buffer.pairs() == (KeyValue('a', '1'), KeyValue('b', '2'))
