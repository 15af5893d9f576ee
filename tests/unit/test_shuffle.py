"""
Unit tests for the shuffle step (grouping intermediate pairs by key)
"""

from localmr.shuffle import count_values, group_by_key
from localmr.types import KeyValue


class TestGroupByKey:
    """Tests for key grouping functionality"""

    def test_groups_values_by_key(self):
        pairs = [
            KeyValue('apple', '1'),
            KeyValue('banana', '1'),
            KeyValue('apple', '1'),
            KeyValue('cherry', '1'),
            KeyValue('apple', '1'),
        ]

        groups = group_by_key(pairs)

        assert groups == {'apple': ['1', '1', '1'], 'banana': ['1'], 'cherry': ['1']}

    def test_preserves_buffer_order_within_key(self):
        pairs = [('k', 'c'), ('other', 'x'), ('k', 'a'), ('k', 'b')]

        assert group_by_key(pairs)['k'] == ['c', 'a', 'b']

    def test_empty_input_gives_empty_groups(self):
        assert group_by_key([]) == {}

    def test_returns_plain_dict(self):
        groups = group_by_key([('a', '1')])

        assert type(groups) is dict
        assert 'missing' not in groups

    def test_accepts_plain_tuples(self):
        assert group_by_key([('x', '1'), ('y', '2')]) == {'x': ['1'], 'y': ['2']}


class TestCountValues:

    def test_counts_all_values(self):
        groups = {'a': ['1', '1'], 'b': ['1'], 'c': []}

        assert count_values(groups) == 3

    def test_conserves_pair_count(self):
        pairs = [(str(i % 7), str(i)) for i in range(100)]

        assert count_values(group_by_key(pairs)) == len(pairs)
