"""
Shuffle step: group intermediate pairs by key before the reduce phase
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Tuple


def group_by_key(pairs: Iterable[Tuple[str, str]]) -> Dict[str, List[str]]:
    """
    Group values by key, preserving the order in which pairs appear

    Args:
        pairs: (key, value) pairs, typically the sealed intermediate buffer

    Returns:
        Dictionary mapping each key to the list of its values
    """
    grouped = defaultdict(list)
    for key, value in pairs:
        grouped[key].append(value)
    return dict(grouped)


def count_values(groups: Dict[str, List[str]]) -> int:
    """Total number of values across all keys."""
    return sum(len(values) for values in groups.values())
