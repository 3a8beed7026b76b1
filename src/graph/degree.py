"""
Degree index: how many link endpoints touch each node.
"""

from collections import Counter
from typing import Dict, Iterable


def compute_degrees(links: Iterable) -> Dict[str, int]:
    """
    Count in + out degree per node id.

    Self-loops count twice (once as source, once as target). Ids that
    never appear are absent from the result and should be read as 0.

    Args:
        links: Objects with ``source_id`` and ``target_id`` attributes

    Returns:
        dict of node id -> degree
    """
    degrees = Counter()
    for link in links:
        degrees[link.source_id] += 1
        degrees[link.target_id] += 1
    return dict(degrees)
