"""
Cluster Anchor Map
==================
One target point per category, spread evenly around a circle centered
on the viewport. Nodes drift toward their category's anchor.

    k      = distinct primary categories + 1 (secondary cluster)
    radius = 0.25 * min(width, height)
    angle  = -90 deg + i * 360/k   (starts at the top; clockwise on
                                    screen, where y grows downward)

Categories take slots in first-seen order; the secondary cluster always
takes the last slot.
"""

import math
from typing import Dict, Iterable, Tuple

# Reserved anchor key for secondary entities (VC firms)
SECONDARY_CLUSTER = '__secondary__'

ORBIT_RATIO = 0.25


def compute_cluster_anchors(categories: Iterable[str], width: float,
                            height: float) -> Dict[str, Tuple[float, float]]:
    """
    Compute the anchor point for each category plus the secondary cluster.

    Args:
        categories: Primary-node category labels (duplicates ignored)
        width: Viewport width
        height: Viewport height

    Returns:
        dict of category -> (x, y), including SECONDARY_CLUSTER
    """
    ordered = []
    for category in categories:
        if category not in ordered and category != SECONDARY_CLUSTER:
            ordered.append(category)
    ordered.append(SECONDARY_CLUSTER)

    cx, cy = width / 2, height / 2
    orbit = min(width, height) * ORBIT_RATIO
    step = 2 * math.pi / len(ordered)

    anchors = {}
    for i, key in enumerate(ordered):
        angle = i * step - math.pi / 2
        anchors[key] = (cx + math.cos(angle) * orbit, cy + math.sin(angle) * orbit)
    return anchors


def cluster_key(node) -> str:
    """Anchor key a node is attracted to."""
    return SECONDARY_CLUSTER if node.is_secondary else node.category
