"""
Force Composer
==============
Named, composable forces for the layout simulation.

Every force follows the same two-step protocol:

    force.initialize(simulation)   # on (re)load and on resize
    force.apply(alpha)             # once per tick, before integration

Forces add to node velocities (``vx``, ``vy``); only centering moves
positions directly. The simulation integrates positions after all
forces have run, so the order forces are registered in does not change
the result.

Forces:
    ManyBodyForce     -- repulsion between every node pair (numpy)
    LinkForce         -- springs toward a rest length along links
    CollisionForce    -- separation of overlapping circles (numpy)
    ClusterForce      -- pull toward the node's category anchor
    BoundingBoxForce  -- push back from the viewport edges
    CenterForce       -- weak drift of the centroid toward the center
"""

import math
import logging
from collections import Counter

import numpy as np

from src.layout.anchors import cluster_key

logger = logging.getLogger(__name__)

JIGGLE = 1e-6


class Force:
    """Base class; subclasses implement ``apply``."""

    def __init__(self):
        self.simulation = None

    def initialize(self, simulation):
        self.simulation = simulation

    def apply(self, alpha: float):
        raise NotImplementedError

    def _jiggle(self, shape):
        return (self.simulation.rng.random(shape) - 0.5) * JIGGLE


def _positions(nodes, with_velocity=False) -> np.ndarray:
    if with_velocity:
        return np.array([(n.x + n.vx, n.y + n.vy) for n in nodes], dtype=float)
    return np.array([(n.x, n.y) for n in nodes], dtype=float)


def _add_velocities(nodes, dv: np.ndarray):
    for node, (dvx, dvy) in zip(nodes, dv):
        node.vx += float(dvx)
        node.vy += float(dvy)


# ============================================================
# PAIRWISE FORCES
# ============================================================

class ManyBodyForce(Force):
    """
    Inverse-square repulsion between all node pairs.

    Each node i receives ``sum_j (p_j - p_i) * strength * alpha / d^2``.
    A negative strength repels. Distances below ``distance_min`` are
    clamped so near-coincident nodes do not explode.
    """

    def __init__(self, strength: float = -300.0, distance_min: float = 1.0,
                 distance_max: float = math.inf):
        super().__init__()
        self.strength = strength
        self.distance_min = distance_min
        self.distance_max = distance_max

    def apply(self, alpha):
        nodes = self.simulation.nodes
        if len(nodes) < 2:
            return

        pos = _positions(nodes)
        delta = pos[np.newaxis, :, :] - pos[:, np.newaxis, :]
        dist2 = (delta ** 2).sum(axis=2)

        coincident = dist2 == 0
        np.fill_diagonal(coincident, False)
        if coincident.any():
            delta = np.where(coincident[..., np.newaxis], self._jiggle(delta.shape), delta)
            dist2 = (delta ** 2).sum(axis=2)

        clamped = np.maximum(dist2, self.distance_min ** 2)
        weight = self.strength * alpha / clamped
        np.fill_diagonal(weight, 0.0)
        if math.isfinite(self.distance_max):
            weight[dist2 >= self.distance_max ** 2] = 0.0

        _add_velocities(nodes, (delta * weight[..., np.newaxis]).sum(axis=1))


class CollisionForce(Force):
    """
    Pushes apart nodes whose circles (radius + padding) overlap.

    Strength does not scale with alpha, so overlaps keep resolving late
    in convergence. The push is shared by relative area: the smaller
    node moves more.
    """

    def __init__(self, padding: float = 10.0, strength: float = 0.9, iterations: int = 1):
        super().__init__()
        self.padding = padding
        self.strength = strength
        self.iterations = iterations

    def apply(self, alpha):
        nodes = self.simulation.nodes
        if len(nodes) < 2:
            return

        radii = np.array([n.radius + self.padding for n in nodes], dtype=float)
        reach = radii[:, np.newaxis] + radii[np.newaxis, :]
        r2 = radii ** 2
        share = r2[np.newaxis, :] / (r2[:, np.newaxis] + r2[np.newaxis, :])

        for _ in range(self.iterations):
            pos = _positions(nodes, with_velocity=True)
            delta = pos[:, np.newaxis, :] - pos[np.newaxis, :, :]
            dist2 = (delta ** 2).sum(axis=2)

            overlap = dist2 < reach ** 2
            np.fill_diagonal(overlap, False)
            if not overlap.any():
                return

            coincident = overlap & (dist2 == 0)
            if coincident.any():
                delta = np.where(coincident[..., np.newaxis], self._jiggle(delta.shape), delta)
                dist2 = (delta ** 2).sum(axis=2)

            dist = np.sqrt(dist2)
            with np.errstate(divide='ignore', invalid='ignore'):
                push = np.where(overlap, (reach - dist) / dist * self.strength, 0.0)

            _add_velocities(nodes, (delta * (push * share)[..., np.newaxis]).sum(axis=1))


# ============================================================
# LINK FORCE
# ============================================================

class LinkForce(Force):
    """
    Springs along links toward ``distance``, scaled by alpha.

    Endpoints are resolved through the graph's id index. The correction
    is split between endpoints by how many links each one has, so hubs
    move less than leaves. Self-loops exert no force.
    """

    def __init__(self, distance: float = 150.0, strength: float = 0.3):
        super().__init__()
        self.distance = distance
        self.strength = strength
        self._bias = []

    def initialize(self, simulation):
        super().initialize(simulation)
        counts = Counter()
        for link in simulation.links:
            counts[link.source_id] += 1
            counts[link.target_id] += 1
        self._bias = [
            counts[l.source_id] / (counts[l.source_id] + counts[l.target_id])
            for l in simulation.links
        ]

    def apply(self, alpha):
        graph = self.simulation.graph
        for link, bias in zip(self.simulation.links, self._bias):
            if link.source_id == link.target_id:
                continue
            source, target = graph.endpoints(link)
            x = target.x + target.vx - source.x - source.vx
            y = target.y + target.vy - source.y - source.vy
            if x == 0 and y == 0:
                x, y = self._jiggle(2)
            length = math.sqrt(x * x + y * y)
            k = (length - self.distance) / length * alpha * self.strength
            x *= k
            y *= k
            target.vx -= x * bias
            target.vy -= y * bias
            source.vx += x * (1 - bias)
            source.vy += y * (1 - bias)


# ============================================================
# POSITIONAL FORCES
# ============================================================

class ClusterForce(Force):
    """Pulls each node toward its category anchor: v += (a - p) * k * alpha."""

    def __init__(self, strength: float = 0.3):
        super().__init__()
        self.strength = strength

    def apply(self, alpha):
        anchors = self.simulation.anchors
        k = self.strength * alpha
        for node in self.simulation.nodes:
            anchor = anchors.get(cluster_key(node))
            if anchor is None:
                continue
            node.vx += (anchor[0] - node.x) * k
            node.vy += (anchor[1] - node.y) * k


class BoundingBoxForce(Force):
    """
    Keeps nodes inside the viewport.

    A node closer than ``padding`` to an edge gets a corrective velocity
    equal to its penetration depth times alpha.
    """

    def __init__(self, padding: float = 100.0):
        super().__init__()
        self.padding = padding

    def apply(self, alpha):
        width = self.simulation.width
        height = self.simulation.height
        pad = self.padding
        for node in self.simulation.nodes:
            if node.x < pad:
                node.vx += (pad - node.x) * alpha
            if node.x > width - pad:
                node.vx += (width - pad - node.x) * alpha
            if node.y < pad:
                node.vy += (pad - node.y) * alpha
            if node.y > height - pad:
                node.vy += (height - pad - node.y) * alpha


class CenterForce(Force):
    """
    Shifts every node so the centroid moves toward the viewport center.

    ``strength`` is the fraction of the centroid offset removed per tick;
    it is independent of alpha.
    """

    def __init__(self, strength: float = 0.1):
        super().__init__()
        self.strength = strength

    def apply(self, alpha):
        nodes = self.simulation.nodes
        if not nodes:
            return
        cx, cy = self.simulation.center
        sx = (sum(n.x for n in nodes) / len(nodes) - cx) * self.strength
        sy = (sum(n.y for n in nodes) / len(nodes) - cy) * self.strength
        for node in nodes:
            node.x -= sx
            node.y -= sy
