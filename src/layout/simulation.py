"""
Simulation Engine
=================
Owns node/link state for one visualization and advances it one
discrete tick at a time.

Per tick:
    1. alpha += (alpha_target - alpha) * alpha_decay
    2. every registered force adds to node velocities
    3. integrate: free axis  -> v *= (1 - velocity_decay); p += v
                  pinned axis -> p = pin; v = 0
    4. non-finite coordinates fall back to the last finite position

With alpha_target = 0 alpha decays geometrically by (1 - alpha_decay)
per tick. The engine reports ``running = False`` once alpha drops below
``alpha_min`` or the tick budget since the last restart is spent; hosts
stop scheduling ticks at that point. ``restart()`` / ``reheat()`` resume
from the current positions.

The engine never schedules itself. Hosts call ``step()`` from whatever
drives them (see ``src.layout.scheduler``).
"""

import math
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import numpy as np

from src.graph.model import Graph, Link, Node
from src.layout.anchors import compute_cluster_anchors
from src.layout.forces import (
    BoundingBoxForce,
    CenterForce,
    ClusterForce,
    CollisionForce,
    Force,
    LinkForce,
    ManyBodyForce,
)

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """Tuning constants for the engine and its default forces."""
    alpha_decay: float = 0.02
    alpha_min: float = 0.001
    velocity_decay: float = 0.3
    max_ticks: int = 1000
    drag_alpha_target: float = 0.3
    resize_alpha: float = 0.3
    initial_jitter: float = 50.0
    seed: Optional[int] = None

    charge_strength: float = -300.0
    link_distance: float = 150.0
    link_strength: float = 0.3
    collision_padding: float = 10.0
    collision_strength: float = 0.9
    cluster_strength: float = 0.3
    box_padding: float = 100.0
    center_strength: float = 0.1

    @classmethod
    def from_settings(cls, settings) -> 'SimulationConfig':
        """Build a config from ``config.settings.Settings``."""
        return cls(
            alpha_decay=settings.ALPHA_DECAY,
            alpha_min=settings.ALPHA_MIN,
            velocity_decay=settings.VELOCITY_DECAY,
            max_ticks=settings.MAX_TICKS,
            drag_alpha_target=settings.DRAG_ALPHA_TARGET,
            seed=settings.LAYOUT_SEED,
            charge_strength=settings.CHARGE_STRENGTH,
            link_distance=settings.LINK_DISTANCE,
            link_strength=settings.LINK_STRENGTH,
            collision_padding=settings.COLLISION_PADDING,
            collision_strength=settings.COLLISION_STRENGTH,
            cluster_strength=settings.CLUSTER_STRENGTH,
            box_padding=settings.BOX_PADDING,
            center_strength=settings.CENTER_STRENGTH,
        )


def default_forces(config: SimulationConfig) -> Dict[str, Force]:
    """The standard force set, keyed by name."""
    return {
        'charge': ManyBodyForce(strength=config.charge_strength),
        'link': LinkForce(distance=config.link_distance, strength=config.link_strength),
        'collision': CollisionForce(padding=config.collision_padding,
                                    strength=config.collision_strength),
        'cluster': ClusterForce(strength=config.cluster_strength),
        'box': BoundingBoxForce(padding=config.box_padding),
        'center': CenterForce(strength=config.center_strength),
    }


class Simulation:
    """Discrete-time force-directed layout over a Graph."""

    def __init__(self, width: float, height: float,
                 config: Optional[SimulationConfig] = None,
                 forces: Optional[Dict[str, Force]] = None):
        self.config = config or SimulationConfig()
        self.width = float(width)
        self.height = float(height)
        self.rng = np.random.default_rng(self.config.seed)

        self.graph = Graph()
        self.anchors = {}
        self.alpha = 1.0
        self.alpha_target = 0.0
        self.ticks_since_restart = 0
        self.total_ticks = 0

        self._forces: Dict[str, Force] = {}
        self._last_good: Dict[str, tuple] = {}
        self._stopped = True
        self._tick_listeners: List[Callable] = []
        self._end_listeners: List[Callable] = []

        for name, force in (forces if forces is not None else default_forces(self.config)).items():
            self.add_force(name, force)

    # --------------------------------------------------------
    # State access
    # --------------------------------------------------------

    @property
    def nodes(self) -> List[Node]:
        return self.graph.nodes

    @property
    def links(self) -> List[Link]:
        return self.graph.links

    @property
    def center(self):
        return self.width / 2, self.height / 2

    @property
    def running(self) -> bool:
        """True while a host should keep scheduling ticks."""
        # A raised alpha_target keeps a cooled run alive (drag reheat)
        return (
            not self._stopped
            and bool(self.graph.nodes)
            and max(self.alpha, self.alpha_target) >= self.config.alpha_min
            and self.ticks_since_restart < self.config.max_ticks
        )

    # --------------------------------------------------------
    # Forces
    # --------------------------------------------------------

    def add_force(self, name: str, force: Force):
        """Register (or replace) a named force."""
        self._forces[name] = force
        if self.graph.nodes:
            force.initialize(self)

    def remove_force(self, name: str) -> Optional[Force]:
        return self._forces.pop(name, None)

    def force(self, name: str) -> Optional[Force]:
        return self._forces.get(name)

    @property
    def force_names(self) -> List[str]:
        return list(self._forces)

    def _initialize_forces(self):
        for force in self._forces.values():
            force.initialize(self)

    # --------------------------------------------------------
    # Listeners
    # --------------------------------------------------------

    def on_tick(self, callback: Callable):
        """Call ``callback(simulation)`` after every tick."""
        self._tick_listeners.append(callback)

    def on_end(self, callback: Callable):
        """Call ``callback(simulation)`` when the run stops on its own."""
        self._end_listeners.append(callback)

    # --------------------------------------------------------
    # Lifecycle
    # --------------------------------------------------------

    def load(self, graph: Graph):
        """
        Replace all node/link state and restart from the initial state.

        Any reheat in flight is superseded. An empty graph leaves the
        engine stopped; no ticks will run.
        """
        self.graph = graph
        self.anchors = compute_cluster_anchors(graph.categories(), self.width, self.height)
        self.alpha = 1.0
        self.alpha_target = 0.0
        self.total_ticks = 0
        self._last_good = {}

        if not graph.nodes:
            logger.info("Empty graph loaded; nothing to simulate")
            self._stopped = True
            return

        self._initialize_positions()
        self._initialize_forces()
        self.restart()
        logger.info(
            "Simulation loaded: %d nodes, %d links, %d clusters",
            len(graph.nodes), len(graph.links), len(self.anchors),
        )

    def _initialize_positions(self):
        cx, cy = self.center
        jitter = self.config.initial_jitter
        for node in self.graph.nodes:
            node.x = cx + (self.rng.random() - 0.5) * 2 * jitter
            node.y = cy + (self.rng.random() - 0.5) * 2 * jitter
            node.vx = 0.0
            node.vy = 0.0
            self._last_good[node.id] = (node.x, node.y)

    def resize(self, width: float, height: float):
        """Adopt a new viewport: recompute anchors and reheat in place."""
        self.width = float(width)
        self.height = float(height)
        self.anchors = compute_cluster_anchors(self.graph.categories(), self.width, self.height)
        if not self.graph.nodes:
            return
        self._initialize_forces()
        logger.debug("Viewport resized to %.0fx%.0f", self.width, self.height)
        self.reheat(self.config.resize_alpha)

    def restart(self):
        """Resume scheduling from the current positions with a fresh tick budget."""
        self.ticks_since_restart = 0
        self._stopped = not self.graph.nodes

    def reheat(self, alpha: float):
        """Raise alpha and restart."""
        self.alpha = alpha
        self.restart()

    def stop(self):
        self._stopped = True

    # --------------------------------------------------------
    # Ticking
    # --------------------------------------------------------

    def step(self) -> float:
        """
        Advance exactly one tick, whether or not the run has settled.

        Returns:
            alpha after the tick
        """
        if not self.graph.nodes:
            return self.alpha

        self.alpha += (self.alpha_target - self.alpha) * self.config.alpha_decay

        for force in self._forces.values():
            force.apply(self.alpha)

        self._integrate()
        self.ticks_since_restart += 1
        self.total_ticks += 1

        for callback in self._tick_listeners:
            callback(self)

        if not self._stopped and not self.running:
            self._stopped = True
            logger.debug("Simulation settled after %d ticks (alpha %.4f)",
                         self.total_ticks, self.alpha)
            for callback in self._end_listeners:
                callback(self)

        return self.alpha

    def _integrate(self):
        friction = 1.0 - self.config.velocity_decay
        reset = 0
        for node in self.graph.nodes:
            if node.fx is None:
                node.vx *= friction
                node.x += node.vx
            else:
                node.x = node.fx
                node.vx = 0.0
            if node.fy is None:
                node.vy *= friction
                node.y += node.vy
            else:
                node.y = node.fy
                node.vy = 0.0

            if math.isfinite(node.x) and math.isfinite(node.y):
                self._last_good[node.id] = (node.x, node.y)
            else:
                node.x, node.y = self._last_good.get(node.id, self.center)
                node.vx = 0.0
                node.vy = 0.0
                reset += 1

        if reset:
            logger.warning("Reset %d node(s) with non-finite coordinates", reset)

    def run(self) -> int:
        """Tick until the run stops; returns the number of ticks taken."""
        ticks = 0
        while self.running:
            self.step()
            ticks += 1
        return ticks

    # --------------------------------------------------------
    # Queries
    # --------------------------------------------------------

    def find_node(self, x: float, y: float) -> Optional[Node]:
        """Top-most node whose circle contains (x, y), or None."""
        for node in reversed(self.graph.nodes):
            if node.x is None:
                continue
            if (node.x - x) ** 2 + (node.y - y) ** 2 <= node.radius ** 2:
                return node
        return None
