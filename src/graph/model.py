"""
Graph Arena
===========
Mutable node/link records for one visualization run.

Links never hold node object references. They carry ids, and every
consumer resolves endpoints through ``Graph.index`` (id -> position in
``Graph.nodes``). Reloading data builds a new ``Graph``; nothing survives
from the previous one.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from src.graph.degree import compute_degrees
from src.graph.payload import GraphPayload, PRIMARY, SECONDARY

logger = logging.getLogger(__name__)


@dataclass
class Node:
    """A graph node plus its derived visuals and simulation state."""
    id: str
    name: str
    category: str
    kind: str = PRIMARY
    magnitude: Optional[float] = None

    # Derived once per load
    degree: int = 0
    radius: float = 5.0
    color: str = '#cccccc'
    label: Optional[str] = None

    # Simulation state
    x: Optional[float] = None
    y: Optional[float] = None
    vx: float = 0.0
    vy: float = 0.0
    fx: Optional[float] = None
    fy: Optional[float] = None

    @property
    def is_secondary(self) -> bool:
        return self.kind == SECONDARY

    @property
    def is_pinned(self) -> bool:
        return self.fx is not None or self.fy is not None

    def pin(self, x: float, y: float):
        """Fix the node at (x, y); the position follows immediately."""
        self.fx = self.x = x
        self.fy = self.y = y

    def unpin(self):
        self.fx = None
        self.fy = None


@dataclass
class Link:
    """A weighted link between two node ids."""
    source_id: str
    target_id: str
    weight: float = 0.0
    label: str = ''

    # Derived once per load
    stroke_width: float = 1.0
    color: str = '#999999'
    text: str = ''


@dataclass
class Graph:
    """Id-indexed arena of nodes and the links that reference them."""
    nodes: List[Node] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)
    index: Dict[str, int] = field(default_factory=dict)
    dropped_links: int = 0

    @classmethod
    def from_payload(cls, payload: GraphPayload) -> 'Graph':
        """
        Build the arena from a validated payload.

        Duplicate node ids keep the first record. Links whose source or
        target id is unknown are dropped and counted, never raised.
        """
        graph = cls()
        for record in payload.nodes:
            if record.id in graph.index:
                logger.warning("Duplicate node id '%s' ignored", record.id)
                continue
            graph.index[record.id] = len(graph.nodes)
            graph.nodes.append(Node(
                id=record.id,
                name=record.name,
                category=record.category,
                kind=record.kind,
                magnitude=record.magnitude,
            ))

        for record in payload.links:
            if record.source_id not in graph.index or record.target_id not in graph.index:
                graph.dropped_links += 1
                logger.debug(
                    "Dropping dangling link %s -> %s", record.source_id, record.target_id
                )
                continue
            graph.links.append(Link(
                source_id=record.source_id,
                target_id=record.target_id,
                weight=record.weight,
                label=record.label,
            ))

        if graph.dropped_links:
            logger.warning(
                "Dropped %d link(s) referencing unknown node ids", graph.dropped_links
            )

        degrees = compute_degrees(graph.links)
        for node in graph.nodes:
            node.degree = degrees.get(node.id, 0)

        return graph

    def get(self, node_id: str) -> Optional[Node]:
        """Look up a node by id (None when absent)."""
        i = self.index.get(node_id)
        return self.nodes[i] if i is not None else None

    def endpoints(self, link: Link):
        """Resolve a link to its (source, target) nodes."""
        return self.nodes[self.index[link.source_id]], self.nodes[self.index[link.target_id]]

    def categories(self) -> List[str]:
        """Distinct primary-node categories in first-seen order."""
        seen = []
        for node in self.nodes:
            if not node.is_secondary and node.category not in seen:
                seen.append(node.category)
        return seen

    def __len__(self):
        return len(self.nodes)
