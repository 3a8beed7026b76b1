"""
Render Pipeline - Frame Model
=============================
Snapshot of what a host should paint right now. ``build_frame`` is a
pure function of the simulation's current state; it owns no physics and
keeps no history.
"""

from dataclasses import asdict, dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class NodeView:
    """One node as painted: position, size, fill and optional label."""
    id: str
    x: float
    y: float
    radius: float
    color: str
    label: Optional[str] = None


@dataclass(frozen=True)
class LinkView:
    """One link as painted: endpoints, stroke and amount label."""
    source_id: str
    target_id: str
    source_x: float
    source_y: float
    target_x: float
    target_y: float
    stroke_width: float
    color: str
    label_text: str = ''

    @property
    def midpoint(self) -> Tuple[float, float]:
        return (self.source_x + self.target_x) / 2, (self.source_y + self.target_y) / 2


@dataclass(frozen=True)
class Frame:
    nodes: Tuple[NodeView, ...] = field(default_factory=tuple)
    links: Tuple[LinkView, ...] = field(default_factory=tuple)
    alpha: float = 0.0
    tick: int = 0
    width: float = 0.0
    height: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.nodes


def build_frame(simulation) -> Frame:
    """
    Capture the current visual state of a simulation.

    Nodes without a position yet are left out, and so are links that
    touch them.
    """
    graph = simulation.graph
    node_views: List[NodeView] = []
    placed = set()
    for node in graph.nodes:
        if node.x is None or node.y is None:
            continue
        placed.add(node.id)
        node_views.append(NodeView(
            id=node.id,
            x=node.x,
            y=node.y,
            radius=node.radius,
            color=node.color,
            label=node.label,
        ))

    link_views: List[LinkView] = []
    for link in graph.links:
        if link.source_id not in placed or link.target_id not in placed:
            continue
        source, target = graph.endpoints(link)
        link_views.append(LinkView(
            source_id=link.source_id,
            target_id=link.target_id,
            source_x=source.x,
            source_y=source.y,
            target_x=target.x,
            target_y=target.y,
            stroke_width=link.stroke_width,
            color=link.color,
            label_text=link.text,
        ))

    return Frame(
        nodes=tuple(node_views),
        links=tuple(link_views),
        alpha=simulation.alpha,
        tick=simulation.total_ticks,
        width=simulation.width,
        height=simulation.height,
    )


def frame_to_dict(frame: Frame) -> dict:
    """JSON-serializable representation of a frame."""
    return {
        'alpha': frame.alpha,
        'tick': frame.tick,
        'width': frame.width,
        'height': frame.height,
        'nodes': [asdict(n) for n in frame.nodes],
        'links': [asdict(l) for l in frame.links],
    }
