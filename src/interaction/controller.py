"""
Interaction Controller
======================
Translates pointer events into pins and reheats.

    IDLE --down on node--> DRAGGING --move--> DRAGGING --up--> IDLE

    down:  pin the node at the pointer, raise alpha_target so the layout
           keeps moving around it, emit drag-start
    move:  move the pin with the pointer
    up:    release the pin, let alpha_target fall back to 0, emit drag-end

Only one node drags at a time. Events that do not fit the current state
are ignored. The controller runs on the same thread as the simulation
and is only ever invoked between ticks.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class DragState(Enum):
    IDLE = 'idle'
    DRAGGING = 'dragging'


class PointerKind(Enum):
    DOWN = 'down'
    MOVE = 'move'
    UP = 'up'


@dataclass(frozen=True)
class PointerEvent:
    """A toolkit-independent pointer event in layout coordinates."""
    kind: PointerKind
    x: float
    y: float
    node_id: Optional[str] = None


class InteractionController:
    """Drag-to-pin state machine bound to one simulation."""

    def __init__(self, simulation):
        self.simulation = simulation
        self.state = DragState.IDLE
        self.active_node = None
        self._drag_start: List[Callable] = []
        self._drag_end: List[Callable] = []

    def on_drag_start(self, callback: Callable[[str], None]):
        self._drag_start.append(callback)

    def on_drag_end(self, callback: Callable[[str], None]):
        self._drag_end.append(callback)

    @property
    def is_dragging(self) -> bool:
        return self.state is DragState.DRAGGING

    def handle(self, event: PointerEvent) -> DragState:
        """Feed one pointer event; returns the resulting state."""
        if event.kind is PointerKind.DOWN:
            self._pointer_down(event)
        elif event.kind is PointerKind.MOVE:
            self._pointer_move(event)
        elif event.kind is PointerKind.UP:
            self._pointer_up(event)
        return self.state

    # Convenience wrappers for hosts that do not build events
    def pointer_down(self, x: float, y: float, node_id: Optional[str] = None) -> DragState:
        return self.handle(PointerEvent(PointerKind.DOWN, x, y, node_id))

    def pointer_move(self, x: float, y: float) -> DragState:
        return self.handle(PointerEvent(PointerKind.MOVE, x, y))

    def pointer_up(self, x: float, y: float) -> DragState:
        return self.handle(PointerEvent(PointerKind.UP, x, y))

    def reset(self):
        """Forget any drag in progress (used when data is reloaded)."""
        self.state = DragState.IDLE
        self.active_node = None

    # --------------------------------------------------------
    # Transitions
    # --------------------------------------------------------

    def _pointer_down(self, event: PointerEvent):
        if self.state is not DragState.IDLE:
            return

        if event.node_id is not None:
            node = self.simulation.graph.get(event.node_id)
            if node is None:
                logger.debug("Pointer down on unknown node '%s' ignored", event.node_id)
                return
        else:
            node = self.simulation.find_node(event.x, event.y)
            if node is None:
                return

        self.active_node = node
        self.state = DragState.DRAGGING
        self.simulation.alpha_target = self.simulation.config.drag_alpha_target
        self.simulation.restart()
        node.pin(event.x, event.y)

        for callback in self._drag_start:
            callback(node.id)

    def _pointer_move(self, event: PointerEvent):
        if self.state is not DragState.DRAGGING:
            return
        self.active_node.pin(event.x, event.y)
        # Long drags must not run out the tick budget
        if not self.simulation.running:
            self.simulation.restart()

    def _pointer_up(self, event: PointerEvent):
        if self.state is not DragState.DRAGGING:
            return
        node = self.active_node
        node.unpin()
        self.simulation.alpha_target = 0.0
        self.state = DragState.IDLE
        self.active_node = None

        for callback in self._drag_end:
            callback(node.id)
