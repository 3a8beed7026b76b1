"""
Tests for the drag-to-pin interaction controller.
"""

import pytest

from src.interaction.controller import (
    DragState,
    InteractionController,
    PointerEvent,
    PointerKind,
)
from tests.conftest import place

POSITIONS = [(100, 100), (300, 100), (500, 100), (100, 400), (300, 400)]


@pytest.fixture
def controller(loaded_simulation):
    place(loaded_simulation, POSITIONS)
    return InteractionController(loaded_simulation)


class TestPointerDown:

    def test_down_on_node_starts_drag(self, controller):
        state = controller.pointer_down(100, 100)
        assert state is DragState.DRAGGING
        assert controller.is_dragging
        assert controller.active_node.id == 'stripe'

    def test_down_pins_at_pointer(self, controller):
        controller.pointer_down(105, 98)
        node = controller.simulation.graph.get('stripe')
        assert (node.fx, node.fy) == (105, 98)
        assert (node.x, node.y) == (105, 98)

    def test_down_reheats(self, controller):
        sim = controller.simulation
        sim.run()
        assert not sim.running
        controller.pointer_down(*POSITIONS[0], node_id='stripe')
        assert sim.alpha_target == pytest.approx(0.3)
        assert sim.running

    def test_down_by_node_id(self, controller):
        controller.pointer_down(700, 500, node_id='airbnb')
        assert controller.active_node.id == 'airbnb'

    def test_down_on_unknown_id_ignored(self, controller):
        assert controller.pointer_down(0, 0, node_id='ghost') is DragState.IDLE

    def test_down_on_empty_space_ignored(self, controller):
        assert controller.pointer_down(700, 550) is DragState.IDLE
        assert controller.simulation.alpha_target == 0.0

    def test_second_down_ignored_while_dragging(self, controller):
        controller.pointer_down(100, 100)
        controller.pointer_down(300, 100)
        assert controller.active_node.id == 'stripe'
        assert not controller.simulation.graph.get('coinbase').is_pinned


class TestPointerMoveAndUp:

    def test_move_follows_pointer(self, controller):
        controller.pointer_down(100, 100)
        controller.pointer_move(200, 250)
        node = controller.active_node
        assert (node.fx, node.fy) == (200, 250)

    def test_move_while_idle_ignored(self, controller):
        assert controller.pointer_move(200, 250) is DragState.IDLE
        assert not any(n.is_pinned for n in controller.simulation.nodes)

    def test_pinned_node_holds_during_ticks(self, controller):
        sim = controller.simulation
        controller.pointer_down(100, 100)
        controller.pointer_move(220, 180)
        for _ in range(10):
            sim.step()
        node = sim.graph.get('stripe')
        assert (node.x, node.y) == (220, 180)

    def test_move_restarts_exhausted_run(self, controller):
        sim = controller.simulation
        controller.pointer_down(100, 100)
        sim.stop()
        controller.pointer_move(150, 150)
        assert sim.running

    def test_up_releases(self, controller):
        sim = controller.simulation
        controller.pointer_down(100, 100)
        state = controller.pointer_up(100, 100)
        node = sim.graph.get('stripe')
        assert state is DragState.IDLE
        assert not node.is_pinned
        assert sim.alpha_target == 0.0
        assert controller.active_node is None

    def test_up_while_idle_ignored(self, controller):
        assert controller.pointer_up(0, 0) is DragState.IDLE

    def test_released_node_moves_again(self, controller):
        sim = controller.simulation
        controller.pointer_down(100, 100)
        controller.pointer_move(50, 50)
        controller.pointer_up(50, 50)
        sim.step()
        node = sim.graph.get('stripe')
        assert (node.x, node.y) != (50, 50)


class TestCallbacksAndEvents:

    def test_drag_callbacks(self, controller):
        events = []
        controller.on_drag_start(lambda node_id: events.append(('start', node_id)))
        controller.on_drag_end(lambda node_id: events.append(('end', node_id)))
        controller.pointer_down(300, 400)
        controller.pointer_move(310, 410)
        controller.pointer_up(310, 410)
        assert events == [('start', 'a16z'), ('end', 'a16z')]

    def test_handle_event_objects(self, controller):
        assert controller.handle(PointerEvent(PointerKind.DOWN, 100, 100)) is DragState.DRAGGING
        assert controller.handle(PointerEvent(PointerKind.MOVE, 110, 110)) is DragState.DRAGGING
        assert controller.handle(PointerEvent(PointerKind.UP, 110, 110)) is DragState.IDLE

    def test_reset(self, controller):
        controller.pointer_down(100, 100)
        controller.reset()
        assert controller.state is DragState.IDLE
        assert controller.active_node is None
