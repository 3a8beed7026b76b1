"""
Investment Graph - Interaction
===============================
Pointer events -> pinned positions and simulation reheats.
"""

from src.interaction.controller import (
    DragState,
    PointerKind,
    PointerEvent,
    InteractionController,
)

__all__ = [
    'DragState',
    'PointerKind',
    'PointerEvent',
    'InteractionController',
]
