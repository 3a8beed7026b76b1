"""
Investment Graph Test Suite

Regression testing for the layout and rendering engine.

Test Categories:
- Graph: Payload validation, arena construction, degree index
- Visual: Scales, palettes, attribute derivation, label declutter
- Layout: Cluster anchors, forces, simulation lifecycle, schedulers
- Interaction: Drag-to-pin state machine
- Render: Frames, image output, end-to-end visualizer and CLI

Run all tests:
    pytest

Run specific test file:
    pytest tests/test_layout.py
"""

__version__ = "1.0.0"
