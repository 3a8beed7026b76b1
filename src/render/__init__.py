"""
Investment Graph - Render Pipeline
===================================
  - frame.py:               Per-tick visual state (pure function of state)
  - matplotlib_renderer.py: PNG / SVG output
  - visualizer.py:          Facade wiring data, layout, interaction, output
"""

from src.render.frame import Frame, NodeView, LinkView, build_frame, frame_to_dict
from src.render.matplotlib_renderer import FrameRenderer
from src.render.visualizer import GraphVisualizer

__all__ = [
    'Frame',
    'NodeView',
    'LinkView',
    'build_frame',
    'frame_to_dict',
    'FrameRenderer',
    'GraphVisualizer',
]
