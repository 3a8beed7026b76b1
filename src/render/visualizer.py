"""
Graph Visualizer
================
One visualization: palette state, simulation, interaction controller and
renderer wired together.

Usage:
    viz = GraphVisualizer(1600, 1000)
    viz.load(payload)          # dict, GraphPayload, or investment export
    viz.run()                  # or call viz.step() from a frame loop
    frame = viz.frame()
    viz.render(png_path=Path('graph.png'))

Palette allocation lives in this object, so two visualizers never share
category colors. Palettes persist across ``load`` calls on the same
visualizer, which keeps a category's color stable between reloads.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from src.graph.model import Graph
from src.graph.payload import GraphPayload, from_investment_data, load_payload
from src.interaction.controller import DragState, InteractionController, PointerEvent
from src.layout.scheduler import SynchronousScheduler
from src.layout.simulation import Simulation, SimulationConfig
from src.render.frame import Frame, build_frame
from src.render.matplotlib_renderer import FrameRenderer
from src.visual.attributes import derive_attributes
from src.visual.labels import Measure
from src.visual.palette import SECONDARY_COLOR, PaletteState

logger = logging.getLogger(__name__)

SECONDARY_LEGEND_LABEL = 'VC'


class GraphVisualizer:
    """Facade over the layout, interaction and render pipeline."""

    def __init__(self, width: float, height: float,
                 config: Optional[SimulationConfig] = None,
                 size_mode: str = 'magnitude',
                 measure: Optional[Measure] = None,
                 renderer: Optional[FrameRenderer] = None):
        self.size_mode = size_mode
        self.measure = measure
        self.palettes = PaletteState()
        self.simulation = Simulation(width, height, config)
        self.controller = InteractionController(self.simulation)
        self.renderer = renderer or FrameRenderer()

    @classmethod
    def from_settings(cls, settings, **kwargs) -> 'GraphVisualizer':
        """Build a visualizer from ``config.settings.Settings``."""
        kwargs.setdefault('size_mode', settings.SIZE_MODE)
        return cls(
            settings.VIEWPORT_WIDTH,
            settings.VIEWPORT_HEIGHT,
            SimulationConfig.from_settings(settings),
            **kwargs,
        )

    @property
    def graph(self) -> Graph:
        return self.simulation.graph

    # --------------------------------------------------------
    # Data
    # --------------------------------------------------------

    def load(self, data: Union[dict, GraphPayload]) -> Graph:
        """
        Load a new payload and restart the layout from scratch.

        Raises:
            PayloadError: if the payload shape is invalid
        """
        if isinstance(data, dict) and 'companies' in data:
            payload = from_investment_data(data)
        else:
            payload = load_payload(data)

        graph = Graph.from_payload(payload)
        derive_attributes(graph, self.palettes, self.size_mode, self.measure)

        self.controller.reset()
        self.simulation.load(graph)
        return graph

    def resize(self, width: float, height: float):
        self.simulation.resize(width, height)

    # --------------------------------------------------------
    # Ticking
    # --------------------------------------------------------

    def step(self) -> float:
        return self.simulation.step()

    def run(self) -> int:
        """Run the layout to convergence synchronously."""
        return SynchronousScheduler().run(self.simulation)

    @property
    def running(self) -> bool:
        return self.simulation.running

    # --------------------------------------------------------
    # Interaction
    # --------------------------------------------------------

    def pointer(self, event: PointerEvent) -> DragState:
        return self.controller.handle(event)

    def on_drag_start(self, callback: Callable[[str], None]):
        self.controller.on_drag_start(callback)

    def on_drag_end(self, callback: Callable[[str], None]):
        self.controller.on_drag_end(callback)

    # --------------------------------------------------------
    # Output
    # --------------------------------------------------------

    def frame(self) -> Frame:
        return build_frame(self.simulation)

    def legend(self) -> List[Tuple[str, str]]:
        """Legend entries: node categories in allocation order, then VC."""
        entries = list(self.palettes.nodes.allocated())
        if any(n.is_secondary for n in self.graph.nodes):
            entries.append((SECONDARY_LEGEND_LABEL, SECONDARY_COLOR))
        return entries

    def render(self, png_path: Optional[Path] = None, svg_path: Optional[Path] = None):
        """Paint the current frame to image files."""
        return self.renderer.render(self.frame(), png_path, svg_path, legend=self.legend())
