"""
Static Frame Renderer
=====================
Paints a Frame to PNG and SVG with matplotlib.

Uses the matplotlib 'Agg' backend (headless) so images can be produced
without a display (CI, scheduled exports).

Draw order (later = on top):
    1. links (stroke width from weight)
    2. edge amount labels on white boxes
    3. node circles
    4. node labels
    5. category legend
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple

# Use non-interactive backend before importing pyplot
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
from matplotlib.patches import Circle

from src.render.frame import Frame
from src.visual.labels import label_font_size

logger = logging.getLogger(__name__)

# ============================================================
# STYLE CONSTANTS
# ============================================================

STYLE = {
    'background': '#f8f9fa',
    'node_edge': '#ffffff',
    'node_edge_width': 2.0,
    'link_alpha': 0.4,
    'edge_label_size': 11,
    'edge_label_color': '#333333',
    'node_label_color': '#333333',
    'legend_text': '#333333',
}

RENDER_DPI = 100


class FrameRenderer:
    """Render frames at 1 layout unit = 1 output pixel."""

    def __init__(self, dpi: int = RENDER_DPI, show_edge_labels: bool = True,
                 title: Optional[str] = None):
        self.dpi = dpi
        self.show_edge_labels = show_edge_labels
        self.title = title

    @property
    def _pt(self) -> float:
        """Points per layout pixel."""
        return 72.0 / self.dpi

    def draw(self, frame: Frame, legend: Iterable[Tuple[str, str]] = ()):
        """
        Build a matplotlib figure for the frame.

        Args:
            frame: Frame to paint
            legend: (label, color) pairs in display order

        Returns:
            (fig, ax)
        """
        width = frame.width or 1.0
        height = frame.height or 1.0
        fig, ax = plt.subplots(figsize=(width / self.dpi, height / self.dpi), dpi=self.dpi)
        fig.subplots_adjust(left=0, right=1, bottom=0, top=1)
        fig.patch.set_facecolor(STYLE['background'])
        ax.set_facecolor(STYLE['background'])
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)  # screen coordinates: y grows downward
        ax.set_aspect('equal')
        ax.axis('off')

        pt = self._pt

        for link in frame.links:
            ax.plot(
                [link.source_x, link.target_x],
                [link.source_y, link.target_y],
                color=link.color, alpha=STYLE['link_alpha'],
                linewidth=link.stroke_width * pt,
                solid_capstyle='round', zorder=1,
            )

        if self.show_edge_labels:
            for link in frame.links:
                if not link.label_text:
                    continue
                mx, my = link.midpoint
                ax.text(
                    mx, my, link.label_text,
                    ha='center', va='center',
                    fontsize=STYLE['edge_label_size'] * pt, fontweight='bold',
                    color=STYLE['edge_label_color'],
                    bbox=dict(boxstyle='round,pad=0.25', facecolor='white',
                              alpha=0.85, edgecolor='none'),
                    zorder=2,
                )

        for node in frame.nodes:
            ax.add_patch(Circle(
                (node.x, node.y), node.radius,
                facecolor=node.color, edgecolor=STYLE['node_edge'],
                linewidth=STYLE['node_edge_width'] * pt, zorder=3,
            ))

        for node in frame.nodes:
            if not node.label:
                continue
            size = label_font_size(node.radius)
            ax.text(
                node.x, node.y, node.label,
                ha='center', va='center',
                fontsize=size * pt, fontweight='bold',
                color=STYLE['node_label_color'], zorder=4,
            )

        handles = [mpatches.Patch(color=color, label=label) for label, color in legend]
        if handles:
            ax.legend(handles=handles, loc='upper right', frameon=False,
                      fontsize=12 * pt, labelcolor=STYLE['legend_text'])

        if self.title:
            ax.text(width / 2, 20, self.title, ha='center', va='top',
                    fontsize=18 * pt, fontweight='bold', color='#1e3a5f', zorder=5)

        return fig, ax

    def render(self, frame: Frame, png_path: Optional[Path] = None,
               svg_path: Optional[Path] = None,
               legend: Iterable[Tuple[str, str]] = ()) -> Tuple[Optional[Path], Optional[Path]]:
        """
        Paint the frame and save it in the requested formats.

        Returns:
            (png_path, svg_path), None for formats not requested
        """
        if frame.is_empty:
            logger.info("Rendering empty frame (no nodes)")

        fig, _ = self.draw(frame, legend)
        try:
            for path, fmt in ((png_path, 'png'), (svg_path, 'svg')):
                if path is None:
                    continue
                path = Path(path)
                path.parent.mkdir(parents=True, exist_ok=True)
                fig.savefig(str(path), format=fmt, dpi=self.dpi,
                            facecolor=STYLE['background'], edgecolor='none')
                logger.info("Frame saved: %s", path)
        finally:
            plt.close(fig)

        return (Path(png_path) if png_path else None,
                Path(svg_path) if svg_path else None)
