"""
Category Palettes
=================
Stable color allocation per category label.

The first time a label is seen it takes the next color from a fixed,
ordered palette (wrapping around when labels outnumber colors); every
later call returns the same color. Allocation follows CALL order, not
alphabetical order, so colors depend on the order in which the payload
delivers categories. Callers that need identical coloring across runs
must deliver categories in a stable order.

Each visualization owns its own ``PaletteState``; there is no module-level
cache shared between visualizations.
"""

from typing import Dict, List, Sequence, Tuple


# Node categories (Tableau 10)
NODE_COLORS = [
    '#4e79a7', '#f28e2c', '#e15759', '#76b7b2', '#59a14f',
    '#edc949', '#af7aa1', '#ff9da7', '#9c755f', '#bab0ab',
]

# Edge categories (brighter companion set)
EDGE_COLORS = [
    '#5a9bd5', '#e07b39', '#d94452', '#6cc4a4', '#8cc63f',
    '#f0c040', '#c47ab6', '#ff7f7f', '#b8860b', '#7b9ea8',
]

# Secondary entities (VC firms) share one fixed color
SECONDARY_COLOR = '#EA4335'

# Links without a category label
DEFAULT_LINK_COLOR = '#999999'


class CategoryPalette:
    """Allocates palette colors to labels in first-seen order."""

    def __init__(self, colors: Sequence[str] = NODE_COLORS):
        if not colors:
            raise ValueError("Palette needs at least one color")
        self.colors = list(colors)
        self._assigned: Dict[str, str] = {}

    def color_for(self, label: str) -> str:
        """Return the color for ``label``, allocating one on first use."""
        color = self._assigned.get(label)
        if color is None:
            color = self.colors[len(self._assigned) % len(self.colors)]
            self._assigned[label] = color
        return color

    def allocated(self) -> List[Tuple[str, str]]:
        """(label, color) pairs in allocation order."""
        return list(self._assigned.items())

    def __contains__(self, label):
        return label in self._assigned

    def __len__(self):
        return len(self._assigned)


class PaletteState:
    """Independent node and edge palettes for one visualization."""

    def __init__(self, node_colors: Sequence[str] = NODE_COLORS,
                 edge_colors: Sequence[str] = EDGE_COLORS):
        self.nodes = CategoryPalette(node_colors)
        self.edges = CategoryPalette(edge_colors)
