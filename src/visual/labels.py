"""
Label Declutter
===============
Decides which nodes get a text label and shortens labels that would
overflow their circle.

Rules:
    - Only the largest nodes are labeled: the top 20% by radius, but at
      least 5 (or every node when there are fewer than 5). Ties with the
      threshold radius are labeled too.
    - Nodes with an empty name never get a label.
    - A label may be at most 1.6 x radius wide, measured at the font
      size it is drawn at (label_font_size, shared with the renderer).
      Longer labels lose trailing characters and gain an ellipsis until
      they fit; a single remaining character is never cut further.

The label set is computed once per data load, not per tick.
"""

import logging
from typing import Callable, Iterable, List, Optional

from matplotlib.font_manager import FontProperties
from matplotlib.textpath import TextPath

logger = logging.getLogger(__name__)

ELLIPSIS = '…'
LABEL_WIDTH_RATIO = 1.6
TOP_FRACTION = 0.2
MIN_LABELED = 5

LABEL_FONT_RATIO = 2.5
MAX_LABEL_FONT_SIZE = 14.0
DEFAULT_FONT_SIZE = 10.0


def label_font_size(radius: float) -> float:
    """Font size (layout pixels) a node label is drawn at."""
    return min(radius / LABEL_FONT_RATIO, MAX_LABEL_FONT_SIZE)


class TextMeasurer:
    """
    Measures rendered text width with matplotlib's font machinery.

    Widths are in the same units as the font size (points, which the
    renderer treats as layout pixels). Call with an explicit ``font_size``
    to measure at a node's label size.
    """

    def __init__(self, font_size: float = DEFAULT_FONT_SIZE, family: str = 'sans-serif',
                 weight: str = 'bold'):
        self.font_size = font_size
        self.prop = FontProperties(family=family, weight=weight)
        self._cache = {}

    def __call__(self, text: str, font_size: Optional[float] = None) -> float:
        size = self.font_size if font_size is None else font_size
        key = (text, size)
        width = self._cache.get(key)
        if width is None:
            if not text:
                width = 0.0
            else:
                path = TextPath((0, 0), text, size=size, prop=self.prop)
                width = float(path.get_extents().width)
            self._cache[key] = width
        return width


def label_threshold(radii: Iterable[float]) -> Optional[float]:
    """
    Smallest radius that still earns a label.

    Returns None when there are no nodes.
    """
    sizes = sorted(radii, reverse=True)
    if not sizes:
        return None
    cutoff = max(MIN_LABELED - 1, int(len(sizes) * TOP_FRACTION) - 1)
    return sizes[min(cutoff, len(sizes) - 1)]


Measure = Callable[[str, float], float]


def truncate_label(text: str, max_width: float, measure: Measure,
                   font_size: float = DEFAULT_FONT_SIZE) -> str:
    """
    Shorten ``text`` with a trailing ellipsis until it fits ``max_width``
    when drawn at ``font_size``.

    Text that already fits is returned unchanged.
    """
    if measure(text, font_size) <= max_width:
        return text
    label = text
    while len(label) > 1 and measure(label + ELLIPSIS, font_size) > max_width:
        label = label[:-1]
    return label + ELLIPSIS


def assign_labels(nodes: List, measure: Optional[Measure] = None) -> int:
    """
    Set ``node.label`` on every node (None for unlabeled nodes).

    Args:
        nodes: Nodes with final ``radius`` and ``name``
        measure: ``(text, font_size) -> width``; defaults to a matplotlib
            TextMeasurer

    Returns:
        Number of labeled nodes
    """
    threshold = label_threshold(n.radius for n in nodes)
    if threshold is None:
        return 0

    measure = measure or TextMeasurer()
    labeled = 0
    for node in nodes:
        if node.radius >= threshold and node.name:
            node.label = truncate_label(
                node.name, node.radius * LABEL_WIDTH_RATIO, measure, label_font_size(node.radius)
            )
            labeled += 1
        else:
            node.label = None

    logger.debug("Labeled %d of %d nodes (threshold radius %.1f)", labeled, len(nodes), threshold)
    return labeled
