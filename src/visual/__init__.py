"""
Investment Graph - Visual Attributes
=====================================
Everything a node or link looks like, derived once per data load.

  - scales.py:      Sqrt / linear metric scalers
  - palette.py:     Stable per-category color allocation
  - attributes.py:  Radius, color, link styling for a Graph
  - labels.py:      Label selection and truncation
  - formatting.py:  Dollar amounts for labels and legends
"""

from src.visual.scales import LinearScale, SqrtScale, extent, fit_scale
from src.visual.palette import CategoryPalette, PaletteState, SECONDARY_COLOR
from src.visual.attributes import derive_attributes, SIZE_MODES
from src.visual.labels import (
    TextMeasurer,
    assign_labels,
    label_font_size,
    label_threshold,
    truncate_label,
)
from src.visual.formatting import format_currency, format_amount_label

__all__ = [
    'LinearScale',
    'SqrtScale',
    'extent',
    'fit_scale',
    'CategoryPalette',
    'PaletteState',
    'SECONDARY_COLOR',
    'derive_attributes',
    'SIZE_MODES',
    'TextMeasurer',
    'assign_labels',
    'label_font_size',
    'label_threshold',
    'truncate_label',
    'format_currency',
    'format_amount_label',
]
