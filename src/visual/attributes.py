"""
Visual Attribute Derivation
===========================
Enriches a freshly built Graph with radius, color, label and link
styling. Runs once per data load.

Size modes:
    magnitude -- sqrt scale of valuation / investment, separate range
                 per node kind (companies larger than VC firms)
    degree    -- 4 + degree / max_degree * 12 (connectivity view)

Secondary nodes without a magnitude in the payload are sized by the sum
of the weights of their links (aggregated investment).
"""

import logging
from collections import defaultdict
from typing import Optional, Tuple

from src.graph.model import Graph
from src.visual.formatting import format_amount_label
from src.visual.labels import Measure, assign_labels
from src.visual.palette import DEFAULT_LINK_COLOR, SECONDARY_COLOR, PaletteState
from src.visual.scales import LinearScale, SqrtScale, fit_scale

logger = logging.getLogger(__name__)

SIZE_MODES = ('magnitude', 'degree')

PRIMARY_RADIUS_RANGE = (25.0, 80.0)
SECONDARY_RADIUS_RANGE = (20.0, 60.0)
STROKE_WIDTH_RANGE = (1.0, 8.0)

DEGREE_BASE_RADIUS = 4.0
DEGREE_RADIUS_SPAN = 12.0


def aggregate_magnitudes(graph: Graph):
    """Fill missing secondary-node magnitudes with their total link weight."""
    totals = defaultdict(float)
    for link in graph.links:
        totals[link.source_id] += link.weight
        if link.target_id != link.source_id:
            totals[link.target_id] += link.weight

    for node in graph.nodes:
        if node.magnitude is None:
            node.magnitude = totals[node.id] if node.is_secondary else 0.0


def _size_by_magnitude(graph: Graph, primary_range, secondary_range):
    for is_secondary, output_range in ((False, primary_range), (True, secondary_range)):
        group = [n for n in graph.nodes if n.is_secondary == is_secondary]
        if not group:
            continue
        scale = fit_scale(SqrtScale, (n.magnitude for n in group), output_range)
        if scale.is_degenerate:
            logger.info(
                "All %s nodes share one magnitude; using midpoint radius",
                'secondary' if is_secondary else 'primary',
            )
        for node in group:
            node.radius = scale(node.magnitude)


def _size_by_degree(graph: Graph):
    max_degree = max([1] + [n.degree for n in graph.nodes])
    for node in graph.nodes:
        node.radius = DEGREE_BASE_RADIUS + (node.degree / max_degree) * DEGREE_RADIUS_SPAN


def derive_attributes(graph: Graph, palettes: PaletteState,
                      size_mode: str = 'magnitude',
                      measure: Optional[Measure] = None,
                      primary_range: Tuple[float, float] = PRIMARY_RADIUS_RANGE,
                      secondary_range: Tuple[float, float] = SECONDARY_RADIUS_RANGE,
                      stroke_range: Tuple[float, float] = STROKE_WIDTH_RANGE) -> Graph:
    """
    Compute radius, color and label for every node and stroke styling
    for every link.

    Args:
        graph: Graph built from the current payload
        palettes: Palette state owned by the calling visualization
        size_mode: 'magnitude' or 'degree'
        measure: Optional text width function for label truncation

    Returns:
        The same graph, enriched in place
    """
    if size_mode not in SIZE_MODES:
        raise ValueError(f"Unknown size mode '{size_mode}' (expected one of {SIZE_MODES})")

    aggregate_magnitudes(graph)

    if size_mode == 'degree':
        _size_by_degree(graph)
    else:
        _size_by_magnitude(graph, primary_range, secondary_range)

    for node in graph.nodes:
        node.color = SECONDARY_COLOR if node.is_secondary else palettes.nodes.color_for(node.category)

    stroke = fit_scale(LinearScale, (l.weight for l in graph.links), stroke_range)
    for link in graph.links:
        link.stroke_width = stroke(link.weight)
        link.color = palettes.edges.color_for(link.label) if link.label else DEFAULT_LINK_COLOR
        link.text = format_amount_label(link.weight)

    assign_labels(graph.nodes, measure)

    logger.info(
        "Derived attributes for %d nodes, %d links (size mode: %s)",
        len(graph.nodes), len(graph.links), size_mode,
    )
    return graph
