"""
Investment Graph - Data Layer
==============================
Turns the materialized payload from the data-access layer into an
id-indexed arena of nodes and links.

  - payload.py: Validate {nodes, links} / investment exports
  - model.py:   Node, Link and the Graph arena
  - degree.py:  In + out degree per node id
"""

from src.graph.payload import (
    PayloadError,
    NodeRecord,
    LinkRecord,
    GraphPayload,
    load_payload,
    load_payload_file,
    from_investment_data,
)
from src.graph.model import Node, Link, Graph
from src.graph.degree import compute_degrees

__all__ = [
    'PayloadError',
    'NodeRecord',
    'LinkRecord',
    'GraphPayload',
    'load_payload',
    'load_payload_file',
    'from_investment_data',
    'Node',
    'Link',
    'Graph',
    'compute_degrees',
]
