"""
Pytest configuration and fixtures for the investment graph tests.

This module provides:
- Small hand-built payloads (two sectors, a few VCs)
- Graph / simulation builders with deterministic seeds
- A fixed-width text measurer so label tests do not depend on fonts
"""

from pathlib import Path

import pytest

from src.graph.model import Graph
from src.graph.payload import load_payload
from src.layout.simulation import Simulation, SimulationConfig

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SAMPLE_INVESTMENTS = PROJECT_ROOT / 'data' / 'sample_investments.json'


# ============================================================
# HELPERS
# ============================================================

def make_graph(nodes, links=()):
    """Build a Graph from plain node/link dicts."""
    return Graph.from_payload(load_payload({'nodes': list(nodes), 'links': list(links)}))


def char_width(text, font_size=10.0):
    """Every character is 0.6 x font size wide (6 units at size 10)."""
    return len(text) * font_size * 0.6


def node_record(node_id, category='X', **fields):
    """Minimal valid primary node dict; ``fields`` override defaults."""
    record = {'id': node_id, 'name': node_id.upper(), 'category': category, 'magnitude': 1.0}
    record.update(fields)
    return record


def place(simulation, positions):
    """Put nodes at exact positions with zero velocity."""
    for node, (x, y) in zip(simulation.nodes, positions):
        node.x, node.y = float(x), float(y)
        node.vx = node.vy = 0.0


# ============================================================
# PAYLOAD FIXTURES
# ============================================================

@pytest.fixture
def small_payload():
    """Two Fintech companies, one Travel company, two VCs, four investments."""
    return {
        'nodes': [
            {'id': 'stripe', 'name': 'Stripe', 'category': 'Fintech', 'magnitude': 650e9},
            {'id': 'coinbase', 'name': 'Coinbase', 'category': 'Fintech', 'magnitude': 50e9},
            {'id': 'airbnb', 'name': 'Airbnb', 'category': 'Travel', 'magnitude': 85e9},
            {'id': 'sequoia', 'name': 'Sequoia Capital', 'category': 'VC', 'kind': 'secondary'},
            {'id': 'a16z', 'name': 'Andreessen Horowitz', 'category': 'VC', 'kind': 'secondary'},
        ],
        'links': [
            {'sourceId': 'sequoia', 'targetId': 'stripe', 'weight': 2e9},
            {'sourceId': 'sequoia', 'targetId': 'airbnb', 'weight': 1.5e9},
            {'sourceId': 'a16z', 'targetId': 'coinbase', 'weight': 250e6},
            {'sourceId': 'a16z', 'targetId': 'stripe', 'weight': 1e9},
        ],
    }


@pytest.fixture
def investment_data():
    """Investment export shape (companies / vcs / investments)."""
    return {
        'companies': [
            {'name': 'Google', 'valuation': 1.7e12, 'sector': 'Technology'},
            {'name': 'Stripe', 'valuation': 650e9, 'sector': 'Fintech'},
            {'name': 'Meta', 'valuation': 900e9, 'sector': 'Technology'},
        ],
        'vcs': [
            {'name': 'Sequoia Capital', 'location': 'Menlo Park, CA'},
            {'name': 'Accel', 'totalInvestment': 5e9},
        ],
        'investments': [
            {'vc': 'Sequoia Capital', 'company': 'Google', 'amount': 12.5e9},
            {'vc': 'Sequoia Capital', 'company': 'Stripe', 'amount': 2e9},
            {'vc': 'Accel', 'company': 'Meta', 'amount': 1.2e9},
        ],
    }


@pytest.fixture
def sample_investments_path():
    return SAMPLE_INVESTMENTS


# ============================================================
# SIMULATION FIXTURES
# ============================================================

@pytest.fixture
def config():
    """Default tuning with a fixed seed."""
    return SimulationConfig(seed=42)


@pytest.fixture
def small_graph(small_payload):
    graph = make_graph(small_payload['nodes'], small_payload['links'])
    for node in graph.nodes:
        node.radius = 20.0
    return graph


@pytest.fixture
def loaded_simulation(small_graph, config):
    """Default-force simulation over the small graph in an 800x600 viewport."""
    sim = Simulation(800, 600, config)
    sim.load(small_graph)
    return sim


@pytest.fixture
def measure():
    return char_width
