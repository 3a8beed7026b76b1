"""
Investment Graph - Layout Engine
=================================
Force-directed layout: category anchors, composable forces, the tick
loop, and schedulers that drive it.

  - anchors.py:    One anchor per category around the viewport center
  - forces.py:     Repulsion, links, collision, cluster, box, centering
  - simulation.py: Alpha schedule, integration, pins, resize
  - scheduler.py:  Synchronous and asyncio frame drivers
"""

from src.layout.anchors import SECONDARY_CLUSTER, cluster_key, compute_cluster_anchors
from src.layout.forces import (
    Force,
    ManyBodyForce,
    LinkForce,
    CollisionForce,
    ClusterForce,
    BoundingBoxForce,
    CenterForce,
)
from src.layout.simulation import Simulation, SimulationConfig, default_forces
from src.layout.scheduler import SynchronousScheduler, AsyncFrameScheduler

__all__ = [
    'SECONDARY_CLUSTER',
    'cluster_key',
    'compute_cluster_anchors',
    'Force',
    'ManyBodyForce',
    'LinkForce',
    'CollisionForce',
    'ClusterForce',
    'BoundingBoxForce',
    'CenterForce',
    'Simulation',
    'SimulationConfig',
    'default_forces',
    'SynchronousScheduler',
    'AsyncFrameScheduler',
]
