"""
Tick Schedulers
===============
Drive ``Simulation.step()`` from different hosts without the engine
knowing how time passes.

    SynchronousScheduler  -- steps back-to-back until the run stops
                             (batch rendering, tests)
    AsyncFrameScheduler   -- one tick per frame interval on an asyncio
                             loop; yields between ticks so input
                             handlers run between ticks, never mid-tick
"""

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class SynchronousScheduler:
    """Runs a simulation to completion in the calling thread."""

    def __init__(self, on_frame: Optional[Callable] = None, frame_every: int = 1):
        self.on_frame = on_frame
        self.frame_every = max(1, frame_every)

    def run(self, simulation) -> int:
        """
        Step until ``simulation.running`` turns False.

        Args:
            simulation: Simulation to drive

        Returns:
            Number of ticks executed
        """
        ticks = 0
        while simulation.running:
            simulation.step()
            ticks += 1
            if self.on_frame and ticks % self.frame_every == 0:
                self.on_frame(simulation)
        logger.info("Layout finished in %d ticks (alpha %.4f)", ticks, simulation.alpha)
        return ticks


class AsyncFrameScheduler:
    """
    Cooperative frame loop for asyncio hosts.

    The loop idles (polling at the frame interval) while the simulation
    is settled, so a reheat from an input handler resumes ticking on the
    next frame. ``stop()`` ends the loop.
    """

    def __init__(self, simulation, interval: float = 1 / 60,
                 on_frame: Optional[Callable] = None):
        self.simulation = simulation
        self.interval = interval
        self.on_frame = on_frame
        self.ticks = 0
        self._stopping = False

    def stop(self):
        self._stopping = True

    async def run(self, until_settled: bool = False) -> int:
        """
        Tick once per interval.

        Args:
            until_settled: Return as soon as the simulation stops instead
                of idling for the next reheat

        Returns:
            Number of ticks executed
        """
        self._stopping = False
        while not self._stopping:
            if self.simulation.running:
                self.simulation.step()
                self.ticks += 1
                if self.on_frame:
                    self.on_frame(self.simulation)
            elif until_settled:
                break
            await asyncio.sleep(self.interval)
        return self.ticks
