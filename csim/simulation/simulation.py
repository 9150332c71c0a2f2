"""Simulation wrapper used by the command line

Builds the cache and simulator from a SimulationConfig and replays the
configured trace through them.
"""
import logging
from typing import Callable, Optional

from csim.core.cache import Cache
from csim.core.simulator import CacheSimulator
from csim.data.stats_export import Statistics
from csim.simulation.config import SimulationConfig
from csim.simulation.trace import open_trace

logger = logging.getLogger(__name__)


class Simulation:
    def __init__(self, config: SimulationConfig, track_history: bool = False):
        self.config = config
        self.cache = Cache(associativity=config.e)
        self.sim = CacheSimulator(self.cache, s=config.s, b=config.b,
                                  stats=Statistics(track_history=track_history))

    @property
    def stats(self) -> Statistics:
        return self.sim.stats

    def run_simulation(self, callback: Optional[Callable[[dict], None]] = None) -> Statistics:
        """Replay the whole trace from an empty cache and zeroed counters.

        Errors propagate; nothing is partially reported.
        """
        cfg = self.config
        lines = open_trace(cfg.trace_path)
        self.sim.reset()
        logger.info("Replaying %s (s=%d, E=%d, b=%d: %d sets, %d-byte blocks)",
                    cfg.trace_path, cfg.s, cfg.e, cfg.b, cfg.num_sets, cfg.block_size)
        stats = self.sim.run_all(lines, callback=callback)
        logger.info("Replayed %d lines, %d cache probes", self.sim.lines_read, stats.accesses)
        return stats
