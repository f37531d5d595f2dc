import logging

import numpy as np

from .errors import InvalidConfigurationError
from .params import WorldBounds, as_count
from .state import AgentState

logger = logging.getLogger(__name__)


def spawn_agents(bounds: WorldBounds, count: int, base_speed: float, rng: np.random.Generator) -> list[AgentState]:
    """
    Uniform positions inside the bounds, uniform headings in [0, 2pi),
    every agent moving at base_speed.
    """
    count = as_count("agent count", count)
    if base_speed <= 0:
        raise InvalidConfigurationError(f"base_speed must be positive, got {base_speed}")
    hw, hh = bounds.half_extents
    agents = []
    for i in range(count):
        pos = rng.uniform([-hw, -hh], [hw, hh])
        heading = rng.uniform(0.0, 2.0 * np.pi)
        agents.append(AgentState.from_polar(id=i, pos=pos, speed=base_speed, heading=heading))
    logger.debug("spawned %d agents in %sx%s", count, bounds.width, bounds.height)
    return agents
