import numpy as np
import pytest

from flock.core.state import AgentKind, AgentState, AgentStore


@pytest.fixture
def make_store():
    """Build a store from explicit positions and velocities."""

    def _make(positions, velocities, kinds=None):
        kinds = kinds or [AgentKind.FLOCKING] * len(positions)
        agents = [
            AgentState(id=i, pos=np.array(p, dtype=float), vel=np.array(v, dtype=float), kind=k)
            for i, (p, v, k) in enumerate(zip(positions, velocities, kinds))
        ]
        return AgentStore(agents=agents)

    return _make
