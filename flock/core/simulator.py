import logging
import math

import numpy as np

from .integrator import integrate
from .params import FlockParams, WorldBounds
from .spawn import spawn_agents
from .state import AgentStore
from ..rules.aggregates import compute_aggregates
from ..rules.steering import BoidsSteering

logger = logging.getLogger(__name__)


def initialize(bounds: WorldBounds, params: FlockParams, agent_count: int, rng_seed=None) -> AgentStore:
    params.validate()
    rng = np.random.default_rng(rng_seed)
    agents = spawn_agents(bounds, agent_count, params.base_speed, rng)
    logger.info(
        "initialized %d agents in %gx%g world (seed=%s)", len(agents), bounds.width, bounds.height, rng_seed
    )
    return AgentStore(agents=agents)


def tick(store: AgentStore, bounds: WorldBounds, params: FlockParams, dt: float, steering: BoidsSteering | None = None):
    """
    Advance every agent by dt.

    Aggregates and steering read only the snapshot taken here; the new state
    is written back in one commit at the end, so no agent ever sees another
    agent's updated state within the same tick.
    """
    dt = float(dt)
    if not math.isfinite(dt) or dt < 0:
        raise ValueError(f"dt must be a non-negative finite number, got {dt}")
    steering = steering or BoidsSteering(params)

    snapshot = store.snapshot()
    aggregates = compute_aggregates(snapshot, params.separation_distance, params.neighbor_search)
    if aggregates is None:
        logger.debug("fewer than two agents; flocking rules skipped")
    # extreme weights or dt can overflow; clamp_speed pins such rows to max_speed
    # and wrap_positions teleports infinite positions back to the edge
    with np.errstate(over="ignore", invalid="ignore"):
        deltas = steering.steering_deltas(snapshot, aggregates, dt)
        positions, velocities = integrate(snapshot.positions, snapshot.velocities, deltas, bounds, params, dt)

    store.commit(positions, velocities)
    store.t += dt


class Simulator:
    """Owns one flock and drives it tick by tick."""

    def __init__(self, store: AgentStore, bounds: WorldBounds, params: FlockParams):
        params.validate()
        self.store = store
        self.bounds = bounds
        self.params = params
        self.steering = BoidsSteering(params)
        self.ticks = 0

    @classmethod
    def create(cls, bounds: WorldBounds, params: FlockParams, agent_count: int, rng_seed=None) -> "Simulator":
        return cls(initialize(bounds, params, agent_count, rng_seed), bounds, params)

    @property
    def t(self) -> float:
        return self.store.t

    def step(self, dt: float) -> AgentStore:
        tick(self.store, self.bounds, self.params, dt, steering=self.steering)
        self.ticks += 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("tick %d t=%.3f agents=%d", self.ticks, self.store.t, self.store.agent_count())
        return self.store
