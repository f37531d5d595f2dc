import numpy as np

from .base import SteeringRule
from .aggregates import FlockAggregates
from ..core.params import FlockParams
from ..core.state import AgentKind, TickSnapshot

# rule weights are expressed in percent of the raw steering vector
WEIGHT_SCALE = 100.0


class Cohesion(SteeringRule):
    name = "cohesion"

    def __init__(self, weight: float):
        self.weight = weight

    def contribution(self, snapshot: TickSnapshot, aggregates: FlockAggregates, dt: float):
        return self.weight * (aggregates.cohesion_targets - snapshot.positions) / WEIGHT_SCALE


class Separation(SteeringRule):
    name = "separation"

    def __init__(self, weight: float):
        self.weight = weight

    def contribution(self, snapshot: TickSnapshot, aggregates: FlockAggregates, dt: float):
        return self.weight * aggregates.separation_push / WEIGHT_SCALE


class Alignment(SteeringRule):
    name = "alignment"

    def __init__(self, weight: float, time_scaled: bool = True):
        self.weight = weight
        self.time_scaled = time_scaled

    def contribution(self, snapshot: TickSnapshot, aggregates: FlockAggregates, dt: float):
        delta = self.weight * (aggregates.alignment_targets - snapshot.velocities) / WEIGHT_SCALE
        # cohesion and separation stay unscaled; only alignment follows dt
        if self.time_scaled:
            delta = delta * dt
        return delta


class BoidsSteering:
    """Sums cohesion, separation and alignment into one delta per agent."""

    def __init__(self, params: FlockParams):
        self.params = params
        self.rules: list[SteeringRule] = [
            Cohesion(params.coherence_weight),
            Separation(params.separation_weight),
            Alignment(params.alignment_weight, time_scaled=params.alignment_time_scaled),
        ]

    def rule_contributions(self, snapshot: TickSnapshot, aggregates: FlockAggregates | None, dt: float):
        n = len(snapshot)
        if aggregates is None:
            return {rule.name: np.zeros((n, 2)) for rule in self.rules}
        mask = self._flocking_mask(snapshot)
        out = {}
        for rule in self.rules:
            out[rule.name] = np.where(mask, rule.contribution(snapshot, aggregates, dt), 0.0)
        return out

    def steering_deltas(self, snapshot: TickSnapshot, aggregates: FlockAggregates | None, dt: float) -> np.ndarray:
        delta = np.zeros((len(snapshot), 2))
        for contrib in self.rule_contributions(snapshot, aggregates, dt).values():
            delta = delta + contrib
        return delta

    @staticmethod
    def _flocking_mask(snapshot: TickSnapshot) -> np.ndarray:
        # player-controlled agents are steered only by the heading controller
        return np.array(
            [[kind is AgentKind.FLOCKING] for kind in snapshot.kinds], dtype=bool
        )
