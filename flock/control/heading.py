import math

import numpy as np

from ..core.state import AgentKind, AgentStore

DEFAULT_TURN_RATE = math.pi / 2.0   # rad/s


def rotate(vel: np.ndarray, angle: float) -> np.ndarray:
    """Counter-clockwise rotation by angle radians."""
    s = math.sin(angle)
    c = math.cos(angle)
    return np.array([vel[0] * c - vel[1] * s, vel[0] * s + vel[1] * c], dtype=float)


def apply_turn(store: AgentStore, agent_id: int, rotation_delta: float):
    """Rotate one agent's velocity, leaving its speed unchanged."""
    st = store.agent(agent_id)
    if not math.isfinite(rotation_delta):
        raise ValueError(f"rotation_delta must be finite, got {rotation_delta}")
    st.vel = rotate(st.vel, rotation_delta)


def turn_direction(left_held: bool, right_held: bool) -> int:
    # left wins when both keys are held
    if left_held:
        return 1
    if right_held:
        return -1
    return 0


class HeadingController:
    """
    Steers one designated agent from external input. The agent is marked
    player-controlled, so flocking rules no longer act on it.
    """

    def __init__(self, store: AgentStore, agent_id: int, turn_rate: float = DEFAULT_TURN_RATE):
        if not math.isfinite(turn_rate):
            raise ValueError(f"turn_rate must be finite, got {turn_rate}")
        self.store = store
        self.agent_id = agent_id
        self.turn_rate = turn_rate
        store.agent(agent_id).kind = AgentKind.PLAYER_CONTROLLED

    def steer(self, direction: float, dt: float) -> float:
        """Apply a signed turn sample (+1 left, -1 right) for this frame; returns the angle used."""
        delta = direction * self.turn_rate * dt
        # NaN is truthy and is rejected by apply_turn
        if delta:
            apply_turn(self.store, self.agent_id, delta)
        return delta

    def steer_keys(self, left_held: bool, right_held: bool, dt: float) -> float:
        return self.steer(turn_direction(left_held, right_held), dt)

    def release(self):
        self.store.agent(self.agent_id).kind = AgentKind.FLOCKING
