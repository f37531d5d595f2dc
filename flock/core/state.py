import math
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from .errors import AgentIndexError


class AgentKind(Enum):
    FLOCKING = "flocking"
    PLAYER_CONTROLLED = "player_controlled"


@dataclass
class AgentState:
    id: int
    pos: np.ndarray      # shape (2,)
    vel: np.ndarray      # shape (2,), Cartesian
    kind: AgentKind = AgentKind.FLOCKING

    @classmethod
    def from_polar(cls, id: int, pos, speed: float, heading: float, kind: AgentKind = AgentKind.FLOCKING):
        vel = np.array([math.cos(heading), math.sin(heading)], dtype=float) * speed
        return cls(id=id, pos=np.array(pos, dtype=float), vel=vel, kind=kind)

    @property
    def speed(self) -> float:
        return float(np.hypot(self.vel[0], self.vel[1]))

    @property
    def heading(self) -> float:
        return float(math.atan2(self.vel[1], self.vel[0]))

    def copy(self) -> "AgentState":
        return AgentState(id=self.id, pos=self.pos.copy(), vel=self.vel.copy(), kind=self.kind)


@dataclass(frozen=True)
class TickSnapshot:
    """
    Read-only copy of every agent's position and velocity taken at the start
    of a tick. Row i belongs to the agent at storage index i.
    """
    positions: np.ndarray    # (N, 2)
    velocities: np.ndarray   # (N, 2)
    kinds: tuple[AgentKind, ...]

    def __len__(self) -> int:
        return len(self.kinds)


@dataclass
class AgentStore:
    agents: list[AgentState] = field(default_factory=list)
    t: float = 0.0

    def agent_count(self) -> int:
        return len(self.agents)

    def agent(self, i: int) -> AgentState:
        # negative ids are rejected instead of indexing from the end
        if not isinstance(i, (int, np.integer)) or isinstance(i, bool) or not 0 <= i < len(self.agents):
            raise AgentIndexError(i, len(self.agents))
        return self.agents[i]

    def position_of(self, i: int) -> tuple[float, float]:
        pos = self.agent(i).pos
        return float(pos[0]), float(pos[1])

    def velocity_of(self, i: int) -> tuple[float, float]:
        vel = self.agent(i).vel
        return float(vel[0]), float(vel[1])

    def heading_of(self, i: int) -> float:
        return self.agent(i).heading

    def speed_of(self, i: int) -> float:
        return self.agent(i).speed

    def snapshot(self) -> TickSnapshot:
        if self.agents:
            positions = np.array([a.pos for a in self.agents], dtype=float)
            velocities = np.array([a.vel for a in self.agents], dtype=float)
        else:
            positions = np.zeros((0, 2))
            velocities = np.zeros((0, 2))
        positions.flags.writeable = False
        velocities.flags.writeable = False
        return TickSnapshot(
            positions=positions,
            velocities=velocities,
            kinds=tuple(a.kind for a in self.agents),
        )

    def commit(self, positions: np.ndarray, velocities: np.ndarray):
        """Write the new per-agent rows back; each agent owns only its slot."""
        for i, st in enumerate(self.agents):
            st.pos = positions[i].copy()
            st.vel = velocities[i].copy()
