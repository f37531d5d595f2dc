class FlockError(Exception):
    """Base class for errors raised by the flocking engine."""


class InvalidConfigurationError(FlockError, ValueError):
    """Bounds or flock parameters that cannot produce a well-defined run."""


class AgentIndexError(FlockError, IndexError):
    """Agent identifier outside the store."""

    def __init__(self, agent_id, agent_count: int):
        super().__init__(f"agent id {agent_id} out of range for {agent_count} agents")
        self.agent_id = agent_id
        self.agent_count = agent_count
