from abc import ABC, abstractmethod


class SteeringRule(ABC):
    name: str

    @abstractmethod
    def contribution(self, snapshot, aggregates, dt: float):
        """Return the (N, 2) velocity delta this rule asks for."""
        ...
