import json
from pathlib import Path
from ..core.state import AgentStore


class FlockLogger:
    """Collects per-tick flock records in memory and writes them as one JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.records = []

    def log_state(self, store: AgentStore, metrics=None):
        record = {
            "t": store.t,
            "agents": [
                {
                    "id": st.id,
                    "pos": st.pos.tolist(),
                    "vel": st.vel.tolist(),
                    "speed": st.speed,
                    "heading": st.heading,
                    "kind": st.kind.value,
                }
                for st in store.agents
            ],
        }
        if metrics is not None:
            record["metrics"] = metrics
        self.records.append(record)

    def flush(self):
        with self.path.open("w") as f:
            json.dump(self.records, f, indent=2)
