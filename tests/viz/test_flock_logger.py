import json
from pathlib import Path

from flock.control.heading import HeadingController
from flock.viz.logger import FlockLogger


class TestFlockLogger:
    def test_flush_writes_records(self, tmp_path: Path, make_store) -> None:
        store = make_store([(0, 0), (1, 2)], [(3, 4), (0, 5)])
        HeadingController(store, 1)
        path = tmp_path / "logs" / "flock.json"
        log = FlockLogger(path)
        log.log_state(store, metrics={"polarization": 0.5})
        store.t = 0.1
        log.log_state(store)
        log.flush()

        data = json.loads(path.read_text())
        assert [r["t"] for r in data] == [0.0, 0.1]
        first = data[0]
        assert first["metrics"] == {"polarization": 0.5}
        assert first["agents"][0]["pos"] == [0.0, 0.0]
        assert first["agents"][0]["speed"] == 5.0
        assert first["agents"][1]["kind"] == "player_controlled"
        assert "metrics" not in data[1]
