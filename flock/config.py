import copy
import math
import pathlib

import yaml

from .core.errors import InvalidConfigurationError
from .core.params import FlockParams, WorldBounds


DEFAULT_CONFIG = {
    "dt": 1.0 / 60.0,
    "steps": 600,
    "seed": None,
    "log_every": 1,
    "world": {"width": 1000.0, "height": 800.0},
    "flock": {
        "coherence_weight": 1.0,
        "separation_weight": 1.0,
        "separation_distance": 30.0,
        "alignment_weight": 1.0,
        "base_speed": 200.0,
        "min_speed": 100.0,
        "max_speed": 300.0,
        "alignment_time_scaled": True,
        "neighbor_search": "brute",  # brute | grid
    },
    "agents": {"count": 10},
    "controller": {
        "enabled": False,
        "agent_id": 0,
        "turn_rate": math.pi / 2.0,
        # scripted input: list of {"steps": int, "direction": -1 | 0 | 1}
        "script": [],
    },
}


def deep_update(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_update(out[k], v)
        else:
            out[k] = v
    return out


def load_config(path: pathlib.Path | None) -> dict:
    if path is None:
        return copy.deepcopy(DEFAULT_CONFIG)
    path = pathlib.Path(path)
    cfg = yaml.safe_load(path.read_text())
    if cfg is None:
        return copy.deepcopy(DEFAULT_CONFIG)
    if not isinstance(cfg, dict):
        raise InvalidConfigurationError(f"{path}: top level must be a mapping")
    if "inherits" in cfg:
        base_path = path.parent / cfg["inherits"]
        base_cfg = load_config(base_path)
        cfg = {k: v for k, v in cfg.items() if k != "inherits"}
        return deep_update(base_cfg, cfg)
    return deep_update(copy.deepcopy(DEFAULT_CONFIG), cfg)


def params_from_config(cfg: dict) -> FlockParams:
    flock_cfg = deep_update(DEFAULT_CONFIG["flock"], cfg.get("flock") or {})
    unknown = set(flock_cfg) - set(DEFAULT_CONFIG["flock"])
    if unknown:
        raise InvalidConfigurationError(f"unknown flock option(s): {sorted(unknown)}")
    return FlockParams(**flock_cfg)


def bounds_from_config(cfg: dict) -> WorldBounds:
    world = deep_update(DEFAULT_CONFIG["world"], cfg.get("world") or {})
    return WorldBounds(width=world["width"], height=world["height"])
