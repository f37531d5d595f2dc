import argparse
import logging
import pathlib
import sys

# Ensure repository root is on PYTHONPATH when running without installation.
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from flock.config import load_config, params_from_config, bounds_from_config
from flock.control.heading import HeadingController
from flock.core.metrics import summarize
from flock.core.simulator import Simulator
from flock.viz.logger import FlockLogger

logger = logging.getLogger("run_sim")


def expand_script(script: list[dict]) -> list[int]:
    """Turn [{"steps": 30, "direction": 1}, ...] into one direction per tick."""
    directions = []
    for segment in script or []:
        directions.extend([int(segment.get("direction", 0))] * int(segment.get("steps", 0)))
    return directions


def build_simulator(cfg: dict) -> Simulator:
    bounds = bounds_from_config(cfg)
    params = params_from_config(cfg)
    return Simulator.create(bounds, params, cfg["agents"]["count"], rng_seed=cfg.get("seed"))


def run(cfg: dict, log_path: pathlib.Path | None = None) -> dict:
    sim = build_simulator(cfg)
    dt = cfg["dt"]

    ctrl_cfg = cfg.get("controller", {})
    controller = None
    directions = []
    if ctrl_cfg.get("enabled") and sim.store.agent_count() > 0:
        controller = HeadingController(sim.store, ctrl_cfg.get("agent_id", 0), turn_rate=ctrl_cfg["turn_rate"])
        directions = expand_script(ctrl_cfg.get("script", []))

    flock_logger = FlockLogger(log_path) if log_path else None
    log_every = max(1, int(cfg.get("log_every", 1)))
    sep = sim.params.separation_distance

    for step in range(cfg["steps"]):
        if controller is not None and step < len(directions):
            controller.steer(directions[step], dt)
        store = sim.step(dt)
        if flock_logger and step % log_every == 0:
            flock_logger.log_state(store, metrics=summarize(store, sep))

    if flock_logger:
        flock_logger.flush()
        logger.info("wrote %d records to %s", len(flock_logger.records), flock_logger.path)
    return summarize(sim.store, sep)


def main():
    parser = argparse.ArgumentParser(description="Run headless boids simulation.")
    parser.add_argument("--config", type=pathlib.Path, help="Path to YAML config.")
    parser.add_argument("--log", type=pathlib.Path, help="Optional path to write JSON trajectory log.")
    parser.add_argument("--steps", type=int, help="Override total simulation steps.")
    parser.add_argument("--dt", type=float, help="Override simulation timestep.")
    parser.add_argument("--seed", type=int, help="Override spawn RNG seed.")
    parser.add_argument("--count", type=int, help="Override number of agents.")
    parser.add_argument("--turn", type=int, choices=(-1, 0, 1),
                        help="Hold a constant turn on the controlled agent for the whole run.")
    parser.add_argument("--log-level", default="INFO", dest="log_level")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    cfg = load_config(args.config)
    if args.steps is not None:
        cfg["steps"] = args.steps
    if args.dt is not None:
        cfg["dt"] = args.dt
    if args.seed is not None:
        cfg["seed"] = args.seed
    if args.count is not None:
        cfg["agents"] = {**cfg["agents"], "count": args.count}
    if args.turn is not None:
        cfg["controller"] = {
            **cfg["controller"],
            "enabled": True,
            "script": [{"steps": cfg["steps"], "direction": args.turn}],
        }

    summary = run(cfg, args.log)
    for key, value in summary.items():
        print(f"{key}: {value}")


if __name__ == "__main__":
    main()
