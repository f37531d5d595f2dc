import json
import sys
import matplotlib.pyplot as plt


def load_log(path):
    with open(path, "r") as f:
        return json.load(f)


def metric_series(data, key):
    """(t, value) pairs for every record that carries metrics."""
    points = [(entry["t"], entry["metrics"][key]) for entry in data if "metrics" in entry]
    return [t for t, _ in points], [v for _, v in points]


def main(log_path="logs/flock.json"):
    data = load_log(log_path)
    ts, pol = metric_series(data, "polarization")
    if not ts:
        sys.exit(f"{log_path} has no metrics; rerun run_sim.py with --log")
    _, speed = metric_series(data, "mean_speed")

    fig, (ax_pol, ax_speed) = plt.subplots(2, 1, sharex=True)
    ax_pol.plot(ts, pol)
    ax_pol.set_ylabel("polarization")
    ax_pol.set_ylim(0.0, 1.05)
    ax_speed.plot(ts, speed)
    ax_speed.set_ylabel("mean speed")
    ax_speed.set_xlabel("time")
    ax_pol.set_title("Flock order over time")
    plt.show()


if __name__ == "__main__":
    log = sys.argv[1] if len(sys.argv) > 1 else "logs/flock.json"
    main(log)
