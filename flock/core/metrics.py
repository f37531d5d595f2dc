"""
Flock-level observables computed from one read-only snapshot of the store.
"""

import numpy as np

from .state import AgentStore


def _pairwise_distances(positions: np.ndarray) -> np.ndarray:
    offsets = positions[None, :, :] - positions[:, None, :]
    return np.hypot(offsets[..., 0], offsets[..., 1])


def coverage_extent(store: AgentStore) -> float:
    """Area of the axis-aligned box around every agent."""
    positions = store.snapshot().positions
    if len(positions) == 0:
        return 0.0
    return float(np.prod(np.ptp(positions, axis=0)))


def mean_pairwise_distance(store: AgentStore) -> float:
    positions = store.snapshot().positions
    n = len(positions)
    if n < 2:
        return 0.0
    upper = np.triu_indices(n, k=1)
    return float(_pairwise_distances(positions)[upper].mean())


def polarization(store: AgentStore) -> float:
    """
    Alignment order parameter: norm of the mean unit heading, 1.0 when every
    agent flies the same way, near 0 for random headings.
    """
    vels = store.snapshot().velocities
    if len(vels) == 0:
        return 0.0
    speeds = np.hypot(vels[:, 0], vels[:, 1])
    moving = speeds > 0
    if not moving.any():
        return 0.0
    units = vels[moving] / speeds[moving, None]
    return float(np.linalg.norm(units.sum(axis=0)) / len(vels))


def mean_speed(store: AgentStore) -> float:
    vels = store.snapshot().velocities
    if len(vels) == 0:
        return 0.0
    return float(np.hypot(vels[:, 0], vels[:, 1]).mean())


def close_pair_count(store: AgentStore, threshold: float) -> int:
    """Unordered agent pairs strictly closer than threshold."""
    positions = store.snapshot().positions
    n = len(positions)
    if n < 2:
        return 0
    upper = np.triu_indices(n, k=1)
    return int((_pairwise_distances(positions)[upper] < threshold).sum())


def summarize(store: AgentStore, separation_distance: float) -> dict:
    return {
        "t": store.t,
        "agents": store.agent_count(),
        "mean_speed": mean_speed(store),
        "polarization": polarization(store),
        "mean_pairwise_distance": mean_pairwise_distance(store),
        "close_pairs": close_pair_count(store, separation_distance),
        "coverage_extent": coverage_extent(store),
    }
