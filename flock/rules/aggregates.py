"""
Flock-wide aggregates for one tick.

Leave-one-out averages come from a single flock-wide sum per tick with each
agent's own term subtracted, so they cost O(N) overall. Separation needs the
set of close neighbours per agent, found either by a full pairwise scan or by
bucketing agents into a uniform grid whose cell side equals the separation
distance. Both strategies yield the same neighbour set.
"""

from dataclasses import dataclass

import numpy as np

from ..core.state import TickSnapshot


@dataclass(frozen=True)
class FlockAggregates:
    position_sum: np.ndarray       # (2,)
    velocity_sum: np.ndarray       # (2,)
    cohesion_targets: np.ndarray   # (N, 2) mean position of the other agents
    alignment_targets: np.ndarray  # (N, 2) mean velocity of the other agents
    separation_push: np.ndarray    # (N, 2)


def separation_push_brute(positions: np.ndarray, distance: float) -> np.ndarray:
    offsets = positions[None, :, :] - positions[:, None, :]   # [i, j] = p_j - p_i
    dist = np.hypot(offsets[..., 0], offsets[..., 1])
    close = dist < distance
    np.fill_diagonal(close, False)
    return -(offsets * close[..., None]).sum(axis=1)


def separation_push_grid(positions: np.ndarray, distance: float) -> np.ndarray:
    push = np.zeros_like(positions, dtype=float)
    if distance <= 0 or len(positions) == 0:
        return push
    cells = np.floor(positions / distance).astype(np.int64)
    buckets: dict[tuple[int, int], list[int]] = {}
    for i, (cx, cy) in enumerate(cells):
        buckets.setdefault((int(cx), int(cy)), []).append(i)

    for i, (cx, cy) in enumerate(cells):
        p = positions[i]
        for dcx in (-1, 0, 1):
            for dcy in (-1, 0, 1):
                for j in buckets.get((int(cx) + dcx, int(cy) + dcy), ()):
                    if j == i:
                        continue
                    off = positions[j] - p
                    if np.hypot(off[0], off[1]) < distance:
                        push[i] -= off
    return push


SEPARATION_STRATEGIES = {
    "brute": separation_push_brute,
    "grid": separation_push_grid,
}


def compute_aggregates(snapshot: TickSnapshot, separation_distance: float, neighbor_search: str = "brute"):
    """
    Returns None when the flock has fewer than two agents: there is nobody to
    average against, and steering must contribute nothing for this tick.
    """
    n = len(snapshot)
    if n <= 1:
        return None
    positions = snapshot.positions
    velocities = snapshot.velocities

    position_sum = positions.sum(axis=0)
    velocity_sum = velocities.sum(axis=0)
    cohesion_targets = (position_sum - positions) / (n - 1)
    alignment_targets = (velocity_sum - velocities) / (n - 1)

    push = SEPARATION_STRATEGIES[neighbor_search](positions, separation_distance)
    return FlockAggregates(
        position_sum=position_sum,
        velocity_sum=velocity_sum,
        cohesion_targets=cohesion_targets,
        alignment_targets=alignment_targets,
        separation_push=push,
    )
