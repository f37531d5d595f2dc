import logging

import numpy as np

from .params import FlockParams, WorldBounds

logger = logging.getLogger(__name__)


def clamp_speed(prev_vel: np.ndarray, new_vel: np.ndarray, min_speed: float, max_speed: float) -> np.ndarray:
    """
    Rescale each row of new_vel so its norm lies in [min_speed, max_speed],
    keeping its direction. A zero-length row keeps the heading of prev_vel
    (heading 0 if that is zero too) at min_speed. A row whose norm overflowed
    to inf, or that holds NaN, is pinned to max_speed along whatever direction
    its finite-or-infinite components still give.
    """
    speed = np.hypot(new_vel[:, 0], new_vel[:, 1])
    clamped = np.clip(speed, min_speed, max_speed)
    degenerate = speed == 0.0
    overflow = ~np.isfinite(speed)

    out = np.empty_like(new_vel, dtype=float)
    ok = ~degenerate & ~overflow
    # factor is exactly 1.0 for rows already inside the bounds
    out[ok] = new_vel[ok] * (clamped[ok] / speed[ok])[:, None]
    if degenerate.any():
        logger.debug("zero velocity for %d agent(s); keeping previous heading", int(degenerate.sum()))
        heading = np.arctan2(prev_vel[degenerate, 1], prev_vel[degenerate, 0])
        out[degenerate] = np.stack([np.cos(heading), np.sin(heading)], axis=1) * min_speed
    if overflow.any():
        logger.debug("non-finite velocity for %d agent(s); pinning to max_speed", int(overflow.sum()))
        # NaN components carry no direction; +-inf become +-max float
        comp = np.nan_to_num(new_vel[overflow], nan=0.0)
        heading = np.where(
            (comp[:, 0] == 0.0) & (comp[:, 1] == 0.0),
            np.arctan2(prev_vel[overflow, 1], prev_vel[overflow, 0]),
            np.arctan2(comp[:, 1], comp[:, 0]),
        )
        out[overflow] = np.stack([np.cos(heading), np.sin(heading)], axis=1) * max_speed
    return out


def wrap_positions(positions: np.ndarray, bounds: WorldBounds) -> np.ndarray:
    """Teleporting toroidal wrap: leaving one edge re-enters at the opposite edge."""
    out = positions.copy()
    for axis, half in enumerate(bounds.half_extents):
        col = out[:, axis]
        over = col > half
        under = col < -half
        col[over] = -half
        col[under] = half
    return out


def integrate(positions: np.ndarray, velocities: np.ndarray, deltas: np.ndarray,
              bounds: WorldBounds, params: FlockParams, dt: float):
    """Apply steering deltas, clamp speed, advance and wrap. Inputs are not modified."""
    new_vel = clamp_speed(velocities, velocities + deltas, params.min_speed, params.max_speed)
    new_pos = wrap_positions(positions + new_vel * dt, bounds)
    return new_pos, new_vel
