import numpy as np

from flock.core.integrator import clamp_speed, integrate, wrap_positions
from flock.core.params import FlockParams, WorldBounds


class TestClampSpeed:
    def test_caps_fast_agents(self) -> None:
        out = clamp_speed(np.array([[600.0, 0.0]]), np.array([[600.0, 0.0]]), 100.0, 300.0)
        np.testing.assert_allclose(out, [[300.0, 0.0]])

    def test_raises_slow_agents_and_keeps_direction(self) -> None:
        out = clamp_speed(np.array([[3.0, 4.0]]), np.array([[3.0, 4.0]]), 100.0, 300.0)
        np.testing.assert_allclose(out, [[60.0, 80.0]])

    def test_in_range_rows_unchanged(self) -> None:
        vel = np.array([[120.0, -35.5], [0.0, 299.0]])
        np.testing.assert_array_equal(clamp_speed(vel, vel, 100.0, 300.0), vel)

    def test_zero_velocity_keeps_previous_heading(self) -> None:
        out = clamp_speed(np.array([[0.0, 5.0]]), np.array([[0.0, 0.0]]), 100.0, 300.0)
        np.testing.assert_allclose(out, [[0.0, 100.0]], atol=1e-9)
        assert np.isfinite(out).all()

    def test_zero_velocity_without_history(self) -> None:
        out = clamp_speed(np.zeros((1, 2)), np.zeros((1, 2)), 100.0, 300.0)
        np.testing.assert_allclose(out, [[100.0, 0.0]])

    def test_empty_flock(self) -> None:
        assert clamp_speed(np.zeros((0, 2)), np.zeros((0, 2)), 1.0, 2.0).shape == (0, 2)


class TestWrapPositions:
    def test_teleports_to_opposite_edge(self) -> None:
        bounds = WorldBounds(100, 80)
        out = wrap_positions(np.array([[59.0, 0.0], [-50.5, -41.0], [10.0, 20.0]]), bounds)
        np.testing.assert_array_equal(out, [[-50.0, 0.0], [50.0, 40.0], [10.0, 20.0]])

    def test_edge_itself_is_inside(self) -> None:
        bounds = WorldBounds(100, 80)
        pos = np.array([[50.0, -40.0]])
        np.testing.assert_array_equal(wrap_positions(pos, bounds), pos)

    def test_far_overshoot_still_lands_inside(self) -> None:
        bounds = WorldBounds(100, 80)
        out = wrap_positions(np.array([[1e6, -1e6]]), bounds)
        assert bounds.contains(out[0])


class TestIntegrate:
    def test_applies_delta_then_moves(self) -> None:
        params = FlockParams(min_speed=0.0, max_speed=100.0)
        pos, vel = integrate(
            np.array([[0.0, 0.0]]), np.array([[0.0, 10.0]]), np.array([[2.0, 0.0]]),
            WorldBounds(1000, 800), params, 0.5,
        )
        np.testing.assert_allclose(vel, [[2.0, 10.0]])
        np.testing.assert_allclose(pos, [[1.0, 5.0]])

    def test_does_not_modify_inputs(self) -> None:
        positions = np.array([[49.0, 0.0]])
        velocities = np.array([[200.0, 0.0]])
        integrate(positions, velocities, np.array([[500.0, 0.0]]), WorldBounds(100, 100), FlockParams(), 1.0)
        np.testing.assert_array_equal(positions, [[49.0, 0.0]])
        np.testing.assert_array_equal(velocities, [[200.0, 0.0]])

    def test_wrap_after_crossing_edge(self) -> None:
        bounds = WorldBounds(100, 100)
        pos, _ = integrate(
            np.array([[49.9, 0.0]]), np.array([[150.0, 0.0]]), np.zeros((1, 2)), bounds, FlockParams(), 0.01
        )
        assert pos[0, 0] == -50.0


class TestClampSpeedNonFinite:
    def test_infinite_row_pinned_to_max_speed(self) -> None:
        prev = np.array([[0.0, 150.0], [0.0, 150.0]])
        new = np.array([[np.inf, 150.0], [-np.inf, 150.0]])
        out = clamp_speed(prev, new, 100.0, 300.0)
        assert np.isfinite(out).all()
        np.testing.assert_allclose(out, [[300.0, 0.0], [-300.0, 0.0]], atol=1e-9)

    def test_norm_overflow_with_finite_components(self) -> None:
        new = np.array([[1e308, 1e308]])
        out = clamp_speed(np.zeros((1, 2)), new, 100.0, 300.0)
        np.testing.assert_allclose(out, [[300.0 / np.sqrt(2), 300.0 / np.sqrt(2)]])

    def test_nan_row_keeps_previous_heading(self) -> None:
        out = clamp_speed(np.array([[0.0, 5.0]]), np.array([[np.nan, np.nan]]), 100.0, 300.0)
        np.testing.assert_allclose(out, [[0.0, 300.0]], atol=1e-9)

    def test_mixed_inf_and_nan_components(self) -> None:
        out = clamp_speed(np.array([[1.0, 0.0]]), np.array([[np.nan, -np.inf]]), 100.0, 300.0)
        np.testing.assert_allclose(out, [[0.0, -300.0]], atol=1e-9)

    def test_finite_rows_unaffected(self) -> None:
        prev = np.array([[120.0, 0.0], [0.0, 150.0]])
        new = np.array([[120.0, 0.0], [np.inf, np.inf]])
        out = clamp_speed(prev, new, 100.0, 300.0)
        np.testing.assert_array_equal(out[0], [120.0, 0.0])
