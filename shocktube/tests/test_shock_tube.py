"""
Pytest tests for Sod's shock tube problem.

Tests verify:
1. Wave structure (left-moving shock, contact, right-moving rarefaction)
2. Comparison with exact solution
3. Physical bounds maintained at every recorded frame
4. Stability of the fixed dt/dx over the standard run
"""

import numpy as np
import pytest

from shocktube import (
    Mesh1D, SchemeConfig, Solver1D, SolverConfig, sod_initial_state
)
from shocktube.test_cases import run_shock_tube_test, riemann_exact, star_region

N_PIXEL = 2000
N_STEPS_PER_PIXEL = 50


@pytest.fixture(scope="module")
def long_run():
    """400 cells, 1000 steps (t = 20); waves stay clear of the boundaries."""
    return run_shock_tube_test(n_cells=400, n_steps=1000)


@pytest.fixture(scope="module")
def standard_run():
    """2000 cells, ten frames of 50 steps each."""
    scheme = SchemeConfig()
    mesh = Mesh1D.centered(N_PIXEL, scheme.dx)
    config = SolverConfig(n_steps_per_frame=N_STEPS_PER_PIXEL, n_frames=10)
    solver = Solver1D(mesh, scheme, config)
    solver.set_initial_condition(sod_initial_state(mesh.x_cells, scheme.gas))
    info = solver.solve()
    return solver, info


def value_at(x_cells, values, x):
    return values[np.argmin(np.abs(x_cells - x))]


class TestExactSolution:
    """Sanity checks on the reference solution itself."""

    def test_standard_sod_star_state(self):
        """Toro's values for the classic (high pressure on the left) Sod problem."""
        p_star, u_star = star_region((1.0, 0.0, 1.0), (0.125, 0.0, 0.1))
        assert p_star == pytest.approx(0.30313, rel=1e-4)
        assert u_star == pytest.approx(0.92745, rel=1e-4)

    def test_mirrored_problem(self):
        """Swapping sides mirrors the solution in x and flips the velocity."""
        x = np.linspace(-3, 3, 61)
        mirrored = riemann_exact(x, 1.5)
        standard = riemann_exact(-x, 1.5, left=(1.0, 0.0, 1.0), right=(0.125, 0.0, 0.1))

        np.testing.assert_allclose(mirrored['rho'], standard['rho'], rtol=1e-10)
        np.testing.assert_allclose(mirrored['p'], standard['p'], rtol=1e-10)
        np.testing.assert_allclose(mirrored['u'], -standard['u'], atol=1e-10)

    def test_initial_time(self):
        x = np.array([-1.0, 0.0, 1.0])
        exact = riemann_exact(x, 0.0)
        np.testing.assert_allclose(exact['rho'], [0.125, 0.125, 1.0])

    def test_vacuum_rejected(self):
        with pytest.raises(ValueError):
            star_region((1.0, -20.0, 1.0), (1.0, 20.0, 1.0))


class TestWaveStructure:
    """High pressure sits at x > 0, so the shock runs left and the fan runs right."""

    def test_shock_moves_left(self, long_run):
        solver, exact = long_run
        state = solver.get_state()
        x = solver.mesh.x_cells

        disturbed = np.flatnonzero(np.abs(state.rho - 0.125) > 1e-3)
        x_front = x[disturbed[0]]
        assert -45.0 < x_front < -25.0, \
            f"Shock front expected near x = -35, found at x = {x_front}"

    def test_rarefaction_moves_right(self, long_run):
        solver, exact = long_run
        state = solver.get_state()
        x = solver.mesh.x_cells

        disturbed = np.flatnonzero(np.abs(state.p - 1.0) > 1e-3)
        x_head = x[disturbed[-1]]
        assert 15.0 < x_head < 45.0, \
            f"Rarefaction head expected near x = 23.7, found at x = {x_head}"

    def test_star_region_plateaus(self, long_run):
        """Densities either side of the contact match the exact plateaus."""
        solver, exact = long_run
        state = solver.get_state()
        x = solver.mesh.x_cells

        # between shock (-35.0) and contact (-18.5)
        assert value_at(x, state.rho, -26.8) == pytest.approx(value_at(x, exact['rho'], -26.8), abs=0.02)
        # between contact (-18.5) and rarefaction tail (1.4)
        assert value_at(x, state.rho, -8.6) == pytest.approx(value_at(x, exact['rho'], -8.6), abs=0.02)
        assert value_at(x, state.p, -18.5) == pytest.approx(exact['p_star'], abs=0.02)
        assert value_at(x, state.u, -18.5) == pytest.approx(exact['u_star'], abs=0.05)


class TestExactSolutionComparison:
    """Tests comparing numerical solution to exact solution."""

    def test_density_accuracy(self, long_run):
        solver, exact = long_run
        rho_error_l1 = np.mean(np.abs(solver.get_state().rho - exact['rho']))
        assert rho_error_l1 < 0.05 * np.mean(exact['rho']), \
            f"Density L1 error too large: {rho_error_l1}"

    def test_velocity_accuracy(self, long_run):
        solver, exact = long_run
        u_max = np.max(np.abs(exact['u']))
        u_error_l1 = np.mean(np.abs(solver.get_state().u - exact['u']))
        assert u_error_l1 < 0.1 * u_max, \
            f"Velocity L1 error too large: {u_error_l1}"

    def test_pressure_accuracy(self, long_run):
        solver, exact = long_run
        p_error_l1 = np.mean(np.abs(solver.get_state().p - exact['p']))
        assert p_error_l1 < 0.05 * np.mean(exact['p']), \
            f"Pressure L1 error too large: {p_error_l1}"

    def test_limited_beats_first_order(self, long_run):
        solver, exact = long_run
        first_order, _ = run_shock_tube_test(n_cells=400, n_steps=1000, use_first_order=True)

        error_limited = np.mean(np.abs(solver.get_state().rho - exact['rho']))
        error_first = np.mean(np.abs(first_order.get_state().rho - exact['rho']))
        assert error_limited < error_first, \
            f"Limited reconstruction ({error_limited}) not better than first order ({error_first})"


class TestPhysicalBounds:
    """The standard 2000-cell run stays physical at every recorded frame."""

    def test_all_frames_recorded(self, standard_run):
        solver, info = standard_run
        frames = solver.history_arrays()
        assert frames['rho'].shape == (11, N_PIXEL)
        np.testing.assert_allclose(frames['time'], np.arange(11) * N_STEPS_PER_PIXEL * 0.02)
        assert info['iterations'] == 10 * N_STEPS_PER_PIXEL

    def test_density_bounds(self, standard_run):
        solver, _ = standard_run
        for i, rho in enumerate(solver.history['rho']):
            assert np.min(rho) > 0.1, f"Frame {i}: density fell to {np.min(rho)}"
            assert np.max(rho) < 1.0 + 1e-3, f"Frame {i}: density rose to {np.max(rho)}"

    def test_positive_pressure(self, standard_run):
        solver, _ = standard_run
        for i, p in enumerate(solver.history['p']):
            assert np.all(p > 0), f"Frame {i}: negative pressure, min = {np.min(p)}"

    def test_far_field_untouched(self, standard_run):
        """After t = 10 nothing has reached cells more than 50 units away."""
        solver, _ = standard_run
        state = solver.get_state()
        x = solver.mesh.x_cells
        np.testing.assert_allclose(state.rho[x < -50], 0.125)
        np.testing.assert_allclose(state.rho[x > 50], 1.0)


class TestStability:
    """Regression guard for the fixed dt = 0.02, dx = 0.5."""

    def test_density_stays_positive(self):
        solver, _ = run_shock_tube_test(n_cells=N_PIXEL, n_steps=N_STEPS_PER_PIXEL)
        assert solver.iteration == N_STEPS_PER_PIXEL
        assert np.all(solver.get_state().rho > 0)
        assert np.all(np.isfinite(solver.U))

    def test_cfl_well_below_one(self, standard_run):
        _, info = standard_run
        assert info['cfl'] < 0.2, f"CFL number {info['cfl']} unexpectedly large"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
