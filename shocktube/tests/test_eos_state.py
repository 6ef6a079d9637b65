"""
Pytest tests for the equation of state, flow state, mesh and initial conditions.
"""

import numpy as np
import pytest

from shocktube import (
    GasProperties, FlowState, Mesh1D, pressure, sound_speed,
    riemann_initial_state, sod_initial_state
)


@pytest.fixture
def gas():
    """Diatomic ideal gas."""
    return GasProperties(gamma=1.4)


class TestEquationOfState:
    """Tests for the ideal-gas pressure relation."""

    def test_unit_pressure_at_rest(self):
        """The right Sod state (rho = 1, at rest, rhoE = 1/(gamma-1)) has unit pressure."""
        gamma = 1.4
        p = pressure(1.0, 0.0, 1.0 / (gamma - 1), gamma)
        assert p == pytest.approx(1.0, rel=1e-14)

    def test_kinetic_energy_removed(self):
        """p = (gamma-1) * (rhoE - 0.5 rhoU²/rho)."""
        p = pressure(2.0, 1.0, 3.0)
        assert p == pytest.approx(0.4 * (3.0 - 0.25))

    def test_vectorized(self):
        """Arrays are handled elementwise."""
        rho = np.array([1.0, 0.125])
        rhoE = np.array([2.5, 0.25])
        p = pressure(rho, np.zeros(2), rhoE)
        np.testing.assert_allclose(p, [1.0, 0.1])

    def test_default_gamma(self):
        assert pressure(1.0, 0.0, 1.0) == pytest.approx(0.4)

    def test_sound_speed(self):
        assert sound_speed(1.0, 1.0) == pytest.approx(np.sqrt(1.4))

    def test_invalid_gamma(self):
        with pytest.raises(ValueError):
            GasProperties(gamma=1.0)


class TestFlowState:
    """Tests for conversions between primitive and conservative variables."""

    def test_from_primitives(self, gas):
        state = FlowState.from_primitives(rho=np.array([2.0]), u=np.array([0.5]),
                                          p=np.array([1.0]), gas=gas)
        assert state.rhoU[0] == pytest.approx(1.0)
        assert state.rhoE[0] == pytest.approx(1.0 / 0.4 + 0.25)
        assert state.u[0] == pytest.approx(0.5)
        assert state.p[0] == pytest.approx(1.0)

    def test_array_conversion(self, gas):
        U = np.array([[1.0, 0.5], [0.1, -0.2], [2.5, 1.0]])
        state = FlowState.from_array(U, gas)
        np.testing.assert_array_equal(state.to_array(), U)

    def test_derived_quantities(self, gas):
        state = FlowState.from_primitives(rho=np.array([1.4]), u=np.array([2.0]),
                                          p=np.array([1.0]), gas=gas)
        assert state.a[0] == pytest.approx(1.0)
        assert state.M[0] == pytest.approx(2.0)
        assert state.e[0] == pytest.approx(1.0 / (1.4 * 0.4))
        assert state.H[0] == pytest.approx(state.E[0] + 1.0 / 1.4)


class TestMesh:

    def test_centered_is_symmetric(self):
        mesh = Mesh1D.centered(4, 0.5)
        np.testing.assert_allclose(mesh.x_cells, [-0.75, -0.25, 0.25, 0.75])
        np.testing.assert_allclose(mesh.dx, 0.5)
        assert mesh.n_cells == 4
        assert mesh.is_uniform

    def test_rejects_bad_faces(self):
        with pytest.raises(ValueError):
            Mesh1D(x_faces=np.array([0.0, 1.0, 0.5]))
        with pytest.raises(ValueError):
            Mesh1D.uniform(0.0, 1.0, 0)


class TestInitialConditions:

    def test_sod_split_at_zero(self, gas):
        """x > 0 takes the high-pressure state; x = 0 belongs to the left."""
        state = sod_initial_state(np.array([-1.0, 0.0, 1.0]), gas)
        np.testing.assert_allclose(state.rho, [0.125, 0.125, 1.0])
        np.testing.assert_allclose(state.rhoU, 0.0)
        np.testing.assert_allclose(state.rhoE, [0.1 / 0.4, 0.1 / 0.4, 1.0 / 0.4])
        np.testing.assert_allclose(state.p, [0.1, 0.1, 1.0])

    def test_general_riemann_problem(self, gas):
        state = riemann_initial_state(np.linspace(-1, 1, 5), (1.0, 0.75, 1.0),
                                      (0.125, 0.0, 0.1), gas, x_split=0.3)
        np.testing.assert_allclose(state.rho, [1.0, 1.0, 1.0, 0.125, 0.125])
        np.testing.assert_allclose(state.u, [0.75, 0.75, 0.75, 0.0, 0.0])

    def test_rejects_non_positive_density(self, gas):
        with pytest.raises(ValueError):
            riemann_initial_state(np.zeros(3), (0.0, 0.0, 1.0), (1.0, 0.0, 1.0), gas)
