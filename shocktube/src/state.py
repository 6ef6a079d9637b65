"""
Flow state representation using conservative variables.

State is defined by:
    rho   - density
    rhoU  - momentum per volume
    rhoE  - total energy per volume

All quantities are nondimensional.
"""

import numpy as np
from dataclasses import dataclass

from .gas import GasProperties
from . import eos


@dataclass
class FlowState:
    """
    Represents the flow state at a point or cell using conservative variables.

    Conservative variables (stored directly):
        rho  : Density
        rhoU : Momentum per volume
        rhoE : Total energy per volume

    Primitive variables (computed as properties):
        u, p, a, M, E, H, e
    """
    rho: np.ndarray     # Density
    rhoU: np.ndarray    # Momentum per volume
    rhoE: np.ndarray    # Total energy per volume
    gas: GasProperties

    # --- Primitive variables as properties ---

    @property
    def u(self) -> np.ndarray:
        """Velocity."""
        return self.rhoU / self.rho

    @property
    def p(self) -> np.ndarray:
        """Pressure from total energy."""
        return eos.pressure(self.rho, self.rhoU, self.rhoE, self.gas.gamma)

    @property
    def e(self) -> np.ndarray:
        """Specific internal energy."""
        return self.p / (self.rho * self.gas.gm1)

    @property
    def E(self) -> np.ndarray:
        """Total specific energy."""
        return self.rhoE / self.rho

    @property
    def H(self) -> np.ndarray:
        """Total specific enthalpy."""
        return self.E + self.p / self.rho

    @property
    def a(self) -> np.ndarray:
        """Speed of sound."""
        return eos.sound_speed(self.rho, self.p, self.gas.gamma)

    @property
    def M(self) -> np.ndarray:
        """Mach number."""
        return self.u / self.a

    # --- Array conversion methods ---

    def to_array(self) -> np.ndarray:
        """
        Convert to conservative variable array.

        Returns:
            U: Array of shape (3, n_cells) [rho, rhoU, rhoE]
        """
        return np.array([self.rho, self.rhoU, self.rhoE], dtype=float)

    @classmethod
    def from_array(cls, U: np.ndarray, gas: GasProperties) -> 'FlowState':
        """
        Create FlowState from conservative variable array.

        Args:
            U: Conservative variables [rho, rhoU, rhoE]
            gas: Gas properties
        """
        return cls(rho=U[0], rhoU=U[1], rhoE=U[2], gas=gas)

    @classmethod
    def from_primitives(cls, rho: np.ndarray, u: np.ndarray, p: np.ndarray,
                        gas: GasProperties) -> 'FlowState':
        """
        Create FlowState from primitive variables.

        Args:
            rho: Density
            u: Velocity
            p: Pressure
            gas: Gas properties
        """
        rho = np.asarray(rho, dtype=float)
        u = np.asarray(u, dtype=float)
        p = np.asarray(p, dtype=float)
        rhoU = rho * u
        rhoE = eos.total_energy(rho, u, p, gas.gamma)

        return cls(rho=rho, rhoU=rhoU, rhoE=rhoE, gas=gas)
