"""
Initial conditions for Riemann (shock-tube) problems.
"""

import numpy as np
from typing import Tuple

from .gas import GasProperties
from .state import FlowState

Primitive = Tuple[float, float, float]

# (rho, u, p); the high-pressure gas sits at x > 0
SOD_LEFT: Primitive = (0.125, 0.0, 0.1)
SOD_RIGHT: Primitive = (1.0, 0.0, 1.0)


def riemann_initial_state(x: np.ndarray, left: Primitive, right: Primitive,
                          gas: GasProperties, x_split: float = 0.0) -> FlowState:
    """
    Two uniform states separated at x_split.

    Cells with x > x_split take the right state, all others the left state.

    Args:
        x: Cell centres
        left, right: Primitive states (rho, u, p)
        gas: Gas properties
        x_split: Location of the initial discontinuity
    """
    x = np.asarray(x, dtype=float)
    if left[0] <= 0 or right[0] <= 0:
        raise ValueError("Initial densities must be positive")
    if left[2] < 0 or right[2] < 0:
        raise ValueError("Initial pressures must be non-negative")

    is_right = x > x_split
    rho = np.where(is_right, right[0], left[0])
    u = np.where(is_right, right[1], left[1])
    p = np.where(is_right, right[2], left[2])

    return FlowState.from_primitives(rho=rho, u=u, p=p, gas=gas)


def sod_initial_state(x: np.ndarray, gas: GasProperties) -> FlowState:
    """
    Sod shock tube split at x = 0.

    x > 0:  (rho, rhoU, rhoE) = (1.0,   0, 1.0 / (gamma - 1))
    x <= 0: (rho, rhoU, rhoE) = (0.125, 0, 0.1 / (gamma - 1))
    """
    return riemann_initial_state(x, SOD_LEFT, SOD_RIGHT, gas, x_split=0.0)
