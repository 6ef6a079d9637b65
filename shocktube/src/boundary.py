"""
Boundary conditions for the 1D shock-tube solver.

Every stage reads its neighbours through one layer of ghost cells on each
side. A boundary condition fills those ghost cells, both for the conserved
state and for the per-cell smoothness ratio consumed by the reconstruction.
"""

import numpy as np
from abc import ABC, abstractmethod

N_GHOST = 1


class BoundaryCondition(ABC):
    """Abstract base class for boundary conditions."""

    @abstractmethod
    def apply(self, U: np.ndarray, side: str) -> np.ndarray:
        """
        Apply boundary condition to ghost cells.

        Args:
            U: Conservative variables including ghost cells (3, n_cells + 2)
            side: 'left' or 'right'

        Returns:
            Modified U with ghost cells set
        """
        pass

    @abstractmethod
    def apply_ratio(self, r: np.ndarray, side: str) -> np.ndarray:
        """
        Apply boundary condition to the ghost entries of a ratio field.

        Args:
            r: Smoothness ratio including ghost cells (n_cells + 2,)
            side: 'left' or 'right'

        Returns:
            Modified r with ghost entries set
        """
        pass


class TransmissiveBC(BoundaryCondition):
    """
    Zero-gradient (clamped index) boundary: the ghost cell repeats the
    edge cell. Waves leave the domain with little reflection.
    """

    def apply(self, U: np.ndarray, side: str) -> np.ndarray:
        if side == 'left':
            U[:, 0] = U[:, 1]
        elif side == 'right':
            U[:, -1] = U[:, -2]
        return U

    def apply_ratio(self, r: np.ndarray, side: str) -> np.ndarray:
        if side == 'left':
            r[0] = r[1]
        elif side == 'right':
            r[-1] = r[-2]
        return r


class PeriodicBC(BoundaryCondition):
    """
    Periodic boundary: the domain wraps around. Must be used on both sides.
    """

    def apply(self, U: np.ndarray, side: str) -> np.ndarray:
        if side == 'left':
            U[:, 0] = U[:, -2]
        elif side == 'right':
            U[:, -1] = U[:, 1]
        return U

    def apply_ratio(self, r: np.ndarray, side: str) -> np.ndarray:
        if side == 'left':
            r[0] = r[-2]
        elif side == 'right':
            r[-1] = r[1]
        return r


class WallBC(BoundaryCondition):
    """
    Inviscid wall (slip): zero normal velocity.
    Reflects the velocity component.

    The mirrored cell sees the pressure gradients in reverse order, so its
    ratio is the reciprocal of the edge cell's. With that choice the face
    states on both sides of the wall mirror each other exactly and no mass
    or energy crosses the wall.
    """

    def apply(self, U: np.ndarray, side: str) -> np.ndarray:
        if side == 'left':
            U[:, 0] = U[:, 1]
            U[1, 0] = -U[1, 1]  # Reflect momentum
        elif side == 'right':
            U[:, -1] = U[:, -2]
            U[1, -1] = -U[1, -2]  # Reflect momentum
        return U

    def apply_ratio(self, r: np.ndarray, side: str) -> np.ndarray:
        with np.errstate(divide='ignore', invalid='ignore'):
            if side == 'left':
                r[0] = 1.0 / r[1]
            elif side == 'right':
                r[-1] = 1.0 / r[-2]
        return r


BOUNDARY_CONDITIONS = {
    'transmissive': TransmissiveBC,
    'clamped': TransmissiveBC,
    'periodic': PeriodicBC,
    'wall': WallBC,
}


def make_boundary_condition(name: str) -> BoundaryCondition:
    """Build a boundary condition from its name."""
    try:
        return BOUNDARY_CONDITIONS[name]()
    except KeyError:
        raise ValueError(f"Unknown boundary condition: {name}. "
                         f"Options: {', '.join(repr(k) for k in BOUNDARY_CONDITIONS)}") from None


def add_ghosts(U: np.ndarray, bc_left: BoundaryCondition,
               bc_right: BoundaryCondition) -> np.ndarray:
    """Copy interior state into a new array with one ghost cell per side, then fill the ghosts."""
    n_vars, n_cells = U.shape
    U_ghost = np.empty((n_vars, n_cells + 2 * N_GHOST))
    U_ghost[:, N_GHOST:-N_GHOST] = U
    bc_left.apply(U_ghost, 'left')
    bc_right.apply(U_ghost, 'right')
    return U_ghost


def add_ratio_ghosts(r: np.ndarray, bc_left: BoundaryCondition,
                     bc_right: BoundaryCondition) -> np.ndarray:
    """Ratio counterpart of add_ghosts."""
    r_ghost = np.empty(len(r) + 2 * N_GHOST)
    r_ghost[N_GHOST:-N_GHOST] = r
    bc_left.apply_ratio(r_ghost, 'left')
    bc_right.apply_ratio(r_ghost, 'right')
    return r_ghost
