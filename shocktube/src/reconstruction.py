"""
Limited face reconstruction for 2nd order accuracy.

The slope limiter is driven by one scalar per cell, the pressure-gradient
smoothness ratio r, shared by all three conserved components.
"""

import numpy as np
from typing import Tuple


def limited_reconstruction(w, w_nbr, r):
    """
    Reconstruct a face value from a cell value towards its neighbour.

    For finite r > 0:
        w_face = w + 0.5 * (w_nbr - w) * min(r, 1)
    so the face value never passes the midpoint between w and w_nbr.
    Otherwise (r <= 0, inf or nan, i.e. a local extremum or a flat
    neighbourhood) the face value is exactly w.

    Args:
        w: Cell value(s), scalar or array (n_vars, n_faces)
        w_nbr: Neighbour value(s), same shape as w
        r: Smoothness ratio, scalar or (n_faces,), broadcast over variables

    Returns:
        Face value(s) with the shape of w
    """
    w = np.asarray(w, dtype=float)
    w_nbr = np.asarray(w_nbr, dtype=float)
    r = np.asarray(r, dtype=float)

    with np.errstate(invalid='ignore'):
        use_slope = np.isfinite(r) & (r > 0)
    limiter = np.minimum(np.where(use_slope, r, 0.0), 1.0)

    w_face = np.where(use_slope, w + 0.5 * (w_nbr - w) * limiter, w)
    return w_face[()]


def reconstruct_faces(U: np.ndarray, r: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Limited reconstruction of the left and right states at every face.

    Face i lies between padded cells i and i + 1. The left state comes from
    the left cell using its own ratio; the right state comes from the right
    cell using the reciprocal of its ratio, because the ratio is defined as
    gradient ahead over gradient behind and is read from the opposite side.

    Args:
        U: Conservative variables with ghost cells (n_vars, n_cells + 2)
        r: Smoothness ratio with ghost cells (n_cells + 2,)

    Returns:
        UL: Left states at each face (n_vars, n_faces)
        UR: Right states at each face (n_vars, n_faces)
    """
    U_left_cell, U_right_cell = U[:, :-1], U[:, 1:]

    with np.errstate(divide='ignore', invalid='ignore'):
        r_inv = 1.0 / r[1:]

    UL = limited_reconstruction(U_left_cell, U_right_cell, r[:-1])
    UR = limited_reconstruction(U_right_cell, U_left_cell, r_inv)

    return UL, UR


def reconstruct_first_order(U: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    First-order reconstruction (piecewise constant) - most stable.

    Simply uses cell-centered values at faces (no slope reconstruction).

    Args:
        U: Conservative variables with ghost cells (n_vars, n_cells + 2)

    Returns:
        UL: Left states at each face (n_vars, n_faces)
        UR: Right states at each face (n_vars, n_faces)
    """
    return U[:, :-1].copy(), U[:, 1:].copy()
