"""
Uniform 1D cell-centred mesh.
"""

import numpy as np
from dataclasses import dataclass


@dataclass
class Mesh1D:
    """
    Cell-centred finite volume mesh:
    - x_faces: Face locations (n_cells + 1)
    - x_cells: Cell centers (n_cells)
    - dx: Cell widths (n_cells)
    """
    x_faces: np.ndarray

    def __post_init__(self):
        self.x_faces = np.asarray(self.x_faces, dtype=float)
        if self.x_faces.ndim != 1 or len(self.x_faces) < 2:
            raise ValueError("Mesh1D needs at least two face locations")
        self.n_cells = len(self.x_faces) - 1
        self.x_cells = 0.5 * (self.x_faces[:-1] + self.x_faces[1:])
        self.dx = self.x_faces[1:] - self.x_faces[:-1]
        if np.any(self.dx <= 0):
            raise ValueError("Face locations must be strictly increasing")

    @property
    def is_uniform(self) -> bool:
        return bool(np.allclose(self.dx, self.dx[0]))

    @classmethod
    def uniform(cls, x_min: float, x_max: float, n_cells: int) -> 'Mesh1D':
        """
        Create a uniform mesh.

        Args:
            x_min, x_max: Domain bounds
            n_cells: Number of cells
        """
        if n_cells < 1:
            raise ValueError(f"n_cells must be positive, got {n_cells}")
        return cls(x_faces=np.linspace(x_min, x_max, n_cells + 1))

    @classmethod
    def centered(cls, n_cells: int, dx: float) -> 'Mesh1D':
        """
        Uniform mesh of n_cells cells of width dx, symmetric about x = 0.

        Cell i has its centre at (i - (n_cells - 1) / 2) * dx.
        """
        half_width = 0.5 * n_cells * dx
        return cls.uniform(-half_width, half_width, n_cells)
