"""
Time-stepping driver for the 1D shock-tube solver.
"""

import logging

import numpy as np
import matplotlib.pyplot as plt
from dataclasses import dataclass
from typing import Dict, Optional

from .config import SchemeConfig
from .state import FlowState
from .mesh import Mesh1D
from .flux import FluxScheme, RoeAveragedFlux
from .boundary import BoundaryCondition, BOUNDARY_CONDITIONS, make_boundary_condition
from .timestepping import two_stage_step
from .diagnostics import check_physical, cfl_number

logger = logging.getLogger(__name__)


@dataclass
class SolverConfig:
    """Configuration for the time-stepping driver."""
    n_steps_per_frame: int = 50
    n_frames: int = 1
    boundary: str = 'transmissive'  # Options: 'transmissive', 'periodic', 'wall'
    use_first_order: bool = False  # Use first-order reconstruction for stability
    check_physical: bool = True  # Raise NonPhysicalStateError after a bad step
    log_interval: int = 10  # Frames between progress messages
    record_history: bool = True  # Keep a density/pressure snapshot per frame

    def __post_init__(self):
        if self.boundary not in BOUNDARY_CONDITIONS:
            raise ValueError(f"Unknown boundary condition: {self.boundary}. "
                             f"Options: {', '.join(repr(k) for k in BOUNDARY_CONDITIONS)}")
        if self.n_steps_per_frame < 1:
            raise ValueError(f"n_steps_per_frame must be positive, got {self.n_steps_per_frame}")
        if self.n_frames < 0:
            raise ValueError(f"n_frames must be non-negative, got {self.n_frames}")
        if self.log_interval < 1:
            raise ValueError(f"log_interval must be positive, got {self.log_interval}")


class Solver1D:
    """
    1D Euler shock-tube solver.

    Features:
    - Pressure-ratio limited reconstruction
    - Central flux with Roe-averaged spectral-radius dissipation
    - Two-stage (half step / full step) explicit time integration
    - Fixed dt and dx taken from SchemeConfig
    """

    def __init__(self, mesh: Mesh1D, scheme: SchemeConfig = None,
                 config: SolverConfig = None, flux_scheme: FluxScheme = None):
        """
        Initialize the solver.

        Args:
            mesh: Computational mesh (uniform, cell width scheme.dx)
            scheme: Scheme constants
            config: Driver configuration
            flux_scheme: Numerical flux (RoeAveragedFlux by default)
        """
        self.mesh = mesh
        self.scheme = scheme if scheme is not None else SchemeConfig()
        self.config = config if config is not None else SolverConfig()
        self.flux_scheme = flux_scheme if flux_scheme is not None else RoeAveragedFlux()

        if not mesh.is_uniform or not np.isclose(mesh.dx[0], self.scheme.dx):
            raise ValueError(f"Mesh spacing must be uniform and equal to dx = {self.scheme.dx}")

        # Boundary conditions from the config; may be replaced before solving
        self.bc_left = make_boundary_condition(self.config.boundary)
        self.bc_right = make_boundary_condition(self.config.boundary)

        # Solution storage
        self.U = None
        self.time = 0.0
        self.iteration = 0
        self.history = {'time': [], 'rho': [], 'p': []}

    @property
    def gas(self):
        return self.scheme.gas

    def set_initial_condition(self, state: FlowState):
        """Set the initial flow state."""
        U = state.to_array()
        if U.shape != (3, self.mesh.n_cells):
            raise ValueError(f"Initial state has shape {U.shape}, "
                             f"expected (3, {self.mesh.n_cells})")
        self.U = U
        self.time = 0.0
        self.iteration = 0
        self.history = {'time': [], 'rho': [], 'p': []}

    def set_boundary_conditions(self, bc_left: BoundaryCondition,
                                bc_right: BoundaryCondition):
        """Set boundary conditions."""
        self.bc_left = bc_left
        self.bc_right = bc_right

    def get_state(self) -> FlowState:
        """Get current flow state."""
        return FlowState.from_array(self.U, self.gas)

    def step(self) -> float:
        """
        Perform one two-stage time step.

        Returns:
            dt: Time step taken
        """
        if self.U is None:
            raise ValueError("Initial condition must be set before stepping")

        self.U = two_stage_step(self.U, self.scheme, self.bc_left, self.bc_right,
                                self.flux_scheme, self.config.use_first_order)

        self.time += self.scheme.dt
        self.iteration += 1

        if self.config.check_physical:
            check_physical(self.U, self.gas, step=self.iteration)

        return self.scheme.dt

    def run(self, n_steps: int):
        """Perform n_steps time steps."""
        for _ in range(n_steps):
            self.step()

    def record_frame(self):
        """Store a density/pressure snapshot of the current state."""
        state = self.get_state()
        self.history['time'].append(self.time)
        self.history['rho'].append(state.rho.copy())
        self.history['p'].append(state.p)

    def history_arrays(self) -> Dict[str, np.ndarray]:
        """Recorded frames as arrays of shape (n_frames,) and (n_frames, n_cells)."""
        return {key: np.array(values) for key, values in self.history.items()}

    def check_cfl(self) -> float:
        """Return the Courant number, logging a warning when it exceeds 1."""
        cfl = cfl_number(self.U, self.scheme)
        if cfl > 1.0:
            logger.warning("CFL number %.3f exceeds 1 (dt = %g, dx = %g); "
                           "the explicit update is likely unstable",
                           cfl, self.scheme.dt, self.scheme.dx)
        return cfl

    def solve(self, n_frames: Optional[int] = None) -> Dict:
        """
        Run n_frames frames of config.n_steps_per_frame time steps each.

        Args:
            n_frames: Number of frames (config.n_frames if omitted)

        Returns:
            Dictionary with run info
        """
        if self.bc_left is None or self.bc_right is None:
            raise ValueError("Boundary conditions must be set before solving")

        if self.U is None:
            raise ValueError("Initial condition must be set before solving")

        if n_frames is None:
            n_frames = self.config.n_frames

        logger.info("Starting 1D shock-tube solver")
        logger.info("Cells: %d, dt: %g, dx: %g, gamma: %g",
                    self.mesh.n_cells, self.scheme.dt, self.scheme.dx, self.scheme.gamma)
        logger.info("Frames: %d x %d steps, boundary: %s",
                    n_frames, self.config.n_steps_per_frame, self.config.boundary)

        cfl = self.check_cfl()
        if self.config.record_history and not self.history['time']:
            self.record_frame()

        for frame in range(1, n_frames + 1):
            self.run(self.config.n_steps_per_frame)

            if self.config.record_history:
                self.record_frame()

            if frame % self.config.log_interval == 0:
                cfl = self.check_cfl()
                state = self.get_state()
                logger.info("Frame %5d, iter %7d, t = %.4f, rho = [%.4f, %.4f], "
                            "p_min = %.4f, CFL = %.3f",
                            frame, self.iteration, self.time, np.min(state.rho),
                            np.max(state.rho), np.min(state.p), cfl)

        state = self.get_state()
        return {
            'frames': n_frames,
            'iterations': self.iteration,
            'time': self.time,
            'min_density': float(np.min(state.rho)),
            'min_pressure': float(np.min(state.p)),
            'cfl': self.check_cfl(),
        }

    def plot_solution(self, filename: str = None):
        """Plot the current solution and, if frames were recorded, the density history."""
        state = self.get_state()
        x = self.mesh.x_cells
        has_history = len(self.history['time']) > 1

        fig, axes = plt.subplots(2 if has_history else 1, 3,
                                 figsize=(15, 8 if has_history else 4), squeeze=False)
        fig.suptitle(f'Shock tube (t = {self.time:.3f}, iter = {self.iteration})')

        for ax, values, label, style in zip(axes[0], (state.rho, state.u, state.p),
                                            ('Density', 'Velocity', 'Pressure'),
                                            ('b-', 'r-', 'g-')):
            ax.plot(x, values, style, linewidth=1.5)
            ax.set_xlabel('x')
            ax.set_ylabel(label)
            ax.set_title(label)
            ax.grid(True, alpha=0.3)

        if has_history:
            frames = self.history_arrays()
            gs = axes[1, 0].get_gridspec()
            for ax in axes[1]:
                ax.remove()
            ax_xt = fig.add_subplot(gs[1, :])
            image = ax_xt.imshow(frames['rho'], aspect='auto', origin='lower', cmap='viridis',
                                 extent=(self.mesh.x_faces[0], self.mesh.x_faces[-1],
                                         frames['time'][0], frames['time'][-1]))
            ax_xt.set_xlabel('x')
            ax_xt.set_ylabel('t')
            ax_xt.set_title('Density history')
            fig.colorbar(image, ax=ax_xt)

        plt.tight_layout()

        if filename:
            fig.savefig(filename, dpi=150, bbox_inches='tight')
            logger.info("Saved plot to %s", filename)
        else:
            plt.show()

        return fig
