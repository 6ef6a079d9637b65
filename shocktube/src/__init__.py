"""
1D Euler Shock-Tube Solver Package
==================================

A finite-volume solver for the one-dimensional compressible Euler equations,
set up for Sod-type shock-tube problems.

Features:
- Ideal-gas equation of state (gamma = 1.4)
- Pressure-ratio limited face reconstruction
- Central flux with Roe-averaged spectral-radius dissipation
- Two-stage (half step / full step) explicit time integration
- Transmissive, periodic and wall boundaries

State representation (conservative variables):
    rho   - density
    rhoU  - momentum per volume
    rhoE  - total energy per volume

Example:
    scheme = SchemeConfig()                       # gamma = 1.4, dt = 0.02, dx = 0.5
    mesh = Mesh1D.centered(2000, scheme.dx)
    solver = Solver1D(mesh, scheme, SolverConfig(n_frames=10))
    solver.set_initial_condition(sod_initial_state(mesh.x_cells, scheme.gas))
    solver.solve()
    print(solver.get_state().p)
"""

from .gas import GasProperties
from .eos import pressure, sound_speed
from .state import FlowState
from .mesh import Mesh1D
from .config import SchemeConfig, ConfigJSONEncoder, load_config, dump_config
from .boundary import (BoundaryCondition, TransmissiveBC, PeriodicBC, WallBC,
                       make_boundary_condition)
from .reconstruction import limited_reconstruction, reconstruct_faces, reconstruct_first_order
from .flux import FluxScheme, RoeAveragedFlux, euler_flux, physical_flux
from .timestepping import (RatioBundle, pressure_ratio_stage, update_stage, two_stage_step,
                           HALF_STEP, FULL_STEP)
from .initial import riemann_initial_state, sod_initial_state
from .diagnostics import NonPhysicalStateError, check_physical, cfl_number, conserved_totals
from .solver import Solver1D, SolverConfig

__all__ = [
    # Gas properties and equation of state
    'GasProperties',
    'pressure',
    'sound_speed',

    # Flow state
    'FlowState',

    # Mesh
    'Mesh1D',

    # Configuration
    'SchemeConfig',
    'ConfigJSONEncoder',
    'load_config',
    'dump_config',

    # Boundary conditions
    'BoundaryCondition',
    'TransmissiveBC',
    'PeriodicBC',
    'WallBC',
    'make_boundary_condition',

    # Reconstruction
    'limited_reconstruction',
    'reconstruct_faces',
    'reconstruct_first_order',

    # Flux
    'FluxScheme',
    'RoeAveragedFlux',
    'euler_flux',
    'physical_flux',

    # Stages
    'RatioBundle',
    'pressure_ratio_stage',
    'update_stage',
    'two_stage_step',
    'HALF_STEP',
    'FULL_STEP',

    # Initial conditions
    'riemann_initial_state',
    'sod_initial_state',

    # Diagnostics
    'NonPhysicalStateError',
    'check_physical',
    'cfl_number',
    'conserved_totals',

    # Solver
    'Solver1D',
    'SolverConfig',
]

__version__ = '1.0.0'
