"""
Shock-Tube Package - 1D Euler Solver
====================================

Re-exports all public components from shocktube.src
"""

from shocktube.src import (
    GasProperties,
    pressure,
    sound_speed,
    FlowState,
    Mesh1D,
    SchemeConfig,
    ConfigJSONEncoder,
    load_config,
    dump_config,
    BoundaryCondition,
    TransmissiveBC,
    PeriodicBC,
    WallBC,
    make_boundary_condition,
    limited_reconstruction,
    reconstruct_faces,
    reconstruct_first_order,
    FluxScheme,
    RoeAveragedFlux,
    euler_flux,
    physical_flux,
    RatioBundle,
    pressure_ratio_stage,
    update_stage,
    two_stage_step,
    HALF_STEP,
    FULL_STEP,
    riemann_initial_state,
    sod_initial_state,
    NonPhysicalStateError,
    check_physical,
    cfl_number,
    conserved_totals,
    Solver1D,
    SolverConfig,
    __version__,
)

__all__ = [
    'GasProperties',
    'pressure',
    'sound_speed',
    'FlowState',
    'Mesh1D',
    'SchemeConfig',
    'ConfigJSONEncoder',
    'load_config',
    'dump_config',
    'BoundaryCondition',
    'TransmissiveBC',
    'PeriodicBC',
    'WallBC',
    'make_boundary_condition',
    'limited_reconstruction',
    'reconstruct_faces',
    'reconstruct_first_order',
    'FluxScheme',
    'RoeAveragedFlux',
    'euler_flux',
    'physical_flux',
    'RatioBundle',
    'pressure_ratio_stage',
    'update_stage',
    'two_stage_step',
    'HALF_STEP',
    'FULL_STEP',
    'riemann_initial_state',
    'sod_initial_state',
    'NonPhysicalStateError',
    'check_physical',
    'cfl_number',
    'conserved_totals',
    'Solver1D',
    'SolverConfig',
]
