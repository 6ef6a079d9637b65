"""
Test cases for the 1D shock-tube solver.
"""

from .shock_tube import run_shock_tube_test, riemann_exact, star_region

__all__ = [
    'run_shock_tube_test',
    'riemann_exact',
    'star_region',
]
