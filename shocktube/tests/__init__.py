"""
Test cases for the 1D shock-tube solver.

Run tests with pytest:
    pytest shocktube/tests/ -v

Or run individual test files:
    pytest shocktube/tests/test_shock_tube.py -v
"""
