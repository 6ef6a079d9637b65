"""
Gas properties for a calorically perfect gas.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GasProperties:
    """Thermodynamic properties for a calorically perfect gas (nondimensional)."""
    gamma: float = 1.4          # Ratio of specific heats (diatomic)

    def __post_init__(self):
        if self.gamma <= 1.0:
            raise ValueError(f"gamma must be greater than 1, got {self.gamma}")

    @property
    def gm1(self) -> float:
        """gamma - 1."""
        return self.gamma - 1
