"""
Scheme constants and their JSON representation.

The constants (gamma, dt, dx) are held in one immutable value that is
threaded into every stage call.
"""

import dataclasses
import json
from pathlib import Path
from typing import Union

import numpy as np

from .gas import GasProperties


class ConfigJSONEncoder(json.JSONEncoder):
    """JSON encoder that understands dataclasses and numpy scalars/arrays."""

    def default(self, o):
        if dataclasses.is_dataclass(o):
            return dataclasses.asdict(o)
        if isinstance(o, np.generic):
            return o.item()
        if isinstance(o, np.ndarray):
            return o.tolist()
        return super().default(o)


@dataclasses.dataclass(frozen=True)
class SchemeConfig:
    """Fixed constants of the finite-volume scheme."""
    gas: GasProperties = dataclasses.field(default_factory=GasProperties)
    dt: float = 0.02            # Time step
    dx: float = 0.5             # Cell width

    def __post_init__(self):
        if isinstance(self.gas, dict):
            # frozen dataclass, so bypass __setattr__
            object.__setattr__(self, 'gas', GasProperties(**self.gas))
        if self.dt <= 0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if self.dx <= 0:
            raise ValueError(f"dx must be positive, got {self.dx}")

    @property
    def gamma(self) -> float:
        return self.gas.gamma

    @property
    def dt_over_dx(self) -> float:
        return self.dt / self.dx


def load_config(path: Union[str, Path], cls=SchemeConfig):
    """Load a config dataclass from a JSON file. Unknown keys raise TypeError."""
    with open(path) as f:
        data = json.load(f)
    return cls(**data)


def dump_config(config, path: Union[str, Path]):
    """Write a config dataclass to a JSON file."""
    with open(path, 'w') as f:
        json.dump(config, f, cls=ConfigJSONEncoder, indent=2)
