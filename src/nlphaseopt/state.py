from dataclasses import dataclass, field

import numpy as np


def _zero3() -> np.ndarray:
    return np.zeros(3)


@dataclass
class StateLin3d:
    """Position, velocity and acceleration of a point in 3D"""

    p: np.ndarray = field(default_factory=_zero3)
    v: np.ndarray = field(default_factory=_zero3)
    a: np.ndarray = field(default_factory=_zero3)
