from typing import List, NamedTuple, Protocol

import numpy as np


class Bounds(NamedTuple):
    lower: float
    upper: float


class AbstractVariableSet(Protocol):
    """Base interface for all optimization variable sets"""

    @property
    def name(self) -> str: ...

    def get_rows(self) -> int: ...

    def get_values(self) -> np.ndarray: ...

    def set_variables(self, x: np.ndarray) -> None: ...

    def get_bounds(self) -> List[Bounds]: ...
