import numpy as np

from typing import Dict, List, Protocol
from itertools import product


def extend_ids_lists(row_ids, col_ids, slice_rows, slice_cols):
    row_indices = range(*slice_rows.indices(10**6))
    col_indices = range(*slice_cols.indices(10**6))

    for r, c in product(row_indices, col_indices):
        row_ids.extend([r])
        col_ids.extend([c])


class AbstractConstraint(Protocol):
    """Base interface for all constraint types"""

    @property
    def name(self) -> str: ...

    def get_rows(self) -> int: ...

    def compute_constraints(
        self,
        c_id: slice,
        constraint_values: np.ndarray,
    ) -> None: ...

    def compute_jacobians(
        self,
        c_id: slice,
        var_ids: Dict[str, slice],
        jacobian: np.ndarray,
    ) -> None: ...

    def get_structure_ids(
        self,
        c_id: slice,
        var_ids: Dict[str, slice],
        row_ids: List[int],
        col_ids: List[int],
    ) -> None: ...

    def get_bounds(
        self,
        c_id: slice,
        clb: List[float],
        cub: List[float],
    ) -> None: ...
