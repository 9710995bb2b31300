import logging
from typing import List, Protocol

import numpy as np
import scipy.sparse as sp

import nlphaseopt.params as pars

from nlphaseopt.endeffectors import EndeffectorID
from nlphaseopt.exceptions import InfeasibleDurationError, ScheduleConfigError
from nlphaseopt.variable_models.abstract_variable import Bounds

logger = logging.getLogger(__name__)


class ContactScheduleObserver(Protocol):
    """Anything caching phase boundaries that must be refreshed when durations change"""

    def update_phase_durations(self) -> None: ...


class ContactSchedule:
    """
    Phase durations of one endeffector as optimization variables.

    Only the first n-1 durations are variables. The last one follows from the
    total time, which is fixed by the initial timings:
        T_last = t_total - sum(T_0 .. T_n-2)
    """

    def __init__(self, ee: EndeffectorID, timings, min_duration: float, max_duration: float):
        """
        Args:
            ee: Endeffector these phases belong to
            timings: Initial duration of every phase (seconds)
            min_duration: Lower bound of every optimized phase duration
            max_duration: Upper bound of every optimized phase duration
        """
        timings = [float(t) for t in timings]
        if not timings:
            raise ScheduleConfigError(f"Contact schedule of {ee!s} needs at least one phase")
        if any(t <= 0.0 for t in timings):
            raise ScheduleConfigError(f"Phase durations of {ee!s} must be positive, got {timings}")
        if min_duration <= 0.0 or max_duration <= 0.0:
            raise ScheduleConfigError(f"Phase duration bounds must be positive, got [{min_duration}, {max_duration}]")
        if min_duration > max_duration:
            raise ScheduleConfigError(f"Empty phase duration bounds [{min_duration}, {max_duration}]")

        self.ee = EndeffectorID(ee)
        self.durations = timings
        self.t_total = float(np.sum(timings))
        self.phase_duration_bounds = Bounds(min_duration, max_duration)

        self.observers: List[ContactScheduleObserver] = []

    @property
    def name(self) -> str:
        return f"ee-schedule_{self.ee.name}"

    def get_rows(self) -> int:
        # last phase duration is not optimized over, it comes from the total time
        return len(self.durations) - 1

    def add_observer(self, o: ContactScheduleObserver) -> None:
        self.observers.append(o)

    def update_observers(self) -> None:
        for observer in self.observers:
            observer.update_phase_durations()

    def get_values(self) -> np.ndarray:
        return np.array(self.durations[: self.get_rows()])

    def set_variables(self, x) -> None:
        x = np.asarray(x, dtype=float).reshape(-1)
        if x.shape[0] != self.get_rows():
            raise ScheduleConfigError(f"{self.name} has {self.get_rows()} variables, got {x.shape[0]}")

        last_duration = self.t_total - float(np.sum(x))
        if last_duration <= pars.TIME_EPS:
            raise InfeasibleDurationError(self.ee, last_duration, self.t_total)

        self.durations = [float(v) for v in x] + [last_duration]
        logger.debug("%s durations: %s", self.name, self.durations)
        self.update_observers()

    def get_bounds(self) -> List[Bounds]:
        return [self.phase_duration_bounds] * self.get_rows()

    def get_durations(self) -> List[float]:
        return list(self.durations)

    def get_total_time(self) -> float:
        return self.t_total

    def get_jacobian_of_pos(self, current_phase: int, dx_dT, xd) -> sp.csr_matrix:
        """
        Jacobian of a position-like quantity w.r.t. all duration variables.

        Args:
            current_phase: Phase the queried time falls into
            dx_dT: Derivative of the position w.r.t. the duration of current_phase
            xd: Velocity at the queried time

        Every entry is stored, zeros included: a value that is zero now can
        become nonzero once the query time moves into another phase, and the
        solver needs a fixed sparsity pattern.
        """
        dx_dT = np.asarray(dx_dT, dtype=float).reshape(-1)
        xd = np.asarray(xd, dtype=float).reshape(-1)
        n_dim = xd.shape[0]
        jac = np.zeros((n_dim, self.get_rows()))

        in_last_phase = current_phase == len(self.durations) - 1

        # duration of current phase expands and compresses the motion
        if not in_last_phase:
            jac[:, current_phase] = dx_dT

        for phase in range(current_phase):
            # each previous duration shifts the motion along the time axis
            jac[:, phase] = -xd

            # as the total time is fixed, in the last phase a previous duration
            # also compresses/expands the last phase itself
            if in_last_phase:
                jac[:, phase] -= dx_dT

        n_cols = jac.shape[1]
        indices = np.tile(np.arange(n_cols), n_dim)
        indptr = np.arange(0, n_dim * n_cols + 1, n_cols) if n_cols else np.zeros(n_dim + 1, dtype=int)
        return sp.csr_matrix((jac.ravel(), indices, indptr), shape=jac.shape)

    def get_structure_ids(self, n_dim: int, row_offset: int, col_offset: int, row_ids: List[int], col_ids: List[int]) -> None:
        """Dense block pattern of get_jacobian_of_pos placed at (row_offset, col_offset)"""
        for r in range(n_dim):
            for c in range(self.get_rows()):
                row_ids.append(row_offset + r)
                col_ids.append(col_offset + c)
