import logging
from typing import List, Tuple

import numpy as np

import nlphaseopt.params as pars
from nlphaseopt.exceptions import ScheduleConfigError

logger = logging.getLogger(__name__)


class PhaseTimeline:
    """Ordered stance/swing phases of one endeffector and their durations."""

    def __init__(self):
        self.is_contact_phase_: List[bool] = []
        self.durations: List[float] = []

    def add_phase(self, is_contact: bool, duration_sec: float) -> None:
        if duration_sec <= 0.0:
            raise ScheduleConfigError(f"Phase duration must be positive, got {duration_sec}")
        self.is_contact_phase_.append(bool(is_contact))
        self.durations.append(float(duration_sec))

    def get_phase_count(self) -> int:
        return len(self.durations)

    def is_contact_phase(self, phase: int) -> bool:
        return self.is_contact_phase_[phase]

    def get_durations(self) -> List[float]:
        return list(self.durations)

    def set_durations(self, durations) -> None:
        if len(durations) != len(self.durations):
            raise ScheduleConfigError(f"Expected {len(self.durations)} phase durations, got {len(durations)}")
        self.durations = [float(d) for d in durations]

    def get_total_time(self) -> float:
        return float(np.sum(self.durations))

    def get_phase_start_times(self) -> List[float]:
        return [0.0] + list(np.cumsum(self.durations)[:-1])

    def get_phase(self, t_global: float) -> Tuple[int, float]:
        """
        Resolve a global time into (phase index, local time in that phase).

        A time on a phase boundary belongs to the later phase, the total time
        itself to the end of the last phase. Times outside [0, total_time] are
        clamped onto the trajectory.
        """
        if not self.durations:
            raise ScheduleConfigError("Timeline has no phases")

        t_total = self.get_total_time()
        if t_global < 0.0 or t_global > t_total:
            logger.debug("Clamping query time %.6g into [0, %.6g]", t_global, t_total)
            t_global = min(max(t_global, 0.0), t_total)

        last = len(self.durations) - 1
        t_start = 0.0
        for phase, duration in enumerate(self.durations):
            t_end = t_start + duration
            if phase == last or t_global < t_end - pars.TIME_EPS:
                t_local = min(max(t_global - t_start, 0.0), duration)
                return phase, t_local
            t_start = t_end
