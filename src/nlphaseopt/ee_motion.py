from typing import List, Optional, Tuple

import numpy as np
import scipy.sparse as sp

import nlphaseopt.params as pars
from nlphaseopt.ee_swing_motion import EESwingMotion
from nlphaseopt.endeffectors import EndeffectorID
from nlphaseopt.exceptions import ScheduleConfigError
from nlphaseopt.phase_timeline import PhaseTimeline
from nlphaseopt.state import StateLin3d
from nlphaseopt.variable_models.contact_schedule import ContactSchedule


class EEMotion:
    """
    Motion of one(!) endeffector stepping multiple times.

    Every phase owns a motion model. Stance phases keep the foot at the
    current contact position, each swing phase moves it to a new contact.
    """

    def __init__(self):
        self.contacts: List[np.ndarray] = [np.zeros(3)]
        self.timeline = PhaseTimeline()
        self.lift_heights: List[float] = []
        self.phase_motion: List[EESwingMotion] = []

        self.contact_schedule: Optional[ContactSchedule] = None

    def set_initial_pos(self, pos) -> None:
        self.contacts[0] = np.asarray(pos, dtype=float).copy()
        self._update_phase_motions()

    def add_stance_phase(self, duration: float) -> None:
        self._add_phase(duration, is_contact=True, lift_height=0.0)

    def add_swing_phase(self, duration: float, goal, lift_height: float = pars.DEFAULT_LIFT_HEIGHT) -> None:
        self.contacts.append(np.asarray(goal, dtype=float).copy())
        self._add_phase(duration, is_contact=False, lift_height=lift_height)

    def _add_phase(self, duration: float, is_contact: bool, lift_height: float) -> None:
        if self.contact_schedule is not None:
            raise ScheduleConfigError("Phases cannot be added once a contact schedule drives this motion")
        self.timeline.add_phase(is_contact, duration)
        self.lift_heights.append(lift_height)
        self.phase_motion.append(EESwingMotion())
        self._update_phase_motions()

    def set_contact_position(self, foothold: int, pos) -> None:
        """Landing position of the swing phase with index foothold (0-based)."""
        if not 0 <= foothold < len(self.contacts) - 1:
            raise ScheduleConfigError(f"No swing phase with index {foothold}, motion has {len(self.contacts) - 1}")
        self.contacts[foothold + 1] = np.asarray(pos, dtype=float).copy()
        self._update_phase_motions()

    def _update_phase_motions(self) -> None:
        contact = 0
        durations = self.timeline.get_durations()
        for phase, motion in enumerate(self.phase_motion):
            start = self.contacts[contact]
            if not self.timeline.is_contact_phase(phase):
                contact += 1
            motion.init(durations[phase], self.lift_heights[phase], start, self.contacts[contact])

    # contact schedule observer
    def set_contact_schedule(self, schedule: ContactSchedule) -> None:
        if len(schedule.get_durations()) != self.timeline.get_phase_count():
            raise ScheduleConfigError(
                f"{schedule.name} has {len(schedule.get_durations())} phases, motion has {self.timeline.get_phase_count()}"
            )
        self.contact_schedule = schedule
        schedule.add_observer(self)
        self.update_phase_durations()

    def make_contact_schedule(
        self,
        ee: EndeffectorID,
        min_duration: float = pars.DEFAULT_MIN_PHASE_DURATION,
        max_duration: float = pars.DEFAULT_MAX_PHASE_DURATION,
    ) -> ContactSchedule:
        """Contact schedule initialized with the current timings, driving this motion."""
        schedule = ContactSchedule(ee, self.timeline.get_durations(), min_duration, max_duration)
        self.set_contact_schedule(schedule)
        return schedule

    def update_phase_durations(self) -> None:
        durations = self.contact_schedule.get_durations()
        self.timeline.set_durations(durations)
        for motion, duration in zip(self.phase_motion, durations):
            motion.set_duration(duration)

    def get_phase(self, t_global: float) -> Tuple[int, float]:
        return self.timeline.get_phase(t_global)

    def get_state(self, t_global: float) -> StateLin3d:
        phase, t_local = self.get_phase(t_global)
        return self.phase_motion[phase].get_state(t_local)

    def is_in_contact(self, t_global: float) -> bool:
        phase, _ = self.get_phase(t_global)
        return self.timeline.is_contact_phase(phase)

    def get_contact_positions(self) -> List[np.ndarray]:
        return [c.copy() for c in self.contacts]

    def get_free_contact_positions(self) -> List[np.ndarray]:
        """Those not fixed by the start stance"""
        return [c.copy() for c in self.contacts[1:]]

    def get_total_time(self) -> float:
        return self.timeline.get_total_time()

    def get_timings(self) -> List[float]:
        return self.timeline.get_durations()

    def get_jacobian_pos_wrt_durations(self, t_global: float) -> sp.csr_matrix:
        """Sensitivity of the position at t_global to every duration variable of the schedule"""
        if self.contact_schedule is None:
            raise ScheduleConfigError("Motion is not driven by a contact schedule")
        phase, t_local = self.get_phase(t_global)
        motion = self.phase_motion[phase]
        dx_dT = motion.get_derivative_of_pos_wrt_duration(t_local)
        xd = motion.get_state(t_local).v
        return self.contact_schedule.get_jacobian_of_pos(phase, dx_dT, xd)
