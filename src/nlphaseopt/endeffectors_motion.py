from typing import List

import nlphaseopt.params as pars
from nlphaseopt.ee_motion import EEMotion
from nlphaseopt.endeffectors import Endeffectors, EndeffectorsBool, EndeffectorsPos
from nlphaseopt.variable_models.contact_schedule import ContactSchedule


class EndeffectorsMotion:
    """The motions of all endeffectors of a robot, one EEMotion each."""

    def __init__(self, n_ee: int):
        self.ee_motion: Endeffectors[EEMotion] = Endeffectors(n_ee)
        for ee in self.ee_motion.get_ees_ordered():
            self.ee_motion[ee] = EEMotion()

    def get_count(self) -> int:
        return self.ee_motion.get_count()

    def get_ees_ordered(self):
        return self.ee_motion.get_ees_ordered()

    def at(self, ee) -> EEMotion:
        return self.ee_motion.at(ee)

    def set_initial_pos(self, initial_pos: EndeffectorsPos) -> None:
        for ee in self.get_ees_ordered():
            self.at(ee).set_initial_pos(initial_pos.at(ee))

    def get_endeffectors_pos(self, t_global: float) -> EndeffectorsPos:
        pos = EndeffectorsPos(self.get_count())
        for ee in self.get_ees_ordered():
            pos[ee] = self.at(ee).get_state(t_global).p
        return pos

    def get_contact_state(self, t_global: float) -> EndeffectorsBool:
        contact = EndeffectorsBool(self.get_count())
        for ee in self.get_ees_ordered():
            contact[ee] = self.at(ee).is_in_contact(t_global)
        return contact

    def get_total_time(self) -> float:
        return max(self.at(ee).get_total_time() for ee in self.get_ees_ordered())

    def make_contact_schedules(
        self,
        min_duration: float = pars.DEFAULT_MIN_PHASE_DURATION,
        max_duration: float = pars.DEFAULT_MAX_PHASE_DURATION,
    ) -> List[ContactSchedule]:
        return [self.at(ee).make_contact_schedule(ee, min_duration, max_duration) for ee in self.get_ees_ordered()]
