from nlphaseopt.constraint_models.abstract_constraint import *
from nlphaseopt.endeffectors import EndeffectorsPos
from nlphaseopt.endeffectors_motion import EndeffectorsMotion


class FootholdConstraint(AbstractConstraint):
    """Footholds (xy) at time t must match a nominal stance"""

    def __init__(self, ee_motion: EndeffectorsMotion, nominal_stance: EndeffectorsPos, t: float):
        """
        Args:
            ee_motion: Motion of all endeffectors
            nominal_stance: Desired world position of every endeffector
            t: Global time at which the footholds are constrained (seconds)
        """
        self.ee_motion = ee_motion
        self.desired_ee_pos_W = nominal_stance
        self.t = t
        self.dim = 2  # xy

    @property
    def name(self) -> str:
        return "foothold"

    def get_rows(self) -> int:
        return self.dim * self.ee_motion.get_count()

    def _ee_rows(self, c_id: slice, ee) -> slice:
        start = c_id.start + self.dim * int(ee)
        return slice(start, start + self.dim)

    def compute_constraints(self, c_id, c):
        """Endeffector xy positions at time t"""
        pos = self.ee_motion.get_endeffectors_pos(self.t)
        for ee in self.ee_motion.get_ees_ordered():
            c[self._ee_rows(c_id, ee)] = pos[ee][: self.dim]

    def compute_jacobians(self, c_id, var_ids, jac):
        """Only the phase durations move the footholds at a fixed time"""
        for ee in self.ee_motion.get_ees_ordered():
            motion = self.ee_motion.at(ee)
            schedule = motion.contact_schedule
            if schedule is None or schedule.name not in var_ids:
                continue

            J = motion.get_jacobian_pos_wrt_durations(self.t)
            jac[self._ee_rows(c_id, ee), var_ids[schedule.name]] = J.toarray()[: self.dim, :]

    def get_structure_ids(self, c_id, var_ids, row_ids, col_ids):
        """Dense dependency of every foot on all of its own durations"""
        for ee in self.ee_motion.get_ees_ordered():
            schedule = self.ee_motion.at(ee).contact_schedule
            if schedule is None or schedule.name not in var_ids:
                continue

            extend_ids_lists(row_ids, col_ids, self._ee_rows(c_id, ee), var_ids[schedule.name])

    def get_bounds(self, c_id, clb, cub):
        """Equality with the nominal stance"""
        for ee in self.ee_motion.get_ees_ordered():
            rows = self._ee_rows(c_id, ee)
            clb[rows] = cub[rows] = list(self.desired_ee_pos_W[ee][: self.dim])
