import numpy as np

import nlphaseopt.params as pars
from nlphaseopt.state import StateLin3d

Z_AXIS = np.array([0.0, 0.0, 1.0])


class EESwingMotion:
    """
    Motion of one endeffector from a start to a goal position in a given time.

    All axes follow the cubic blend s(tau) = 3 tau^2 - 2 tau^3 with
    tau = t_local / T, the z-axis additionally lifts the foot by
    16 h tau^2 (1 - tau)^2, which peaks at h in the middle of the phase.
    Velocity is zero at both ends. With equal start and goal and no lift
    height the motion is a constant position (stance).
    """

    def __init__(self, duration: float = 1.0, lift_height: float = pars.DEFAULT_LIFT_HEIGHT, start=None, goal=None):
        self.start = np.zeros(3) if start is None else np.asarray(start, dtype=float).copy()
        self.goal = self.start.copy() if goal is None else np.asarray(goal, dtype=float).copy()
        self.lift_height = lift_height
        self.duration = duration

    def init(self, duration: float, lift_height: float, start, goal) -> None:
        self.start = np.asarray(start, dtype=float).copy()
        self.goal = np.asarray(goal, dtype=float).copy()
        self.lift_height = lift_height
        self.duration = duration

    def set_duration(self, duration: float) -> None:
        self.duration = duration

    def _tau(self, t_local: float) -> float:
        return float(np.clip(t_local / self.duration, 0.0, 1.0))

    def get_state(self, t_local: float) -> StateLin3d:
        T = self.duration
        tau = self._tau(t_local)
        delta = self.goal - self.start

        s = 3.0 * tau**2 - 2.0 * tau**3
        ds = 6.0 * tau - 6.0 * tau**2
        dds = 6.0 - 12.0 * tau

        h = 16.0 * self.lift_height
        bump = h * (tau**2 - 2.0 * tau**3 + tau**4)
        dbump = h * (2.0 * tau - 6.0 * tau**2 + 4.0 * tau**3)
        ddbump = h * (2.0 - 12.0 * tau + 12.0 * tau**2)

        state = StateLin3d()
        state.p = self.start + delta * s + Z_AXIS * bump
        state.v = (delta * ds + Z_AXIS * dbump) / T
        state.a = (delta * dds + Z_AXIS * ddbump) / T**2
        return state

    def get_derivative_of_pos_wrt_duration(self, t_local: float) -> np.ndarray:
        """
        dp/dT at fixed local time.

        p depends on T only through tau = t_local / T, so
        dp/dT = dp/dtau * (-t_local / T^2) = -tau * v.
        """
        return -self._tau(t_local) * self.get_state(t_local).v
