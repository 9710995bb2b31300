import logging

import numpy as np

from nlphaseopt.trajectory_optimization import PhaseTrajOpt
from nlphaseopt.endeffectors import EndeffectorID, EndeffectorsPos, QUAD_MAP, QuadFootID, reverse
from nlphaseopt.endeffectors_motion import EndeffectorsMotion
from nlphaseopt.constraint_models import FootholdConstraint
from nlphaseopt.cost_models import PhaseDurationCost

logging.basicConfig(level=logging.INFO)

STEP = 0.15
T_STANCE = 0.3
T_SWING = 0.3
N_STEPS = 3

ee_of = reverse(QUAD_MAP)

nominal_stance = {
    QuadFootID.LF: np.array([0.19, 0.13, 0.0]),
    QuadFootID.RF: np.array([0.19, -0.13, 0.0]),
    QuadFootID.LH: np.array([-0.19, 0.13, 0.0]),
    QuadFootID.RH: np.array([-0.19, -0.13, 0.0]),
}

ee_motion = EndeffectorsMotion(4)
start = EndeffectorsPos(4)
for foot, pos in nominal_stance.items():
    start[ee_of[foot]] = pos
ee_motion.set_initial_pos(start)

# trot: diagonal pairs swing together, LF/RH first
for foot, pos in nominal_stance.items():
    motion = ee_motion.at(ee_of[foot])
    first_pair = foot in (QuadFootID.LF, QuadFootID.RH)
    if not first_pair:
        motion.add_stance_phase(T_SWING)

    for k in range(N_STEPS):
        motion.add_swing_phase(T_SWING, pos + np.array([STEP * (k + 1), 0.0, 0.0]))
        motion.add_stance_phase(T_STANCE if k < N_STEPS - 1 or not first_pair else T_STANCE + T_SWING)

schedules = ee_motion.make_contact_schedules(min_duration=0.1, max_duration=0.8)

# all feet at their last foothold well before the end
t_check = ee_motion.get_total_time() - 0.1
goal = EndeffectorsPos(4)
for foot, pos in nominal_stance.items():
    goal[ee_of[foot]] = pos + np.array([STEP * N_STEPS, 0.0, 0.0])

costs = [PhaseDurationCost(s.name, s.get_values(), np.eye(s.get_rows()) * 1e-2) for s in schedules]

opti = PhaseTrajOpt(
    variables=schedules,
    constraints=[FootholdConstraint(ee_motion, goal, t_check)],
    costs=costs,
)

result = opti.solve(100, 1e-6, print_level=5)

for ee in ee_motion.get_ees_ordered():
    name = schedules[ee].name
    print(f"{QUAD_MAP[EndeffectorID(ee)].name}: {np.round(result['durations'][name], 3)}")
