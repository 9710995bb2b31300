import unittest

import cyipopt
import numpy as np

from nlphaseopt.constraint_models import FootholdConstraint
from nlphaseopt.cost_models import PhaseDurationCost
from nlphaseopt.endeffectors import EndeffectorID, EndeffectorsPos
from nlphaseopt.endeffectors_motion import EndeffectorsMotion
from nlphaseopt.exceptions import ScheduleConfigError
from nlphaseopt.trajectory_optimization import PhaseTrajOpt

np.set_printoptions(precision=3, suppress=True, linewidth=400)


def finite_diff(f, z, M, eps=1e-6):
    N = z.shape[0]
    jac = np.zeros((M, N))
    for i in range(N):
        zp = np.copy(z)
        zp[i] += eps
        zm = np.copy(z)
        zm[i] -= eps
        jac[:, i : i + 1] = ((f(zp) - f(zm)) / (2.0 * eps)).reshape((-1, 1))
    return jac


class TestPhaseTrajOpt(unittest.TestCase):
    def setUp(self):
        self.motion = EndeffectorsMotion(2)
        start = EndeffectorsPos(2)
        start[EndeffectorID.E0] = np.array([0.0, 0.1, 0.0])
        start[EndeffectorID.E1] = np.array([0.0, -0.1, 0.0])
        self.motion.set_initial_pos(start)

        self.motion.at(EndeffectorID.E0).add_swing_phase(0.4, [0.2, 0.1, 0.0])
        self.motion.at(EndeffectorID.E0).add_stance_phase(0.6)
        self.motion.at(EndeffectorID.E1).add_stance_phase(0.4)
        self.motion.at(EndeffectorID.E1).add_swing_phase(0.4, [0.2, -0.1, 0.0])
        self.motion.at(EndeffectorID.E1).add_stance_phase(0.2)

        self.schedules = self.motion.make_contact_schedules(0.1, 0.8)

        nominal = EndeffectorsPos(2)
        nominal[EndeffectorID.E0] = np.array([0.2, 0.1, 0.0])
        nominal[EndeffectorID.E1] = np.array([0.1, -0.1, 0.0])

        self.opti = PhaseTrajOpt(
            variables=self.schedules,
            constraints=[FootholdConstraint(self.motion, nominal, 0.5)],
            costs=[
                PhaseDurationCost("ee-schedule_E0", np.array([0.4]), np.eye(1)),
                PhaseDurationCost("ee-schedule_E1", np.array([0.4, 0.4]), 2.0 * np.eye(2)),
            ],
        )

    def test_dimensions_and_bounds(self):
        self.assertEqual(self.opti.vars_dim, 3)
        self.assertEqual(self.opti.cons_dim, 4)
        self.assertEqual(self.opti.var_ids["ee-schedule_E1"], slice(1, 3))
        np.testing.assert_allclose(self.opti.x0, [0.4, 0.4, 0.4])
        self.assertEqual(self.opti.lb, [0.1, 0.1, 0.1])
        self.assertEqual(self.opti.ub, [0.8, 0.8, 0.8])
        self.assertEqual(self.opti.clb, [0.2, 0.1, 0.1, -0.1])
        self.assertEqual(self.opti.clb, self.opti.cub)

    def test_sparsity_structure(self):
        rows, cols = self.opti.jacobianstructure()

        np.testing.assert_array_equal(rows, [0, 1, 2, 2, 3, 3])
        np.testing.assert_array_equal(cols, [0, 0, 1, 2, 1, 2])

    def test_constraint_values(self):
        c = self.opti.constraints(self.opti.x0)

        # E0 is standing at its new foothold, E1 is a quarter into its swing
        np.testing.assert_allclose(c[:2], [0.2, 0.1], atol=1e-12)
        np.testing.assert_allclose(c[2:], [0.03125, -0.1], atol=1e-12)

    def test_constraint_jacobian(self):
        xx = np.array([0.35, 0.45, 0.35])

        JacDense = self.opti.jac_test(xx)
        JacSparse = self.opti.jacobian(xx)
        JacDiff = finite_diff(self.opti.constraints, xx, self.opti.cons_dim)

        self.assertTrue(np.allclose(JacDiff, JacDense, 1e-8, 1e-5))

        rows, cols = self.opti.jacobianstructure()
        np.testing.assert_allclose(JacSparse, JacDense[rows, cols])
        # all entries outside the pattern are zero
        mask = np.ones_like(JacDense, dtype=bool)
        mask[rows, cols] = False
        np.testing.assert_allclose(JacDense[mask], 0.0)

    def test_cost_gradient(self):
        xx = np.array([0.3, 0.5, 0.2])

        grad = self.opti.gradient(xx).reshape(1, -1)
        grad_diff = finite_diff(lambda w: np.array([self.opti.objective(w)]), xx, 1)

        self.assertTrue(np.allclose(grad, grad_diff, 1e-8, 1e-5))
        self.assertAlmostEqual(self.opti.objective(self.opti.x0), 0.0)

    def test_iterate_updates_schedules(self):
        self.opti.constraints(np.array([0.3, 0.5, 0.2]))

        np.testing.assert_allclose(self.schedules[0].get_durations(), [0.3, 0.7])
        np.testing.assert_allclose(self.schedules[1].get_durations(), [0.5, 0.2, 0.3])
        self.assertFalse(self.motion.at(EndeffectorID.E0).is_in_contact(0.25))
        self.assertTrue(self.motion.at(EndeffectorID.E0).is_in_contact(0.35))

    def test_infeasible_iterate_is_rejected(self):
        with self.assertRaises(cyipopt.CyIpoptEvaluationError):
            self.opti.constraints(np.array([0.4, 0.6, 0.5]))

        # nothing was committed for the infeasible schedule
        np.testing.assert_allclose(self.schedules[1].get_durations(), [0.4, 0.4, 0.2])

    def test_duplicate_variable_sets(self):
        with self.assertRaises(ScheduleConfigError):
            PhaseTrajOpt(variables=[self.schedules[0], self.schedules[0]])

    def test_decode_solution(self):
        self.opti.constraints(np.array([0.3, 0.5, 0.2]))
        durations = self.opti._decode_solution()

        self.assertEqual(set(durations.keys()), {"ee-schedule_E0", "ee-schedule_E1"})
        self.assertAlmostEqual(sum(durations["ee-schedule_E1"]), 1.0)


if __name__ == "__main__":
    unittest.main()
