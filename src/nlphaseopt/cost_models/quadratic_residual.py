import numpy as np

from .abstract_cost import AbstractCostFunction


class PhaseDurationCost(AbstractCostFunction):
    """Keeps the optimized phase durations of one endeffector close to a nominal timing"""

    def __init__(self, schedule_name: str, ref: np.array, weight: np.array):
        super().__init__(ref, weight)
        self.schedule_name = schedule_name

    def obj(self, opt_vect, var_ids):
        var = opt_vect[var_ids[self.schedule_name]].reshape(-1, 1)
        res = self.compute_residual(var)
        cost = self.compute_cost(res)
        return cost

    def grad(self, opt_vect, cost_grad, var_ids):
        var = opt_vect[var_ids[self.schedule_name]].reshape((-1, 1))
        res = self.compute_residual(var)
        jac = self.compute_gradient(res)
        cost_grad[var_ids[self.schedule_name]] += jac
