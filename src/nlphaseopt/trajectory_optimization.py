import logging
import time
from typing import Dict, List, Optional, Tuple

import cyipopt
import numpy as np

import nlphaseopt.params as params

from nlphaseopt.constraint_models.abstract_constraint import AbstractConstraint
from nlphaseopt.cost_models.abstract_cost import AbstractCostFunction
from nlphaseopt.exceptions import InfeasibleDurationError, ScheduleConfigError
from nlphaseopt.variable_models.abstract_variable import AbstractVariableSet

logger = logging.getLogger(__name__)


class PhaseTrajOpt:
    def __init__(
        self,
        variables: List[AbstractVariableSet],
        constraints: Optional[List[AbstractConstraint]] = None,
        costs: Optional[List[AbstractCostFunction]] = None,
    ):
        """
        Initialize the phase timing optimization problem.

        Args:
            variables: Variable sets, e.g. one contact schedule per endeffector
            constraints: Constraints on the values the variable sets produce
            costs: Cost terms on the variables
        """
        self.variables = variables
        self.constraints_list = [] if constraints is None else constraints
        self.costs_list = [] if costs is None else costs

        # Variable and constraint slices
        self._initialize_ids()

        # Initialize optimization structures
        self.iter_count = 0
        self.x0 = np.hstack([var.get_values() for var in self.variables]) if self.variables else np.zeros(0)
        self.lb = [None] * self.vars_dim
        self.ub = [None] * self.vars_dim
        self.clb = [0] * self.cons_dim
        self.cub = [0] * self.cons_dim
        self._w = None

        self._initialize_bounds()

        # Initialize sparsity pattern
        self.row_ids, self.col_ids = self._initialize_sparsity_pattern()

    def _initialize_ids(self):
        self.var_ids: Dict[str, slice] = {}
        var_offset = 0
        for var in self.variables:
            if var.name in self.var_ids:
                raise ScheduleConfigError(f"Duplicate variable set {var.name}")
            self.var_ids[var.name] = slice(var_offset, var_offset + var.get_rows())
            var_offset += var.get_rows()

        self.c_ids: List[slice] = []
        con_offset = 0
        for constraint in self.constraints_list:
            self.c_ids.append(slice(con_offset, con_offset + constraint.get_rows()))
            con_offset += constraint.get_rows()

        self.vars_dim = var_offset
        self.cons_dim = con_offset

    def _initialize_sparsity_pattern(self) -> Tuple[List[int], List[int]]:
        """Build Jacobian sparsity pattern"""
        row_ids, col_ids = [], []

        for constraint, c_id in zip(self.constraints_list, self.c_ids):
            constraint.get_structure_ids(c_id, self.var_ids, row_ids, col_ids)

        return row_ids, col_ids

    def _initialize_bounds(self):
        """Set variable and constraint bounds"""
        for var in self.variables:
            for i, bound in enumerate(var.get_bounds()):
                self.lb[self.var_ids[var.name].start + i] = bound.lower
                self.ub[self.var_ids[var.name].start + i] = bound.upper

        for constraint, c_id in zip(self.constraints_list, self.c_ids):
            constraint.get_bounds(c_id, self.clb, self.cub)

    def _update_variables(self, w: np.ndarray) -> None:
        """Push the solver iterate into the variable sets, notifying their observers"""
        if self._w is not None and np.array_equal(w, self._w):
            return

        try:
            for var in self.variables:
                var.set_variables(w[self.var_ids[var.name]])
        except InfeasibleDurationError as err:
            logger.debug("Rejecting iterate: %s", err)
            self._w = None
            raise cyipopt.CyIpoptEvaluationError(str(err)) from err

        self._w = np.array(w, copy=True)

    def objective(self, w: np.ndarray) -> float:
        """Compute objective function value."""
        self._update_variables(w)
        obj = 0.0

        for cost in self.costs_list:
            obj += cost.obj(w, self.var_ids)

        return obj

    def gradient(self, w: np.ndarray) -> np.ndarray:
        self._update_variables(w)
        grad = np.zeros_like(w, dtype=float)

        for cost in self.costs_list:
            cost.grad(w, grad, self.var_ids)

        return grad

    def constraints(self, w: np.ndarray) -> np.ndarray:
        self._update_variables(w)
        c = np.zeros(self.cons_dim)

        for constraint, c_id in zip(self.constraints_list, self.c_ids):
            constraint.compute_constraints(c_id, c)

        return c

    def jacobianstructure(self) -> Tuple[np.ndarray, np.ndarray]:
        """Get Jacobian sparsity pattern."""
        return np.array(self.row_ids, dtype=int), np.array(self.col_ids, dtype=int)

    def jac_test(self, w):
        self._update_variables(w)
        jac = np.zeros((self.cons_dim, self.vars_dim))

        for constraint, c_id in zip(self.constraints_list, self.c_ids):
            constraint.compute_jacobians(c_id, self.var_ids, jac)

        return jac

    def jacobian(self, w: np.ndarray) -> np.ndarray:
        """Compute constraint Jacobian"""
        jac = self.jac_test(w)

        # Return the elements of the sparsity pattern, zeros included
        rows, cols = self.jacobianstructure()

        return jac[rows, cols]

    def intermediate(self, alg_mod, iter_count, obj_value, inf_pr, inf_du, mu, d_norm, regularization_size, alpha_du, alpha_pr, ls_trials):
        self.iter_count = iter_count
        logger.debug("iter %d: obj %.6g, inf_pr %.3g, inf_du %.3g", iter_count, obj_value, inf_pr, inf_du)

    def solve(self, max_iter: int = params.MAX_ITER, tol: float = params.TOL, print_level: int = params.PRINT_LEVEL) -> Dict:
        """Solve the optimization problem"""

        nlp = cyipopt.Problem(
            n=self.vars_dim,
            m=self.cons_dim,
            problem_obj=self,
            lb=self.lb,
            ub=self.ub,
            cl=self.clb,
            cu=self.cub,
        )

        nlp.add_option("max_iter", max_iter)
        nlp.add_option("max_wall_time", params.MAX_CPU_TIME)
        nlp.add_option("print_level", print_level)
        nlp.add_option("jacobian_approximation", "exact")
        nlp.add_option("hessian_approximation", "limited-memory")
        nlp.add_option("nlp_scaling_method", "none")
        nlp.add_option("tol", tol)

        t0 = time.time()
        self.sol, self.info = nlp.solve(self.x0)
        solve_time = time.time() - t0

        # leave the variable sets (and their observers) at the solution
        self._update_variables(self.sol)

        logger.info(
            "Solved in %.3fs, %d iterations: %s",
            solve_time,
            self.iter_count,
            self.info["status_msg"],
        )

        self.sol_dict = {
            "solve_time": solve_time,
            "iter_count": self.iter_count,
            "status": self.info["status"],
            "solution": self.sol,
            "durations": self._decode_solution(),
        }

        return self.sol_dict

    def _decode_solution(self) -> Dict[str, List[float]]:
        """Phase durations of every schedule, derived last phase included"""
        return {var.name: var.get_durations() for var in self.variables if hasattr(var, "get_durations")}
