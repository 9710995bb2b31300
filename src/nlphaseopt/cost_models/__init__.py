from .abstract_cost import AbstractCostFunction
from .quadratic_residual import PhaseDurationCost
