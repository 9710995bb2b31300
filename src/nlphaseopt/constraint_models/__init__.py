from .abstract_constraint import AbstractConstraint


from .foothold_constraint import FootholdConstraint
