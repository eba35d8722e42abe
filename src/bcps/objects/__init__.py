from .integer_variable import IntegerVariable, PseudocostData
from .linear_constraint import LinearConstraint

__all__ = [
    "IntegerVariable",
    "LinearConstraint",
    "PseudocostData",
]
