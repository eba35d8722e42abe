import pytest
import autograd.numpy as np

from bcps import IntegerVariable, LinearConstraint, RelaxationModel


@pytest.fixture
def model():
    """Three integer columns and one row, with a fractional relaxation point."""
    m = RelaxationModel(
        solution=np.array([2.4, 0.7, 3.0]),
        reduced_costs=np.array([1.0, -2.0, 0.0]),
    )
    m.add_object(IntegerVariable(0.0, 5.0))
    m.add_object(IntegerVariable(0.0, 1.0, binary=True))
    m.add_object(IntegerVariable(0.0, 4.0))
    return m


@pytest.fixture
def row():
    return LinearConstraint([2, 0], [1.0, 2.0], lb_hard=0.0, ub_hard=6.0)
