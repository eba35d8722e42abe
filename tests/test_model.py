"""Tests for the model context and an end-to-end pass over an LP relaxation."""
import pytest
import autograd.numpy as np
from scipy.optimize import linprog

from bcps import (
    BranchDirection,
    Encoded,
    IntegerVariable,
    LinearConstraint,
    RelaxationModel,
    Solution,
    decode_knowledge,
)
from bcps.model import hash_weights


def test_add_object_assigns_indices_once():
    m = RelaxationModel()
    a, b = IntegerVariable(), IntegerVariable()
    assert m.add_object(a) == 0
    assert m.add_object(b) == 1
    assert m.num_objects == 2
    assert m.get_object(1) is b
    with pytest.raises(ValueError):
        m.add_object(a)


def test_hash_weights_prefix_stable():
    short = hash_weights(3)
    long = hash_weights(10)
    assert np.array_equal(short, long[:3])
    assert np.all((long >= 0.5) & (long < 1.5))

    m = RelaxationModel()
    assert np.array_equal(m.hash_weights(2), short[:2])
    assert np.array_equal(m.hash_weights(10), long)


def test_capture_solution():
    m = RelaxationModel(solution=[1.0, 2.5])
    sol = m.capture_solution(4.0)
    assert isinstance(sol, Solution)
    assert np.array_equal(sol.values, [1.0, 2.5])
    # The snapshot does not follow later changes
    m.solution[0] = 9.0
    assert sol.values[0] == 1.0


def test_lp_relaxation_pass():
    """max x + y  s.t.  2x + 2y <= 5,  x, y integer in [0, 3]."""
    res = linprog(c=[-1.0, -1.0], A_ub=[[2.0, 2.0]], b_ub=[5.0], bounds=[(0, 3), (0, 3)])
    assert res.status == 0

    m = RelaxationModel(solution=res.x, objective_sense=-1.0)
    x = IntegerVariable(0.0, 3.0)
    y = IntegerVariable(0.0, 3.0)
    cut = LinearConstraint([0, 1], [2.0, 2.0], ub_hard=5.0)
    for obj in (x, y, cut):
        m.add_object(obj)
        obj.hashing(m)

    assert cut.infeasibility(m) == (0.0, None)
    scores = [obj.infeasibility(m) for obj in (x, y)]
    assert all(0.0 <= s <= 0.5 for s, _ in scores)
    # x + y = 2.5 at the optimum, so at least one column is fractional
    assert any(s > 0.0 for s, _ in scores)

    target = x if scores[0][0] > 0.0 else y
    infeas, way = target.infeasibility(m)
    branch = target.create_branch_object(m, way)
    assert branch is not None
    lb, ub = branch.bounds(BranchDirection.DOWN)
    assert ub == np.floor(branch.value)
    branch.apply(target, BranchDirection.DOWN)
    assert target.bounds_consistent()

    # Ship the whole node over the wire and back
    blobs = [obj.encode().pack() for obj in m.objects]
    blobs.append(m.capture_solution(-res.fun).encode().pack())
    restored = [decode_knowledge(Encoded.unpack(blob)) for blob in blobs]
    for before, after in zip(m.objects, restored):
        assert type(after) is type(before)
        assert after.object_index == before.object_index
        assert after.hash_value == before.hash_value
        assert (after.lb_soft, after.ub_soft) == (before.lb_soft, before.ub_soft)
    assert np.isclose(restored[-1].quality, 2.5)

    target.reset_bounds(m)
    assert (target.lb_soft, target.ub_soft) == (0.0, 3.0)


def test_hash_weights_are_read_only():
    m = RelaxationModel()
    weights = m.hash_weights(4)
    with pytest.raises(ValueError):
        weights[0] = 0.0
    with pytest.raises(ValueError):
        m.hash_weights(16)[3] = 0.0
    assert np.array_equal(m.hash_weights(4), hash_weights(4))
