"""Evaluating entities on a knapsack LP relaxation.

This example builds the entities of a small 0/1 knapsack, solves its LP
relaxation with SciPy, and walks through what a search scheduler does with
them: measure infeasibility, pick the most infeasible column, create a
branch object, apply it, and ship the node's entities over the wire.

Run this module directly (requires scipy).
"""

from __future__ import annotations

import autograd.numpy as np
from scipy.optimize import linprog

import bcps
from bcps import Encoded, IntegerVariable, LinearConstraint, RelaxationModel


# =============================================================================
# Knapsack relaxation
# =============================================================================

def knapsack_relaxation():
    """
    0/1 Knapsack Problem
    --------------------
    maximize    sum(v[i] * x[i])
    subject to  sum(w[i] * x[i]) <= capacity
                x[i] in {0, 1}
    """
    print("=" * 60)
    print("0/1 KNAPSACK RELAXATION")
    print("=" * 60)

    values = np.array([10.0, 6.0, 14.0, 7.0, 3.0])
    weights = np.array([5.0, 3.0, 7.0, 4.0, 2.0])
    capacity = 15.0
    n = values.size

    res = linprog(
        c=-values, A_ub=[weights], b_ub=[capacity], bounds=[(0, 1)] * n
    )
    model = RelaxationModel(
        solution=res.x, reduced_costs=res.lower.marginals, objective_sense=-1.0
    )

    columns = [IntegerVariable(0.0, 1.0, binary=True) for _ in range(n)]
    capacity_row = LinearConstraint(np.arange(n), weights, ub_hard=capacity)
    for obj in columns + [capacity_row]:
        model.add_object(obj)
        obj.hashing(model)

    print(f"LP bound: {-res.fun:.2f}")
    print(f"Relaxation point: {np.round(res.x, 3)}")

    scored = [(col.infeasibility(model), col) for col in columns]
    (infeas, way), col = max(scored, key=lambda item: item[0][0])
    if infeas == 0.0:
        print("Relaxation is integral, nothing to branch on")
        return

    branch = col.create_branch_object(model, way)
    print(f"Branch on x{col.object_index} (infeasibility {infeas:.3f}), {way.name} first")
    print(f"  down child bounds: {branch.down_bounds}")
    print(f"  up child bounds:   {branch.up_bounds}")

    branch.apply(col)
    print(f"Status after branching: {col.status!r}")

    blobs = [obj.encode().pack() for obj in model.objects]
    blobs.append(model.capture_solution(-res.fun).encode().pack())
    restored = [bcps.decode_knowledge(Encoded.unpack(blob)) for blob in blobs]
    print(f"Shipped {len(blobs)} objects in {sum(len(b) for b in blobs)} bytes")
    for obj in restored:
        print(f"  {obj!r}")


if __name__ == "__main__":
    knapsack_relaxation()
