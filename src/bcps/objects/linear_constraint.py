"""
Linear Constraints

A sparse row lb <= a.x <= ub. Rows are never branched on; their
infeasibility is the bound violation of the current activity, squashed
into [0, 0.5) so it can be compared with variable infeasibilities.
"""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

import autograd.numpy as np

from ..constants import (
    DEFAULT_HASH_SEED,
    MAX_INFEASIBILITY,
    BranchDirection,
    Representation,
)
from ..constraint import Constraint
from ..encoded import INT_DTYPE, DecodeError, Encoded, register_knowledge_type
from ..model import Model, hash_weights

logger = logging.getLogger(__name__)

# Weights of the lower and upper bound terms, drawn apart from the column stream
_BOUND_WEIGHTS = hash_weights(2, DEFAULT_HASH_SEED + 1)


class LinearConstraint(Constraint):
    TYPE_TAG = "LinearConstraint"

    def __init__(
        self,
        indices: Sequence[int] = (),
        coefficients: Sequence[float] = (),
        lb_hard: float = -np.inf,
        ub_hard: float = np.inf,
        lb_soft: float | None = None,
        ub_soft: float | None = None,
        *,
        rep_type: Representation = Representation.CORE,
    ):
        super().__init__(lb_hard, ub_hard, lb_soft, ub_soft, rep_type=rep_type)
        indices = np.array(indices, dtype=int).ravel()
        coefficients = np.array(coefficients, dtype=float).ravel()
        if indices.size != coefficients.size:
            raise ValueError(
                f"Got {indices.size} indices for {coefficients.size} coefficients"
            )
        order = np.argsort(indices, kind="stable")
        self.indices = indices[order]
        self.coefficients = coefficients[order]

    @property
    def num_elements(self) -> int:
        return int(self.indices.size)

    def activity(self, model: Model) -> float:
        if not self.num_elements:
            return 0.0
        return float(np.dot(self.coefficients, model.solution[self.indices]))

    def hashing(self, model: Model | None = None) -> None:
        """Hash the coefficients and the hard bounds.

        Bounds enter through arctan so infinite bounds map to +-pi/2.
        """
        value = float(
            _BOUND_WEIGHTS[0] * np.arctan(self.lb_hard)
            + _BOUND_WEIGHTS[1] * np.arctan(self.ub_hard)
        )
        if self.num_elements:
            size = int(self.indices[-1]) + 1
            weights = model.hash_weights(size) if model is not None else hash_weights(size)
            value += float(np.dot(self.coefficients, weights[self.indices]))
        self._hash_value = value

    def infeasibility(self, model: Model) -> Tuple[float, BranchDirection | None]:
        act = self.activity(model)
        tol = model.feasibility_tolerance
        if act < self.lb_soft - tol:
            violation, way = self.lb_soft - act, BranchDirection.UP
        elif act > self.ub_soft + tol:
            violation, way = act - self.ub_soft, BranchDirection.DOWN
        else:
            return 0.0, None
        return MAX_INFEASIBILITY * violation / (1.0 + violation), way

    def feasible_region(self, model: Model) -> None:
        act = min(max(self.activity(model), self.lb_hard), self.ub_hard)
        self.set_lb_soft(act)
        self.set_ub_soft(act)

    def encode(self, encoded: Encoded | None = None) -> Encoded:
        if encoded is None:
            encoded = Encoded(self.TYPE_TAG)
        self._encode_base(encoded)
        encoded.write_array(self.indices, dtype=INT_DTYPE)
        encoded.write_array(self.coefficients)
        return encoded

    @classmethod
    def decode(cls, encoded: Encoded) -> LinearConstraint:
        obj = cls()
        obj._decode_base(encoded)
        indices = encoded.read_array(dtype=INT_DTYPE).astype(int)
        coefficients = encoded.read_array()
        if indices.size != coefficients.size:
            raise DecodeError(
                f"Row has {indices.size} indices but {coefficients.size} coefficients"
            )
        obj.indices = indices
        obj.coefficients = coefficients
        logger.debug(f"Decoded row {obj.object_index} with {indices.size} elements")
        return obj


register_knowledge_type(LinearConstraint.TYPE_TAG, LinearConstraint)
