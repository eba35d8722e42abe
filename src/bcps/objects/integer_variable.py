"""
Integer Variables

A column restricted to integer (or binary) values. Its infeasibility is the
distance of the relaxation value to the nearest integer and it branches by
splitting its soft bounds at floor/ceiling of that value. Branching cost
estimates come from pseudo-costs learned during the search.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

import autograd.numpy as np

from ..branch import BranchObject
from ..constants import (
    DEFAULT_ESTIMATE,
    BranchDirection,
    IntegralityClass,
    Representation,
)
from ..encoded import Encoded, register_knowledge_type
from ..model import Model, hash_weights
from ..variable import Variable

logger = logging.getLogger(__name__)


@dataclass
class PseudocostData:
    """Pseudocost information for a variable."""

    down_cost: float = DEFAULT_ESTIMATE  # Average obj degradation per unit down
    up_cost: float = DEFAULT_ESTIMATE  # Average obj degradation per unit up
    down_count: int = 0  # Number of down branches observed
    up_count: int = 0  # Number of up branches observed


class IntegerVariable(Variable):
    TYPE_TAG = "IntegerVariable"

    def __init__(
        self,
        lb_hard: float = 0.0,
        ub_hard: float = 1.0,
        lb_soft: float | None = None,
        ub_soft: float | None = None,
        *,
        binary: bool = False,
        rep_type: Representation = Representation.CORE,
    ):
        int_type = IntegralityClass.BINARY if binary else IntegralityClass.INTEGER
        super().__init__(
            lb_hard, ub_hard, lb_soft, ub_soft, rep_type=rep_type, int_type=int_type
        )
        self.pseudocost = PseudocostData()

    def current_value(self, model: Model) -> float | None:
        """Relaxation value of this column, clamped to the soft bounds.

        None when the column has no index or lies outside the relaxation.
        """
        index = self.object_index
        if index < 0 or index >= len(model.solution):
            return None
        value = float(model.solution[index])
        return min(max(value, self.lb_soft), self.ub_soft)

    def hashing(self, model: Model | None = None) -> None:
        index = self.object_index
        if index < 0:
            self._hash_value = 0.0
            return
        weights = model.hash_weights(index + 1) if model is not None else hash_weights(index + 1)
        self._hash_value = float(weights[index])

    def infeasibility(self, model: Model) -> Tuple[float, BranchDirection | None]:
        value = self.current_value(model)
        if value is None:
            return 0.0, None
        nearest = np.round(value)
        distance = abs(value - nearest)
        if distance <= model.integer_tolerance:
            return 0.0, None

        fraction = value - np.floor(value)
        way = BranchDirection.DOWN if fraction < 0.5 else BranchDirection.UP
        return float(min(distance, 0.5)), way

    def feasible_region(self, model: Model) -> None:
        value = self.current_value(model)
        if value is None:
            return
        nearest = float(np.round(value))
        if abs(value - nearest) > model.integer_tolerance:
            logger.debug(
                f"Fixing fractional variable {self.object_index} "
                f"from {value} to {nearest}"
            )
        self.set_lb_soft(nearest)
        self.set_ub_soft(nearest)

    def create_branch_object(
        self, model: Model, way: BranchDirection
    ) -> BranchObject | None:
        value = self.current_value(model)
        if value is None:
            return None
        floor_value, ceiling_value = self.floor_ceiling(value, model.integer_tolerance)
        if floor_value == ceiling_value:
            logger.debug(f"Variable {self.object_index} is integral at {value}, no branch")
            return None
        return BranchObject(
            object_index=self.object_index,
            way=BranchDirection(way),
            value=value,
            down_bounds=(self.lb_soft, floor_value),
            up_bounds=(ceiling_value, self.ub_soft),
        )

    def _new_feasible(self, model: Model, preferred: bool) -> BranchObject | None:
        if model.reduced_costs is None:
            return None
        value = self.current_value(model)
        if value is None:
            return None
        nearest = float(np.round(value))
        dj = float(model.reduced_costs[self.object_index]) * model.objective_sense
        go_down = dj >= 0.0 if preferred else dj < 0.0

        if go_down:
            target = nearest - 1.0
            if target < self.lb_soft:
                return None
            return BranchObject(
                object_index=self.object_index,
                way=BranchDirection.DOWN,
                value=value,
                down_bounds=(target, target),
                up_bounds=(nearest, self.ub_soft),
            )

        target = nearest + 1.0
        if target > self.ub_soft:
            return None
        return BranchObject(
            object_index=self.object_index,
            way=BranchDirection.UP,
            value=value,
            down_bounds=(self.lb_soft, nearest),
            up_bounds=(target, target),
        )

    def preferred_new_feasible(self, model: Model) -> BranchObject | None:
        """Move one step in the direction the reduced cost favors."""
        return self._new_feasible(model, preferred=True)

    def not_preferred_new_feasible(self, model: Model) -> BranchObject | None:
        """Move one step against the reduced cost."""
        return self._new_feasible(model, preferred=False)

    def update_pseudocost(
        self, direction: BranchDirection, improvement: float, distance: float
    ) -> None:
        """Fold an observed objective change per unit of bound change into the average."""
        if distance <= 1e-6:
            return
        unit_cost = max(0.0, improvement) / distance
        pc = self.pseudocost
        if direction == BranchDirection.DOWN:
            pc.down_cost = (pc.down_cost * pc.down_count + unit_cost) / (pc.down_count + 1)
            pc.down_count += 1
        else:
            pc.up_cost = (pc.up_cost * pc.up_count + unit_cost) / (pc.up_count + 1)
            pc.up_count += 1

    def up_estimate(self) -> float:
        return self.pseudocost.up_cost if self.pseudocost.up_count else DEFAULT_ESTIMATE

    def down_estimate(self) -> float:
        return self.pseudocost.down_cost if self.pseudocost.down_count else DEFAULT_ESTIMATE

    def encode(self, encoded: Encoded | None = None) -> Encoded:
        if encoded is None:
            encoded = Encoded(self.TYPE_TAG)
        self._encode_base(encoded)
        encoded.write_double(self.pseudocost.down_cost)
        encoded.write_double(self.pseudocost.up_cost)
        encoded.write_int(self.pseudocost.down_count)
        encoded.write_int(self.pseudocost.up_count)
        return encoded

    @classmethod
    def decode(cls, encoded: Encoded) -> IntegerVariable:
        obj = cls()
        obj._decode_base(encoded)
        obj.pseudocost = PseudocostData(
            down_cost=encoded.read_double(),
            up_cost=encoded.read_double(),
            down_count=encoded.read_int(),
            up_count=encoded.read_int(),
        )
        return obj


register_knowledge_type(IntegerVariable.TYPE_TAG, IntegerVariable)
