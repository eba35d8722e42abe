"""
Bounded Entities

An entity is a single primal (variable) or dual (constraint) object of a
subproblem. All that is assumed about it at this level is that it has
bounds, an integrality class and a few status flags.

Bound semantics:
- Hard bounds are fixed when the entity is created and are never tightened
  by branching.
- Soft bounds are the working range. Branching tightens them and
  `reset_bounds` restores them to the hard bounds.
- `lb_hard <= lb_soft <= ub_soft <= ub_hard` is maintained by the callers
  (branch objects, the owning model); the setters do not check it.

The speculative hooks (`infeasibility`, `create_branch_object`,
`preferred_new_feasible`, ...) return "no answer" by default. Concrete
entities in `bcps.objects` override them.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Tuple

import autograd.numpy as np

from .constants import (
    DEFAULT_ESTIMATE,
    BranchDirection,
    IntegralityClass,
    Representation,
    StatusFlag,
)
from .encoded import DecodeError, Encoded

if TYPE_CHECKING:
    from .branch import BranchObject
    from .model import Model

logger = logging.getLogger(__name__)


class Entity:
    def __init__(
        self,
        lb_hard: float = 0.0,
        ub_hard: float = 0.0,
        lb_soft: float | None = None,
        ub_soft: float | None = None,
        *,
        rep_type: Representation = Representation.CORE,
        int_type: IntegralityClass = IntegralityClass.CONTINUOUS,
    ):
        self._object_index = -1
        self._rep_type = Representation(rep_type)
        self._int_type = IntegralityClass(int_type)
        self._status = StatusFlag.NONE
        self._lb_hard = float(lb_hard)
        self._ub_hard = float(ub_hard)
        self._lb_soft = self._lb_hard if lb_soft is None else float(lb_soft)
        self._ub_soft = self._ub_hard if ub_soft is None else float(ub_soft)
        self._hash_value = 0.0

    def clone(self) -> Entity:
        return copy.deepcopy(self)

    # -------------------------------------------------------------- accessors

    def get_object_index(self) -> int:
        return self._object_index

    def get_rep_type(self) -> Representation:
        return self._rep_type

    def get_int_type(self) -> IntegralityClass:
        return self._int_type

    def get_status(self) -> StatusFlag:
        return self._status

    def get_lb_hard(self) -> float:
        return self._lb_hard

    def get_ub_hard(self) -> float:
        return self._ub_hard

    def get_lb_soft(self) -> float:
        return self._lb_soft

    def get_ub_soft(self) -> float:
        return self._ub_soft

    object_index = property(get_object_index)
    rep_type = property(get_rep_type)
    int_type = property(get_int_type)
    status = property(get_status)
    lb_hard = property(get_lb_hard)
    ub_hard = property(get_ub_hard)
    lb_soft = property(get_lb_soft)
    ub_soft = property(get_ub_soft)

    @property
    def hash_value(self) -> float:
        return self._hash_value

    # --------------------------------------------------------------- mutators

    def set_object_index(self, index: int) -> None:
        self._object_index = int(index)

    def set_rep_type(self, rep_type: Representation) -> None:
        self._rep_type = Representation(rep_type)

    def set_int_type(self, int_type: IntegralityClass) -> None:
        self._int_type = IntegralityClass(int_type)

    def set_status(self, flag: StatusFlag) -> None:
        """Merge `flag` into the status. Bits already set stay set."""
        self._status |= StatusFlag(flag)

    def clear_status(self, flag: StatusFlag) -> None:
        self._status &= ~StatusFlag(flag)

    def has_status(self, flag: StatusFlag) -> bool:
        flag = StatusFlag(flag)
        return (self._status & flag) == flag

    def set_lb_hard(self, lb: float) -> None:
        self._lb_hard = float(lb)

    def set_ub_hard(self, ub: float) -> None:
        self._ub_hard = float(ub)

    def set_lb_soft(self, lb: float) -> None:
        self._lb_soft = float(lb)

    def set_ub_soft(self, ub: float) -> None:
        self._ub_soft = float(ub)

    def bounds_consistent(self, tol: float = 0.0) -> bool:
        """Check lb_hard <= lb_soft <= ub_soft <= ub_hard within `tol`."""
        return (
            self._lb_hard <= self._lb_soft + tol
            and self._lb_soft <= self._ub_soft + tol
            and self._ub_soft <= self._ub_hard + tol
        )

    # ---------------------------------------------------------- search hooks

    def hashing(self, model: Model | None = None) -> None:
        self._hash_value = 0.0

    def infeasibility(self, model: Model) -> Tuple[float, BranchDirection | None]:
        """
        Measure how much the current relaxation value violates this entity.

        Returns (infeasibility, preferred_way). Infeasibility is scaled into
        [0.0, 0.5], 0.0 meaning satisfied. The preferred way is the child the
        entity would like explored first, None when it has no preference.
        """
        return 0.0, None

    def feasible_region(self, model: Model) -> None:
        """Set soft bounds to match the current relaxation solution."""

    def create_branch_object(
        self, model: Model, way: BranchDirection
    ) -> BranchObject | None:
        """Branch object splitting on this entity, or None if not branchable."""
        return None

    def preferred_new_feasible(self, model: Model) -> BranchObject | None:
        """Branch toward a new feasible point in a good direction, if known."""
        return None

    def not_preferred_new_feasible(self, model: Model) -> BranchObject | None:
        """Branch toward a new feasible point in a bad direction, if known."""
        return None

    def reset_bounds(self, model: Model | None = None) -> None:
        self._lb_soft = self._lb_hard
        self._ub_soft = self._ub_hard

    def bound_branch(self, model: Model | None = None) -> bool:
        return True

    def floor_ceiling(self, value: float, tolerance: float) -> Tuple[float, float]:
        """Closest valid points below and above `value`.

        A value within `tolerance` of a valid point maps both ends to it.
        """
        value = float(value)
        if self._int_type == IntegralityClass.CONTINUOUS:
            return value, value

        if self._int_type == IntegralityClass.SEMICONTINUOUS:
            # Valid points are 0 and [lb_hard, ub_hard]
            if tolerance < value < self._lb_hard - tolerance:
                return 0.0, self._lb_hard
            return value, value

        nearest = float(np.round(value))
        if abs(value - nearest) <= tolerance:
            floor_value = ceiling_value = nearest
        else:
            floor_value = float(np.floor(value))
            ceiling_value = float(np.ceil(value))

        if self._int_type == IntegralityClass.BINARY:
            floor_value = min(max(floor_value, 0.0), 1.0)
            ceiling_value = min(max(ceiling_value, 0.0), 1.0)
        return floor_value, ceiling_value

    def up_estimate(self) -> float:
        return DEFAULT_ESTIMATE

    def down_estimate(self) -> float:
        return DEFAULT_ESTIMATE

    # ---------------------------------------------------------- serialization

    def _encode_base(self, encoded: Encoded) -> Encoded:
        encoded.write_int(self._object_index)
        encoded.write_int(self._rep_type)
        encoded.write_char(self._int_type.value)
        encoded.write_int(self._status.value)
        encoded.write_double(self._lb_hard)
        encoded.write_double(self._ub_hard)
        encoded.write_double(self._lb_soft)
        encoded.write_double(self._ub_soft)
        encoded.write_double(self._hash_value)
        return encoded

    def _decode_base(self, encoded: Encoded) -> None:
        self._object_index = encoded.read_int()
        rep_type = encoded.read_int()
        int_type = encoded.read_char()
        status = encoded.read_int()
        try:
            self._rep_type = Representation(rep_type)
            self._int_type = IntegralityClass(int_type)
            self._status = StatusFlag(status)
        except ValueError as e:
            raise DecodeError(f"Corrupt entity header: {e}") from e
        self._lb_hard = encoded.read_double()
        self._ub_hard = encoded.read_double()
        self._lb_soft = encoded.read_double()
        self._ub_soft = encoded.read_double()
        self._hash_value = encoded.read_double()

    def encode(self, encoded: Encoded | None = None) -> Encoded:
        raise NotImplementedError(
            f"{type(self).__name__} does not implement encode; "
            "concrete entities must override it"
        )

    def __repr__(self):
        return (
            f"{type(self).__name__}(index={self._object_index}, "
            f"int_type={self._int_type.value}, "
            f"hard=[{self._lb_hard}, {self._ub_hard}], "
            f"soft=[{self._lb_soft}, {self._ub_soft}])"
        )
