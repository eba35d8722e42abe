"""
Branch Objects

A branch object describes how the search tree splits on a single entity:
the bounds of the down child, the bounds of the up child, and which child
the entity would like explored first. Entities are referenced by their
object index only, so branch objects can be copied and shipped with the
node that owns them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

from .constants import BranchDirection, StatusFlag

if TYPE_CHECKING:
    from .entity import Entity


@dataclass(frozen=True)
class BranchObject:
    """A two-way split on one entity."""

    object_index: int
    way: BranchDirection  # Child to explore first
    value: float  # Relaxation value the split was built from
    down_bounds: Tuple[float, float]
    up_bounds: Tuple[float, float]

    def bounds(self, direction: BranchDirection) -> Tuple[float, float]:
        return self.down_bounds if direction == BranchDirection.DOWN else self.up_bounds

    def apply(self, entity: Entity, direction: BranchDirection | None = None) -> None:
        """Tighten the entity's soft bounds to the chosen child."""
        if entity.object_index != self.object_index:
            raise ValueError(
                f"Branch on object {self.object_index} applied to object "
                f"{entity.object_index}"
            )
        lb, ub = self.bounds(self.way if direction is None else direction)
        entity.set_lb_soft(lb)
        entity.set_ub_soft(ub)
        entity.set_status(StatusFlag.BRANCHED_ON)
