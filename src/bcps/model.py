"""
Model Context

Entities are evaluated against a model context that supplies the current
relaxation solution, reduced costs and tolerances. The `Model` protocol is
what entity operations consume; `RelaxationModel` is a plain container that
implements it and owns the canonical entity list. It does not solve
anything: the relaxation solver writes `solution` and `reduced_costs`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Protocol

import numpy as np

from .constants import DEFAULT_FEAS_TOL, DEFAULT_HASH_SEED, DEFAULT_INT_TOL
from .solution import Solution

if TYPE_CHECKING:
    from .entity import Entity

logger = logging.getLogger(__name__)


def hash_weights(size: int, seed: int = DEFAULT_HASH_SEED) -> np.ndarray:
    """Seeded weights in [0.5, 1.5); a longer stream extends a shorter one."""
    rng = np.random.default_rng(seed)
    return 0.5 + rng.random(size)


class Model(Protocol):
    solution: np.ndarray
    reduced_costs: np.ndarray | None
    objective_sense: float
    integer_tolerance: float
    feasibility_tolerance: float

    @property
    def num_objects(self) -> int:
        ...

    def hash_weights(self, size: int) -> np.ndarray:
        ...


@dataclass
class RelaxationModel:
    """Relaxation state plus the entities it owns.

    `objective_sense` is 1.0 for minimization and -1.0 for maximization.
    """

    solution: np.ndarray = field(default_factory=lambda: np.zeros(0))
    reduced_costs: np.ndarray | None = None
    objective_sense: float = 1.0
    integer_tolerance: float = DEFAULT_INT_TOL
    feasibility_tolerance: float = DEFAULT_FEAS_TOL
    hash_seed: int = DEFAULT_HASH_SEED
    objects: List[Entity] = field(default_factory=list)

    def __post_init__(self):
        self.solution = np.asarray(self.solution, dtype=float)
        if self.reduced_costs is not None:
            self.reduced_costs = np.asarray(self.reduced_costs, dtype=float)
        self._weights = np.zeros(0)
        self._weights.flags.writeable = False

    @property
    def num_objects(self) -> int:
        return len(self.objects)

    def add_object(self, obj: Entity) -> int:
        """Take ownership of an entity and assign its global index."""
        if obj.object_index != -1:
            raise ValueError(
                f"Object already carries index {obj.object_index}; "
                "indices are assigned exactly once"
            )
        index = len(self.objects)
        obj.set_object_index(index)
        self.objects.append(obj)
        return index

    def get_object(self, index: int) -> Entity:
        return self.objects[index]

    def hash_weights(self, size: int) -> np.ndarray:
        if self._weights.size < size:
            self._weights = hash_weights(max(size, 2 * self._weights.size), self.hash_seed)
            self._weights.flags.writeable = False
        return self._weights[:size]

    def capture_solution(self, quality: float) -> Solution:
        """Snapshot the current relaxation values."""
        logger.debug(f"Capturing solution of size {self.solution.size}, quality {quality}")
        return Solution(self.solution, quality)
