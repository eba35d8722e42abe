from __future__ import annotations

import logging

import autograd.numpy as np

from .constants import DEFAULT_ETOL
from .encoded import Encoded, register_knowledge_type

logger = logging.getLogger(__name__)


class Solution:
    """
    A snapshot of variable values and the objective quality they reach.

    Values are index-aligned with variable object indices. `indices` records
    those positions so restricted records (see `select_nonzeros`) still know
    which variable each value belongs to; it is not part of the wire format,
    a decoded record is always aligned from position 0.

    Records are immutable: the arrays are read-only copies.
    """

    TYPE_TAG = "Solution"

    def __init__(self, values=(), quality: float = 0.0, indices=None):
        values = np.array(values, dtype=float).ravel()
        if indices is None:
            indices = np.arange(values.size)
        else:
            indices = np.array(indices, dtype=int).ravel()
            if indices.size != values.size:
                raise ValueError(
                    f"Got {indices.size} indices for {values.size} values"
                )
        values.flags.writeable = False
        indices.flags.writeable = False
        self._values = values
        self._indices = indices
        self._quality = float(quality)

    @property
    def size(self) -> int:
        return int(self._values.size)

    @property
    def values(self) -> np.ndarray:
        return self._values

    @property
    def indices(self) -> np.ndarray:
        return self._indices

    @property
    def quality(self) -> float:
        return self._quality

    def value_of(self, index: int) -> float:
        """Value recorded for a variable index, 0.0 if it is not recorded."""
        hits = np.flatnonzero(self._indices == index)
        return float(self._values[hits[0]]) if hits.size else 0.0

    def _select(self, mask) -> Solution:
        return Solution(self._values[mask], self._quality, self._indices[mask])

    def select_nonzeros(self, etol: float = DEFAULT_ETOL) -> Solution:
        """Entries whose magnitude exceeds `etol`."""
        return self._select(np.abs(self._values) > etol)

    def select_fractional(self, etol: float = DEFAULT_ETOL) -> Solution:
        """Entries more than `etol` away from the nearest integer."""
        return self._select(np.abs(self._values - np.round(self._values)) > etol)

    def encode(self, encoded: Encoded | None = None) -> Encoded:
        if encoded is None:
            encoded = Encoded(self.TYPE_TAG)
        encoded.write_int(self.size)
        encoded.write_raw(self._values)
        encoded.write_double(self._quality)
        return encoded

    @classmethod
    def decode(cls, encoded: Encoded) -> Solution:
        size = encoded.read_int()
        values = encoded.read_raw(size)
        quality = encoded.read_double()
        logger.debug(f"Decoded solution of size {size}, quality {quality}")
        return cls(values, quality)

    def __len__(self):
        return self.size

    def __repr__(self):
        return f"Solution(size={self.size}, quality={self._quality})"


register_knowledge_type(Solution.TYPE_TAG, Solution)
