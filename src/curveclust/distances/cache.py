from __future__ import annotations

import logging
from typing import Any, Sequence

import numpy as np

from .function import DEFAULT_TOLERANCE, CurveDistanceOracle, boundary_lower_bound

logger = logging.getLogger(__name__)


class DistanceCache:
    """Lazily filled, symmetric matrix of curve-to-curve distances.

    The cache is responsible for:
    - resolving a pair only the first time it is requested;
    - deriving the cheap bounds handed to the expensive oracle call;
    - keeping ``matrix[i, j] == matrix[j, i]`` for every resolved pair.

    One cache belongs to one algorithm call; it is never shared across calls.
    It is not safe for concurrent use.
    """

    def __init__(
        self,
        curves: Sequence[Any],
        oracle: CurveDistanceOracle,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> None:
        if tolerance < 0:
            raise ValueError("tolerance must be non-negative.")
        self.curves = curves
        self.oracle = oracle
        self.tolerance = float(tolerance)
        self.n = len(curves)

        self._values = np.zeros((self.n, self.n), dtype=float)
        self._known = np.eye(self.n, dtype=bool)
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return self.n

    def _check_index(self, idx: int) -> None:
        if not 0 <= idx < self.n:
            raise IndexError(f"curve index {idx} out of range for {self.n} curves")

    def is_computed(self, i: int, j: int) -> bool:
        self._check_index(i)
        self._check_index(j)
        return bool(self._known[i, j])

    @property
    def n_computed(self) -> int:
        """Number of unordered off-diagonal pairs resolved so far."""
        return int((np.count_nonzero(self._known) - self.n) // 2)

    def _compute(self, i: int, j: int) -> float:
        a, b = self.curves[i], self.curves[j]
        lower = boundary_lower_bound(a, b)
        upper = float(self.oracle.discrete_distance(a, b))
        return float(
            self.oracle.continuous_distance(a, b, upper, lower, self.tolerance, exact=False)
        )

    def distance(self, i: int, j: int) -> float:
        """Return the distance between curves i and j, computing it on first use."""
        self._check_index(i)
        self._check_index(j)
        if self._known[i, j]:
            self.hits += 1
            return float(self._values[i, j])

        self.misses += 1
        value = self._compute(i, j)
        self._values[i, j] = value
        self._values[j, i] = value
        self._known[i, j] = True
        self._known[j, i] = True
        return value

    def dist_row(self, i: int) -> np.ndarray:
        """Resolve and return the distances from curve i to all curves."""
        return np.array([self.distance(i, j) for j in range(self.n)], dtype=float)

    def materialize(self) -> np.ndarray:
        """Resolve every pair and return a copy of the full matrix."""
        for i in range(self.n):
            for j in range(i + 1, self.n):
                self.distance(i, j)
        logger.debug(
            f"Materialized {self.n}x{self.n} distance matrix "
            f"({self.misses} oracle evaluations, {self.hits} cache hits)"
        )
        return self._values.copy()
