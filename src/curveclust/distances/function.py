from __future__ import annotations

from typing import Any, Protocol, Sequence

import numpy as np


DEFAULT_TOLERANCE = 0.001


class CurveDistanceOracle(Protocol):
    """Protocol for the external curve-to-curve distance computation.

    Both methods receive the curves themselves (not indices). The continuous
    distance is the expensive one; the bounds let an implementation stop as
    soon as its estimate is certified within ``tolerance``.
    """

    def discrete_distance(self, a: Any, b: Any) -> float:
        """Compute the discrete distance between curves a and b.

        Args:
            a: First curve
            b: Second curve

        Returns:
            Discrete distance, an upper bound for the continuous one
        """
        ...

    def continuous_distance(
        self,
        a: Any,
        b: Any,
        upper_bound: float,
        lower_bound: float,
        tolerance: float,
        exact: bool = False,
    ) -> float:
        """Compute the continuous distance between curves a and b.

        Args:
            a: First curve
            b: Second curve
            upper_bound: Known upper bound for the distance
            lower_bound: Known lower bound for the distance
            tolerance: Absolute precision required for the result
            exact: Request an exact computation instead of the bounded one

        Returns:
            Distance between a and b, exact up to ``tolerance``
        """
        ...


class UniformSampler(Protocol):
    """Protocol for drawing uniform reals in [0, 1)."""

    def sample(self, count: int) -> np.ndarray:
        ...


class NumpyUniformSampler:
    """Uniform sampler backed by ``numpy.random.default_rng``."""

    def __init__(self, random_state: int | None = None):
        self.rng = np.random.default_rng(random_state)

    def sample(self, count: int) -> np.ndarray:
        return self.rng.random(int(count))


def boundary_lower_bound(a: Sequence[Any], b: Sequence[Any]) -> float:
    """Cheap lower bound from the curves' matching endpoints.

    Any traversal must pair the two start points and the two end points, so
    the larger of those Euclidean distances bounds the Fréchet distance.
    """
    start = np.asarray(a[0], dtype=float) - np.asarray(b[0], dtype=float)
    end = np.asarray(a[-1], dtype=float) - np.asarray(b[-1], dtype=float)
    return float(np.sqrt(max(np.sum(start * start), np.sum(end * end))))


def estimate_distance_matrix_memory(n_curves: int, dtype_size: int = 8) -> float:
    """Return the memory footprint (in GB) of an n×n distance cache."""
    # values plus the boolean mask of computed cells
    return (n_curves * n_curves * (dtype_size + 1)) / (1024 ** 3)
