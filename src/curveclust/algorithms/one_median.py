from __future__ import annotations

import logging
import math
import time
from typing import Any, Sequence

import numpy as np

from curveclust.distances.cache import DistanceCache
from curveclust.distances.function import (
    DEFAULT_TOLERANCE,
    CurveDistanceOracle,
    NumpyUniformSampler,
    UniformSampler,
)

from ._shared import center_cost_sum, elapsed_since, validate_epsilon
from .results import ClusteringResult

logger = logging.getLogger(__name__)

N_CANDIDATES = 60


def witness_count(epsilon: float) -> int:
    """Number of witnesses needed for a (1 + epsilon) estimate of a candidate."""
    validate_epsilon(epsilon)
    return int(math.ceil(math.log(N_CANDIDATES) / (epsilon * epsilon)))


def _sample_indices(sampler: UniformSampler, count: int, n: int) -> np.ndarray:
    """Draw ``count`` uniform curve indices in [0, n)."""
    u = np.asarray(sampler.sample(count), dtype=float)
    if u.shape != (count,):
        raise ValueError(f"Sampler returned shape {u.shape}, expected ({count},).")
    if np.any(u < 0) or np.any(u >= 1):
        raise ValueError("Sampler values must lie in [0, 1).")
    # guard against u * n rounding up to n
    return np.minimum(np.floor(u * n).astype(int), n - 1)


def one_median_approx(
    epsilon: float,
    curves: Sequence[Any],
    oracle: CurveDistanceOracle,
    sampler: UniformSampler | None = None,
    random_state: int | None = None,
    tolerance: float = DEFAULT_TOLERANCE,
) -> ClusteringResult:
    """Sampling-based approximation of the 1-median.

    Draws 60 candidate curves and ``ceil(ln 60 / epsilon^2)`` witness curves
    uniformly at random (with replacement). The candidate with the smallest
    summed distance to the witnesses becomes the center; the reported value
    is its true summed distance to all curves.

    Parameters
    ----------
    epsilon:
        Approximation parameter, must be > 0.
    sampler:
        Source of uniform reals in [0, 1). Defaults to
        ``NumpyUniformSampler(random_state)``.
    tolerance:
        Precision requested from the continuous distance oracle (default
        0.001, overridable as an extension).
    """
    start = time.perf_counter()
    validate_epsilon(epsilon)
    n = len(curves)
    if n == 0:
        return ClusteringResult.empty()

    if sampler is None:
        sampler = NumpyUniformSampler(random_state)

    candidates = _sample_indices(sampler, N_CANDIDATES, n)
    witnesses = _sample_indices(sampler, witness_count(epsilon), n)
    logger.debug(f"Sampled {len(candidates)} candidates and {len(witnesses)} witnesses")

    cache = DistanceCache(curves, oracle, tolerance=tolerance)

    best_candidate = 0
    best_objective = math.inf
    for candidate in candidates:
        objective = 0.0
        for witness in witnesses:
            objective += cache.distance(int(candidate), int(witness))
        if objective < best_objective:
            best_candidate = int(candidate)
            best_objective = objective

    centers = (best_candidate,)
    value = center_cost_sum(centers, cache)
    logger.debug(f"Approximate 1-median: curve {best_candidate} (cost={value:.6g})")
    return ClusteringResult(
        centers=centers,
        value=float(value),
        running_time=elapsed_since(start),
        objective="1-median",
    )


def one_median_exhaustive(
    curves: Sequence[Any],
    oracle: CurveDistanceOracle,
    tolerance: float = DEFAULT_TOLERANCE,
) -> ClusteringResult:
    """Exact 1-median by evaluating every curve against all others.

    ``tolerance`` is the precision requested from the continuous distance
    oracle (default 0.001, overridable as an extension).
    """
    start = time.perf_counter()
    n = len(curves)
    if n == 0:
        return ClusteringResult.empty()

    cache = DistanceCache(curves, oracle, tolerance=tolerance)

    best_candidate = 0
    best_objective = math.inf
    for i in range(n):
        objective = float(np.sum(cache.dist_row(i)))
        if objective < best_objective:
            best_candidate = i
            best_objective = objective

    logger.debug(f"Exhaustive 1-median: curve {best_candidate} (cost={best_objective:.6g})")
    return ClusteringResult(
        centers=(best_candidate,),
        value=float(best_objective),
        running_time=elapsed_since(start),
        objective="1-median",
    )
