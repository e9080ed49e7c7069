from __future__ import annotations

import logging
import time
from typing import Any, List, Sequence, Tuple

from curveclust.distances.cache import DistanceCache
from curveclust.distances.function import DEFAULT_TOLERANCE, CurveDistanceOracle

from ._shared import (
    center_cost_sum,
    cluster_assignment,
    curve_cost,
    elapsed_since,
    validate_num_centers,
)
from .results import ClusteringResult

logger = logging.getLogger(__name__)


def _farthest_curve(centers: Sequence[int], cache: DistanceCache) -> Tuple[float, int]:
    """Return (cost, index) of the first curve farthest from its nearest center."""
    chosen = set(centers)
    max_cost = 0.0
    farthest = None
    for j in range(cache.n):
        if j in chosen:
            continue
        cost = curve_cost(j, centers, cache)
        if cost > max_cost:
            max_cost = cost
            farthest = j

    if farthest is None:
        # every remaining curve coincides with a center; keep centers unique
        farthest = next(j for j in range(cache.n) if j not in chosen)
    return max_cost, farthest


def _local_search(centers: List[int], cache: DistanceCache) -> Tuple[List[int], float]:
    """Swap-based improvement of the summed nearest-center cost.

    A swap is accepted only if it lowers the cost by more than
    ``approx_cost / (3 k n)``, where ``approx_cost`` is the cost before the
    first pass. Each accepted swap therefore removes a fixed amount from a
    non-negative quantity, which bounds the number of passes.
    """
    k = len(centers)
    n = cache.n
    cost = center_cost_sum(centers, cache)
    approx_cost = cost
    gamma = 1.0 / (3 * k * n)
    threshold = gamma * approx_cost

    passes = 0
    swaps = 0
    found = True
    while found:
        found = False
        passes += 1
        for i in range(k):
            for j in range(n):
                if j in centers:
                    continue
                candidate = list(centers)
                candidate[i] = j
                candidate_cost = center_cost_sum(candidate, cache)
                if cost - threshold > candidate_cost:
                    logger.debug(
                        f"Swap center {centers[i]} -> {j} at position {i}: "
                        f"cost {cost:.6g} -> {candidate_cost:.6g}"
                    )
                    centers = candidate
                    cost = candidate_cost
                    swaps += 1
                    found = True

    logger.debug(f"Local search finished after {passes} passes and {swaps} swaps")
    return centers, cost


def gonzalez(
    num_centers: int,
    curves: Sequence[Any],
    oracle: CurveDistanceOracle,
    use_refinement: bool = False,
    with_assignment: bool = False,
    tolerance: float = DEFAULT_TOLERANCE,
) -> ClusteringResult:
    """Run the farthest-point (Gonzalez) 2-approximation for k-center.

    Parameters
    ----------
    num_centers:
        Number of centers to select. Curve 0 is always the first center, so
        ``num_centers=0`` still yields one center.
    curves:
        Immutable sequence of curves; ``curve[0]`` and ``curve[-1]`` must be
        points.
    oracle:
        External distance computation, see ``CurveDistanceOracle``.
    use_refinement:
        Improve the seeded centers by local search (see ``arya``).
    with_assignment:
        Also partition the curves by nearest center.
    tolerance:
        Precision requested from the continuous distance oracle. Defaults to
        0.001; other values are an extension for oracles with a different
        precision trade-off.

    Returns
    -------
    ClusteringResult
        Without refinement, ``value`` is the largest nearest-center distance
        found in the last seeding pass, i.e. the distance of the last added
        center to the centers before it (``objective="k-center"``). With
        refinement, ``value`` is the summed nearest-center distance of the
        refined centers (``objective="k-median"``).
    """
    start = time.perf_counter()
    n = len(curves)
    if n == 0:
        return ClusteringResult.empty()
    validate_num_centers(num_centers, n)

    cache = DistanceCache(curves, oracle, tolerance=tolerance)

    centers = [0]
    value = 0.0
    while len(centers) < num_centers:
        value, farthest = _farthest_curve(centers, cache)
        centers.append(farthest)
        logger.debug(f"Found center no. {len(centers)}: curve {farthest} (cost={value:.6g})")

    objective = "k-center"
    if use_refinement:
        centers, value = _local_search(centers, cache)
        objective = "k-median"

    assignment = cluster_assignment(centers, cache) if with_assignment else None

    logger.debug(f"Distance cache: {cache.misses} oracle evaluations, {cache.hits} hits")
    return ClusteringResult(
        centers=tuple(centers),
        value=float(value),
        running_time=elapsed_since(start),
        assignment=assignment,
        objective=objective,
    )


def arya(
    num_centers: int,
    curves: Sequence[Any],
    oracle: CurveDistanceOracle,
    with_assignment: bool = False,
    tolerance: float = DEFAULT_TOLERANCE,
) -> ClusteringResult:
    """Gonzalez seeding followed by swap-based local search.

    ``tolerance`` is forwarded to ``gonzalez`` (default 0.001).
    """
    return gonzalez(
        num_centers,
        curves,
        oracle,
        use_refinement=True,
        with_assignment=with_assignment,
        tolerance=tolerance,
    )
