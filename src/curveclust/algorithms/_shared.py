from __future__ import annotations

import math
import time
from typing import Sequence

from curveclust.distances.cache import DistanceCache

from .results import ClusterAssignment


def validate_num_centers(num_centers: int, n: int) -> None:
    # 0 is accepted: the seed center is always placed
    if num_centers < 0 or num_centers > n:
        raise ValueError("num_centers must satisfy 0 <= num_centers <= n.")


def validate_epsilon(epsilon: float) -> None:
    if not math.isfinite(epsilon) or epsilon <= 0:
        raise ValueError("epsilon must be a finite number > 0.")


def elapsed_since(start: float) -> float:
    return time.perf_counter() - start


def nearest_center(i: int, centers: Sequence[int], cache: DistanceCache) -> int:
    """Return the position (within ``centers``) of the center closest to curve i.

    Ties go to the first position scanned.
    """
    best = math.inf
    nearest = 0
    for position, center in enumerate(centers):
        dist = cache.distance(i, center)
        if dist < best:
            best = dist
            nearest = position
    return nearest


def curve_cost(i: int, centers: Sequence[int], cache: DistanceCache) -> float:
    """Distance from curve i to its nearest center (``inf`` without centers)."""
    best = math.inf
    for center in centers:
        dist = cache.distance(i, center)
        if dist < best:
            best = dist
    return best


def center_cost_sum(centers: Sequence[int], cache: DistanceCache) -> float:
    """Sum of nearest-center distances over all curves."""
    cost = 0.0
    for i in range(cache.n):
        cost += curve_cost(i, centers, cache)
    return cost


def kcenter_radius(centers: Sequence[int], cache: DistanceCache) -> float:
    """Compute the max distance from any curve to its nearest center."""
    radius = 0.0
    for i in range(cache.n):
        radius = max(radius, curve_cost(i, centers, cache))
    return radius


def cluster_assignment(centers: Sequence[int], cache: DistanceCache) -> ClusterAssignment:
    """Assign each curve to the position of its nearest center."""
    if len(centers) == 0:
        return ClusterAssignment()

    clusters = {position: [] for position in range(len(centers))}
    for i in range(cache.n):
        clusters[nearest_center(i, centers, cache)].append(i)
    return ClusterAssignment(clusters=clusters)
