from __future__ import annotations

from typing import Dict

import numpy as np
from sklearn.metrics import adjusted_rand_score, silhouette_score

from curveclust.algorithms._shared import center_cost_sum, cluster_assignment, kcenter_radius
from curveclust.algorithms.results import ClusteringResult
from curveclust.distances.cache import DistanceCache


def result_labels(result: ClusteringResult, cache: DistanceCache) -> np.ndarray:
    """Center position of every curve, using the result's assignment when present."""
    assignment = result.assignment
    if assignment is None:
        assignment = cluster_assignment(result.centers, cache)
    return assignment.labels(cache.n)


def silhouette_from_cache(cache: DistanceCache, labels: np.ndarray) -> float:
    """Silhouette score on the fully resolved distance matrix (NaN if undefined)."""
    n_labels = np.unique(labels).size
    if n_labels < 2 or n_labels > cache.n - 1:
        return float("nan")
    D = cache.materialize()
    return float(silhouette_score(D, labels, metric="precomputed"))


def adjusted_rand(labels_true: np.ndarray, labels_pred: np.ndarray) -> float:
    return float(adjusted_rand_score(labels_true, labels_pred))


def evaluate_result(
    result: ClusteringResult,
    cache: DistanceCache,
    labels_true: np.ndarray | None = None,
) -> Dict[str, float]:
    """Score a result against a shared evaluation cache.

    Radius and cost sum are recomputed from the centers so results with
    different objectives can be compared side by side.
    """
    if result.size() == 0:
        return {
            "radius": np.nan,
            "cost_sum": np.nan,
            "silhouette": np.nan,
            "ari": np.nan,
        }

    labels = result_labels(result, cache)
    ari = np.nan
    if labels_true is not None:
        ari = adjusted_rand(np.asarray(labels_true), labels)

    return {
        "radius": float(kcenter_radius(result.centers, cache)),
        "cost_sum": float(center_cost_sum(result.centers, cache)),
        "silhouette": silhouette_from_cache(cache, labels),
        "ari": float(ari),
    }
