from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence, Tuple

import numpy as np
import pandas as pd
from tqdm.auto import tqdm

from curveclust.algorithms import arya, gonzalez, one_median_approx, one_median_exhaustive
from curveclust.algorithms.results import ClusteringResult
from curveclust.analysis.metrics import evaluate_result
from curveclust.distances.cache import DistanceCache
from curveclust.distances.function import (
    DEFAULT_TOLERANCE,
    CurveDistanceOracle,
    estimate_distance_matrix_memory,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonConfig:
    """Configuration for comparing the clustering algorithms on one collection.

    Attributes
    ----------
    k_values:
        Numbers of centers for Gonzalez and Arya.
    epsilon:
        Approximation parameter of the sampled 1-median.
    repetitions:
        Runs of the sampled 1-median (seeded 0..repetitions-1).
    include_exhaustive:
        Also run the exhaustive 1-median (quadratic in the number of curves).
    """

    k_values: Tuple[int, ...] = (2,)
    epsilon: float = 0.5
    repetitions: int = 5
    include_exhaustive: bool = True
    tolerance: float = DEFAULT_TOLERANCE

    def __post_init__(self) -> None:
        if not self.k_values or any(k < 1 for k in self.k_values):
            raise ValueError("k_values must be a non-empty sequence of positive integers.")
        if not self.epsilon > 0:
            raise ValueError("epsilon must be > 0.")
        if self.repetitions < 1:
            raise ValueError("repetitions must be >= 1.")
        if self.tolerance < 0:
            raise ValueError("tolerance must be non-negative.")


def _result_row(
    algorithm: str,
    k: int,
    repetition: int,
    seed: int | None,
    result: ClusteringResult,
    evaluation_cache: DistanceCache,
    labels: np.ndarray | None,
) -> Dict:
    row = {
        "algorithm": algorithm,
        "objective": result.objective,
        "k": k,
        "repetition": repetition,
        "seed": seed,
        "n_centers": result.size(),
        "centers": list(result.centers),
        "value": float(result.value),
        "runtime_sec": float(result.running_time),
    }
    row.update(evaluate_result(result, evaluation_cache, labels))
    return row


def _run_one(
    label: str,
    run: Callable[[], ClusteringResult],
    score: Callable[[ClusteringResult], Dict],
) -> Dict | None:
    """Run one algorithm and score it; a failure in either step skips the run."""
    try:
        return score(run())
    except Exception as exc:
        logger.warning(f"  Error in {label}: {exc}")
        return None


def run_comparison(
    curves: Sequence[Any],
    oracle: CurveDistanceOracle,
    config: ComparisonConfig | None = None,
    labels: np.ndarray | None = None,
    verbose: bool = False,
) -> pd.DataFrame:
    """Run every clustering algorithm on one curve collection.

    Args:
        curves: Curve collection
        oracle: Distance oracle used by all runs
        config: Comparison configuration
        labels: Optional ground-truth labels, enables the ARI column
        verbose: If True, enable DEBUG logging

    Returns:
        One row per run with the reported value, recomputed radius and cost
        sum, silhouette, ARI and runtime
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    if config is None:
        config = ComparisonConfig()

    n = len(curves)
    if labels is not None and len(labels) != n:
        raise ValueError("labels must have one entry per curve.")
    logger.info(
        f"Comparing algorithms on {n} curves "
        f"(~{estimate_distance_matrix_memory(n):.4f} GB per distance cache)"
    )

    # algorithms keep their own caches; this one only serves the scores
    evaluation_cache = DistanceCache(curves, oracle, tolerance=config.tolerance)
    rows: List[Dict] = []

    k_values = [k for k in config.k_values if k <= n]
    if len(k_values) < len(config.k_values):
        logger.warning(f"  Skipping k values larger than the collection size ({n})")

    for k in tqdm(k_values, desc="k values", leave=False):
        for name, algorithm in (("gonzalez", gonzalez), ("arya", arya)):
            row = _run_one(
                f"{name} (k={k})",
                lambda: algorithm(k, curves, oracle, tolerance=config.tolerance),
                lambda result: _result_row(name, k, 0, None, result, evaluation_cache, labels),
            )
            if row is not None:
                rows.append(row)

    if config.include_exhaustive:
        row = _run_one(
            "one_median_exhaustive",
            lambda: one_median_exhaustive(curves, oracle, tolerance=config.tolerance),
            lambda result: _result_row(
                "one_median_exhaustive", 1, 0, None, result, evaluation_cache, labels
            ),
        )
        if row is not None:
            rows.append(row)

    for rep in tqdm(range(config.repetitions), desc="1-median reps", leave=False):
        seed = rep
        row = _run_one(
            f"one_median_approx (rep={rep})",
            lambda: one_median_approx(
                config.epsilon, curves, oracle, random_state=seed, tolerance=config.tolerance
            ),
            lambda result: _result_row(
                "one_median_approx", 1, rep, seed, result, evaluation_cache, labels
            ),
        )
        if row is not None:
            rows.append(row)

    logger.info(
        f"  ✓ {len(rows)} runs complete "
        f"({evaluation_cache.misses} distances evaluated for scoring)"
    )
    return pd.DataFrame(rows)
