from __future__ import annotations

import numpy as np
import pytest

from conftest import (
    EXAMPLE_TABLE,
    FailingOracle,
    TableOracle,
    VertexOracle,
    point_curves,
    table_curves,
)
from curveclust.algorithms import gonzalez
from curveclust.algorithms.results import ClusteringResult
from curveclust.analysis import aggregate, algorithm_comparison_table, evaluate_result
from curveclust.distances.cache import DistanceCache
from curveclust.experiments import ComparisonConfig, run_comparison


def _two_groups() -> tuple:
    return point_curves([0, 1, 2, 10, 11, 12]), np.array([0, 0, 0, 1, 1, 1])


def test_evaluate_result_on_example(example_curves, example_oracle) -> None:
    result = gonzalez(2, example_curves, example_oracle)
    cache = DistanceCache(example_curves, example_oracle)

    scores = evaluate_result(result, cache, labels_true=np.array([0, 0, 1, 1]))

    assert scores["radius"] == 2.0
    assert scores["cost_sum"] == 3.0
    assert np.isclose(scores["silhouette"], 0.7)
    assert np.isclose(scores["ari"], 1.0)


def test_evaluate_result_single_cluster_has_no_silhouette(example_curves, example_oracle) -> None:
    result = gonzalez(1, example_curves, example_oracle)
    scores = evaluate_result(result, DistanceCache(example_curves, example_oracle))
    assert np.isnan(scores["silhouette"])
    assert np.isnan(scores["ari"])
    assert scores["radius"] == 5.0


def test_evaluate_empty_result() -> None:
    cache = DistanceCache([], VertexOracle())
    scores = evaluate_result(ClusteringResult.empty(), cache)
    assert all(np.isnan(v) for v in scores.values())


def test_run_comparison_rows_and_summary() -> None:
    curves, labels = _two_groups()
    config = ComparisonConfig(k_values=(2, 3), epsilon=0.5, repetitions=2)

    df = run_comparison(curves, VertexOracle(), config, labels=labels)

    assert len(df) == 7
    assert set(df["algorithm"]) == {
        "gonzalez",
        "arya",
        "one_median_exhaustive",
        "one_median_approx",
    }
    arya_k2 = df[(df["algorithm"] == "arya") & (df["k"] == 2)].iloc[0]
    assert arya_k2["objective"] == "k-median"
    assert np.isclose(arya_k2["value"], 4.0)
    assert np.isclose(arya_k2["ari"], 1.0)

    exhaustive = df[df["algorithm"] == "one_median_exhaustive"].iloc[0]
    assert np.isclose(exhaustive["value"], exhaustive["cost_sum"])

    summary = aggregate(df)
    assert len(summary) == 6
    assert "radius_mean" in summary.columns

    table = algorithm_comparison_table(summary)
    assert len(table) == 6
    assert "Arya" in set(table["Algorithm"])
    assert all("±" in cell for cell in table["Radius"])


def test_run_comparison_skips_failed_runs() -> None:
    config = ComparisonConfig(k_values=(2,), repetitions=1)
    df = run_comparison(table_curves(3), FailingOracle(), config)
    assert df.empty


def test_run_comparison_rejects_mismatched_labels() -> None:
    curves, _ = _two_groups()
    with pytest.raises(ValueError):
        run_comparison(curves, VertexOracle(), labels=np.array([0, 1]))


@pytest.mark.parametrize(
    "kwargs",
    [{"k_values": ()}, {"k_values": (0,)}, {"epsilon": 0.0}, {"repetitions": 0}],
)
def test_comparison_config_validation(kwargs) -> None:
    with pytest.raises(ValueError):
        ComparisonConfig(**kwargs)


def test_run_comparison_survives_failure_while_scoring(caplog, example_curves) -> None:
    class PairFailingOracle(TableOracle):
        def continuous_distance(self, a, b, upper_bound, lower_bound, tolerance, exact=False):
            if {a.index, b.index} == {1, 2}:
                raise RuntimeError("oracle did not converge")
            return super().continuous_distance(a, b, upper_bound, lower_bound, tolerance, exact)

    # gonzalez itself never needs the pair (1, 2); scoring its assignment does
    assert gonzalez(2, example_curves, PairFailingOracle(EXAMPLE_TABLE)).centers == (0, 2)

    config = ComparisonConfig(k_values=(2,), repetitions=1, include_exhaustive=False)
    df = run_comparison(example_curves, PairFailingOracle(EXAMPLE_TABLE), config)

    assert "gonzalez" not in set(df.get("algorithm", []))
    assert any("Error in gonzalez (k=2)" in m for m in caplog.messages)
