from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Tuple

import numpy as np
import pytest


EXAMPLE_TABLE = np.array(
    [
        [0.0, 1.0, 5.0, 5.0],
        [1.0, 0.0, 5.0, 5.0],
        [5.0, 5.0, 0.0, 2.0],
        [5.0, 5.0, 2.0, 0.0],
    ]
)


@dataclass(frozen=True)
class TableCurve:
    """Curve stand-in whose boundary points all sit at the origin."""

    index: int
    point: Tuple[float, float] = (0.0, 0.0)

    def __getitem__(self, pos: int) -> Tuple[float, float]:
        return self.point


@dataclass
class TableOracle:
    """Oracle answering straight from a fixed distance table."""

    table: np.ndarray
    calls: List[Tuple[str, int, int]] = field(default_factory=list)

    def discrete_distance(self, a: TableCurve, b: TableCurve) -> float:
        self.calls.append(("discrete", a.index, b.index))
        return float(self.table[a.index, b.index])

    def continuous_distance(
        self,
        a: TableCurve,
        b: TableCurve,
        upper_bound: float,
        lower_bound: float,
        tolerance: float,
        exact: bool = False,
    ) -> float:
        self.calls.append(("continuous", a.index, b.index))
        return float(self.table[a.index, b.index])

    @property
    def n_evaluations(self) -> int:
        return sum(1 for kind, _, _ in self.calls if kind == "continuous")


class VertexOracle:
    """Max distance between matching vertices of equal-length point curves."""

    def __init__(self) -> None:
        self.n_evaluations = 0

    def discrete_distance(self, a: Any, b: Any) -> float:
        diff = np.asarray(a, dtype=float) - np.asarray(b, dtype=float)
        return float(np.max(np.sqrt(np.sum(diff * diff, axis=1))))

    def continuous_distance(
        self,
        a: Any,
        b: Any,
        upper_bound: float,
        lower_bound: float,
        tolerance: float,
        exact: bool = False,
    ) -> float:
        self.n_evaluations += 1
        return upper_bound


class FailingOracle:
    def discrete_distance(self, a: Any, b: Any) -> float:
        return 1.0

    def continuous_distance(self, a, b, upper_bound, lower_bound, tolerance, exact=False) -> float:
        raise RuntimeError("oracle did not converge")


class FixedSampler:
    """Replays the given batches of uniform values, one batch per call."""

    def __init__(self, *batches: List[float]) -> None:
        self.batches = list(batches)
        self.requested: List[int] = []

    def sample(self, count: int) -> np.ndarray:
        self.requested.append(count)
        batch = self.batches.pop(0)
        assert len(batch) == count
        return np.asarray(batch, dtype=float)


def table_curves(n: int) -> List[TableCurve]:
    return [TableCurve(index=i) for i in range(n)]


def point_curves(xs: List[float]) -> List[np.ndarray]:
    """Single-vertex curves on the x axis."""
    return [np.array([[float(x), 0.0]]) for x in xs]


def random_curves(n: int, seed: int = 0, n_vertices: int = 4) -> List[np.ndarray]:
    rng = np.random.default_rng(seed)
    return [rng.normal(size=(n_vertices, 2)) for _ in range(n)]


@pytest.fixture
def example_curves() -> List[TableCurve]:
    return table_curves(4)


@pytest.fixture
def example_oracle() -> TableOracle:
    return TableOracle(EXAMPLE_TABLE)
