from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal, Mapping, Tuple

import numpy as np


Objective = Literal["k-center", "k-median", "1-median", "empty"]


@dataclass(frozen=True)
class ClusterAssignment:
    """Curve indices grouped by the position of their nearest center.

    The mapping and its member tuples are read-only once constructed.
    """

    clusters: Mapping[int, Tuple[int, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {int(pos): tuple(members) for pos, members in self.clusters.items()}
        object.__setattr__(self, "clusters", MappingProxyType(frozen))

    def __len__(self) -> int:
        return len(self.clusters)

    def count(self, i: int) -> int:
        """Number of curves assigned to center position i."""
        return len(self.clusters[i])

    def get(self, i: int, j: int) -> int:
        """Index of the j-th curve assigned to center position i."""
        return self.clusters[i][j]

    def labels(self, n: int) -> np.ndarray:
        """Center position of every curve, shape (n,)."""
        labels = np.full(n, -1, dtype=int)
        for position, members in self.clusters.items():
            labels[np.asarray(members, dtype=int)] = position
        if np.any(labels < 0):
            raise ValueError("Assignment does not cover every curve.")
        return labels


@dataclass(frozen=True)
class ClusteringResult:
    """Outcome of one clustering call.

    Attributes
    ----------
    centers:
        Curve indices of the chosen centers, in the order they were added.
    value:
        Objective value reached; its meaning is given by ``objective``
        (maximum nearest-center distance for ``"k-center"``, summed
        nearest-center distance for ``"k-median"`` and ``"1-median"``).
    running_time:
        Wall time of the call in seconds.
    assignment:
        Partition of the curves by nearest center, when requested.
    """

    centers: Tuple[int, ...] = ()
    value: float = 0.0
    running_time: float = 0.0
    assignment: ClusterAssignment | None = None
    objective: Objective = "empty"

    @classmethod
    def empty(cls) -> "ClusteringResult":
        return cls()

    def __len__(self) -> int:
        return len(self.centers)

    def get(self, i: int) -> int:
        return self.centers[i]

    def size(self) -> int:
        return len(self.centers)
