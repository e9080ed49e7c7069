from ._shared import (
    center_cost_sum,
    cluster_assignment,
    curve_cost,
    kcenter_radius,
    nearest_center,
)
from .kcenter_gonzalez import arya, gonzalez
from .one_median import one_median_approx, one_median_exhaustive
from .results import ClusterAssignment, ClusteringResult

__all__ = [
    "ClusterAssignment",
    "ClusteringResult",
    "arya",
    "center_cost_sum",
    "cluster_assignment",
    "curve_cost",
    "gonzalez",
    "kcenter_radius",
    "nearest_center",
    "one_median_approx",
    "one_median_exhaustive",
]
