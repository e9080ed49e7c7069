"""
curveclust - k-center and 1-median clustering of curves.

This package provides:
- a lazily filled distance cache over an external curve distance oracle
- Gonzalez farthest-point seeding and Arya local-search refinement
- randomized and exhaustive 1-median solvers
- in-memory evaluation and comparison utilities
"""

from .algorithms import (
    ClusterAssignment,
    ClusteringResult,
    arya,
    gonzalez,
    one_median_approx,
    one_median_exhaustive,
)
from .distances import CurveDistanceOracle, DistanceCache

__all__ = [
    "ClusterAssignment",
    "ClusteringResult",
    "CurveDistanceOracle",
    "DistanceCache",
    "arya",
    "gonzalez",
    "one_median_approx",
    "one_median_exhaustive",
    "distances",
    "algorithms",
]
