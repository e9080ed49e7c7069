from .cache import DistanceCache
from .function import (
    DEFAULT_TOLERANCE,
    CurveDistanceOracle,
    NumpyUniformSampler,
    UniformSampler,
    boundary_lower_bound,
)

__all__ = [
    "DEFAULT_TOLERANCE",
    "CurveDistanceOracle",
    "DistanceCache",
    "NumpyUniformSampler",
    "UniformSampler",
    "boundary_lower_bound",
]
