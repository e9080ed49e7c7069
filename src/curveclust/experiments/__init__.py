from .run import ComparisonConfig, run_comparison

__all__ = ["ComparisonConfig", "run_comparison"]
