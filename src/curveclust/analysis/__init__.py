from .metrics import adjusted_rand, evaluate_result, result_labels, silhouette_from_cache
from .summarize import aggregate, algorithm_comparison_table

__all__ = [
    "adjusted_rand",
    "aggregate",
    "algorithm_comparison_table",
    "evaluate_result",
    "result_labels",
    "silhouette_from_cache",
]
