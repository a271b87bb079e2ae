"""Fleet performance estimation (wave scheduling) and the performance matrix."""

from .matrix import build_performance_matrix, matrix_to_dataframe
from .waves import (
    MAX_DISTRIBUTION_PASSES,
    WaveEstimator,
    distribute_wave,
    estimate_performance,
    expand_truck_units,
)

__all__ = [
    "estimate_performance",
    "expand_truck_units",
    "distribute_wave",
    "build_performance_matrix",
    "matrix_to_dataframe",
    "WaveEstimator",
    "MAX_DISTRIBUTION_PASSES",
]
