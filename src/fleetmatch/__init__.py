"""Fleetmatch: waste-collection fleet performance and assignment search."""

__version__ = "0.1.0"

# Main API
from .api import evaluate, run_pipeline

# Engine entry points
from .assignment import best_fleet_per_waste, search_assignments
from .estimation import build_performance_matrix, estimate_performance

# Core types
from .config import FleetmatchParams, get_default_scenario, load_fleetmatch_params
from .core_types import (
    AssignmentEntry,
    AssignmentSearchResult,
    BestFleetForWaste,
    ComboResult,
    EvaluationReport,
    Fleet,
    PerformanceResult,
    Scenario,
    TruckType,
    TruckUnit,
    WasteStream,
    WaveDetail,
)
from .interfaces import PerformanceEstimator

# Extension system
from .registry import get_performance_estimator, register_performance_estimator

# Short aliases
estimate = estimate_performance
build_matrix = build_performance_matrix
search = search_assignments
best_per_waste = best_fleet_per_waste

__all__ = [
    # Version
    "__version__",
    # Main API
    "evaluate",
    "run_pipeline",
    # Engine
    "estimate_performance",
    "build_performance_matrix",
    "search_assignments",
    "best_fleet_per_waste",
    "estimate",
    "build_matrix",
    "search",
    "best_per_waste",
    # Config
    "FleetmatchParams",
    "get_default_scenario",
    "load_fleetmatch_params",
    # Types
    "Scenario",
    "WasteStream",
    "Fleet",
    "TruckType",
    "TruckUnit",
    "WaveDetail",
    "PerformanceResult",
    "AssignmentEntry",
    "ComboResult",
    "AssignmentSearchResult",
    "BestFleetForWaste",
    "EvaluationReport",
    # Extensions
    "PerformanceEstimator",
    "register_performance_estimator",
    "get_performance_estimator",
]
