"""Registry for pluggable components in Fleetmatch."""

from .interfaces import PerformanceEstimator

# Registries for each component type
PERFORMANCE_ESTIMATOR_REGISTRY: dict[str, type[PerformanceEstimator]] = {}

__all__ = [
    "register_performance_estimator",
    "get_performance_estimator",
    # Exposed for advanced users who need direct access
    "PERFORMANCE_ESTIMATOR_REGISTRY",
]


def register_performance_estimator(name: str):
    """Decorator to register a performance estimator implementation."""

    def decorator(cls: type[PerformanceEstimator]):
        if name in PERFORMANCE_ESTIMATOR_REGISTRY:
            raise ValueError(f"Performance estimator '{name}' is already registered")
        PERFORMANCE_ESTIMATOR_REGISTRY[name] = cls
        return cls

    return decorator


def get_performance_estimator(name: str) -> PerformanceEstimator:
    """Instantiate the estimator registered under ``name``."""
    # Built-in estimators register themselves on import.
    import fleetmatch.estimation  # noqa: F401

    try:
        return PERFORMANCE_ESTIMATOR_REGISTRY[name]()
    except KeyError:
        available = ", ".join(sorted(PERFORMANCE_ESTIMATOR_REGISTRY))
        raise ValueError(
            f"Unknown performance estimator '{name}'. Available: {available}"
        ) from None
