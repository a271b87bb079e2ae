"""Protocol definitions for pluggable components in Fleetmatch."""

from typing import Protocol

from fleetmatch.core_types import Fleet, PerformanceResult, WasteStream


class PerformanceEstimator(Protocol):
    """Protocol for fleet performance estimators.

    An estimator turns one (fleet, waste stream) pair into a
    :class:`PerformanceResult`. It must not raise for degenerate input: zero
    demand is reported as 0 minutes and an unusable fleet as ``math.inf``.
    """

    def estimate(
        self, fleet: Fleet, waste: WasteStream, stop_minutes: float
    ) -> PerformanceResult:
        """Returns the estimated performance of ``fleet`` on ``waste``."""
        ...
