"""Performance matrix: the estimator applied to every fleet × waste stream pair."""

import numpy as np
import pandas as pd

from fleetmatch.core_types import PerformanceMatrix, Scenario
from fleetmatch.interfaces import PerformanceEstimator
from fleetmatch.registry import get_performance_estimator
from fleetmatch.utils.logging import FleetmatchLogger

logger = FleetmatchLogger.get_logger(__name__)


def build_performance_matrix(
    scenario: Scenario, estimator: PerformanceEstimator | None = None
) -> PerformanceMatrix:
    """Estimate every (fleet, waste stream) pair of ``scenario``.

    Pairs are independent, so the result depends on nothing but the scenario
    and the estimator. Defaults to the wave estimator.
    """
    if estimator is None:
        estimator = get_performance_estimator("waves")

    matrix: PerformanceMatrix = {}
    for fleet in scenario.fleets:
        matrix[fleet.fleet_id] = {}
        for waste in scenario.waste_streams:
            matrix[fleet.fleet_id][waste.waste_id] = estimator.estimate(
                fleet, waste, scenario.stop_minutes
            )

    logger.debug(
        f"Built performance matrix: {len(scenario.fleets)} fleets x "
        f"{len(scenario.waste_streams)} waste streams"
    )
    return matrix


def matrix_to_dataframe(
    scenario: Scenario, matrix: PerformanceMatrix, unit: str = "minutes"
) -> pd.DataFrame:
    """Fleets as rows, waste streams as columns; NaN marks "not serviceable"."""
    if unit not in ("minutes", "hours"):
        raise ValueError("unit must be 'minutes' or 'hours'")

    divisor = 60.0 if unit == "hours" else 1.0
    data = {}
    for waste in scenario.waste_streams:
        column = []
        for fleet in scenario.fleets:
            performance = matrix[fleet.fleet_id][waste.waste_id]
            column.append(
                performance.minutes / divisor if performance.serviceable else np.nan
            )
        data[waste.waste_id] = column

    frame = pd.DataFrame(data, index=scenario.fleet_ids, columns=scenario.waste_ids)
    frame.index.name = "Fleet_ID"
    return frame
