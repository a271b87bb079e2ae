"""Unconstrained baseline: the fastest fleet for each waste stream on its own."""

from fleetmatch.core_types import BestFleetForWaste, PerformanceMatrix, Scenario


def best_fleet_per_waste(
    scenario: Scenario, matrix: PerformanceMatrix
) -> list[BestFleetForWaste]:
    """Pick, per waste stream, the fleet with the lowest finite time.

    The same fleet may win several streams. On ties the earlier fleet wins.
    Streams no fleet can service are left out.
    """
    results = []
    for waste in scenario.waste_streams:
        best = None
        for fleet in scenario.fleets:
            performance = matrix.get(fleet.fleet_id, {}).get(waste.waste_id)
            if performance is None or not performance.serviceable:
                continue
            if best is None or performance.minutes < best.minutes:
                best = BestFleetForWaste(
                    waste=waste, fleet=fleet, minutes=performance.minutes
                )
        if best is not None:
            results.append(best)
    return results
