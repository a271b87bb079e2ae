"""
waves.py

Estimates how long one fleet needs to collect one waste stream.

Every physical truck makes exactly one round trip per **wave**: it leaves the
depot, makes as many stops as its capacity allows, and returns to unload. A
wave lasts as long as its busiest truck, and waves run back-to-back until
every stop has been served.

Model
-----
* ``stops = ceil(total_bins / bins_per_stop)``
* A truck of capacity *c* makes ``floor(c / bins_per_stop)`` stops per trip.
* ``wave_capacity`` is the sum of stops-per-trip over all trucks.
* Each wave covers ``min(stops_remaining, wave_capacity)`` stops, dealt out
  one at a time round-robin over the trucks (largest first), so loads stay
  within one stop of each other until smaller trucks fill up.
* Wave time is ``max_stops * stop_minutes``; total time is the sum over waves.

Degenerate inputs never raise: zero demand costs 0 minutes and a fleet with
no productive truck yields ``math.inf`` ("not serviceable").

Typical usage
-------------
>>> from fleetmatch.config import get_default_scenario
>>> scenario = get_default_scenario()
>>> result = estimate_performance(scenario.fleets[0], scenario.waste_streams[0], 18)
>>> result.minutes
90
"""

import math

from fleetmatch.core_types import (
    Fleet,
    PerformanceResult,
    TruckUnit,
    WasteStream,
    WaveDetail,
)
from fleetmatch.registry import register_performance_estimator
from fleetmatch.utils.logging import FleetmatchLogger

logger = FleetmatchLogger.get_logger(__name__)

# Upper bound on round-robin passes within a single wave. A pass always places
# at least one stop while demand <= wave capacity, so this is never reached
# for consistent input.
MAX_DISTRIBUTION_PASSES = 100_000


def expand_truck_units(fleet: Fleet, waste: WasteStream) -> list[TruckUnit]:
    """Expand a fleet into individual trucks able to make productive stops.

    Truck types with a non-positive count or capacity are skipped, as are
    trucks too small to carry a single stop's worth of bins.
    """
    units: list[TruckUnit] = []
    for index, truck in enumerate(fleet.trucks):
        count = max(0, math.floor(truck.count or 0))
        capacity = max(0, truck.capacity or 0)
        if count <= 0 or capacity <= 0:
            continue
        stops_per_trip = math.floor(capacity / waste.bins_per_stop)
        if stops_per_trip <= 0:
            continue
        for n in range(count):
            units.append(
                TruckUnit(
                    unit_id=f"{fleet.fleet_id}-{index}-{n}",
                    name=truck.name,
                    stops_per_trip=stops_per_trip,
                )
            )
    return units


def distribute_wave(capacities: list[int], demand: int) -> list[int]:
    """Deal ``demand`` stops round-robin over trucks with the given capacities.

    Returns the number of stops assigned to each truck, in input order. The
    loop stops when demand is exhausted, when a full pass assigns nothing, or
    after ``MAX_DISTRIBUTION_PASSES`` passes.
    """
    assignments = [0] * len(capacities)
    remaining = list(capacities)
    outstanding = demand

    passes = 0
    while outstanding > 0 and passes < MAX_DISTRIBUTION_PASSES:
        passes += 1
        progress = False
        for i in range(len(remaining)):
            if outstanding <= 0:
                break
            if remaining[i] > 0:
                assignments[i] += 1
                remaining[i] -= 1
                outstanding -= 1
                progress = True
        if not progress:
            break

    if outstanding > 0:
        logger.warning(
            f"Wave distribution left {outstanding} of {demand} stops unassigned"
        )
    return assignments


def _zero_demand_result() -> PerformanceResult:
    return PerformanceResult(minutes=0, stops=0, waves=0, wave_capacity=0)


def estimate_performance(
    fleet: Fleet, waste: WasteStream, stop_minutes: float
) -> PerformanceResult:
    """Estimate total minutes for ``fleet`` to collect every bin of ``waste``.

    Args:
        fleet: Fleet whose trucks are dispatched in synchronized waves.
        waste: Waste stream to collect.
        stop_minutes: Minutes spent per stop.

    Returns:
        PerformanceResult with the wave breakdown. ``minutes`` is 0 for a
        stream without demand and ``math.inf`` when no truck in the fleet can
        make a productive stop.
    """
    if waste.total_bins <= 0 or waste.bins_per_stop <= 0:
        return _zero_demand_result()

    total_stops = math.ceil(waste.total_bins / waste.bins_per_stop)
    units = expand_truck_units(fleet, waste)

    if not units:
        logger.debug(
            f"Fleet {fleet.fleet_id} has no truck able to service {waste.waste_id}"
        )
        return PerformanceResult(
            minutes=math.inf, stops=total_stops, waves=0, wave_capacity=0
        )

    # Largest trucks first; sorted() is stable so equal trucks keep fleet order.
    units = sorted(units, key=lambda unit: unit.stops_per_trip, reverse=True)
    capacities = [unit.stops_per_trip for unit in units]
    wave_capacity = sum(capacities)

    stops_remaining = total_stops
    total_minutes = 0
    wave_details: list[WaveDetail] = []

    while stops_remaining > 0:
        wave_demand = min(stops_remaining, wave_capacity)
        assignments = distribute_wave(capacities, wave_demand)
        max_stops = max(assignments)
        total_minutes += max_stops * stop_minutes
        stops_remaining -= wave_demand
        wave_details.append(
            WaveDetail(
                assignments=assignments, max_stops=max_stops, wave_demand=wave_demand
            )
        )

    max_route_minutes = max(
        (wave.max_stops * stop_minutes for wave in wave_details), default=0
    )

    logger.debug(
        f"Fleet {fleet.fleet_id} on {waste.waste_id}: {total_stops} stops, "
        f"{len(wave_details)} waves, {total_minutes} min"
    )

    return PerformanceResult(
        minutes=total_minutes,
        stops=total_stops,
        waves=len(wave_details),
        wave_capacity=wave_capacity,
        per_truck_stops=units,
        wave_details=wave_details,
        max_route_minutes=max_route_minutes,
    )


@register_performance_estimator("waves")
class WaveEstimator:
    """Registry adapter around :func:`estimate_performance`."""

    def estimate(
        self, fleet: Fleet, waste: WasteStream, stop_minutes: float
    ) -> PerformanceResult:
        return estimate_performance(fleet, waste, stop_minutes)
