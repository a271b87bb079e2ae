"""Reference scenario shipped with Fleetmatch.

Three waste streams of decreasing volume against three 30-truck fleets: two
identical pantech fleets (one restricted to a single stream per day) and a mixed
pantech/compactor fleet.

``DEFAULT_SCENARIO`` is built once at import time and never mutated; callers
that want a scenario to work from should use :func:`get_default_scenario`,
which returns a deep copy.
"""

import copy

from fleetmatch.core_types import Fleet, Scenario, TruckType, WasteStream

DEFAULT_SCENARIO_VERSION = "1"

DEFAULT_STOP_MINUTES = 18
DEFAULT_MAX_COMBOS = 6

DEFAULT_SCENARIO = Scenario(
    stop_minutes=DEFAULT_STOP_MINUTES,
    waste_streams=(
        WasteStream(
            waste_id="T1",
            name="Type 1",
            description="High volume, average 3 bins per stop",
            total_bins=400,
            bins_per_stop=3,
        ),
        WasteStream(
            waste_id="T2",
            name="Type 2",
            description="Medium volume, average 2 bins per stop",
            total_bins=160,
            bins_per_stop=2,
        ),
        WasteStream(
            waste_id="T3",
            name="Type 3",
            description="Low volume, single bin per stop",
            total_bins=40,
            bins_per_stop=1,
        ),
    ),
    fleets=(
        Fleet(
            fleet_id="A",
            name="Fleet A",
            note="30 pantech trucks, single waste stream per day",
            single_waste_type=True,
            trucks=(TruckType(truck_id="A-1", name="Pantech", count=30, capacity=80),),
        ),
        Fleet(
            fleet_id="B",
            name="Fleet B",
            note="30 pantech trucks, flexible waste stream",
            single_waste_type=False,
            trucks=(TruckType(truck_id="B-1", name="Pantech", count=30, capacity=80),),
        ),
        Fleet(
            fleet_id="C",
            name="Fleet C",
            note="15 pantech (40 bin) + 15 compactor (120 bin), single waste stream",
            single_waste_type=True,
            trucks=(
                TruckType(truck_id="C-1", name="Pantech", count=15, capacity=40),
                TruckType(truck_id="C-2", name="Compactor", count=15, capacity=120),
            ),
        ),
    ),
)


def get_default_scenario() -> Scenario:
    """Return a fresh copy of the reference scenario."""
    return copy.deepcopy(DEFAULT_SCENARIO)


def default_single_waste_type(fleet_id: str) -> bool:
    """Single-stream flag of the reference fleet with this id (False if none)."""
    for fleet in DEFAULT_SCENARIO.fleets:
        if fleet.fleet_id == fleet_id:
            return fleet.single_waste_type
    return False
