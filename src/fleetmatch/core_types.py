import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd


@dataclass(frozen=True)
class WasteStream:
    """A category of waste: how many bins exist and how many are collected per stop."""
    waste_id: str
    name: str
    total_bins: float
    bins_per_stop: float
    description: str = ''

    @property
    def stops_required(self) -> int:
        """Number of stops needed to collect every bin (0 when not collectable)."""
        if self.total_bins <= 0 or self.bins_per_stop <= 0:
            return 0
        return math.ceil(self.total_bins / self.bins_per_stop)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'Waste_ID': self.waste_id,
            'Name': self.name,
            'Description': self.description,
            'Total_Bins': self.total_bins,
            'Bins_Per_Stop': self.bins_per_stop,
            'Stops_Required': self.stops_required,
        }


@dataclass(frozen=True)
class TruckType:
    """A homogeneous group of trucks inside a fleet."""
    truck_id: str
    name: str
    count: int
    capacity: float  # bins per trip

    def stops_per_trip(self, bins_per_stop: float) -> int:
        """Productive stops one truck can make before it is full."""
        if bins_per_stop <= 0 or self.capacity <= 0:
            return 0
        return math.floor(self.capacity / bins_per_stop)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'Truck_ID': self.truck_id,
            'Name': self.name,
            'Count': self.count,
            'Capacity': self.capacity,
        }


@dataclass(frozen=True)
class Fleet:
    """A named group of truck types.

    ``single_waste_type`` records whether the fleet may only work one stream
    per day. It is carried for reporting; the assignment search always pairs
    each fleet with exactly one stream anyway.
    """
    fleet_id: str
    name: str
    trucks: Tuple[TruckType, ...] = ()
    note: str = ''
    single_waste_type: bool = False

    @property
    def total_trucks(self) -> int:
        return sum(max(0, int(truck.count)) for truck in self.trucks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'Fleet_ID': self.fleet_id,
            'Name': self.name,
            'Note': self.note,
            'Single_Waste_Type': self.single_waste_type,
            'Trucks': [truck.to_dict() for truck in self.trucks],
        }


@dataclass(frozen=True)
class Scenario:
    """Everything the engine needs for one evaluation run."""
    stop_minutes: float
    waste_streams: Tuple[WasteStream, ...] = ()
    fleets: Tuple[Fleet, ...] = ()

    @property
    def waste_ids(self) -> List[str]:
        return [waste.waste_id for waste in self.waste_streams]

    @property
    def fleet_ids(self) -> List[str]:
        return [fleet.fleet_id for fleet in self.fleets]

    def get_waste(self, waste_id: str) -> WasteStream:
        for waste in self.waste_streams:
            if waste.waste_id == waste_id:
                return waste
        raise KeyError(f"Waste stream {waste_id} not found")

    def get_fleet(self, fleet_id: str) -> Fleet:
        for fleet in self.fleets:
            if fleet.fleet_id == fleet_id:
                return fleet
        raise KeyError(f"Fleet {fleet_id} not found")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'stop_minutes': self.stop_minutes,
            'waste_streams': [
                {
                    'id': waste.waste_id,
                    'name': waste.name,
                    'description': waste.description,
                    'total_bins': waste.total_bins,
                    'bins_per_stop': waste.bins_per_stop,
                }
                for waste in self.waste_streams
            ],
            'fleets': [
                {
                    'id': fleet.fleet_id,
                    'name': fleet.name,
                    'note': fleet.note,
                    'single_waste_type': fleet.single_waste_type,
                    'trucks': [
                        {
                            'id': truck.truck_id,
                            'name': truck.name,
                            'count': truck.count,
                            'capacity': truck.capacity,
                        }
                        for truck in fleet.trucks
                    ],
                }
                for fleet in self.fleets
            ],
        }


@dataclass
class TruckUnit:
    """One physical truck and the stops it can make per trip for a given stream."""
    unit_id: str
    name: str
    stops_per_trip: int


@dataclass
class WaveDetail:
    """Stop assignment of one dispatch wave."""
    assignments: List[int]  # stops per unit, in unit order
    max_stops: int
    wave_demand: int


def empty_list_factory():
    """Ensures a new empty list is created for default."""
    return []


@dataclass
class PerformanceResult:
    """Estimated effort for one fleet servicing one waste stream."""
    minutes: float
    stops: int
    waves: int = 0
    wave_capacity: int = 0
    per_truck_stops: List[TruckUnit] = field(default_factory=empty_list_factory)
    wave_details: List[WaveDetail] = field(default_factory=empty_list_factory)
    max_route_minutes: float = 0.0

    @property
    def serviceable(self) -> bool:
        return math.isfinite(self.minutes)

    @property
    def hours(self) -> float:
        return self.minutes / 60

    def to_dict(self) -> Dict[str, Any]:
        return {
            'Minutes': self.minutes if self.serviceable else None,
            'Stops': self.stops,
            'Waves': self.waves,
            'Wave_Capacity': self.wave_capacity,
            'Trucks': len(self.per_truck_stops),
            'Max_Route_Minutes': self.max_route_minutes,
            'Serviceable': self.serviceable,
        }


# fleet_id -> waste_id -> result
PerformanceMatrix = Dict[str, Dict[str, PerformanceResult]]


@dataclass
class AssignmentEntry:
    """One fleet paired with one waste stream inside a combo."""
    fleet_id: str
    waste_id: str
    performance: PerformanceResult


@dataclass
class ComboResult:
    """A complete one-to-one pairing of fleets to waste streams."""
    entries: List[AssignmentEntry]
    max_minutes: float
    sum_minutes: float

    @property
    def pairs(self) -> List[Tuple[str, str]]:
        return [(entry.fleet_id, entry.waste_id) for entry in self.entries]

    def describe(self) -> str:
        return ", ".join(f"{fleet_id} → {waste_id}" for fleet_id, waste_id in self.pairs)


@dataclass
class AssignmentSearchResult:
    """Ranked feasible combos; ``best`` is None when nothing is feasible."""
    best: Optional[ComboResult] = None
    all: List[ComboResult] = field(default_factory=empty_list_factory)

    def top(self, k: int) -> List[ComboResult]:
        return self.all[:max(1, int(k))]

    @staticmethod
    def to_dataframe(combos: List[ComboResult]) -> pd.DataFrame:
        """Convert ranked combos to a DataFrame."""
        if len(combos) == 0:
            return pd.DataFrame(columns=['Rank', 'Assignment', 'Max_Minutes', 'Sum_Minutes'])

        data = []
        for rank, combo in enumerate(combos, start=1):
            data.append({
                'Rank': rank,
                'Assignment': combo.describe(),
                'Max_Minutes': combo.max_minutes,
                'Sum_Minutes': combo.sum_minutes,
            })
        return pd.DataFrame(data)


@dataclass
class BestFleetForWaste:
    """Fastest fleet for one stream, ignoring the one-fleet-per-stream rule."""
    waste: WasteStream
    fleet: Fleet
    minutes: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'Waste_ID': self.waste.waste_id,
            'Fleet_ID': self.fleet.fleet_id,
            'Minutes': self.minutes,
        }


@dataclass
class EvaluationReport:
    """Everything produced by one run of the pipeline."""
    scenario: Scenario
    matrix: PerformanceMatrix
    best_per_waste: List[BestFleetForWaste]
    assignments: AssignmentSearchResult
    max_combos: int = 6
    runtime_sec: float = 0.0
    output_path: Optional[Path] = None  # set once results are written

    @property
    def best(self) -> Optional[ComboResult]:
        return self.assignments.best

    @property
    def top_combos(self) -> List[ComboResult]:
        return self.assignments.top(self.max_combos)
