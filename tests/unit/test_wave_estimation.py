"""Unit tests for the wave-based performance estimator."""

import math
import unittest

from fleetmatch.core_types import Fleet, TruckType, WasteStream
from fleetmatch.estimation.waves import (
    MAX_DISTRIBUTION_PASSES,
    distribute_wave,
    estimate_performance,
    expand_truck_units,
)


def _fleet(*trucks, fleet_id="F"):
    return Fleet(
        fleet_id=fleet_id,
        name=f"Fleet {fleet_id}",
        trucks=tuple(
            TruckType(truck_id=f"{fleet_id}-{i}", name=name, count=count, capacity=capacity)
            for i, (name, count, capacity) in enumerate(trucks)
        ),
    )


def _waste(total_bins, bins_per_stop, waste_id="W"):
    return WasteStream(
        waste_id=waste_id, name=waste_id, total_bins=total_bins, bins_per_stop=bins_per_stop
    )


class TestEstimatePerformance(unittest.TestCase):
    """Test cases for estimate_performance."""

    def test_reference_pantech_fleet(self):
        """400 bins at 3 per stop on 30 trucks of 80 bins."""
        fleet = _fleet(("Pantech", 30, 80))
        result = estimate_performance(fleet, _waste(400, 3), 18)

        self.assertEqual(result.stops, 134)
        self.assertEqual(result.wave_capacity, 780)
        self.assertEqual(result.waves, 1)
        self.assertEqual(result.minutes, 90)
        self.assertEqual(result.max_route_minutes, 90)

        wave = result.wave_details[0]
        self.assertEqual(wave.wave_demand, 134)
        self.assertEqual(wave.max_stops, 5)
        # 134 = 30 * 4 + 14: the first 14 trucks make a fifth stop
        self.assertEqual(wave.assignments, [5] * 14 + [4] * 16)
        self.assertTrue(all(unit.stops_per_trip == 26 for unit in result.per_truck_stops))

    def test_zero_bins_costs_nothing(self):
        result = estimate_performance(_fleet(("Pantech", 30, 80)), _waste(0, 3), 18)
        self.assertEqual(result.minutes, 0)
        self.assertEqual(result.stops, 0)
        self.assertEqual(result.waves, 0)
        self.assertEqual(result.wave_details, [])

    def test_non_positive_bins_per_stop_costs_nothing(self):
        result = estimate_performance(_fleet(("Pantech", 30, 80)), _waste(100, 0), 18)
        self.assertEqual(result.minutes, 0)
        self.assertEqual(result.stops, 0)

    def test_empty_fleet_not_serviceable(self):
        result = estimate_performance(_fleet(), _waste(10, 1), 18)
        self.assertTrue(math.isinf(result.minutes))
        self.assertFalse(result.serviceable)
        self.assertEqual(result.stops, 10)
        self.assertEqual(result.waves, 0)

    def test_zero_count_and_zero_capacity_not_serviceable(self):
        fleet = _fleet(("Idle", 0, 80), ("Broken", 5, 0))
        result = estimate_performance(fleet, _waste(10, 1), 18)
        self.assertEqual(result.minutes, math.inf)
        self.assertEqual(result.per_truck_stops, [])

    def test_trucks_smaller_than_one_stop_not_serviceable(self):
        result = estimate_performance(_fleet(("Ute", 10, 2)), _waste(30, 3), 18)
        self.assertEqual(result.minutes, math.inf)
        self.assertEqual(result.stops, 10)

    def test_multiple_waves(self):
        """45 stops on two 10-stop trucks: waves of 20, 20 and 5 stops."""
        result = estimate_performance(_fleet(("Truck", 2, 10)), _waste(45, 1), 10)

        self.assertEqual(result.waves, 3)
        self.assertEqual([w.wave_demand for w in result.wave_details], [20, 20, 5])
        self.assertEqual([w.max_stops for w in result.wave_details], [10, 10, 3])
        self.assertEqual(result.wave_details[2].assignments, [3, 2])
        self.assertEqual(result.minutes, 230)
        self.assertEqual(result.max_route_minutes, 100)

    def test_larger_trucks_first_and_absorb_overflow(self):
        fleet = _fleet(("Small", 1, 2), ("Big", 1, 5))
        result = estimate_performance(fleet, _waste(6, 1), 10)

        self.assertEqual([u.name for u in result.per_truck_stops], ["Big", "Small"])
        self.assertEqual([u.unit_id for u in result.per_truck_stops], ["F-1-0", "F-0-0"])
        self.assertEqual(result.wave_details[0].assignments, [4, 2])
        self.assertEqual(result.minutes, 40)

    def test_equal_trucks_keep_fleet_order(self):
        fleet = _fleet(("First", 2, 10), ("Second", 1, 10))
        result = estimate_performance(fleet, _waste(5, 1), 1)
        self.assertEqual(
            [u.unit_id for u in result.per_truck_stops], ["F-0-0", "F-0-1", "F-1-0"]
        )

    def test_fractional_bins_per_stop(self):
        result = estimate_performance(_fleet(("Truck", 1, 5)), _waste(10, 2.5), 6)
        self.assertEqual(result.stops, 4)
        self.assertEqual(result.wave_capacity, 2)
        self.assertEqual(result.waves, 2)
        self.assertEqual(result.minutes, 24)


class TestExpandTruckUnits(unittest.TestCase):
    """Test cases for expand_truck_units."""

    def test_units_per_truck_type(self):
        fleet = _fleet(("Pantech", 2, 40), ("Compactor", 1, 120))
        units = expand_truck_units(fleet, _waste(100, 3))
        self.assertEqual(len(units), 3)
        self.assertEqual([u.stops_per_trip for u in units], [13, 13, 40])
        self.assertEqual([u.unit_id for u in units], ["F-0-0", "F-0-1", "F-1-0"])

    def test_fractional_count_is_floored(self):
        units = expand_truck_units(_fleet(("Truck", 2.7, 10)), _waste(10, 1))
        self.assertEqual(len(units), 2)


class TestDistributeWave(unittest.TestCase):
    """Test cases for the round-robin distribution."""

    def test_round_robin_balances_within_one_stop(self):
        assignments = distribute_wave([10, 10, 10], 8)
        self.assertEqual(assignments, [3, 3, 2])

    def test_zero_demand(self):
        self.assertEqual(distribute_wave([3, 3], 0), [0, 0])

    def test_demand_above_capacity_stops_without_progress(self):
        # A pass that assigns nothing ends the loop instead of spinning.
        self.assertEqual(distribute_wave([3, 3], 10), [3, 3])

    def test_pass_cap_is_large(self):
        self.assertGreaterEqual(MAX_DISTRIBUTION_PASSES, 10_000)


if __name__ == "__main__":
    unittest.main()
