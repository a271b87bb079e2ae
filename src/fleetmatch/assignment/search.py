"""
search.py

Exhaustive one-to-one assignment of fleets to waste streams.

Every ordering of the waste-stream ids is paired position by position with the
fleet list. Candidates containing a pair the fleet cannot service are dropped;
the rest are ranked by their slowest pair (``max_minutes``: all fleets work in
parallel, so the operation ends when the last one finishes) and then by total
workload (``sum_minutes``).

The search is factorial in the number of streams. That is acceptable for the
handful of streams a depot plans around and is not meant to scale further.

When the fleet count differs from the stream count no ordering can line up
with the fleet list, so the search returns an empty result without
generating any permutation.
"""

from fleetmatch.core_types import (
    AssignmentEntry,
    AssignmentSearchResult,
    ComboResult,
    PerformanceMatrix,
    Scenario,
)
from fleetmatch.utils.logging import FleetmatchLogger

from .permutations import permutations

logger = FleetmatchLogger.get_logger(__name__)


def _build_combo(
    fleet_ids: list[str], waste_order: list[str], matrix: PerformanceMatrix
) -> ComboResult | None:
    """Pair ``waste_order`` with ``fleet_ids``; None if any pair is unserviceable."""
    entries = []
    for fleet_id, waste_id in zip(fleet_ids, waste_order):
        performance = matrix.get(fleet_id, {}).get(waste_id)
        if performance is None or not performance.serviceable:
            return None
        entries.append(
            AssignmentEntry(fleet_id=fleet_id, waste_id=waste_id, performance=performance)
        )

    if not entries:
        return None

    minutes = [entry.performance.minutes for entry in entries]
    return ComboResult(entries=entries, max_minutes=max(minutes), sum_minutes=sum(minutes))


def search_assignments(
    scenario: Scenario, matrix: PerformanceMatrix
) -> AssignmentSearchResult:
    """Rank every feasible fleet-to-waste-stream pairing.

    Args:
        scenario: Scenario providing the ordered fleets and waste streams.
        matrix: Output of :func:`build_performance_matrix` for ``scenario``.

    Returns:
        AssignmentSearchResult whose ``all`` list is sorted ascending by
        ``max_minutes`` then ``sum_minutes``; ``best`` is its first element or
        None when no pairing is feasible.
    """
    fleet_ids = scenario.fleet_ids
    waste_ids = scenario.waste_ids

    if len(fleet_ids) != len(waste_ids):
        logger.debug(
            f"{len(fleet_ids)} fleets vs {len(waste_ids)} waste streams: "
            "no one-to-one assignment possible"
        )
        return AssignmentSearchResult()

    combos: list[ComboResult] = []
    considered = 0
    for waste_order in permutations(waste_ids):
        considered += 1
        combo = _build_combo(fleet_ids, waste_order, matrix)
        if combo is not None:
            combos.append(combo)

    # Stable sort: exact ties keep generation order.
    combos.sort(key=lambda combo: (combo.max_minutes, combo.sum_minutes))

    logger.debug(f"Assignment search: {len(combos)} feasible of {considered} candidates")

    return AssignmentSearchResult(best=combos[0] if combos else None, all=combos)
