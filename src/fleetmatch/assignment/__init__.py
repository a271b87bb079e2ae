"""Fleet-to-waste-stream assignment search and the per-stream baseline."""

from .best_per_waste import best_fleet_per_waste
from .permutations import permutations
from .search import search_assignments

__all__ = [
    "search_assignments",
    "best_fleet_per_waste",
    "permutations",
]
