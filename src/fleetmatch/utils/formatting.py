"""Human-readable rendering of engine output."""

import math

INFINITY_LABEL = "∞"
NOT_SERVICEABLE_LABEL = "–"


def format_hours(minutes: float, precision: int = 2) -> str:
    """Minutes as hours with fixed precision; ``∞`` for not serviceable."""
    if minutes is None or not math.isfinite(minutes):
        return INFINITY_LABEL
    return f"{minutes / 60:.{precision}f}"


def format_number(value: float | None) -> str:
    """Whole number with thousands separators (``None`` renders as 0)."""
    if value is None or not math.isfinite(value):
        return "0"
    return f"{value:,.0f}"


def format_cell(minutes: float) -> str:
    """Matrix cell text: ``"1.50 h"`` or a dash when the pair is not serviceable."""
    if minutes is None or not math.isfinite(minutes):
        return NOT_SERVICEABLE_LABEL
    return f"{format_hours(minutes)} h"
