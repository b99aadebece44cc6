"""Points-based pricing engine - converts deliverable points into hours and price"""

import math
from typing import Iterable
from sprint_pricing.domain.models import LineItem, PricingResult
from sprint_pricing.domain.exceptions import InvalidPointsError

HOURS_PER_POINT = 15
POINT_BASE_FEE = 5000
POINT_PRICE_PER_POINT = 2500


def _require_finite(value: float, what: str = "Point value") -> float:
    if not math.isfinite(value):
        raise InvalidPointsError(f"{what} must be finite, got {value!r}")
    return value


def hours_from_points(points: float) -> float:
    """Convert points to hours (no range restriction, negatives pass through)"""
    return _require_finite(_require_finite(points) * HOURS_PER_POINT, "Hours")


def price_from_points(points: float) -> float:
    """Convert points to price: flat base fee plus a per-point rate"""
    return _require_finite(POINT_BASE_FEE + _require_finite(points) * POINT_PRICE_PER_POINT, "Price")


def pricing_formula_text(prefix: str = "Formula:") -> str:
    """Human-readable formula so display copy stays in sync with the constants"""
    return f"{prefix} ${POINT_BASE_FEE:,} base + (complexity × ${POINT_PRICE_PER_POINT:,})"


def calculate_pricing_from_deliverables(items: Iterable[LineItem]) -> PricingResult:
    """
    Aggregate line items into total points, hours and price.

    Hours are converted per item and summed. Price is computed once from the
    point total, so the base fee is charged exactly once per call, including
    for an empty list. Values are returned un-rounded and negative inputs are
    computed as given. Any value that overflows to infinity raises
    InvalidPointsError.

    Example:
        [LineItem(base_points=2, quantity=3, complexity_score=1.5)]
        → points 9, hours 135, price 5000 + 9 * 2500 = 27500
    """
    total_points = 0.0
    total_hours = 0.0

    for item in items:
        points = _require_finite(item.effective_points)
        total_points += points
        total_hours += hours_from_points(points)

    _require_finite(total_hours, "Hours")
    total_price = price_from_points(total_points)

    return PricingResult(price=total_price, hours=total_hours, points=total_points)
