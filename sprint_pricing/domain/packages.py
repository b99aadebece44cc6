"""Sprint package quoting - engine totals vs. stored flat fee/hours"""

from typing import Iterable, Optional
from sprint_pricing.domain.models import LineItem, PackageQuote
from sprint_pricing.domain.pricing import calculate_pricing_from_deliverables

MATCH_TOLERANCE = 0.01


def _matches(stored: Optional[float], calculated: float) -> bool:
    if stored is None:
        return False
    return abs(calculated - stored) < MATCH_TOLERANCE


def quote_package(
    line_items: Iterable[LineItem],
    flat_fee: Optional[float] = None,
    flat_hours: Optional[float] = None,
) -> PackageQuote:
    """
    Price a package from its deliverables.

    A stored flat fee/hours overrides the calculated value; NULL means the
    package is priced dynamically.
    """
    calculated = calculate_pricing_from_deliverables(line_items)

    return PackageQuote(
        calculated=calculated,
        stored_flat_fee=flat_fee,
        stored_flat_hours=flat_hours,
        final_price=flat_fee if flat_fee is not None else calculated.price,
        final_hours=flat_hours if flat_hours is not None else calculated.hours,
        price_match=_matches(flat_fee, calculated.price),
        hours_match=_matches(flat_hours, calculated.hours),
    )
