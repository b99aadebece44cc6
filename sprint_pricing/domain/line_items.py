"""Boundary adapter: raw deliverable rows/payloads → normalized LineItem"""

from typing import Any, Iterable, List, Mapping, Optional
from sprint_pricing.domain.models import LineItem

# Accepted spellings, in precedence order
POINTS_KEYS = ("points", "defaultEstimatePoints", "default_estimate_points")
QUANTITY_KEYS = ("quantity",)
COMPLEXITY_KEYS = ("complexityScore", "complexity_score")


def _first_present(data: Mapping[str, Any], keys: Iterable[str]) -> Optional[Any]:
    # None means absent; 0 is a real value
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _coalesce(*values: Optional[Any], default: float) -> float:
    for value in values:
        if value is not None:
            return float(value)
    return default


def line_item_from_mapping(data: Mapping[str, Any]) -> LineItem:
    """
    Resolve aliases and defaults for one deliverable.

    base_points = points ?? defaultEstimatePoints ?? 0
    quantity = quantity ?? 1
    complexity_score = complexityScore ?? 1.0
    """
    return LineItem(
        base_points=_coalesce(_first_present(data, POINTS_KEYS), default=0.0),
        quantity=_coalesce(_first_present(data, QUANTITY_KEYS), default=1),
        complexity_score=_coalesce(_first_present(data, COMPLEXITY_KEYS), default=1.0),
    )


def line_items_from_mappings(rows: Iterable[Mapping[str, Any]]) -> List[LineItem]:
    return [line_item_from_mapping(row) for row in rows]


def line_item_from_columns(
    base_points: Optional[float],
    catalog_points: Optional[float],
    catalog_default_points: Optional[float],
    quantity: Optional[float],
    complexity_score: Optional[float],
) -> LineItem:
    """Build a line item from junction + catalog columns (snapshot wins over catalog)"""
    return LineItem(
        base_points=_coalesce(base_points, catalog_points, catalog_default_points, default=0.0),
        quantity=_coalesce(quantity, default=1),
        complexity_score=_coalesce(complexity_score, default=1.0),
    )
