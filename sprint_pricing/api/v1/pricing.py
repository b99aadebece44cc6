"""POST /v1/pricing/calculate and GET /v1/pricing/formula - stateless engine access"""

from fastapi import APIRouter, HTTPException, Query

from sprint_pricing.api.v1.schemas import PricingRequest, PricingResponse, FormulaResponse
from sprint_pricing.domain.line_items import line_items_from_mappings
from sprint_pricing.domain.pricing import (
    HOURS_PER_POINT,
    POINT_BASE_FEE,
    POINT_PRICE_PER_POINT,
    calculate_pricing_from_deliverables,
    pricing_formula_text,
)
from sprint_pricing.domain.exceptions import InvalidPointsError
from sprint_pricing.infrastructure.observability.metrics import pricing_calculation_counter

router = APIRouter()


@router.post("/pricing/calculate", response_model=PricingResponse)
def calculate_pricing(request_body: PricingRequest):
    """
    Price an ad-hoc list of deliverables.

    Each item may carry `points` or `defaultEstimatePoints`, plus optional
    `quantity` (default 1) and `complexityScore` (default 1.0). The base fee
    is charged once for the whole list.
    """
    items = line_items_from_mappings(item.model_dump() for item in request_body.items)

    try:
        result = calculate_pricing_from_deliverables(items)
    except InvalidPointsError as e:
        raise HTTPException(status_code=422, detail=str(e))

    pricing_calculation_counter.inc()
    return PricingResponse(price=result.price, hours=result.hours, points=result.points)


@router.get("/pricing/formula", response_model=FormulaResponse)
def get_formula(prefix: str = Query("Formula:", max_length=64)):
    """Display string and constants for UI copy"""
    return FormulaResponse(
        formula=pricing_formula_text(prefix),
        base_fee=POINT_BASE_FEE,
        price_per_point=POINT_PRICE_PER_POINT,
        hours_per_point=HOURS_PER_POINT,
    )
