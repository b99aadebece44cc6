"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional


class LineItemIn(BaseModel):
    """One deliverable in a pricing request; aliases are resolved server-side"""

    model_config = ConfigDict(populate_by_name=True)

    points: Optional[float] = None
    default_estimate_points: Optional[float] = Field(None, alias="defaultEstimatePoints")
    quantity: Optional[float] = None
    complexity_score: Optional[float] = Field(None, alias="complexityScore")


class PricingRequest(BaseModel):
    """Request body for POST /v1/pricing/calculate"""

    items: List[LineItemIn] = Field(default_factory=list)


class PricingResponse(BaseModel):
    """Engine totals"""

    price: float
    hours: float
    points: float


class FormulaResponse(BaseModel):
    """Response for GET /v1/pricing/formula"""

    formula: str
    base_fee: float
    price_per_point: float
    hours_per_point: float


class DeliverableSchema(BaseModel):
    """Catalog entry with derived hours"""

    id: str
    name: str
    category: Optional[str] = None
    points: float
    hours: float


class DeliverableListResponse(BaseModel):
    deliverables: List[DeliverableSchema]


class SprintDeliverableSchema(BaseModel):
    """One deliverable row inside a sprint"""

    deliverable_id: str
    name: Optional[str] = None
    quantity: float
    base_points: float
    complexity_score: float
    adjusted_points: Optional[float] = None
    hours: Optional[float] = None


class SprintTotals(BaseModel):
    total_points: float
    total_hours: float
    total_price: float


class SprintResponse(BaseModel):
    """Response for GET /v1/sprint-drafts/{sprint_id}"""

    sprint_id: str
    title: Optional[str] = None
    status: str
    deliverable_count: int
    deliverables: List[SprintDeliverableSchema]
    totals: SprintTotals


class ComplexityUpdateRequest(BaseModel):
    """Request body for PATCH /v1/sprint-drafts/{sprint_id}/deliverables/complexity"""

    model_config = ConfigDict(populate_by_name=True)

    deliverable_id: str = Field(..., alias="deliverableId", min_length=1)
    # Numbers or numeric strings; clamped server-side
    complexity_score: Any = Field(None, alias="complexityScore")


class AdjustedDeliverable(BaseModel):
    id: str
    name: Optional[str] = None
    complexity_score: float
    adjusted_points: float
    adjusted_hours: float


class ComplexityUpdateResponse(BaseModel):
    success: bool = True
    updated_totals: SprintTotals
    deliverable: AdjustedDeliverable


class SyncResponse(BaseModel):
    success: bool = True
    updated_count: int
    totals: SprintTotals


class RecalculateResponse(BaseModel):
    """Response for POST /v1/admin/sprint-drafts/recalculate"""

    success: bool = True
    recalculated: int
    sprints: int


class PackageCalculation(BaseModel):
    name: str
    slug: str
    calculated_price: float
    calculated_hours: float
    calculated_points: float
    stored_flat_fee: Optional[float] = None
    stored_flat_hours: Optional[float] = None
    final_price: float
    final_hours: float
    price_match: bool
    hours_match: bool


class PackageCalculationResponse(BaseModel):
    """Response for GET /v1/admin/sprint-packages/calculate"""

    success: bool = True
    calculations: List[PackageCalculation]
