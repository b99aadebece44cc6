"""GET /v1/deliverables - Active deliverables catalog"""

from fastapi import APIRouter, Depends

from sprint_pricing.api.v1.schemas import DeliverableListResponse, DeliverableSchema
from sprint_pricing.api.dependencies import get_deliverable_repository
from sprint_pricing.infrastructure.database.repositories import DeliverableRepository, catalog_base_points
from sprint_pricing.domain.pricing import hours_from_points

router = APIRouter()


@router.get("/deliverables", response_model=DeliverableListResponse)
def list_deliverables(repo: DeliverableRepository = Depends(get_deliverable_repository)):
    """List active catalog entries with nominal points and hours at normal complexity"""
    deliverables = []
    for d in repo.list_active():
        points = catalog_base_points(d)
        deliverables.append(
            DeliverableSchema(
                id=d.id,
                name=d.name,
                category=d.category,
                points=points,
                hours=hours_from_points(points),
            )
        )

    return DeliverableListResponse(deliverables=deliverables)
