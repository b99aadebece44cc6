"""Sprint draft endpoints - breakdown, complexity edits and catalog sync"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from sprint_pricing.api.v1.schemas import (
    AdjustedDeliverable,
    ComplexityUpdateRequest,
    ComplexityUpdateResponse,
    SprintDeliverableSchema,
    SprintResponse,
    SprintTotals,
    SyncResponse,
)
from sprint_pricing.api.dependencies import get_request_id
from sprint_pricing.infrastructure.database.session import get_db
from sprint_pricing.infrastructure.database.repositories import SprintDraftRepository, catalog_base_points
from sprint_pricing.domain.complexity import parse_complexity, DEFAULT_COMPLEXITY
from sprint_pricing.domain.models import PricingResult
from sprint_pricing.domain.exceptions import (
    DeliverableNotFoundError,
    InvalidPointsError,
    SprintNotEditableError,
    SprintNotFoundError,
)
from sprint_pricing.infrastructure.observability.metrics import record_complexity_update, record_recalculation
from sprint_pricing.infrastructure.observability.logging import log_recalculation

router = APIRouter()


def _totals(result: PricingResult) -> SprintTotals:
    return SprintTotals(total_points=result.points, total_hours=result.hours, total_price=result.price)


@router.get("/sprint-drafts/{sprint_id}", response_model=SprintResponse)
def get_sprint(sprint_id: str, db: Session = Depends(get_db)):
    """
    Retrieve a sprint draft with its deliverable breakdown.

    Totals are the values last persisted by a recalculation.
    """
    repo = SprintDraftRepository(db)
    sprint = repo.get(sprint_id)

    if not sprint:
        raise HTTPException(status_code=404, detail="Sprint not found")

    deliverables = []
    for row in repo.list_deliverables(sprint_id):
        base = row.base_points if row.base_points is not None else catalog_base_points(row.deliverable)
        deliverables.append(
            SprintDeliverableSchema(
                deliverable_id=row.deliverable_id,
                name=row.deliverable_name or (row.deliverable.name if row.deliverable else None),
                quantity=row.quantity,
                base_points=base,
                complexity_score=row.complexity_score if row.complexity_score is not None else DEFAULT_COMPLEXITY,
                adjusted_points=row.custom_estimate_points,
                hours=row.custom_hours,
            )
        )

    return SprintResponse(
        sprint_id=sprint.id,
        title=sprint.title,
        status=sprint.status,
        deliverable_count=sprint.deliverable_count,
        deliverables=deliverables,
        totals=SprintTotals(
            total_points=sprint.total_estimate_points or 0,
            total_hours=sprint.total_fixed_hours or 0,
            total_price=sprint.total_fixed_price or 0,
        ),
    )


@router.patch("/sprint-drafts/{sprint_id}/deliverables/complexity", response_model=ComplexityUpdateResponse)
def update_complexity(
    sprint_id: str,
    request_body: ComplexityUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Update one deliverable's complexity score and recalculate sprint totals.

    Flow:
    1. Clamp the score to [0.5, 2.0] (unparsable → 1.0)
    2. Store score, adjusted points and hours on the sprint row
    3. Re-run the pricing engine over the whole sprint and persist totals
    """
    start_time = time.time()
    request_id = get_request_id(request)
    try:
        complexity = parse_complexity(request_body.complexity_score)
        repo = SprintDraftRepository(db)
        row, adjustment = repo.set_complexity(sprint_id, request_body.deliverable_id, complexity)
        result = repo.recalculate_totals(sprint_id)
        db.commit()

    except SprintNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Sprint not found")

    except DeliverableNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Deliverable not found or inactive")

    except SprintNotEditableError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    except InvalidPointsError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Complexity update failed: {e}", extra={"request_id": request_id, "sprint_id": sprint_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_complexity_update(complexity)
    record_recalculation("complexity", result.price)
    log_recalculation(request_id, sprint_id, "complexity", result, (time.time() - start_time) * 1000)

    return ComplexityUpdateResponse(
        updated_totals=_totals(result),
        deliverable=AdjustedDeliverable(
            id=row.deliverable_id,
            name=row.deliverable_name or row.deliverable.name,
            complexity_score=adjustment.complexity_score,
            adjusted_points=adjustment.custom_estimate_points,
            adjusted_hours=adjustment.custom_hours,
        ),
    )


@router.post("/sprint-drafts/{sprint_id}/sync-deliverables", response_model=SyncResponse)
def sync_deliverables(sprint_id: str, request: Request, db: Session = Depends(get_db)):
    """Pull fresh names and points from the catalog into the sprint, then recalculate"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        repo = SprintDraftRepository(db)
        updated = repo.sync_from_catalog(sprint_id)
        result = repo.recalculate_totals(sprint_id)
        db.commit()

    except SprintNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Sprint not found")

    except InvalidPointsError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Deliverable sync failed: {e}", extra={"request_id": request_id, "sprint_id": sprint_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_recalculation("sync", result.price)
    log_recalculation(request_id, sprint_id, "sync", result, (time.time() - start_time) * 1000)

    return SyncResponse(updated_count=updated, totals=_totals(result))
