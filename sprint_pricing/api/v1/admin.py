"""Admin endpoints - bulk sprint recalculation and package pricing checks"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from sprint_pricing.api.v1.schemas import PackageCalculation, PackageCalculationResponse, RecalculateResponse
from sprint_pricing.api.dependencies import get_package_repository, get_request_id
from sprint_pricing.infrastructure.database.session import get_db
from sprint_pricing.infrastructure.database.repositories import SprintDraftRepository, SprintPackageRepository
from sprint_pricing.domain.packages import quote_package
from sprint_pricing.infrastructure.observability.metrics import sprint_recalculation_counter

router = APIRouter()


@router.post("/admin/sprint-drafts/recalculate", response_model=RecalculateResponse)
def recalculate_all_sprints(request: Request, db: Session = Depends(get_db)):
    """
    Backfill adjusted points/hours on every sprint deliverable and
    recompute every sprint's totals.
    """
    request_id = get_request_id(request)

    try:
        rows, sprints = SprintDraftRepository(db).recalculate_all()
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Bulk recalculation failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    sprint_recalculation_counter.labels(trigger="backfill").inc(sprints)
    logging.info(
        "Bulk recalculation completed",
        extra={"request_id": request_id, "step": "backfill", "rows": rows, "sprints": sprints},
    )

    return RecalculateResponse(recalculated=rows, sprints=sprints)


@router.get("/admin/sprint-packages/calculate", response_model=PackageCalculationResponse)
def calculate_packages(repo: SprintPackageRepository = Depends(get_package_repository)):
    """Show engine totals for each active package next to its stored flat fee/hours"""
    calculations = []
    for package in repo.list_active():
        quote = quote_package(
            repo.line_items(package),
            flat_fee=package.flat_fee,
            flat_hours=package.flat_hours,
        )
        calculations.append(
            PackageCalculation(
                name=package.name,
                slug=package.slug,
                calculated_price=quote.calculated.price,
                calculated_hours=quote.calculated.hours,
                calculated_points=quote.calculated.points,
                stored_flat_fee=quote.stored_flat_fee,
                stored_flat_hours=quote.stored_flat_hours,
                final_price=quote.final_price,
                final_hours=quote.final_hours,
                price_match=quote.price_match,
                hours_match=quote.hours_match,
            )
        )

    return PackageCalculationResponse(calculations=calculations)
