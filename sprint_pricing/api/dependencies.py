"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from sprint_pricing.infrastructure.database.session import get_db
from sprint_pricing.infrastructure.database.repositories import (
    DeliverableRepository,
    SprintPackageRepository,
)


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_deliverable_repository(db: Session = Depends(get_db)) -> DeliverableRepository:
    return DeliverableRepository(db)


def get_package_repository(db: Session = Depends(get_db)) -> SprintPackageRepository:
    return SprintPackageRepository(db)
