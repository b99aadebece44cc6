"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sprint_pricing.api.main import create_app
from sprint_pricing.infrastructure.database.models import (
    Base,
    Deliverable,
    SprintDraft,
    SprintDeliverable,
    SprintPackage,
    SprintPackageDeliverable,
)
from sprint_pricing.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def catalog(db: Session) -> dict[str, Deliverable]:
    """
    Deliverables catalog:
    - logo: 2 points
    - brand_guide: no points, default estimate 4
    - workshop: 1.5 points
    - retired: 3 points, inactive
    """
    deliverables = {
        "logo": Deliverable(id="del-logo", name="Logo", category="Branding", points=2),
        "brand_guide": Deliverable(
            id="del-guide", name="Brand Guide", category="Branding", points=None, default_estimate_points=4
        ),
        "workshop": Deliverable(id="del-workshop", name="Workshop", category="Workshops", points=1.5),
        "retired": Deliverable(id="del-retired", name="Retired Asset", category="Legacy", points=3, active=False),
    }
    db.add_all(deliverables.values())
    db.commit()
    return deliverables


@pytest.fixture
def sprint_draft(db: Session, catalog: dict[str, Deliverable]) -> SprintDraft:
    """
    Draft sprint with:
    - logo x1, complexity unset      → 2 effective points
    - brand_guide x2, complexity 1.5 → 12 effective points
    Totals not yet calculated.
    """
    sprint = SprintDraft(id="sprint-1", title="Rebrand", status="draft")
    db.add(sprint)
    db.add_all(
        [
            SprintDeliverable(sprint_draft_id=sprint.id, deliverable_id="del-logo", quantity=1, base_points=2),
            SprintDeliverable(
                sprint_draft_id=sprint.id, deliverable_id="del-guide", quantity=2, complexity_score=1.5
            ),
        ]
    )
    db.commit()
    return sprint


@pytest.fixture
def packages(db: Session, catalog: dict[str, Deliverable]) -> list[SprintPackage]:
    """
    Two packages with the same contents (logo x1, workshop x2 → 5 points):
    - starter: dynamic pricing
    - fixed: stored flat fee 17500 and flat hours 80
    """
    starter = SprintPackage(id="pkg-starter", name="Starter", slug="starter", sort_order=1)
    fixed = SprintPackage(
        id="pkg-fixed", name="Fixed", slug="fixed", sort_order=2, flat_fee=17500, flat_hours=80
    )
    retired = SprintPackage(id="pkg-retired", name="Retired", slug="retired", sort_order=3, active=False)
    db.add_all([starter, fixed, retired])
    for package in (starter, fixed):
        db.add_all(
            [
                SprintPackageDeliverable(
                    sprint_package_id=package.id, deliverable_id="del-logo", quantity=1, sort_order=1
                ),
                SprintPackageDeliverable(
                    sprint_package_id=package.id,
                    deliverable_id="del-workshop",
                    quantity=2,
                    complexity_score=1.0,
                    sort_order=2,
                ),
            ]
        )
    db.commit()
    return [starter, fixed]
