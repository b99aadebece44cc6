"""Data access layer for deliverables, sprint drafts and packages"""

from datetime import datetime, timezone
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from sprint_pricing.infrastructure.database.models import (
    Deliverable,
    SprintDraft,
    SprintDeliverable,
    SprintPackage,
)
from sprint_pricing.domain.models import AdjustedLine, LineItem, PricingResult
from sprint_pricing.domain.line_items import line_item_from_columns
from sprint_pricing.domain.complexity import adjusted_line, DEFAULT_COMPLEXITY
from sprint_pricing.domain.pricing import calculate_pricing_from_deliverables
from sprint_pricing.domain.exceptions import (
    DeliverableNotFoundError,
    SprintNotEditableError,
    SprintNotFoundError,
)


def catalog_base_points(deliverable: Optional[Deliverable]) -> float:
    """Catalog points, falling back to the default estimate"""
    if deliverable is None:
        return 0.0
    if deliverable.points is not None:
        return deliverable.points
    if deliverable.default_estimate_points is not None:
        return deliverable.default_estimate_points
    return 0.0


class DeliverableRepository:
    """Repository for the deliverables catalog"""

    def __init__(self, db: Session):
        self.db = db

    def list_active(self) -> List[Deliverable]:
        return (
            self.db.query(Deliverable)
            .filter(Deliverable.active.is_(True))
            .order_by(Deliverable.category, Deliverable.name)
            .all()
        )

    def get_active(self, deliverable_id: str) -> Optional[Deliverable]:
        return (
            self.db.query(Deliverable)
            .filter(Deliverable.id == deliverable_id, Deliverable.active.is_(True))
            .first()
        )


class SprintDraftRepository:
    """Repository for sprint drafts and their deliverable rows"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, sprint_id: str) -> Optional[SprintDraft]:
        return self.db.query(SprintDraft).filter(SprintDraft.id == sprint_id).first()

    def list_deliverables(self, sprint_id: str) -> List[SprintDeliverable]:
        return (
            self.db.query(SprintDeliverable)
            .filter(SprintDeliverable.sprint_draft_id == sprint_id)
            .order_by(SprintDeliverable.created_at)
            .all()
        )

    def get_deliverable(self, sprint_id: str, deliverable_id: str) -> Optional[SprintDeliverable]:
        return (
            self.db.query(SprintDeliverable)
            .filter(
                SprintDeliverable.sprint_draft_id == sprint_id,
                SprintDeliverable.deliverable_id == deliverable_id,
            )
            .first()
        )

    def line_items(self, sprint_id: str) -> List[LineItem]:
        """Map junction rows to engine input; the stored snapshot wins over the catalog"""
        items = []
        for row in self.list_deliverables(sprint_id):
            catalog = row.deliverable
            items.append(
                line_item_from_columns(
                    base_points=row.base_points,
                    catalog_points=catalog.points if catalog else None,
                    catalog_default_points=catalog.default_estimate_points if catalog else None,
                    quantity=row.quantity,
                    complexity_score=row.complexity_score,
                )
            )
        return items

    def set_complexity(self, sprint_id: str, deliverable_id: str, complexity: float) -> Tuple[SprintDeliverable, AdjustedLine]:
        """
        Store a new complexity score and the adjusted points/hours it implies.

        Raises:
            SprintNotFoundError: Sprint draft does not exist
            SprintNotEditableError: Sprint is not in draft status
            DeliverableNotFoundError: Deliverable inactive or not in this sprint
        """
        sprint = self.get(sprint_id)
        if sprint is None:
            raise SprintNotFoundError(f"Sprint {sprint_id} not found")
        if sprint.status != "draft":
            raise SprintNotEditableError("Can only edit drafts")

        row = self.get_deliverable(sprint_id, deliverable_id)
        if row is None or row.deliverable is None or not row.deliverable.active:
            raise DeliverableNotFoundError(f"Deliverable {deliverable_id} not found or inactive")

        base = row.base_points if row.base_points is not None else catalog_base_points(row.deliverable)
        adjustment = adjusted_line(base, complexity)
        self._apply(row, adjustment)
        self.db.flush()
        return row, adjustment

    def sync_from_catalog(self, sprint_id: str) -> int:
        """Refresh name/category/base points from the catalog, keeping each row's complexity"""
        if self.get(sprint_id) is None:
            raise SprintNotFoundError(f"Sprint {sprint_id} not found")

        updated = 0
        for row in self.list_deliverables(sprint_id):
            if row.deliverable is None:
                continue
            row.deliverable_name = row.deliverable.name
            row.deliverable_category = row.deliverable.category
            row.base_points = catalog_base_points(row.deliverable)
            self._refresh_adjustment(row)
            updated += 1

        self.db.flush()
        return updated

    def recalculate_totals(self, sprint_id: str) -> PricingResult:
        """Run the pricing engine over the sprint's rows and persist the aggregate totals"""
        sprint = self.get(sprint_id)
        if sprint is None:
            raise SprintNotFoundError(f"Sprint {sprint_id} not found")

        items = self.line_items(sprint_id)
        result = calculate_pricing_from_deliverables(items)

        sprint.deliverable_count = len(items)
        sprint.total_estimate_points = result.points
        sprint.total_fixed_hours = result.hours
        sprint.total_fixed_price = result.price
        sprint.updated_at = datetime.now(timezone.utc)
        self.db.flush()
        return result

    def recalculate_all(self) -> Tuple[int, int]:
        """
        Backfill adjusted values on every row with an active deliverable,
        then recompute totals for every sprint that has rows.

        Returns: (rows_recalculated, sprints_recalculated)
        """
        rows = (
            self.db.query(SprintDeliverable)
            .join(Deliverable, SprintDeliverable.deliverable_id == Deliverable.id)
            .filter(Deliverable.active.is_(True))
            .all()
        )
        for row in rows:
            self._refresh_adjustment(row)
        self.db.flush()

        sprint_ids = [
            sprint_id
            for (sprint_id,) in self.db.query(SprintDeliverable.sprint_draft_id).distinct().all()
        ]
        for sprint_id in sprint_ids:
            self.recalculate_totals(sprint_id)

        return len(rows), len(sprint_ids)

    def _refresh_adjustment(self, row: SprintDeliverable) -> None:
        base = row.base_points if row.base_points is not None else catalog_base_points(row.deliverable)
        complexity = row.complexity_score if row.complexity_score is not None else DEFAULT_COMPLEXITY
        self._apply(row, adjusted_line(base, complexity))

    @staticmethod
    def _apply(row: SprintDeliverable, adjustment: AdjustedLine) -> None:
        row.complexity_score = adjustment.complexity_score
        row.custom_estimate_points = adjustment.custom_estimate_points
        row.custom_hours = adjustment.custom_hours


class SprintPackageRepository:
    """Repository for sprint packages"""

    def __init__(self, db: Session):
        self.db = db

    def list_active(self) -> List[SprintPackage]:
        return (
            self.db.query(SprintPackage)
            .filter(SprintPackage.active.is_(True))
            .order_by(SprintPackage.sort_order)
            .all()
        )

    @staticmethod
    def line_items(package: SprintPackage) -> List[LineItem]:
        return [
            line_item_from_columns(
                base_points=None,
                catalog_points=row.deliverable.points if row.deliverable else None,
                catalog_default_points=row.deliverable.default_estimate_points if row.deliverable else None,
                quantity=row.quantity,
                complexity_score=row.complexity_score,
            )
            for row in package.deliverables
        ]
