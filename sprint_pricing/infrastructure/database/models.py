"""SQLAlchemy ORM models for the deliverables catalog, sprint drafts and packages"""

import uuid
from sqlalchemy import Column, String, Boolean, Float, DateTime, Integer, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class Deliverable(Base):
    """Master catalog entry with its nominal point value"""

    __tablename__ = "deliverables"

    id = Column(String(64), primary_key=True, default=_new_id)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(Text, nullable=True)
    scope = Column(Text, nullable=True)
    points = Column(Float, nullable=True)
    default_estimate_points = Column(Float, nullable=True)
    fixed_hours = Column(Float, nullable=True)
    fixed_price = Column(Float, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class SprintDraft(Base):
    """Client sprint scope; totals are derived by the pricing engine"""

    __tablename__ = "sprint_drafts"

    id = Column(String(64), primary_key=True, default=_new_id)
    title = Column(Text, nullable=True)
    status = Column(Text, nullable=False, default="draft")
    weeks = Column(Integer, nullable=False, default=2)
    deliverable_count = Column(Integer, nullable=False, default=0)
    total_estimate_points = Column(Float, nullable=True)
    total_fixed_hours = Column(Float, nullable=True)
    total_fixed_price = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    deliverables = relationship(
        "SprintDeliverable",
        back_populates="sprint_draft",
        cascade="all, delete-orphan",
        order_by="SprintDeliverable.created_at",
    )


class SprintDeliverable(Base):
    """Junction row: one deliverable inside a sprint draft, with per-item overrides"""

    __tablename__ = "sprint_deliverables"
    __table_args__ = (UniqueConstraint("sprint_draft_id", "deliverable_id"),)

    id = Column(String(64), primary_key=True, default=_new_id)
    sprint_draft_id = Column(String(64), ForeignKey("sprint_drafts.id", ondelete="CASCADE"), nullable=False, index=True)
    deliverable_id = Column(String(64), ForeignKey("deliverables.id"), nullable=False)
    quantity = Column(Float, nullable=False, default=1)
    complexity_score = Column(Float, nullable=True)
    deliverable_name = Column(Text, nullable=True)
    deliverable_category = Column(Text, nullable=True)
    base_points = Column(Float, nullable=True)
    custom_estimate_points = Column(Float, nullable=True)
    custom_hours = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    sprint_draft = relationship("SprintDraft", back_populates="deliverables")
    deliverable = relationship("Deliverable")


class SprintPackage(Base):
    """Pre-defined bundle of deliverables; NULL flat_fee means dynamic pricing"""

    __tablename__ = "sprint_packages"

    id = Column(String(64), primary_key=True, default=_new_id)
    name = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)
    flat_fee = Column(Float, nullable=True)
    flat_hours = Column(Float, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)

    deliverables = relationship(
        "SprintPackageDeliverable",
        back_populates="package",
        cascade="all, delete-orphan",
        order_by="SprintPackageDeliverable.sort_order",
    )


class SprintPackageDeliverable(Base):
    """Junction row: one deliverable inside a package"""

    __tablename__ = "sprint_package_deliverables"

    id = Column(String(64), primary_key=True, default=_new_id)
    sprint_package_id = Column(String(64), ForeignKey("sprint_packages.id", ondelete="CASCADE"), nullable=False)
    deliverable_id = Column(String(64), ForeignKey("deliverables.id"), nullable=False)
    quantity = Column(Float, nullable=False, default=1)
    complexity_score = Column(Float, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)

    package = relationship("SprintPackage", back_populates="deliverables")
    deliverable = relationship("Deliverable")
