"""
tenant_platform.db.models

Persistence schema for the business modules.

Responsibilities:
- Define one document model per business module:
  - Vehicle (automobiles), Service (business), Product (ecommerce),
    Room (hotels), Venue (weddings)
- Define Review: ratings and comments attached to any reviewable target.
"""

from __future__ import annotations

import enum
import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Enum, Float, Index, Integer, String, Text, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column

from tenant_platform.db.base import Base, DocumentMixin, utcnow


class Vehicle(DocumentMixin, Base):
    __tablename__ = "vehicles"

    make: Mapped[str] = mapped_column(String(128), nullable=False)
    model: Mapped[str] = mapped_column(String(128), nullable=False)


class Service(DocumentMixin, Base):
    __tablename__ = "services"

    name: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)


class Product(DocumentMixin, Base):
    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String(256), nullable=False)


class Room(DocumentMixin, Base):
    __tablename__ = "rooms"

    room_number: Mapped[str] = mapped_column(String(32), nullable=False)
    type: Mapped[str] = mapped_column(String(64), nullable=False)


class Venue(DocumentMixin, Base):
    __tablename__ = "venues"

    name: Mapped[str] = mapped_column(String(256), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)


class ReviewType(enum.StrEnum):
    vendor = "vendor"
    product = "product"
    hotel = "hotel"
    booking = "booking"
    order = "order"


class TargetModel(enum.StrEnum):
    # Path segment in /api/reviews/target/{target_model}/...; treat as stable API contract.
    Vendor = "Vendor"
    Product = "Product"
    Hotel = "Hotel"
    Booking = "Booking"
    Order = "Order"


class BusinessCategory(enum.StrEnum):
    hotel = "hotel"
    ecommerce = "ecommerce"
    wedding = "wedding"
    automobile = "automobile"
    business = "business"


class VerificationMethod(enum.StrEnum):
    purchase = "purchase"
    booking = "booking"
    manual = "manual"
    none = "none"


class ReviewStatus(enum.StrEnum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    hidden = "hidden"


class Review(Base):
    __tablename__ = "reviews"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    review_type: Mapped[ReviewType] = mapped_column(Enum(ReviewType), nullable=False)
    target_model: Mapped[TargetModel] = mapped_column(Enum(TargetModel), nullable=False)
    # Targets may live in other systems, so the id is an opaque string.
    target_id: Mapped[str] = mapped_column(String(64), nullable=False)
    business_category: Mapped[BusinessCategory] = mapped_column(
        Enum(BusinessCategory), nullable=False, index=True
    )

    reviewer: Mapped[str] = mapped_column(String(256), nullable=False, index=True)
    reviewer_name: Mapped[str] = mapped_column(String(100), nullable=False)

    rating: Mapped[float] = mapped_column(Float, nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    images: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    is_verified: Mapped[bool] = mapped_column(nullable=False, default=False)
    verification_method: Mapped[VerificationMethod] = mapped_column(
        Enum(VerificationMethod), nullable=False, default=VerificationMethod.none
    )

    status: Mapped[ReviewStatus] = mapped_column(
        Enum(ReviewStatus), nullable=False, default=ReviewStatus.pending, index=True
    )
    moderation_notes: Mapped[str | None] = mapped_column(String(500), nullable=True)
    moderated_by: Mapped[str | None] = mapped_column(String(256), nullable=True)
    moderated_at: Mapped[datetime | None] = mapped_column(nullable=True)

    helpful_votes: Mapped[int] = mapped_column(nullable=False, default=0)
    unhelpful_votes: Mapped[int] = mapped_column(nullable=False, default=0)
    total_votes: Mapped[int] = mapped_column(nullable=False, default=0)

    vendor_response: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    meta: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("ix_reviews_target", "target_model", "target_id", "status"),
    )

    @property
    def helpfulness_ratio(self) -> float:
        if not self.total_votes:
            return 0.0
        return self.helpful_votes / self.total_votes * 100

    def apply_save_rules(self) -> None:
        """Recompute derived fields; call before every flush of a changed review."""
        self.total_votes = (self.helpful_votes or 0) + (self.unhelpful_votes or 0)
        if (
            self.is_verified
            and self.verification_method == VerificationMethod.purchase
            and self.status == ReviewStatus.pending
        ):
            self.status = ReviewStatus.approved
