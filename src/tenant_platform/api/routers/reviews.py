"""
tenant_platform.api.routers.reviews

Ratings and comments for vendors, products, hotels, bookings and orders.

Responsibilities:
- Public read APIs: reviews and rating statistics per target.
- Authenticated write APIs: create/update/delete, helpfulness votes.
- Role-gated APIs: vendor responses and admin moderation.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from tenant_platform.api.deps import db_session
from tenant_platform.api.pagination import PageParams, Pagination, page_params
from tenant_platform.auth.deps import get_principal, require_roles
from tenant_platform.auth.models import Principal
from tenant_platform.db.base import utcnow
from tenant_platform.db.models import (
    BusinessCategory,
    Review,
    ReviewStatus,
    ReviewType,
    TargetModel,
    VerificationMethod,
)
from tenant_platform.db.repositories.reviews import ReviewRepo
from tenant_platform.errors import ForbiddenError, NotFoundError
from tenant_platform.observability.logging import get_logger

router = APIRouter(prefix="/api/reviews", tags=["reviews"])

log = get_logger(__name__)

RECENT_REVIEWS_LIMIT = 5


class ReviewImage(BaseModel):
    url: str = Field(min_length=1)
    caption: str | None = Field(default=None, max_length=200)
    uploaded_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


def _check_rating(v: float | None) -> float | None:
    # Whole or half stars only: 1, 1.5, ..., 5.
    if v is not None and (v * 2) != int(v * 2):
        raise ValueError("Rating must be a whole number or half number (e.g., 4.5)")
    return v


class ReviewCreateRequest(BaseModel):
    review_type: ReviewType
    target_model: TargetModel
    target_id: str = Field(min_length=1, max_length=64)
    business_category: BusinessCategory
    rating: float = Field(ge=1, le=5)
    title: str = Field(min_length=5, max_length=200)
    comment: str = Field(min_length=10, max_length=2000)
    images: list[ReviewImage] = Field(default_factory=list)

    @field_validator("rating")
    @classmethod
    def _half_stars(cls, v: float | None) -> float | None:
        return _check_rating(v)


class ReviewUpdateRequest(BaseModel):
    rating: float | None = Field(default=None, ge=1, le=5)
    title: str | None = Field(default=None, min_length=5, max_length=200)
    comment: str | None = Field(default=None, min_length=10, max_length=2000)
    images: list[ReviewImage] | None = None

    @field_validator("rating")
    @classmethod
    def _half_stars(cls, v: float | None) -> float | None:
        return _check_rating(v)


class VendorResponseRequest(BaseModel):
    message: str = Field(min_length=1, max_length=1000)


class ModerationRequest(BaseModel):
    status: ReviewStatus
    moderation_notes: str | None = Field(default=None, max_length=500)
    is_verified: bool | None = None
    verification_method: VerificationMethod | None = None


def serialize_review(r: Review) -> dict[str, Any]:
    return {
        "id": str(r.id),
        "review_type": r.review_type.value,
        "target_model": r.target_model.value,
        "target_id": r.target_id,
        "business_category": r.business_category.value,
        "reviewer": r.reviewer,
        "reviewer_name": r.reviewer_name,
        "rating": r.rating,
        "title": r.title,
        "comment": r.comment,
        "images": r.images or [],
        "is_verified": r.is_verified,
        "verification_method": r.verification_method.value,
        "status": r.status.value,
        "helpful_votes": r.helpful_votes,
        "unhelpful_votes": r.unhelpful_votes,
        "total_votes": r.total_votes,
        "helpfulness_ratio": r.helpfulness_ratio,
        "vendor_response": r.vendor_response,
        "created_at": r.created_at.isoformat(),
        "updated_at": r.updated_at.isoformat(),
    }


async def _get_or_404(repo: ReviewRepo, review_id: uuid.UUID) -> Review:
    review = await repo.get(review_id)
    if review is None:
        raise NotFoundError("Review not found")
    return review


# --- Public ------------------------------------------------------------------


@router.get("/target/{target_model}/{target_id}")
async def list_target_reviews(
    target_model: TargetModel,
    target_id: str,
    page: PageParams = Depends(page_params),
    rating: int | None = Query(default=None, ge=1, le=5),
    status: ReviewStatus = ReviewStatus.approved,
    sort_by: Literal["created_at", "rating", "helpful_votes"] = "created_at",
    sort_order: Literal["asc", "desc"] = "desc",
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    repo = ReviewRepo(session)
    reviews, total = await repo.list_for_target(
        target_model=target_model,
        target_id=target_id,
        status=status,
        rating=rating,
        sort_by=sort_by,
        sort_order=sort_order,
        offset=page.offset,
        limit=page.limit,
    )
    stats = await repo.rating_stats(target_model=target_model, target_id=target_id)
    return {
        "success": True,
        "message": "Reviews retrieved successfully",
        "data": {
            "reviews": [serialize_review(r) for r in reviews],
            "pagination": Pagination.build(page, total).model_dump(),
            "stats": stats,
        },
    }


@router.get("/target/{target_model}/{target_id}/stats")
async def target_review_stats(
    target_model: TargetModel,
    target_id: str,
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    repo = ReviewRepo(session)
    stats = await repo.rating_stats(target_model=target_model, target_id=target_id)
    recent = await repo.recent_for_target(
        target_model=target_model, target_id=target_id, limit=RECENT_REVIEWS_LIMIT
    )
    return {
        "success": True,
        "message": "Review statistics retrieved successfully",
        "data": {"stats": stats, "recent_reviews": [serialize_review(r) for r in recent]},
    }


# --- Authenticated -------------------------------------------------------------


@router.post("", status_code=HTTP_201_CREATED)
async def create_review(
    request: Request,
    body: ReviewCreateRequest,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    review = await ReviewRepo(session).create(
        review_type=body.review_type,
        target_model=body.target_model,
        target_id=body.target_id,
        business_category=body.business_category,
        reviewer=principal.subject,
        reviewer_name=principal.display_name[:100],
        rating=body.rating,
        title=body.title,
        comment=body.comment,
        images=[img.model_dump(mode="json") for img in body.images],
        meta={
            "user_agent": request.headers.get("user-agent"),
            "ip_address": request.client.host if request.client else None,
            "source": "api",
        },
    )
    await session.commit()
    log.info("review_created", review_id=str(review.id), target=body.target_id)
    return {
        "success": True,
        "message": "Review created successfully",
        "data": {"review": serialize_review(review)},
    }


async def _user_reviews(
    user_id: str,
    page: PageParams,
    business_category: BusinessCategory | None,
    status: ReviewStatus | None,
    session: AsyncSession,
) -> dict[str, Any]:
    reviews, total = await ReviewRepo(session).list_for_reviewer(
        user_id,
        business_category=business_category,
        status=status,
        offset=page.offset,
        limit=page.limit,
    )
    return {
        "success": True,
        "message": "User reviews retrieved successfully",
        "data": {
            "reviews": [serialize_review(r) for r in reviews],
            "pagination": Pagination.build(page, total).model_dump(),
        },
    }


@router.get("/user")
async def list_my_reviews(
    page: PageParams = Depends(page_params),
    business_category: BusinessCategory | None = None,
    status: ReviewStatus | None = None,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    return await _user_reviews(principal.subject, page, business_category, status, session)


@router.get("/user/{user_id}")
async def list_user_reviews(
    user_id: str,
    page: PageParams = Depends(page_params),
    business_category: BusinessCategory | None = None,
    status: ReviewStatus | None = None,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    return await _user_reviews(user_id, page, business_category, status, session)


@router.put("/{review_id}")
async def update_review(
    review_id: uuid.UUID,
    body: ReviewUpdateRequest,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    repo = ReviewRepo(session)
    review = await _get_or_404(repo, review_id)
    if review.reviewer != principal.subject:
        raise ForbiddenError("Not authorized to update this review")

    if body.rating is not None:
        review.rating = body.rating
    if body.title is not None:
        review.title = body.title
    if body.comment is not None:
        review.comment = body.comment
    if body.images is not None:
        review.images = [img.model_dump(mode="json") for img in body.images]

    # Edited content goes back through moderation.
    if body.rating is not None or body.title is not None or body.comment is not None:
        review.status = ReviewStatus.pending

    await repo.save(review)
    await session.commit()
    return {
        "success": True,
        "message": "Review updated successfully",
        "data": {"review": serialize_review(review)},
    }


@router.delete("/{review_id}")
async def delete_review(
    review_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    repo = ReviewRepo(session)
    review = await _get_or_404(repo, review_id)
    if review.reviewer != principal.subject and not principal.is_admin:
        raise ForbiddenError("Not authorized to delete this review")
    await repo.delete(review)
    await session.commit()
    log.info("review_deleted", review_id=str(review_id))
    return {"success": True, "message": "Review deleted successfully"}


@router.post("/{review_id}/helpful")
async def mark_helpful(
    review_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    # TODO: record voters per review so one principal cannot vote twice.
    repo = ReviewRepo(session)
    review = await _get_or_404(repo, review_id)
    review.helpful_votes += 1
    await repo.save(review)
    await session.commit()
    return {
        "success": True,
        "message": "Review marked as helpful",
        "data": {"helpful_votes": review.helpful_votes, "total_votes": review.total_votes},
    }


@router.post("/{review_id}/unhelpful")
async def mark_unhelpful(
    review_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    repo = ReviewRepo(session)
    review = await _get_or_404(repo, review_id)
    review.unhelpful_votes += 1
    await repo.save(review)
    await session.commit()
    return {
        "success": True,
        "message": "Review marked as unhelpful",
        "data": {"unhelpful_votes": review.unhelpful_votes, "total_votes": review.total_votes},
    }


@router.post("/{review_id}/response")
async def add_vendor_response(
    review_id: uuid.UUID,
    body: VendorResponseRequest,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    if not principal.has_any("vendor"):
        raise ForbiddenError("Not authorized to respond to this review")
    repo = ReviewRepo(session)
    review = await _get_or_404(repo, review_id)
    review.vendor_response = {
        "message": body.message,
        "responded_by": principal.subject,
        "responded_at": utcnow().isoformat(),
    }
    await repo.save(review)
    await session.commit()
    return {
        "success": True,
        "message": "Vendor response added successfully",
        "data": {"vendor_response": review.vendor_response},
    }


@router.patch("/{review_id}/moderate", dependencies=[Depends(require_roles("admin"))])
async def moderate_review(
    review_id: uuid.UUID,
    body: ModerationRequest,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    repo = ReviewRepo(session)
    review = await _get_or_404(repo, review_id)
    review.status = body.status
    review.moderation_notes = body.moderation_notes
    review.moderated_by = principal.subject
    review.moderated_at = utcnow()
    if body.is_verified is not None:
        review.is_verified = body.is_verified
    if body.verification_method is not None:
        review.verification_method = body.verification_method
    await repo.save(review)
    await session.commit()
    log.info("review_moderated", review_id=str(review_id), status=review.status.value)
    return {
        "success": True,
        "message": f"Review {review.status.value} successfully",
        "data": {
            "review": {
                "id": str(review.id),
                "status": review.status.value,
                "moderation_notes": review.moderation_notes,
                "moderated_at": review.moderated_at.isoformat() if review.moderated_at else None,
            }
        },
    }
