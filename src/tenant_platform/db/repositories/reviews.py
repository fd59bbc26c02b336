"""
tenant_platform.db.repositories.reviews

Repository for `Review` entities.

Responsibilities:
- Create, fetch, update and delete reviews.
- Query reviews by target or reviewer with paging and sorting.
- Aggregate approved ratings into target statistics.
"""

from __future__ import annotations

import math
import uuid
from typing import Any, Literal

from sqlalchemy import asc, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tenant_platform.db.base import utcnow
from tenant_platform.db.models import (
    BusinessCategory,
    Review,
    ReviewStatus,
    TargetModel,
)

SortField = Literal["created_at", "rating", "helpful_votes"]
SortOrder = Literal["asc", "desc"]


def empty_distribution() -> dict[int, int]:
    return {1: 0, 2: 0, 3: 0, 4: 0, 5: 0}


class ReviewRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, **fields: Any) -> Review:
        review = Review(
            status=ReviewStatus.pending,
            helpful_votes=0,
            unhelpful_votes=0,
            **fields,
        )
        review.apply_save_rules()
        self._session.add(review)
        await self._session.flush()
        return review

    async def get(self, review_id: uuid.UUID) -> Review | None:
        return await self._session.get(Review, review_id)

    async def save(self, review: Review) -> Review:
        review.apply_save_rules()
        review.updated_at = utcnow()
        await self._session.flush()
        return review

    async def delete(self, review: Review) -> None:
        await self._session.delete(review)
        await self._session.flush()

    async def list_for_target(
        self,
        *,
        target_model: TargetModel,
        target_id: str,
        status: ReviewStatus = ReviewStatus.approved,
        rating: int | None = None,
        sort_by: SortField = "created_at",
        sort_order: SortOrder = "desc",
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[Review], int]:
        conditions = [
            Review.target_model == target_model,
            Review.target_id == target_id,
            Review.status == status,
        ]
        if rating is not None:
            conditions.append(Review.rating == rating)

        order = desc if sort_order == "desc" else asc
        stmt = (
            select(Review)
            .where(*conditions)
            .order_by(order(getattr(Review, sort_by)), order(Review.id))
            .offset(offset)
            .limit(limit)
        )
        total_stmt = select(func.count()).select_from(Review).where(*conditions)

        reviews = list((await self._session.execute(stmt)).scalars().all())
        total = (await self._session.execute(total_stmt)).scalar_one()
        return reviews, int(total)

    async def list_for_reviewer(
        self,
        reviewer: str,
        *,
        business_category: BusinessCategory | None = None,
        status: ReviewStatus | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[Review], int]:
        conditions = [Review.reviewer == reviewer]
        if business_category is not None:
            conditions.append(Review.business_category == business_category)
        if status is not None:
            conditions.append(Review.status == status)

        stmt = (
            select(Review)
            .where(*conditions)
            .order_by(desc(Review.created_at), desc(Review.id))
            .offset(offset)
            .limit(limit)
        )
        total_stmt = select(func.count()).select_from(Review).where(*conditions)

        reviews = list((await self._session.execute(stmt)).scalars().all())
        total = (await self._session.execute(total_stmt)).scalar_one()
        return reviews, int(total)

    async def recent_for_target(
        self, *, target_model: TargetModel, target_id: str, limit: int = 5
    ) -> list[Review]:
        reviews, _ = await self.list_for_target(
            target_model=target_model, target_id=target_id, limit=limit
        )
        return reviews

    async def rating_stats(self, *, target_model: TargetModel, target_id: str) -> dict[str, Any]:
        """
        Average, count and per-star distribution over approved reviews.

        Half-star ratings count towards the lower star (4.5 -> 4). The average
        is rounded half-up to one decimal.
        """
        stmt = (
            select(Review.rating, func.count())
            .where(
                Review.target_model == target_model,
                Review.target_id == target_id,
                Review.status == ReviewStatus.approved,
            )
            .group_by(Review.rating)
        )
        rows = (await self._session.execute(stmt)).all()

        distribution = empty_distribution()
        total = 0
        rating_sum = 0.0
        for rating, count in rows:
            distribution[min(5, max(1, math.floor(rating)))] += count
            total += count
            rating_sum += rating * count

        average = math.floor(rating_sum / total * 10 + 0.5) / 10 if total else 0
        return {
            "average_rating": average,
            "total_reviews": total,
            "rating_distribution": distribution,
        }


# --- Module Notes -----------------------------------------------------------
# Reviews are platform-wide rather than tenant-scoped: a vendor keeps its ratings
# across every tenant site that lists it.
