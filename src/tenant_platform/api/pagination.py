"""
tenant_platform.api.pagination

Page/limit query parsing and the pagination block returned by list endpoints.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from fastapi import Query
from pydantic import BaseModel

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(frozen=True, slots=True)
class PageParams:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_params(
    page: int = Query(default=DEFAULT_PAGE, ge=1),
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
) -> PageParams:
    return PageParams(page=page, limit=limit)


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, params: PageParams, total_items: int) -> Pagination:
        total_pages = math.ceil(total_items / params.limit)
        return cls(
            current_page=params.page,
            total_pages=total_pages,
            total_items=total_items,
            items_per_page=params.limit,
            has_next_page=params.page < total_pages,
            has_prev_page=params.page > 1,
        )
