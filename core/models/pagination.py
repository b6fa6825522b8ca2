# =============================================================================
# core/models/pagination.py - Paginated Response Envelope
# =============================================================================
# Every list endpoint returns the same envelope:
#
#   {
#       "data": [...],                       # newest first, at most `limit` rows
#       "meta": {"total": 42, "page": 1, "limit": 10, "totalPages": 5}
#   }
#
# PageRequest carries the parsed `page`/`limit` query values and the derived
# row offset shared by both controllers.
# =============================================================================

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class PageRequest(BaseModel):
    """A validated page request (1-based page, positive limit)."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)

    @property
    def skip(self) -> int:
        """Number of rows before the first row of this page."""
        return (self.page - 1) * self.limit

    @property
    def range_end(self) -> int:
        """Inclusive index of the last row of this page (PostgREST `range`)."""
        return self.skip + self.limit - 1


class PageMeta(BaseModel):
    """Paging metadata for a list response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total: int = Field(..., ge=0, description="Count of all matching rows")
    page: int = Field(..., ge=1, description="1-based current page")
    limit: int = Field(..., ge=1, description="Page size")
    total_pages: int = Field(..., ge=0, description="ceil(total / limit)")


class Page(BaseModel, Generic[T]):
    """
    PaginatedResponse<T>.

    Build it with `Page.build()` so `total_pages` always agrees with
    `total` and `limit`.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    data: list[T] = Field(default_factory=list)
    meta: PageMeta

    @classmethod
    def build(cls, rows: list[T], total: int, request: PageRequest) -> "Page[T]":
        return cls(
            data=rows[:request.limit],
            meta=PageMeta(
                total=total,
                page=request.page,
                limit=request.limit,
                total_pages=total_pages(total, request.limit),
            ),
        )


def total_pages(total: int, limit: int) -> int:
    """ceil(total / limit); zero rows means zero pages."""
    if total <= 0:
        return 0
    return math.ceil(total / limit)
