"""
schemas/common.py

- Shared schemas used across the project (Pydantic v2)
- Contents:
  1) CamelModel: base for every wire schema (camelCase out, camelCase or snake_case in)
  2) Error response standard: ErrorDetail, ErrorResponse
  3) Pagination meta: MetaInfo, make_meta()
  4) Success envelope: SuccessEnvelope[T] (used as response_model)
"""

from __future__ import annotations

from datetime import datetime, timezone
from math import ceil
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =========================================================
# 1) Error response standard
# =========================================================

class ErrorDetail(BaseModel):
    """Smallest unit carrying an error code/message"""
    code: str = Field(..., description="Error code (VALIDATION_ERROR, NOT_FOUND, CONSTRAINT_VIOLATION, INTERNAL_ERROR)")
    message: str = Field(..., description="Human-readable summary")


class ErrorResponse(BaseModel):
    """
    Standard error body returned by the global handlers
    (middlewares/error_handler.py)
    """
    success: bool = False
    error: ErrorDetail
    errors: List[str] = Field(default_factory=list, description="Every violated rule, in order")
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Response creation time (UTC)"
    )

    model_config = ConfigDict(extra="ignore")


# =========================================================
# 2) Pagination meta
# =========================================================

class MetaInfo(BaseModel):
    """
    Meta block attached to paged list responses
    - total: total matches
    - page/size: current page and size
    - pages: total pages
    - sort: applied ordering (optional)
    """
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    size: int = Field(..., ge=1)
    pages: int = Field(..., ge=1)
    sort: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


def make_meta(total: int, page: int, size: int, sort: Optional[str] = None) -> MetaInfo:
    """
    Build paging meta
    - pages is at least 1 even when total is 0 (simpler for the front end)
    """
    pages = max(1, ceil(total / max(1, size)))
    return MetaInfo(total=total, page=page, size=size, pages=pages, sort=sort)


# =========================================================
# 3) Success envelope
# =========================================================

T = TypeVar("T")


class SuccessEnvelope(BaseModel, Generic[T]):
    success: bool = True
    data: T
    message: Optional[str] = None
    meta: Optional[MetaInfo] = None

    model_config = ConfigDict(extra="ignore")

