from __future__ import annotations

import enum
import math
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field, computed_field

T = TypeVar("T")


class ResultCode(enum.IntEnum):
    """Machine-readable result codes carried by ApiResult."""
    SUCCESS = 0
    FAILED = 1
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    VALIDATION_ERROR = 422
    INTERNAL_ERROR = 500


# PUBLIC_INTERFACE
class ApiResult(BaseModel, Generic[T]):
    """Standard response envelope: a success flag, payload, message and code."""
    success: bool = Field(..., description="Whether the operation succeeded")
    data: Optional[T] = Field(default=None, description="Response payload")
    message: str = Field(default="", description="Human readable message")
    code: int = Field(default=int(ResultCode.SUCCESS), description="Result code; 0 means success")

    @classmethod
    def ok(cls, data: Optional[T] = None, message: str = "success") -> "ApiResult[T]":
        """Build a successful result."""
        return cls(success=True, data=data, message=message, code=int(ResultCode.SUCCESS))

    @classmethod
    def fail(
        cls,
        message: str,
        code: int = ResultCode.FAILED,
        data: Optional[T] = None,
    ) -> "ApiResult[T]":
        """Build a failed result."""
        return cls(success=False, data=data, message=message, code=int(code))


# PUBLIC_INTERFACE
class PagedResult(BaseModel, Generic[T]):
    """One page of items plus the total count across all pages."""
    items: List[T] = Field(default_factory=list, description="Items on this page")
    total: int = Field(0, ge=0, description="Total number of matching records")
    page_index: int = Field(1, ge=1, description="1-based page number")
    page_size: int = Field(20, ge=1, description="Page size")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.total else 0


class Pagination(BaseModel):
    """Paging parameters."""
    page_index: int = Field(1, ge=1, description="1-based page number")
    page_size: int = Field(20, ge=1, le=1000, description="Max number of records per page")

    @property
    def offset(self) -> int:
        return (self.page_index - 1) * self.page_size
