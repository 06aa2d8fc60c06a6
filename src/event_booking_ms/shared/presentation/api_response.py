"""Standard API response wrapper."""

import math
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper for consistent response format."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Operation completed successfully",
                "data": {"id": "123"},
                "errors": None,
            }
        }
    )

    success: bool = True
    message: str | None = None
    data: T | None = None
    errors: list[Any] | None = None

    @classmethod
    def ok(cls, data: T | None = None, message: str | None = None) -> "APIResponse[T]":
        """Create a successful response."""
        return cls(success=True, data=data, message=message)

    @classmethod
    def error(
        cls, message: str, errors: list[Any] | None = None
    ) -> "APIResponse[None]":
        """Create an error response."""
        return APIResponse[None](success=False, message=message, errors=errors)


class Page(BaseModel, Generic[T]):
    """One page of a list endpoint."""

    items: list[T]
    total: int
    page: int
    total_pages: int

    @classmethod
    def build(cls, items: list[T], total: int, page: int, limit: int) -> "Page[T]":
        return cls(
            items=items,
            total=total,
            page=page,
            total_pages=math.ceil(total / limit) if limit else 0,
        )
