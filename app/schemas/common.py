"""공통 Pydantic 응답 스키마 정의.

Common Pydantic response schema definitions.
Includes the uniform response envelope, the paginated-result wrapper and
the camelCase base model shared by every request/response schema.
"""

from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.utils.pagination import total_pages

T = TypeVar("T")


class CamelModel(BaseModel):
    """camelCase 직렬화 베이스 모델.

    Base model serialised with camelCase keys (e.g. ``created_at`` -> ``createdAt``).
    Accepts both spellings on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# === 응답 봉투 (Response envelope) 스키마 ===

class ApiResponse(BaseModel, Generic[T]):
    """공통 응답 봉투 스키마.

    Uniform success/error envelope returned by every endpoint.
    ``None`` fields are omitted on the wire.

    Attributes:
        success: 성공 여부 (Whether the operation succeeded)
        message: 응답 메시지 (Human-readable message, optional)
        data: 응답 데이터 (Payload, optional)
    """

    success: bool  # 성공 여부 (Success flag)
    message: str | None = None  # 응답 메시지 (Optional message)
    data: T | None = None  # 응답 데이터 (Optional payload)

    @classmethod
    def ok(cls, data: Any = None, message: str | None = None) -> "ApiResponse[T]":
        """성공 응답을 생성합니다 (Build a success envelope)."""
        return cls(success=True, message=message, data=data)

    @classmethod
    def error(cls, message: str, data: Any = None) -> "ApiResponse[T]":
        """실패 응답을 생성합니다 (Build a failure envelope)."""
        return cls(success=False, message=message, data=data)


class PageableResponse(CamelModel, Generic[T]):
    """페이지네이션 응답 스키마.

    Paginated response wrapper schema.
    Wraps one page of items with pagination metadata.

    Attributes:
        content: 현재 페이지 항목 목록 (Items for the current page)
        page: 요청 페이지 번호 (Requested page number, 0-based)
        size: 요청 페이지 크기 (Requested page size)
        total_elements: 전체 항목 수 (Total count across all pages)
        total_pages: 전체 페이지 수 (Total pages, ceil(total_elements / size))
    """

    content: list[T]  # 현재 페이지 항목 (Items for the current page)
    page: int  # 현재 페이지 — 0부터 시작 (Current page, 0-indexed)
    size: int  # 페이지당 항목 수 (Items per page)
    total_elements: int  # 전체 항목 수 (Total item count)
    total_pages: int  # 전체 페이지 수 (Total pages)

    @classmethod
    def of(
        cls,
        content: Sequence[Any],
        page: int,
        size: int,
        total_elements: int,
    ) -> "PageableResponse[T]":
        """페이지 응답을 생성하고 전체 페이지 수를 계산합니다.

        Build a page wrapper, computing ``total_pages`` from the total count.
        """
        return cls(
            content=list(content),
            page=page,
            size=size,
            total_elements=total_elements,
            total_pages=total_pages(total_elements, size),
        )
