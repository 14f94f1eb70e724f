"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides the PageRequest value object, sort-column resolution and a generic
paginate function for consistent pagination across all list endpoints.

Pages are zero-based: page N covers rows [N*size, N*size+size) of the
fully ordered result set. Ties on the sort key are broken by ascending id
so repeated calls over unchanged data return identical windows.
"""

import math
import re
from typing import Any, Sequence

from pydantic import BaseModel
from sqlalchemy import Select, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.utils.exceptions import BadRequestError

# 내림차순 지정 값 — 대소문자 무시 비교 (Case-insensitive match selects descending)
SORT_DESC: str = "desc"

# camelCase → snake_case 변환용 패턴 (e.g. "createdAt" -> "created_at")
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class PageRequest(BaseModel):
    """페이지 요청 모델.

    Page request value object passed from routers to services and repositories.

    Attributes:
        page: 페이지 번호, 0부터 시작 (Page number, 0-based)
        size: 페이지당 최대 항목 수 (Maximum items per page)
        sort_by: 정렬 기준 필드명 (Sort field, snake_case or camelCase)
        sort_dir: 정렬 방향 — "desc"면 내림차순, 그 외 오름차순
                  (Sort direction: "desc" selects descending, anything else ascending)
    """

    page: int = 0
    size: int = 10
    sort_by: str = "id"
    sort_dir: str = "asc"

    @property
    def descending(self) -> bool:
        return self.sort_dir.lower() == SORT_DESC

    @property
    def offset(self) -> int:
        return self.page * self.size


def total_pages(total_elements: int, size: int) -> int:
    """전체 페이지 수 — ceil(total_elements / size)."""
    if size <= 0:
        return 0
    return math.ceil(total_elements / size)


def resolve_sort_column(model: type[Any], sort_by: str) -> Any:
    """정렬 필드명을 모델 컬럼으로 변환합니다.

    Resolve a sort field name to a mapped column attribute of ``model``.
    Accepts both the attribute name and its camelCase spelling.

    Args:
        model: SQLAlchemy 모델 클래스 (Mapped model class)
        sort_by: 정렬 필드명 (Requested sort field)

    Returns:
        InstrumentedAttribute: 정렬 대상 컬럼 (Column attribute to order by)

    Raises:
        BadRequestError: 모델에 없는 필드일 때 (Unknown sort field)
    """
    columns: set[str] = {attr.key for attr in inspect(model).column_attrs}
    key: str = sort_by if sort_by in columns else _CAMEL_BOUNDARY.sub("_", sort_by).lower()
    if key not in columns:
        raise BadRequestError(f"Unsupported sort field: {sort_by}")
    return getattr(model, key)


def apply_sort(query: Select[Any], model: type[Any], page_request: PageRequest) -> Select[Any]:
    """요청된 정렬과 id 기준 보조 정렬을 적용합니다.

    Apply the requested ordering plus an ascending id tiebreaker.
    """
    column = resolve_sort_column(model, page_request.sort_by)
    ordering = column.desc() if page_request.descending else column.asc()
    return query.order_by(ordering, model.id.asc())


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    page_request: PageRequest,
) -> tuple[Sequence[Any], int]:
    """SQLAlchemy 쿼리에 대한 페이지네이션을 수행합니다.

    Execute a paginated SQLAlchemy query, returning items and total count.
    Runs two queries: one for the total count (via subquery) and one for
    the actual page of results with OFFSET/LIMIT.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: 정렬이 적용된 SQLAlchemy Select 쿼리 (Ordered base query to paginate)
        page_request: 페이지 요청 (Zero-based page request)

    Returns:
        tuple[Sequence[Any], int]: (항목 목록, 전체 개수) 튜플
            (Tuple of paginated items and total count)
    """
    # 전체 개수 조회 — 서브쿼리로 감싸서 COUNT 실행 (Count total via subquery)
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total: int = (await db.execute(count_query)).scalar() or 0

    # 페이지 항목 조회 — OFFSET/LIMIT 적용 (Fetch page items with offset/limit)
    result = await db.execute(query.offset(page_request.offset).limit(page_request.size))
    items: Sequence[Any] = result.scalars().all()

    return items, total
