"""FastAPI 의존성 주입 모듈 — 페이지네이션 쿼리 파라미터.

FastAPI dependency injection module — Pagination query parameters.
Builds a ``PageRequest`` from ``page``, ``size``, ``sortBy`` and ``sortDir``
query parameters. Each resource gets its own sort defaults.
"""

from typing import Annotated, Callable

from fastapi import Query

from app.config import settings
from app.utils.pagination import PageRequest


def page_params(default_sort_by: str, default_sort_dir: str) -> Callable[..., PageRequest]:
    """리소스별 기본 정렬을 가진 페이지 요청 의존성을 생성합니다.

    Create a dependency that parses pagination query parameters with the
    given sort defaults.

    Args:
        default_sort_by: 기본 정렬 필드 (Default sort field)
        default_sort_dir: 기본 정렬 방향 (Default sort direction)

    Returns:
        Callable[..., PageRequest]: FastAPI 의존성 함수 (FastAPI dependency)
    """

    def _dependency(
        page: Annotated[int, Query(ge=0, description="페이지 번호, 0부터 시작")] = 0,
        size: Annotated[int, Query(ge=1, description="페이지 크기")] = settings.DEFAULT_PAGE_SIZE,
        sort_by: Annotated[str, Query(alias="sortBy", description="정렬 필드")] = default_sort_by,
        sort_dir: Annotated[str, Query(alias="sortDir", description="정렬 방향 (asc|desc)")] = default_sort_dir,
    ) -> PageRequest:
        return PageRequest(page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)

    return _dependency


# 사용자 목록: 가입 순 — Users default to creation order
user_page_params: Callable[..., PageRequest] = page_params("createdAt", "asc")
# 게시글 목록: 최신순 — Posts default to newest first
post_page_params: Callable[..., PageRequest] = page_params("createdAt", "desc")
