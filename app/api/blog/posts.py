"""게시글 라우터 — 게시글 CRUD, 작성자별 조회, 검색 엔드포인트.

Post Router — CRUD, per-user listing and keyword search endpoints for posts.
Every response is wrapped in the ``ApiResponse`` envelope.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import post_page_params
from app.database import get_db
from app.schemas.common import ApiResponse, PageableResponse
from app.schemas.post import PostCreate, PostResponse, PostUpdate
from app.services.post_service import post_service
from app.utils.pagination import PageRequest

router: APIRouter = APIRouter()


@router.get("", response_model=ApiResponse[list[PostResponse]], response_model_exclude_none=True)
async def list_posts(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[list[PostResponse]]:
    """게시글 전체 목록을 조회합니다 (페이지네이션 없음).

    List all posts without pagination.
    """
    return ApiResponse.ok(await post_service.list_posts(db))


@router.get(
    "/page",
    response_model=ApiResponse[PageableResponse[PostResponse]],
    response_model_exclude_none=True,
)
async def list_posts_paginated(
    db: Annotated[AsyncSession, Depends(get_db)],
    page_request: Annotated[PageRequest, Depends(post_page_params)],
) -> ApiResponse[PageableResponse[PostResponse]]:
    """게시글 목록을 페이지네이션하여 조회합니다."""
    return ApiResponse.ok(await post_service.list_posts_paginated(db, page_request))


@router.get("/search", response_model=ApiResponse[list[PostResponse]], response_model_exclude_none=True)
async def search_posts(
    keyword: Annotated[str, Query(description="검색 키워드 (제목/본문 부분 일치)")],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[list[PostResponse]]:
    """제목 또는 본문에 키워드가 포함된 게시글을 검색합니다.

    Search posts by a substring of title or content.
    """
    return ApiResponse.ok(await post_service.search_posts(db, keyword))


@router.get(
    "/search/page",
    response_model=ApiResponse[PageableResponse[PostResponse]],
    response_model_exclude_none=True,
)
async def search_posts_paginated(
    keyword: Annotated[str, Query(description="검색 키워드 (제목/본문 부분 일치)")],
    db: Annotated[AsyncSession, Depends(get_db)],
    page_request: Annotated[PageRequest, Depends(post_page_params)],
) -> ApiResponse[PageableResponse[PostResponse]]:
    """게시글 검색 결과를 페이지네이션하여 조회합니다."""
    return ApiResponse.ok(await post_service.search_posts_paginated(db, keyword, page_request))


@router.get(
    "/user/{user_id}",
    response_model=ApiResponse[list[PostResponse]],
    response_model_exclude_none=True,
)
async def list_posts_by_user(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[list[PostResponse]]:
    """사용자가 작성한 게시글을 조회합니다.

    List all posts written by a user.
    """
    return ApiResponse.ok(await post_service.list_posts_by_user(db, user_id))


@router.get(
    "/user/{user_id}/page",
    response_model=ApiResponse[PageableResponse[PostResponse]],
    response_model_exclude_none=True,
)
async def list_posts_by_user_paginated(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    page_request: Annotated[PageRequest, Depends(post_page_params)],
) -> ApiResponse[PageableResponse[PostResponse]]:
    """사용자가 작성한 게시글을 페이지네이션하여 조회합니다."""
    return ApiResponse.ok(
        await post_service.list_posts_by_user_paginated(db, user_id, page_request)
    )


@router.get("/{post_id}", response_model=ApiResponse[PostResponse], response_model_exclude_none=True)
async def get_post(
    post_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[PostResponse]:
    """게시글 상세를 조회합니다.

    Retrieve a post by id.
    """
    return ApiResponse.ok(await post_service.get_post(db, post_id))


@router.post(
    "",
    response_model=ApiResponse[PostResponse],
    response_model_exclude_none=True,
    status_code=201,
)
async def create_post(
    data: PostCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[PostResponse]:
    """새 게시글을 생성합니다.

    Create a new post for an existing user.
    """
    result: PostResponse = await post_service.create_post(db, data)
    await db.commit()
    return ApiResponse.ok(result, "Post created successfully")


@router.put("/{post_id}", response_model=ApiResponse[PostResponse], response_model_exclude_none=True)
async def update_post(
    post_id: UUID,
    data: PostUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[PostResponse]:
    """게시글 제목/본문을 수정합니다.

    Update the title and content of a post.
    """
    result: PostResponse = await post_service.update_post(db, post_id, data)
    await db.commit()
    return ApiResponse.ok(result, "Post updated successfully")


@router.delete("/{post_id}", response_model=ApiResponse[None], response_model_exclude_none=True)
async def delete_post(
    post_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[None]:
    """게시글을 삭제합니다.

    Delete a post by id.
    """
    await post_service.delete_post(db, post_id)
    await db.commit()
    return ApiResponse.ok(message="Post deleted successfully")
