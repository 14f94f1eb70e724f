"""사용자 라우터 — 사용자 CRUD 엔드포인트.

User Router — CRUD endpoints for users.
Every response is wrapped in the ``ApiResponse`` envelope.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import user_page_params
from app.database import get_db
from app.schemas.common import ApiResponse, PageableResponse
from app.schemas.user import UserRequest, UserResponse
from app.services.user_service import user_service
from app.utils.pagination import PageRequest

router: APIRouter = APIRouter()


@router.get("", response_model=ApiResponse[list[UserResponse]], response_model_exclude_none=True)
async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[list[UserResponse]]:
    """사용자 전체 목록을 조회합니다 (페이지네이션 없음).

    List all users without pagination.
    """
    return ApiResponse.ok(await user_service.list_users(db))


@router.get(
    "/page",
    response_model=ApiResponse[PageableResponse[UserResponse]],
    response_model_exclude_none=True,
)
async def list_users_paginated(
    db: Annotated[AsyncSession, Depends(get_db)],
    page_request: Annotated[PageRequest, Depends(user_page_params)],
) -> ApiResponse[PageableResponse[UserResponse]]:
    """사용자 목록을 페이지네이션하여 조회합니다.

    List users one page at a time.
    """
    return ApiResponse.ok(await user_service.list_users_paginated(db, page_request))


@router.get("/{user_id}", response_model=ApiResponse[UserResponse], response_model_exclude_none=True)
async def get_user(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[UserResponse]:
    """사용자 상세를 조회합니다.

    Retrieve a user by id.
    """
    return ApiResponse.ok(await user_service.get_user(db, user_id))


@router.post(
    "",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_none=True,
    status_code=201,
)
async def create_user(
    data: UserRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[UserResponse]:
    """새 사용자를 생성합니다.

    Create a new user.
    """
    result: UserResponse = await user_service.create_user(db, data)
    await db.commit()
    return ApiResponse.ok(result, "User created successfully")


@router.put("/{user_id}", response_model=ApiResponse[UserResponse], response_model_exclude_none=True)
async def update_user(
    user_id: UUID,
    data: UserRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[UserResponse]:
    """사용자 정보를 수정합니다.

    Update an existing user.
    """
    result: UserResponse = await user_service.update_user(db, user_id, data)
    await db.commit()
    return ApiResponse.ok(result, "User updated successfully")


@router.delete("/{user_id}", response_model=ApiResponse[None], response_model_exclude_none=True)
async def delete_user(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[None]:
    """사용자를 삭제합니다.

    Delete a user by id.
    """
    await user_service.delete_user(db, user_id)
    await db.commit()
    return ApiResponse.ok(message="User deleted successfully")
