"""사용자 서비스 — 사용자 CRUD 비즈니스 로직.

User Service — Business logic for user CRUD operations.
Owns the user lifecycle and the email uniqueness invariant. The uniqueness
check and the insert are separate store calls; the unique index on
``users.email`` rejects the loser of a concurrent race.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.user_repository import user_repository
from app.schemas.common import PageableResponse
from app.schemas.user import UserRequest, UserResponse
from app.utils.events import EventEmitter, event_emitter
from app.utils.exceptions import BadRequestError, NotFoundError
from app.utils.pagination import PageRequest


class UserService:
    """사용자 관련 비즈니스 로직을 처리하는 서비스.

    Service handling user business logic.

    Attributes:
        events: 작업 이벤트 발행기 (Operation event emitter)
    """

    def __init__(self, events: EventEmitter) -> None:
        self.events: EventEmitter = events

    def _to_response(self, user: User) -> UserResponse:
        """사용자 모델을 응답 스키마로 변환합니다.

        Convert a User model instance to a UserResponse schema.

        Args:
            user: 사용자 모델 (User model instance)

        Returns:
            UserResponse: 사용자 응답 (User response)
        """
        return UserResponse(
            id=str(user.id),
            email=user.email,
            name=user.name,
            surname=user.surname,
            created_at=user.created_at,
        )

    async def _get_or_404(self, db: AsyncSession, user_id: UUID) -> User:
        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError(f"User not found: {user_id}")
        return user

    async def list_users(self, db: AsyncSession) -> list[UserResponse]:
        """모든 사용자를 조회합니다.

        List all users in store-native order. Empty list if there are none.
        """
        with self.events.operation("user.list"):
            users = await user_repository.get_all(db)
        return [self._to_response(u) for u in users]

    async def list_users_paginated(
        self,
        db: AsyncSession,
        page_request: PageRequest,
    ) -> PageableResponse[UserResponse]:
        """사용자 목록을 페이지네이션하여 조회합니다.

        List one sorted page of users.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            page_request: 페이지 요청 (Zero-based page request)

        Returns:
            PageableResponse[UserResponse]: 사용자 페이지 (Page of users with totals)

        Raises:
            BadRequestError: 지원하지 않는 정렬 필드일 때 (Unsupported sort field)
        """
        with self.events.operation(
            "user.list_page",
            page=page_request.page,
            size=page_request.size,
            sort_by=page_request.sort_by,
        ):
            users, total = await user_repository.find_all_paginated(db, page_request)
        return PageableResponse[UserResponse].of(
            [self._to_response(u) for u in users],
            page_request.page,
            page_request.size,
            total,
        )

    async def get_user(self, db: AsyncSession, user_id: UUID) -> UserResponse:
        """사용자 상세를 조회합니다.

        Retrieve a user by id.

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
        """
        with self.events.operation("user.get", user_id=str(user_id)):
            user: User = await self._get_or_404(db, user_id)
        return self._to_response(user)

    async def create_user(self, db: AsyncSession, data: UserRequest) -> UserResponse:
        """새 사용자를 생성합니다.

        Create a new user after checking the email is not taken.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 사용자 생성 데이터 (User creation data)

        Returns:
            UserResponse: 생성된 사용자 응답 (Created user response)

        Raises:
            BadRequestError: 이메일이 이미 사용 중일 때 (Email already in use)
        """
        with self.events.operation("user.create") as result:
            # 이메일 중복 확인 — Check email uniqueness before insert
            if await user_repository.exists_by_email(db, data.email):
                raise BadRequestError(f"Email is already in use: {data.email}")

            user: User = await user_repository.create(
                db,
                {
                    "email": data.email,
                    "name": data.name,
                    "surname": data.surname,
                },
            )
            result["user_id"] = str(user.id)
        return self._to_response(user)

    async def update_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: UserRequest,
    ) -> UserResponse:
        """사용자 정보를 수정합니다.

        Overwrite email/name/surname of an existing user. Uniqueness is
        re-checked only when the email actually changes.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 사용자 ID (User UUID)
            data: 수정 데이터 (Update data)

        Returns:
            UserResponse: 수정된 사용자 응답 (Updated user response)

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
            BadRequestError: 변경할 이메일이 이미 사용 중일 때 (New email already in use)
        """
        with self.events.operation("user.update", user_id=str(user_id)):
            user: User = await self._get_or_404(db, user_id)

            # 이메일 변경 시에만 중복 확인 — Check uniqueness only if email changes
            if user.email != data.email and await user_repository.exists_by_email(db, data.email):
                raise BadRequestError(f"Email is already in use: {data.email}")

            user.email = data.email
            user.name = data.name
            user.surname = data.surname
            user = await user_repository.save(db, user)
        return self._to_response(user)

    async def delete_user(self, db: AsyncSession, user_id: UUID) -> None:
        """사용자를 삭제합니다.

        Hard-delete a user. The user's posts are removed by the
        ``ON DELETE CASCADE`` foreign key.

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
        """
        with self.events.operation("user.delete", user_id=str(user_id)):
            if not await user_repository.exists_by_id(db, user_id):
                raise NotFoundError(f"User not found: {user_id}")
            await user_repository.delete(db, user_id)


# 싱글턴 인스턴스 — Singleton instance
user_service: UserService = UserService(event_emitter)
