"""사용자 레포지토리 — 사용자 CRUD 및 이메일 조회.

User Repository — CRUD and email lookups for users.
Extends BaseRepository with User-specific database operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    """

    def __init__(self) -> None:
        """UserRepository를 초기화합니다.

        Initialize the UserRepository with the User model.
        """
        super().__init__(User)

    async def exists_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> bool:
        """해당 이메일을 사용하는 사용자가 있는지 확인합니다.

        Check whether any user already uses the exact email value.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 확인할 이메일 (Email to check, compared as stored)

        Returns:
            bool: 사용 중 여부 (Whether the email is taken)
        """
        return await self.exists(db, {"email": email})


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
