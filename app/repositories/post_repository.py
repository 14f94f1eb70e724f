"""게시글 레포지토리 — 작성자별 조회 및 키워드 검색.

Post Repository — Owner filtering and keyword search for posts.
Extends BaseRepository with Post-specific queries. The owning user is
joined-loaded by the model mapping, so every returned post carries it.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.post import Post
from app.repositories.base import BaseRepository
from app.utils.pagination import PageRequest


class PostRepository(BaseRepository[Post]):
    """게시글 레포지토리.

    Post repository with owner filtering and substring search.

    Extends:
        BaseRepository[Post]
    """

    def __init__(self) -> None:
        """레포지토리를 초기화합니다.

        Initialize the post repository with Post model.
        """
        super().__init__(Post)

    @staticmethod
    def _by_user_query(user_id: UUID) -> Select:
        return select(Post).where(Post.user_id == user_id)

    @staticmethod
    def _search_query(keyword: str) -> Select:
        # 키워드는 리터럴 부분 문자열로 취급 — LIKE 와일드카드 이스케이프
        return select(Post).where(
            or_(
                Post.title.contains(keyword, autoescape=True),
                Post.content.contains(keyword, autoescape=True),
            )
        )

    async def get_by_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> Sequence[Post]:
        """작성자의 모든 게시글을 조회합니다.

        Retrieve all posts owned by a user in store-native order.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 작성자 UUID (Owning user UUID)

        Returns:
            Sequence[Post]: 게시글 목록 (List of posts)
        """
        result = await db.execute(self._native_order(self._by_user_query(user_id)))
        return result.scalars().all()

    async def get_by_user_paginated(
        self,
        db: AsyncSession,
        user_id: UUID,
        page_request: PageRequest,
    ) -> tuple[Sequence[Post], int]:
        """작성자의 게시글을 페이지네이션하여 조회합니다.

        Retrieve one sorted page of a user's posts.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 작성자 UUID (Owning user UUID)
            page_request: 페이지 요청 (Zero-based page request)

        Returns:
            tuple[Sequence[Post], int]: (게시글 목록, 전체 개수)
                                        (List of posts, total count)
        """
        return await self.get_paginated(db, self._by_user_query(user_id), page_request)

    async def search(
        self,
        db: AsyncSession,
        keyword: str,
    ) -> Sequence[Post]:
        """제목 또는 본문에 키워드가 포함된 게시글을 조회합니다.

        Retrieve posts whose title or content contains ``keyword``.
        """
        result = await db.execute(self._native_order(self._search_query(keyword)))
        return result.scalars().all()

    async def search_paginated(
        self,
        db: AsyncSession,
        keyword: str,
        page_request: PageRequest,
    ) -> tuple[Sequence[Post], int]:
        """키워드 검색 결과를 페이지네이션하여 조회합니다.

        Retrieve one sorted page of keyword search results.
        """
        return await self.get_paginated(db, self._search_query(keyword), page_request)


# 싱글턴 인스턴스 — Singleton instance
post_repository: PostRepository = PostRepository()
