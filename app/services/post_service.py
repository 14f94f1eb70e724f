"""게시글 서비스 — 게시글 CRUD, 작성자별 조회, 검색 비즈니스 로직.

Post Service — Business logic for post CRUD, per-user listing and search.
Resolves the owning user before creating a post and builds the response
view with the owner's display name resolved at read time.
"""

from datetime import datetime, timezone
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.post import Post
from app.models.user import User
from app.repositories.post_repository import post_repository
from app.repositories.user_repository import user_repository
from app.schemas.common import PageableResponse
from app.schemas.post import PostCreate, PostResponse, PostUpdate
from app.utils.events import EventEmitter, event_emitter
from app.utils.exceptions import NotFoundError
from app.utils.pagination import PageRequest


class PostService:
    """게시글 관련 비즈니스 로직을 처리하는 서비스.

    Service handling post business logic.

    Attributes:
        events: 작업 이벤트 발행기 (Operation event emitter)
    """

    def __init__(self, events: EventEmitter) -> None:
        self.events: EventEmitter = events

    def _to_response(self, post: Post) -> PostResponse:
        """게시글 모델을 응답 스키마로 변환합니다.

        Convert a Post model instance to a PostResponse schema.
        Requires the user relationship to be loaded.

        Args:
            post: 작성자가 로드된 게시글 모델 (Post model with user loaded)

        Returns:
            PostResponse: 게시글 응답 (Post response)
        """
        owner: User = post.user
        return PostResponse(
            id=str(post.id),
            title=post.title,
            content=post.content,
            user_id=str(owner.id),
            user_name=f"{owner.name} {owner.surname}",
            created_at=post.created_at,
            updated_at=post.updated_at,
        )

    def _to_page(
        self,
        posts: Sequence[Post],
        total: int,
        page_request: PageRequest,
    ) -> PageableResponse[PostResponse]:
        return PageableResponse[PostResponse].of(
            [self._to_response(p) for p in posts],
            page_request.page,
            page_request.size,
            total,
        )

    async def _ensure_user_exists(self, db: AsyncSession, user_id: UUID) -> None:
        # 존재 여부만 확인 — Existence query, not a full fetch
        if not await user_repository.exists_by_id(db, user_id):
            raise NotFoundError(f"User not found: {user_id}")

    # --- 조회 (Reads) ---

    async def list_posts(self, db: AsyncSession) -> list[PostResponse]:
        """모든 게시글을 조회합니다 (List all posts in store-native order)."""
        with self.events.operation("post.list"):
            posts = await post_repository.get_all(db)
        return [self._to_response(p) for p in posts]

    async def list_posts_paginated(
        self,
        db: AsyncSession,
        page_request: PageRequest,
    ) -> PageableResponse[PostResponse]:
        """게시글 목록을 페이지네이션하여 조회합니다.

        List one sorted page of posts.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            page_request: 페이지 요청 (Zero-based page request)

        Returns:
            PageableResponse[PostResponse]: 게시글 페이지 (Page of posts with totals)
        """
        with self.events.operation(
            "post.list_page",
            page=page_request.page,
            size=page_request.size,
            sort_by=page_request.sort_by,
        ):
            posts, total = await post_repository.find_all_paginated(db, page_request)
        return self._to_page(posts, total, page_request)

    async def get_post(self, db: AsyncSession, post_id: UUID) -> PostResponse:
        """게시글 상세를 조회합니다.

        Retrieve a post by id.

        Raises:
            NotFoundError: 게시글을 찾을 수 없을 때 (Post not found)
        """
        with self.events.operation("post.get", post_id=str(post_id)):
            post: Post | None = await post_repository.get_by_id(db, post_id)
            if post is None:
                raise NotFoundError(f"Post not found: {post_id}")
        return self._to_response(post)

    async def list_posts_by_user(self, db: AsyncSession, user_id: UUID) -> list[PostResponse]:
        """사용자가 작성한 게시글을 조회합니다.

        List all posts owned by a user.

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
        """
        with self.events.operation("post.list_by_user", user_id=str(user_id)):
            await self._ensure_user_exists(db, user_id)
            posts = await post_repository.get_by_user(db, user_id)
        return [self._to_response(p) for p in posts]

    async def list_posts_by_user_paginated(
        self,
        db: AsyncSession,
        user_id: UUID,
        page_request: PageRequest,
    ) -> PageableResponse[PostResponse]:
        """사용자가 작성한 게시글을 페이지네이션하여 조회합니다.

        List one sorted page of a user's posts.

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
        """
        with self.events.operation(
            "post.list_by_user_page",
            user_id=str(user_id),
            page=page_request.page,
            size=page_request.size,
        ):
            await self._ensure_user_exists(db, user_id)
            posts, total = await post_repository.get_by_user_paginated(db, user_id, page_request)
        return self._to_page(posts, total, page_request)

    async def search_posts(self, db: AsyncSession, keyword: str) -> list[PostResponse]:
        """제목 또는 본문에 키워드가 포함된 게시글을 검색합니다.

        Search posts whose title or content contains the keyword.
        No minimum keyword length; an empty keyword matches every post.
        """
        with self.events.operation("post.search", keyword=keyword):
            posts = await post_repository.search(db, keyword)
        return [self._to_response(p) for p in posts]

    async def search_posts_paginated(
        self,
        db: AsyncSession,
        keyword: str,
        page_request: PageRequest,
    ) -> PageableResponse[PostResponse]:
        """키워드 검색 결과를 페이지네이션하여 조회합니다 (Paginated search)."""
        with self.events.operation(
            "post.search_page",
            keyword=keyword,
            page=page_request.page,
            size=page_request.size,
        ):
            posts, total = await post_repository.search_paginated(db, keyword, page_request)
        return self._to_page(posts, total, page_request)

    # --- 변경 (Mutations) ---

    async def create_post(self, db: AsyncSession, data: PostCreate) -> PostResponse:
        """새 게시글을 생성합니다.

        Create a post owned by an existing user. Creation and update
        timestamps are set to the same instant.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 게시글 생성 데이터 (Post creation data)

        Returns:
            PostResponse: 생성된 게시글 응답 (Created post response)

        Raises:
            NotFoundError: 작성자를 찾을 수 없을 때 (Owning user not found)
        """
        with self.events.operation("post.create", user_id=str(data.user_id)) as result:
            user: User | None = await user_repository.get_by_id(db, data.user_id)
            if user is None:
                raise NotFoundError(f"User not found: {data.user_id}")

            now: datetime = datetime.now(timezone.utc)
            post: Post = await post_repository.create(
                db,
                {
                    "title": data.title,
                    "content": data.content,
                    "user": user,
                    "created_at": now,
                    "updated_at": now,
                },
            )
            result["post_id"] = str(post.id)
        return self._to_response(post)

    async def update_post(
        self,
        db: AsyncSession,
        post_id: UUID,
        data: PostUpdate,
    ) -> PostResponse:
        """게시글 제목/본문을 수정합니다.

        Overwrite title and content. The owner is never changed, even when
        the request carries a ``user_id``.

        Raises:
            NotFoundError: 게시글을 찾을 수 없을 때 (Post not found)
        """
        with self.events.operation("post.update", post_id=str(post_id)):
            post: Post | None = await post_repository.get_by_id(db, post_id)
            if post is None:
                raise NotFoundError(f"Post not found: {post_id}")

            post.title = data.title
            post.content = data.content
            post.updated_at = datetime.now(timezone.utc)
            post = await post_repository.save(db, post)
        return self._to_response(post)

    async def delete_post(self, db: AsyncSession, post_id: UUID) -> None:
        """게시글을 삭제합니다.

        Hard-delete a post.

        Raises:
            NotFoundError: 게시글을 찾을 수 없을 때 (Post not found)
        """
        with self.events.operation("post.delete", post_id=str(post_id)):
            if not await post_repository.exists_by_id(db, post_id):
                raise NotFoundError(f"Post not found: {post_id}")
            await post_repository.delete(db, post_id)


# 싱글턴 인스턴스 — Singleton instance
post_service: PostService = PostService(event_emitter)
