"""게시글 서비스 단위 테스트 — 레포지토리 모킹.

PostService unit tests with mocked user and post repositories.
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.models.post import Post
from app.models.user import User
from app.repositories.post_repository import PostRepository
from app.repositories.user_repository import UserRepository
from app.schemas.post import PostCreate, PostUpdate
from app.services.post_service import PostService
from app.utils.exceptions import NotFoundError
from app.utils.pagination import PageRequest

CREATED = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def users(monkeypatch) -> AsyncMock:
    mock = AsyncMock(spec=UserRepository)
    monkeypatch.setattr("app.services.post_service.user_repository", mock)
    return mock


@pytest.fixture
def posts(monkeypatch) -> AsyncMock:
    mock = AsyncMock(spec=PostRepository)
    monkeypatch.setattr("app.services.post_service.post_repository", mock)
    return mock


@pytest.fixture
def service(recorder) -> PostService:
    return PostService(recorder)


@pytest.fixture
def db() -> MagicMock:
    return MagicMock()


@pytest.fixture
def owner() -> User:
    return User(id=uuid.uuid4(), email="ada@example.com", name="Ada", surname="Lovelace", created_at=CREATED)


def _post(owner: User, title: str = "A title") -> Post:
    return Post(
        id=uuid.uuid4(),
        title=title,
        content="Some long enough content",
        user=owner,
        created_at=CREATED,
        updated_at=CREATED,
    )


class TestCreatePost:
    """게시글 생성."""

    async def test_missing_owner_writes_nothing(self, service, users, posts, db):
        users.get_by_id.return_value = None
        user_id = uuid.uuid4()

        with pytest.raises(NotFoundError) as exc_info:
            await service.create_post(db, PostCreate(
                title="Title", content="Content long enough", user_id=user_id,
            ))

        assert exc_info.value.detail == f"User not found: {user_id}"
        posts.create.assert_not_awaited()

    async def test_creates_with_equal_timestamps(self, service, users, posts, db, owner):
        users.get_by_id.return_value = owner
        posts.create.side_effect = lambda _db, data: Post(id=uuid.uuid4(), **data)

        result = await service.create_post(db, PostCreate(
            title="Title", content="Content long enough", user_id=owner.id,
        ))

        data = posts.create.await_args.args[1]
        assert data["user"] is owner
        assert data["created_at"] == data["updated_at"]
        assert result.user_id == str(owner.id)
        assert result.user_name == "Ada Lovelace"
        assert result.created_at == result.updated_at


class TestReadPosts:
    """게시글 조회."""

    async def test_get_not_found(self, service, posts, db):
        posts.get_by_id.return_value = None
        post_id = uuid.uuid4()

        with pytest.raises(NotFoundError) as exc_info:
            await service.get_post(db, post_id)

        assert exc_info.value.detail == f"Post not found: {post_id}"

    async def test_user_name_joins_name_and_surname(self, service, posts, db, owner):
        posts.get_by_id.return_value = _post(owner)

        result = await service.get_post(db, uuid.uuid4())

        assert result.user_name == "Ada Lovelace"

    async def test_list_by_missing_user(self, service, users, posts, db):
        users.exists_by_id.return_value = False

        with pytest.raises(NotFoundError):
            await service.list_posts_by_user(db, uuid.uuid4())

        users.get_by_id.assert_not_awaited()
        posts.get_by_user.assert_not_awaited()

    async def test_list_by_user(self, service, users, posts, db, owner):
        users.exists_by_id.return_value = True
        posts.get_by_user.return_value = [_post(owner, "First"), _post(owner, "Second")]

        result = await service.list_posts_by_user(db, owner.id)

        assert [p.title for p in result] == ["First", "Second"]
        posts.get_by_user.assert_awaited_once_with(db, owner.id)

    async def test_search_paginated(self, service, posts, db, owner):
        posts.search_paginated.return_value = ([_post(owner)], 11)
        page_request = PageRequest(page=0, size=5)

        page = await service.search_posts_paginated(db, "title", page_request)

        posts.search_paginated.assert_awaited_once_with(db, "title", page_request)
        assert page.total_elements == 11
        assert page.total_pages == 3
        assert len(page.content) == 1

    async def test_search_emits_keyword(self, service, posts, db, recorder):
        posts.search.return_value = []

        await service.search_posts(db, "needle")

        assert recorder.events[0] == {"event": "post.search", "status": "started", "keyword": "needle"}


class TestUpdatePost:
    """게시글 수정."""

    async def test_owner_is_never_changed(self, service, posts, db, owner):
        post = _post(owner)
        posts.get_by_id.return_value = post
        posts.save.return_value = post

        result = await service.update_post(db, post.id, PostUpdate(
            title="New title", content="New content body", user_id=uuid.uuid4(),
        ))

        assert result.title == "New title"
        assert result.content == "New content body"
        assert result.user_id == str(owner.id)
        assert post.user is owner
        assert post.updated_at > post.created_at

    async def test_not_found(self, service, posts, db):
        posts.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await service.update_post(db, uuid.uuid4(), PostUpdate(
                title="New title", content="New content body",
            ))

        posts.save.assert_not_awaited()


class TestDeletePost:
    """게시글 삭제."""

    async def test_missing_deletes_nothing(self, service, posts, db, recorder):
        posts.exists_by_id.return_value = False

        with pytest.raises(NotFoundError):
            await service.delete_post(db, uuid.uuid4())

        posts.delete.assert_not_awaited()
        assert recorder.events[-1]["status"] == "failed"

    async def test_deletes_existing(self, service, posts, db):
        post_id = uuid.uuid4()
        posts.exists_by_id.return_value = True

        await service.delete_post(db, post_id)

        posts.delete.assert_awaited_once_with(db, post_id)
