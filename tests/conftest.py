"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh in-memory database with the schema applied, so no
cleanup between tests is needed. Foreign keys are enabled per connection
so ``ON DELETE CASCADE`` behaves as on PostgreSQL.
"""

import logging
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.utils.events import EventEmitter

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 인메모리 DB에 스키마를 생성합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(eng.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def app_error_client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """처리되지 않은 예외도 500 응답으로 받는 클라이언트."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def user(db: AsyncSession):
    """테스트 사용자를 생성합니다."""
    from app.models.user import User
    u = User(email="test@example.com", name="Test", surname="User")
    db.add(u)
    await db.flush()
    await db.refresh(u)
    return u


@pytest_asyncio.fixture
async def other_user(db: AsyncSession):
    """두 번째 테스트 사용자를 생성합니다."""
    from app.models.user import User
    u = User(email="other@example.com", name="Other", surname="Person")
    db.add(u)
    await db.flush()
    await db.refresh(u)
    return u


@pytest_asyncio.fixture
async def post(db: AsyncSession, user):
    """테스트 게시글을 생성합니다."""
    from app.models.post import Post
    now = datetime.now(timezone.utc)
    p = Post(
        title="Test Post",
        content="Test content for the post",
        user_id=user.id,
        created_at=now,
        updated_at=now,
    )
    db.add(p)
    await db.flush()
    await db.refresh(p)
    return p


@pytest_asyncio.fixture
async def many_posts(db: AsyncSession, user):
    """생성 시각이 모두 다른 게시글 25개를 생성합니다."""
    from app.models.post import Post
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    posts = []
    for i in range(25):
        created = base + timedelta(minutes=i)
        p = Post(
            title=f"Post number {i:02d}",
            content=f"Body text of post {i:02d}",
            user_id=user.id,
            created_at=created,
            updated_at=created,
        )
        db.add(p)
        posts.append(p)
    await db.flush()
    return posts


class RecordingEmitter(EventEmitter):
    """발행된 이벤트를 메모리에 기록하는 테스트용 발행기."""

    def __init__(self) -> None:
        super().__init__()
        self.events: list[dict[str, Any]] = []

    def emit(self, event: str, level: int = logging.INFO, **fields: Any) -> None:
        self.events.append({"event": event, **fields})


@pytest.fixture
def recorder() -> RecordingEmitter:
    return RecordingEmitter()
