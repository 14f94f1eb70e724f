"""게시글 SQLAlchemy ORM 모델 정의.

Post SQLAlchemy ORM model definition.

Tables:
    - posts: 게시글 (Posts, each owned by exactly one user)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Text, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Post(Base):
    """게시글 모델 — 사용자가 작성한 글.

    Post model — A piece of content written by a user.
    The owning user is set at creation and never reassigned.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        title: 제목 (Title, max 200 chars)
        content: 본문 (Body text)
        user_id: 작성자 FK (Owning user foreign key, mandatory)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp, equals created_at on creation)

    Relationships:
        user: 작성자 (Owning user, joined-loaded for the author display name)
    """

    __tablename__ = "posts"

    # 게시글 고유 식별자 — Post unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 제목 — Post title
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    # 본문 — Post body
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # 작성자 FK — Owning user (CASCADE: 사용자 삭제 시 게시글도 삭제)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, 모든 변경 시 갱신)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    user = relationship("User", lazy="joined")
