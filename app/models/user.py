"""사용자 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definition.

Tables:
    - users: 사용자 계정 (User accounts, email unique across the system)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class User(Base):
    """사용자 모델 — 게시글 작성자 계정 정보.

    User model — Account information for post authors.
    Email is unique across all users (enforced by the service and by a unique index).

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        email: 이메일 (Email address, unique, case-sensitive as stored)
        name: 이름 (Given name)
        surname: 성 (Family name)
        created_at: 생성 일시 UTC (Creation timestamp, immutable)

    Constraints:
        uq_users_email: 이메일 고유 (Unique email)
    """

    __tablename__ = "users"

    # 사용자 고유 식별자 — User unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 이메일 — Email address (시스템 전체에서 고유, unique across all users)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    # 이름 — Given name
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    # 성 — Family name
    surname: Mapped[str] = mapped_column(String(50), nullable=False)
    # 생성 일시 — Record creation timestamp (UTC, 생성 후 변경 불가)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
    )
