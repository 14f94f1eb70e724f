"""게시글 관련 Pydantic 요청/응답 스키마 정의.

Post Pydantic request/response schema definitions.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from app.schemas.common import CamelModel


class PostRequest(CamelModel):
    """게시글 공통 요청 필드.

    Fields shared by post create and update requests.

    Attributes:
        title: 제목 (Title, 3~200 chars, not blank)
        content: 본문 (Body, at least 10 chars, not blank)
    """

    title: str = Field(min_length=3, max_length=200)  # 제목 (Post title)
    content: str = Field(min_length=10)  # 본문 (Post body)

    @field_validator("title", "content")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class PostCreate(PostRequest):
    """게시글 생성 요청 스키마.

    Post creation request schema.

    Attributes:
        user_id: 작성자 UUID (Owning user identifier, must exist)
    """

    user_id: UUID  # 작성자 UUID (Owning user)


class PostUpdate(PostRequest):
    """게시글 수정 요청 스키마.

    Post update request schema. ``user_id`` is accepted for client
    compatibility but never applied: the owner of a post cannot change.
    """

    user_id: UUID | None = None  # 무시됨 — 작성자는 변경 불가 (Ignored, owner is immutable)


class PostResponse(CamelModel):
    """게시글 응답 스키마.

    Post response schema with the owner's display name.

    Attributes:
        id: 게시글 UUID (Post identifier)
        title: 제목 (Title)
        content: 본문 (Body)
        user_id: 작성자 UUID (Owning user identifier)
        user_name: 작성자 표시 이름 — "이름 성" (Owner display name, "name surname")
        created_at: 생성 일시 (Creation timestamp)
        updated_at: 수정 일시 (Last update timestamp)
    """

    id: str
    title: str
    content: str
    user_id: str
    user_name: str  # 조회 시 계산, 저장 안 함 (Resolved at read time, never persisted)
    created_at: datetime
    updated_at: datetime
