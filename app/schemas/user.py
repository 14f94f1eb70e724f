"""사용자 관련 Pydantic 요청/응답 스키마 정의.

User Pydantic request/response schema definitions.
Field constraints are enforced before a request reaches the service layer.
"""

from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from app.schemas.common import CamelModel


class UserRequest(CamelModel):
    """사용자 생성/수정 요청 스키마.

    User create/update request schema. Update overwrites all three fields.

    Attributes:
        email: 이메일 (Email address, unique across users)
        name: 이름 (Given name, 2~50 chars, not blank)
        surname: 성 (Family name, 2~50 chars, not blank)
    """

    # 이메일 — 전체 사용자 중 고유, 길이 제한은 email-validator가 적용 (Unique email, at most 254 chars)
    email: EmailStr
    name: str = Field(min_length=2, max_length=50)  # 이름 (Given name)
    surname: str = Field(min_length=2, max_length=50)  # 성 (Family name)

    @field_validator("name", "surname")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class UserResponse(CamelModel):
    """사용자 응답 스키마."""

    id: str
    email: str
    name: str
    surname: str
    created_at: datetime
