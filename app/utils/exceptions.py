"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the error taxonomy
raised by services and repositories. Status codes are fixed per class so
call sites only supply a message; the exception handlers in ``app.main``
render them into the ``ApiResponse`` envelope.

Usage:
    from app.utils.exceptions import NotFoundError, BadRequestError
    raise NotFoundError("User not found: 42")
    raise BadRequestError("Email is already in use: a@b.com")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a requested user or post id does not resolve in the store.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 비즈니스 규칙 위반 시 사용.

    400 Bad Request exception.
    Raised when a business rule is violated before any mutation
    (e.g. duplicate email, unsupported sort field).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ValidationFailedError(HTTPException):
    """400 Validation 예외 — 요청 필드 검증 실패 시 사용.

    400 validation failure raised at the HTTP boundary.
    Carries a field -> message mapping built from pydantic errors.

    Args:
        errors: 필드별 오류 메시지 (Field name to error message mapping)
        detail: 오류 메시지 (Error message, default: "Validation failed")
    """

    def __init__(self, errors: dict[str, str], detail: str = "Validation failed") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
        self.errors: dict[str, str] = errors
