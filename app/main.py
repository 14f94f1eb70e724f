"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어, 예외 처리기, 라우터 등록.

FastAPI application entry point — Middleware, exception handlers and router registration.
Every failure is rendered as an ``ApiResponse`` envelope:
    - NotFoundError → 404
    - BadRequestError → 400
    - ValidationFailedError / RequestValidationError → 400 with field errors
    - 기타 예외 (anything else) → 500
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.blog import blog_router
from app.config import settings
from app.middleware.axiom_logging import AxiomLoggingMiddleware
from app.schemas.common import ApiResponse
from app.utils.events import event_emitter
from app.utils.exceptions import ValidationFailedError
from app.utils.logging_config import setup_logging

setup_logging(settings.LOG_LEVEL)

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# API 로깅 미들웨어 — request/response event logging
# CORS보다 먼저 등록하여 모든 요청을 캡처 (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware, emitter=event_emitter)

# CORS 미들웨어 — Cross-Origin Resource Sharing middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, message: str, data: Any = None) -> JSONResponse:
    """실패 응답 봉투 생성 — Render a failure envelope."""
    body: dict[str, Any] = ApiResponse.error(message, data).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


@app.exception_handler(ValidationFailedError)
async def validation_failed_handler(request: Request, exc: ValidationFailedError) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail), exc.errors)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 필드 검증 오류를 필드별 메시지로 변환합니다.

    Convert pydantic request errors to a ``{field: message}`` mapping.
    """
    errors: dict[str, str] = {}
    for error in exc.errors():
        field: str = ".".join(
            str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")
        )
        errors[field or "request"] = error.get("msg", "Invalid value")
    return await validation_failed_handler(request, ValidationFailedError(errors))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return _error_response(500, f"An error occurred: {exc}")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# 라우터 등록 — /api/users, /api/posts
# ---------------------------------------------------------------------------
app.include_router(blog_router, prefix="/api")
