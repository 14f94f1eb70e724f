"""블로그 API 라우터 패키지 — 모든 리소스 엔드포인트 통합.

Blog API Router package — Aggregates the resource endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - users: 사용자 관리 (User management)
    - posts: 게시글 관리, 작성자별 조회, 검색 (Post management, per-user listing, search)
"""

from fastapi import APIRouter

from app.api.blog.users import router as users_router
from app.api.blog.posts import router as posts_router

blog_router: APIRouter = APIRouter()

# ---------------------------------------------------------------------------
# 라우터 등록 — Register resource routers
# ---------------------------------------------------------------------------
blog_router.include_router(users_router, prefix="/users", tags=["Users"])
blog_router.include_router(posts_router, prefix="/posts", tags=["Posts"])
