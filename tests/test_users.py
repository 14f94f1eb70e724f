"""사용자 CRUD API 테스트.

User CRUD API tests — Create, List, Page, Update, Delete.
Tests the response envelope, the unique email constraint and 404 handling.
"""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from app.repositories.user_repository import user_repository
from app.services.user_service import user_service

URL = "/api/users"


class TestUserCreate:
    """사용자 생성 테스트."""

    async def test_create_user(self, client: AsyncClient):
        """사용자 생성 성공."""
        res = await client.post(URL, json={
            "email": "new@example.com",
            "name": "New",
            "surname": "Person",
        })
        assert res.status_code == 201
        body = res.json()
        assert body["success"] is True
        assert body["message"] == "User created successfully"
        data = body["data"]
        assert data["email"] == "new@example.com"
        assert data["name"] == "New"
        assert data["surname"] == "Person"
        assert data["createdAt"] is not None

        # 생성 후 조회 — read back
        res = await client.get(f"{URL}/{data['id']}")
        assert res.status_code == 200
        fetched = res.json()["data"]
        assert fetched["email"] == "new@example.com"
        assert fetched["name"] == "New"
        assert fetched["surname"] == "Person"

    async def test_create_user_duplicate_email(self, client: AsyncClient, user):
        """중복 이메일 생성 실패 — 400, 저장 없음."""
        res = await client.post(URL, json={
            "email": "test@example.com",
            "name": "Dup",
            "surname": "Person",
        })
        assert res.status_code == 400
        body = res.json()
        assert body["success"] is False
        assert "test@example.com" in body["message"]

        res = await client.get(URL)
        assert len(res.json()["data"]) == 1

    async def test_create_user_invalid_email(self, client: AsyncClient):
        """이메일 형식 오류 시 검증 실패."""
        res = await client.post(URL, json={
            "email": "not-an-email",
            "name": "Bad",
            "surname": "Email",
        })
        assert res.status_code == 400
        body = res.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert "email" in body["data"]

    async def test_create_user_short_name(self, client: AsyncClient):
        """이름이 너무 짧으면 검증 실패."""
        res = await client.post(URL, json={
            "email": "short@example.com",
            "name": "A",
            "surname": "Person",
        })
        assert res.status_code == 400
        assert "name" in res.json()["data"]

    async def test_create_user_blank_names(self, client: AsyncClient):
        """공백뿐인 이름/성은 검증 실패, 저장 없음."""
        res = await client.post(URL, json={
            "email": "blank@example.com",
            "name": "   ",
            "surname": "  ",
        })
        assert res.status_code == 400
        data = res.json()["data"]
        assert "name" in data
        assert "surname" in data

        res = await client.get(URL)
        assert res.json()["data"] == []

    async def test_create_user_email_without_domain_dot(self, client: AsyncClient):
        """도메인에 점이 없는 이메일은 검증 실패."""
        res = await client.post(URL, json={
            "email": "someone@nodot",
            "name": "Some",
            "surname": "One",
        })
        assert res.status_code == 400
        assert "email" in res.json()["data"]


class TestUserRead:
    """사용자 조회 테스트."""

    async def test_list_users_empty(self, client: AsyncClient):
        """사용자가 없으면 빈 목록."""
        res = await client.get(URL)
        assert res.status_code == 200
        assert res.json() == {"success": True, "data": []}

    async def test_list_users(self, client: AsyncClient, user, other_user):
        """사용자 목록 조회."""
        res = await client.get(URL)
        assert res.status_code == 200
        emails = {u["email"] for u in res.json()["data"]}
        assert emails == {"test@example.com", "other@example.com"}

    async def test_get_user_detail(self, client: AsyncClient, user):
        """사용자 상세 조회 — 저장된 필드와 일치."""
        res = await client.get(f"{URL}/{user.id}")
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["id"] == str(user.id)
        assert data["email"] == user.email
        assert data["name"] == user.name
        assert data["surname"] == user.surname

    async def test_get_nonexistent_user(self, client: AsyncClient):
        """존재하지 않는 사용자 조회 시 404."""
        fake_id = str(uuid.uuid4())
        res = await client.get(f"{URL}/{fake_id}")
        assert res.status_code == 404
        body = res.json()
        assert body["success"] is False
        assert fake_id in body["message"]

    async def test_get_user_invalid_id(self, client: AsyncClient):
        """UUID 형식이 아니면 검증 실패."""
        res = await client.get(f"{URL}/not-a-uuid")
        assert res.status_code == 400
        assert "user_id" in res.json()["data"]


class TestUserPage:
    """사용자 페이지네이션 테스트."""

    @pytest.fixture
    async def five_users(self, db):
        # 가입 순서는 이메일 역순 — user4 first, user0 last
        from app.models.user import User
        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        users = []
        for i in range(5):
            u = User(
                email=f"user{i}@example.com",
                name=f"Name{i}",
                surname=f"Surname{i}",
                created_at=base + timedelta(minutes=4 - i),
            )
            db.add(u)
            users.append(u)
        await db.flush()
        return users

    async def test_page_metadata(self, client: AsyncClient, five_users):
        """페이지 메타데이터 — totalElements, totalPages."""
        res = await client.get(f"{URL}/page", params={"page": 1, "size": 2})
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["page"] == 1
        assert data["size"] == 2
        assert data["totalElements"] == 5
        assert data["totalPages"] == 3
        assert len(data["content"]) == 2

    async def test_page_default_creation_order(self, client: AsyncClient, five_users):
        """기본 정렬은 가입 순 (생성 시각 오름차순)."""
        res = await client.get(f"{URL}/page")
        emails = [u["email"] for u in res.json()["data"]["content"]]
        assert emails == [f"user{i}@example.com" for i in (4, 3, 2, 1, 0)]

    async def test_page_sort_by_email_desc(self, client: AsyncClient, five_users):
        """이메일 내림차순 정렬."""
        res = await client.get(f"{URL}/page", params={"size": 10, "sortBy": "email", "sortDir": "DESC"})
        emails = [u["email"] for u in res.json()["data"]["content"]]
        assert emails == sorted(emails, reverse=True)

    async def test_page_sort_unknown_direction_is_ascending(self, client: AsyncClient, five_users):
        """알 수 없는 정렬 방향은 오름차순."""
        res = await client.get(f"{URL}/page", params={"size": 10, "sortBy": "email", "sortDir": "sideways"})
        emails = [u["email"] for u in res.json()["data"]["content"]]
        assert emails == sorted(emails)

    async def test_page_beyond_last(self, client: AsyncClient, five_users):
        """마지막 페이지 이후는 빈 목록, 전체 개수는 유지."""
        res = await client.get(f"{URL}/page", params={"page": 9, "size": 2})
        data = res.json()["data"]
        assert data["content"] == []
        assert data["totalElements"] == 5

    async def test_page_unknown_sort_field(self, client: AsyncClient, five_users):
        """존재하지 않는 정렬 필드는 400."""
        res = await client.get(f"{URL}/page", params={"sortBy": "password"})
        assert res.status_code == 400
        assert res.json()["success"] is False

    async def test_page_negative_page_rejected(self, client: AsyncClient):
        """음수 페이지는 검증 실패."""
        res = await client.get(f"{URL}/page", params={"page": -1})
        assert res.status_code == 400
        assert "page" in res.json()["data"]


class TestUserUpdate:
    """사용자 수정 테스트."""

    async def test_update_user(self, client: AsyncClient, user):
        """이름/성/이메일 수정."""
        res = await client.put(f"{URL}/{user.id}", json={
            "email": "renamed@example.com",
            "name": "Renamed",
            "surname": "Tester",
        })
        assert res.status_code == 200
        body = res.json()
        assert body["message"] == "User updated successfully"
        assert body["data"]["id"] == str(user.id)
        assert body["data"]["email"] == "renamed@example.com"
        assert body["data"]["name"] == "Renamed"

    async def test_update_user_keep_own_email(self, client: AsyncClient, user):
        """자신의 현재 이메일 유지 시 성공."""
        res = await client.put(f"{URL}/{user.id}", json={
            "email": "test@example.com",
            "name": "Same",
            "surname": "Email",
        })
        assert res.status_code == 200
        assert res.json()["data"]["name"] == "Same"

    async def test_update_user_email_taken(self, client: AsyncClient, user, other_user):
        """다른 사용자의 이메일로 변경 시 400."""
        res = await client.put(f"{URL}/{user.id}", json={
            "email": "other@example.com",
            "name": "Test",
            "surname": "User",
        })
        assert res.status_code == 400

        res = await client.get(f"{URL}/{user.id}")
        assert res.json()["data"]["email"] == "test@example.com"

    async def test_update_nonexistent_user(self, client: AsyncClient):
        """존재하지 않는 사용자 수정 시 404."""
        res = await client.put(f"{URL}/{uuid.uuid4()}", json={
            "email": "ghost@example.com",
            "name": "Ghost",
            "surname": "User",
        })
        assert res.status_code == 404


class TestUserDelete:
    """사용자 삭제 테스트."""

    async def test_delete_user(self, client: AsyncClient, user):
        """사용자 삭제 후 조회 시 404."""
        res = await client.delete(f"{URL}/{user.id}")
        assert res.status_code == 200
        assert res.json() == {"success": True, "message": "User deleted successfully"}

        res = await client.get(f"{URL}/{user.id}")
        assert res.status_code == 404

    async def test_delete_nonexistent_user(self, client: AsyncClient):
        """존재하지 않는 사용자 삭제 시 404."""
        res = await client.delete(f"{URL}/{uuid.uuid4()}")
        assert res.status_code == 404

    async def test_delete_user_removes_posts(self, client: AsyncClient, user, post):
        """사용자 삭제 시 게시글도 함께 삭제 (ON DELETE CASCADE)."""
        res = await client.delete(f"{URL}/{user.id}")
        assert res.status_code == 200

        res = await client.get("/api/posts")
        assert res.json()["data"] == []


class TestUnexpectedError:
    """예상치 못한 오류 — 500 봉투."""

    async def test_store_failure_returns_500(self, app_error_client: AsyncClient, monkeypatch, recorder):
        """저장소 오류는 500과 실패 이벤트로 처리."""
        monkeypatch.setattr(user_repository, "get_all", AsyncMock(side_effect=RuntimeError("db down")))
        monkeypatch.setattr(user_service, "events", recorder)

        res = await app_error_client.get(URL)

        assert res.status_code == 500
        assert res.json() == {"success": False, "message": "An error occurred: db down"}
        failed = recorder.events[-1]
        assert failed["event"] == "user.list"
        assert failed["status"] == "failed"
        assert failed["error"] == "RuntimeError"
