"""초기 데이터 시드 스크립트 — 샘플 사용자 및 게시글 생성.

Seed script — Creates sample users and posts for local development.
Run this script once to bootstrap the database.

Usage:
    python -m app.seed

Creates:
    - 3명의 사용자 (3 users)
    - 사용자당 2개의 게시글 (2 posts per user)
"""

import asyncio
from datetime import datetime, timezone

from sqlalchemy import select

from app.database import async_session, engine, Base
from app.models import Post, User

_USERS: list[tuple[str, str, str]] = [
    ("ada@example.com", "Ada", "Lovelace"),
    ("alan@example.com", "Alan", "Turing"),
    ("grace@example.com", "Grace", "Hopper"),
]


async def seed() -> None:
    """데이터베이스를 샘플 데이터로 시드합니다.

    Seed the database with sample data.
    Creates tables if they don't exist, then inserts users and their posts.

    Idempotent: 이미 시드된 경우 건너뜁니다 (Skips if already seeded).
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        # 이미 시드되었는지 확인 — 사용자가 하나라도 있으면 건너뜀
        # (Check if already seeded by looking for any existing user)
        result = await db.execute(select(User).limit(1))
        if result.scalar_one_or_none():
            print("Already seeded. Skipping.")
            return

        for email, name, surname in _USERS:
            user: User = User(email=email, name=name, surname=surname)
            db.add(user)
            await db.flush()  # flush로 user.id 생성 (Flush to generate user.id)

            for n in (1, 2):
                now: datetime = datetime.now(timezone.utc)
                db.add(
                    Post(
                        title=f"{name}'s post #{n}",
                        content=f"Sample content number {n} written by {name} {surname}.",
                        user_id=user.id,
                        created_at=now,
                        updated_at=now,
                    )
                )

        await db.commit()
        print(f"Seeded: {len(_USERS)} users, {len(_USERS) * 2} posts")


if __name__ == "__main__":
    asyncio.run(seed())
