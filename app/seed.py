"""초기 데이터 시드 스크립트 — 데모 사용자 5명 생성.

Seed script — Creates the demo users every query example runs against.
Run this script once to bootstrap the database.

Usage:
    python -m app.seed

Creates (in id order):
    - zhangsan (status 1, 123@123.com)
    - lisi     (status 0)
    - wangwu   (status 1)
    - zhaoliu  (status 0)
    - sunqi    (status 0)
"""

import asyncio

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import async_session, engine, Base
from app.models import User, UserStatus

# 데모 사용자 — Demo users as (name, status, email)
DEMO_USERS: list[tuple[str, int, str]] = [
    ("zhangsan", UserStatus.ACTIVE, "123@123.com"),
    ("lisi", UserStatus.INACTIVE, "lisi@example.com"),
    ("wangwu", UserStatus.ACTIVE, "wangwu@example.com"),
    ("zhaoliu", UserStatus.INACTIVE, "zhaoliu@example.com"),
    ("sunqi", UserStatus.INACTIVE, "sunqi@example.com"),
]


async def seed_users(db: AsyncSession) -> bool:
    """데모 사용자를 삽입합니다. 이미 사용자가 있으면 건너뜁니다.

    Insert the demo users in order and flush.
    Idempotent: 사용자 테이블이 비어 있을 때만 삽입 (Only inserts into an empty table).

    Returns:
        bool: 삽입 여부 (Whether anything was inserted)
    """
    existing: int = (await db.execute(select(func.count()).select_from(User))).scalar() or 0
    if existing:
        return False

    # 순서대로 flush하여 ID 순서를 보장 — Flush one by one so ids follow list order
    for name, status, email in DEMO_USERS:
        db.add(User(name=name, status=int(status), email=email))
        await db.flush()
    return True


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with initial data.
    Creates tables if they don't exist, then inserts the demo users.
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        if not await seed_users(db):
            print("Already seeded. Skipping.")
            return
        await db.commit()
        print(f"Seeded {len(DEMO_USERS)} users")


if __name__ == "__main__":
    asyncio.run(seed())
