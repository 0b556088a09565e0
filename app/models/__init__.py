"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
``Base.metadata.create_all``.

Modules:
    user: 사용자 및 상태 값 (User and UserStatus)
"""

from app.models.user import User, UserStatus

__all__ = ["User", "UserStatus"]
