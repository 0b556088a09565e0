"""사용자 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definition.
A single flat table queried through every repository style
(ORM expressions, native SQL, criteria predicates).

Tables:
    - users: 사용자 계정 (User accounts with an integer status flag)
"""

from enum import IntEnum

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class UserStatus(IntEnum):
    """사용자 상태 값 — Conventional values of ``User.status``.

    Other integers are stored as-is; only 1 counts as active.
    """

    INACTIVE = 0
    ACTIVE = 1


class User(Base):
    """사용자 모델 — 이름, 상태, 이메일을 가진 사용자 계정.

    User model — A user account with a name, status flag and email.

    Attributes:
        id: 자동 증가 식별자 (Auto-increment identifier)
        name: 이름 (Display name, not unique)
        status: 상태 (1 = active, 0 = inactive)
        email: 이메일 (Email address, optional)
    """

    __tablename__ = "users"

    # 사용자 고유 식별자 — Auto-increment primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 이름 — Display name
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    # 상태 — Status flag (UserStatus)
    status: Mapped[int] = mapped_column(Integer, nullable=False, default=UserStatus.ACTIVE, index=True)
    # 이메일 — Email address
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)

    def __repr__(self) -> str:
        return f"<User id={self.id} name={self.name!r} status={self.status}>"
