"""사용자 관련 Pydantic 요청/응답 스키마 정의.

User Pydantic request/response schema definitions.
Covers user creation (ORM or native insert), status updates by name,
dynamic criteria search, and the query mode selector shared by the
list endpoints.
"""

from enum import Enum

from pydantic import BaseModel, Field

from app.utils.pagination import Page


class QueryMode(str, Enum):
    """쿼리 방식 — ORM 표현식 또는 원시 SQL.

    Query style used by the repository: SQLAlchemy ORM expressions or native SQL.
    """

    ORM = "orm"
    NATIVE = "native"


class ParamBinding(str, Enum):
    """파라미터 바인딩 방식 — Parameter binding style (?1 vs :name)."""

    POSITIONAL = "positional"
    NAMED = "named"


class UserCreate(BaseModel):
    """사용자 생성 요청 스키마.

    User creation request schema.

    Attributes:
        name: 이름 (Display name)
        status: 상태 (1 = active, 0 = inactive)
        email: 이메일 (Email address, optional)
    """

    name: str = Field(min_length=1, max_length=100)
    status: int = 1
    email: str | None = Field(default=None, max_length=255)


class UserStatusUpdate(BaseModel):
    """이름 기준 상태 변경 요청 스키마.

    Set ``status`` on every user named ``name``.
    """

    name: str
    status: int


class UserSearchRequest(BaseModel):
    """동적 조건 검색 요청 스키마 (부분 조건).

    Dynamic criteria search request. Only provided fields become predicates;
    an empty list matches nothing.

    Attributes:
        name: 정확한 이름 (Exact name)
        names: 이름 목록 (Name in list)
        name_contains: 이름 부분 문자열 (Name substring)
        status: 상태 (Exact status)
        emails: 이메일 목록 (Email in list)
        sort: 정렬 문자열 목록 (Sort strings, e.g. ["name,desc"])
    """

    name: str | None = None
    names: list[str] | None = None
    name_contains: str | None = None
    status: int | None = None
    emails: list[str] | None = None
    sort: list[str] | None = None


class UserResponse(BaseModel):
    """사용자 응답 스키마."""

    id: int
    name: str
    status: int
    email: str | None = None


class UpdateResult(BaseModel):
    """변경 쿼리 결과 — Number of rows touched by a modifying query."""

    affected: int


class UserPage(Page):
    """사용자 페이지 응답 스키마 — Page of ``UserResponse`` items."""

    items: list[UserResponse]
