"""사용자 동적 조건 쿼리 — 런타임에 술어를 조립하는 레포지토리 조각.

User criteria queries — Repository fragment whose predicates are
assembled at run time from optional inputs instead of a fixed query.
Mixed into ``UserRepository`` so callers see a single repository.
"""

from collections.abc import Collection
from dataclasses import dataclass
from typing import Any, Sequence

from sqlalchemy import ColumnElement, Select, and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.utils.sorting import Sort, apply_sort


@dataclass(frozen=True)
class UserSearchCriteria:
    """사용자 검색 조건 — 제공된 필드만 AND 술어가 됩니다.

    User search criteria. Every field that is not None contributes one
    AND-ed predicate; an empty collection matches no users.

    Attributes:
        name: 정확한 이름 (Exact name)
        names: 이름 목록 (Name must be one of these)
        name_contains: 이름 부분 문자열 (Substring of the name, wildcards escaped)
        status: 상태 값 (Exact status)
        emails: 이메일 목록 (Email must be one of these)
    """

    name: str | None = None
    names: Collection[str] | None = None
    name_contains: str | None = None
    status: int | None = None
    emails: Collection[str] | None = None

    def predicates(self) -> list[ColumnElement[bool]]:
        """조건을 SQLAlchemy 술어 목록으로 변환합니다.

        Build the predicate list for the supplied fields.
        """
        predicates: list[ColumnElement[bool]] = []
        if self.name is not None:
            predicates.append(User.name == self.name)
        if self.names is not None:
            predicates.append(User.name.in_(list(self.names)))
        if self.name_contains is not None:
            predicates.append(User.name.contains(self.name_contains, autoescape=True))
        if self.status is not None:
            predicates.append(User.status == self.status)
        if self.emails is not None:
            predicates.append(User.email.in_(list(self.emails)))
        return predicates


class UserCriteriaQueries:
    """동적 조건 쿼리 메서드 모음 — Criteria-built query methods."""

    async def find_users_by_emails_criteria(
        self,
        db: AsyncSession,
        emails: Collection[str],
    ) -> list[User]:
        """이메일 집합에 속한 사용자를 조회합니다.

        Find users whose email is in ``emails``. An empty collection
        yields an empty result.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            emails: 이메일 집합 (Set of emails)

        Returns:
            list[User]: 일치하는 사용자 목록, ID 순 (Matching users ordered by id)
        """
        return await self.search(db, UserSearchCriteria(emails=emails))

    async def search(
        self,
        db: AsyncSession,
        criteria: UserSearchCriteria,
        sort: Sort | None = None,
    ) -> list[User]:
        """조건 객체로부터 쿼리를 조립하여 사용자를 조회합니다.

        Assemble a query from ``criteria`` and run it. Without any
        criteria every user is returned.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            criteria: 검색 조건 (Search criteria)
            sort: 정렬 조건, 없으면 ID 순 (Sort; id order when omitted)

        Returns:
            list[User]: 일치하는 사용자 목록 (Matching users)
        """
        query: Select = select(User)

        predicates: list[Any] = criteria.predicates()
        if predicates:
            query = query.where(and_(*predicates))

        query = apply_sort(query, User, sort) if sort else query.order_by(User.id)
        result = await db.execute(query)
        users: Sequence[User] = result.scalars().all()
        return list(users)
