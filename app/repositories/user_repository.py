"""사용자 레포지토리 — ORM, 원시 SQL, 바인딩 방식별 사용자 쿼리.

User Repository — User queries written in every supported style:
    - ORM: SQLAlchemy 표현식 쿼리 (Expression-language queries on mapped classes)
    - native: 원시 SQL, 결과는 User 엔티티로 매핑 (Raw SQL mapped back onto User)
    - positional / named binding: 위치 및 이름 파라미터 (?1 vs :name)
    - sorting, paging, collection parameters, modifying statements

Criteria-built queries live in ``UserCriteriaQueries`` and are mixed in.
Unless a sort is given, reads are ordered by id.
"""

from collections.abc import Collection
from typing import Sequence

from sqlalchemy import Select, bindparam, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User, UserStatus
from app.repositories.base import BaseRepository
from app.repositories.user_criteria import UserCriteriaQueries
from app.utils.pagination import PageRequest, paginate_native
from app.utils.sorting import Sort, apply_sort
from app.utils.sql import named_text, positional_text


class UserRepository(BaseRepository[User], UserCriteriaQueries):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    """

    def __init__(self) -> None:
        """UserRepository를 초기화합니다.

        Initialize the UserRepository with the User model.
        """
        super().__init__(User)

    async def _fetch(self, db: AsyncSession, query: Select, params: dict | None = None) -> list[User]:
        result = await db.execute(query, params or {})
        users: Sequence[User] = result.scalars().all()
        return list(users)

    # ------------------------------------------------------------------
    # 활성 사용자 — Active users
    # ------------------------------------------------------------------

    async def find_all_active_users_orm(self, db: AsyncSession) -> list[User]:
        """활성 사용자 전체를 ORM 쿼리로 조회합니다.

        All users with ``status = 1`` via an ORM expression query.
        """
        query: Select = (
            select(User).where(User.status == UserStatus.ACTIVE).order_by(User.id)
        )
        return await self._fetch(db, query)

    async def find_all_active_users_native(self, db: AsyncSession) -> list[User]:
        """활성 사용자 전체를 원시 SQL로 조회합니다.

        All users with ``status = 1`` via native SQL mapped onto User.
        """
        stmt = named_text("SELECT * FROM users u WHERE u.status = 1 ORDER BY u.id")
        return await self._fetch(db, select(User).from_statement(stmt))

    # ------------------------------------------------------------------
    # 정렬 — Sorting
    # ------------------------------------------------------------------

    async def find_all_users_sorted_orm(self, db: AsyncSession, sort: Sort) -> list[User]:
        """전체 사용자를 전달된 정렬로 조회합니다.

        All users ordered by ``sort``. Safe orders must name mapped columns;
        SQL expressions such as ``LENGTH(name)`` need ``Sort.unsafe``.

        Raises:
            InvalidSortError: 안전한 정렬이 매핑된 컬럼이 아닌 경우
        """
        query: Select = apply_sort(select(User), User, sort)
        return await self._fetch(db, query)

    # ------------------------------------------------------------------
    # 페이지네이션 — Paging
    # ------------------------------------------------------------------

    async def find_all_users_paginated_orm(
        self,
        db: AsyncSession,
        page_request: PageRequest,
    ) -> tuple[list[User], int]:
        """ID 순으로 정렬된 사용자 페이지를 ORM 쿼리로 조회합니다.

        One page of users ordered by id; returns (items, total).
        """
        items, total = await self.get_paginated(
            db, select(User).order_by(User.id), page_request
        )
        return list(items), total

    async def find_all_users_paginated_native(
        self,
        db: AsyncSession,
        page_request: PageRequest,
    ) -> tuple[list[User], int]:
        """ID 순으로 정렬된 사용자 페이지를 원시 SQL로 조회합니다.

        One page of users ordered by id via native SQL with an explicit
        count statement; returns (items, total).
        """
        items, total = await paginate_native(
            db,
            User,
            "SELECT * FROM users ORDER BY id",
            "SELECT count(*) FROM users",
            page_request.page,
            page_request.per_page,
        )
        return list(items), total

    # ------------------------------------------------------------------
    # 위치 파라미터 — Positional parameters
    # ------------------------------------------------------------------

    async def find_users_by_status_orm(self, db: AsyncSession, status: int) -> list[User]:
        query: Select = select(User).where(User.status == status).order_by(User.id)
        return await self._fetch(db, query)

    async def find_users_by_status_and_name_orm(
        self,
        db: AsyncSession,
        status: int,
        name: str,
    ) -> list[User]:
        query: Select = (
            select(User)
            .where(User.status == status, User.name == name)
            .order_by(User.id)
        )
        return await self._fetch(db, query)

    async def find_users_by_status_native(self, db: AsyncSession, status: int) -> list[User]:
        """상태로 사용자를 조회합니다 (원시 SQL, ?1 위치 파라미터).

        Users by status via native SQL with a ``?1`` placeholder.
        """
        stmt = positional_text("SELECT * FROM users u WHERE u.status = ?1 ORDER BY u.id", status)
        return await self._fetch(db, select(User).from_statement(stmt))

    # ------------------------------------------------------------------
    # 이름 파라미터 — Named parameters
    # ------------------------------------------------------------------

    async def find_users_by_status_and_name_named_orm(
        self,
        db: AsyncSession,
        status: int,
        name: str,
    ) -> list[User]:
        """상태와 이름으로 사용자를 조회합니다 (ORM, 이름 파라미터).

        Users by status and name; values are bound by name at execution time.
        """
        return await self.find_users_by_user_status_and_user_name_named_orm(db, status, name)

    async def find_users_by_user_status_and_user_name_named_orm(
        self,
        db: AsyncSession,
        user_status: int,
        user_name: str,
    ) -> list[User]:
        """바인딩 이름이 인자 이름과 달라도 동작하는 이름 파라미터 쿼리.

        Named binds are matched by bind name (``status``, ``name``), not by
        the Python argument names.
        """
        query: Select = (
            select(User)
            .where(User.status == bindparam("status"), User.name == bindparam("name"))
            .order_by(User.id)
        )
        return await self._fetch(db, query, {"status": user_status, "name": user_name})

    async def find_users_by_status_and_name_named_native(
        self,
        db: AsyncSession,
        status: int,
        name: str,
    ) -> list[User]:
        stmt = named_text(
            "SELECT * FROM users u WHERE u.status = :status AND u.name = :name ORDER BY u.id",
            status=status,
            name=name,
        )
        return await self._fetch(db, select(User).from_statement(stmt))

    # ------------------------------------------------------------------
    # 컬렉션 파라미터 — Collection parameters
    # ------------------------------------------------------------------

    async def find_users_by_names_orm(self, db: AsyncSession, names: Collection[str]) -> list[User]:
        """이름 목록에 속한 사용자를 조회합니다. 빈 목록은 빈 결과.

        Users whose name is in ``names``, bound as an expanding ``:names``
        parameter. An empty collection yields an empty result.
        """
        query: Select = (
            select(User)
            .where(User.name.in_(bindparam("names", expanding=True)))
            .order_by(User.id)
        )
        return await self._fetch(db, query, {"names": list(names)})

    # ------------------------------------------------------------------
    # 변경 쿼리 — Modifying statements
    # ------------------------------------------------------------------

    async def update_user_status_for_name_orm(self, db: AsyncSession, status: int, name: str) -> int:
        """이름으로 사용자를 찾아 상태를 변경합니다 (ORM UPDATE).

        Returns:
            int: 변경된 행 수 (Number of affected rows)
        """
        stmt = update(User).where(User.name == name).values(status=status)
        result = await db.execute(stmt)
        return result.rowcount

    async def update_user_status_for_name_native(self, db: AsyncSession, status: int, name: str) -> int:
        """이름으로 사용자를 찾아 상태를 변경합니다 (원시 SQL, ? 위치 파라미터).

        The identity map is cleared afterwards so later reads reflect the
        database.

        Returns:
            int: 변경된 행 수 (Number of affected rows)
        """
        stmt = positional_text("UPDATE users SET status = ? WHERE name = ?", status, name)
        result = await db.execute(stmt)
        db.expunge_all()
        return result.rowcount

    async def insert_user_native(
        self,
        db: AsyncSession,
        name: str,
        status: int,
        email: str | None,
    ) -> None:
        """원시 SQL로 새 사용자를 삽입합니다.

        Insert one user via native SQL with named parameters.
        """
        stmt = named_text(
            "INSERT INTO users (name, status, email) VALUES (:name, :status, :email)",
            name=name,
            status=status,
            email=email,
        )
        await db.execute(stmt)
        db.expunge_all()


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
