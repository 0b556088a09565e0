"""사용자 서비스 — 쿼리 방식 선택 및 응답 변환 비즈니스 로직.

User Service — Business logic on top of the user repository.
Chooses the ORM or native variant of each query from ``QueryMode``,
converts ORM rows into response schemas, and raises HTTP errors for
missing records and unsupported combinations.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.user_criteria import UserSearchCriteria
from app.repositories.user_repository import user_repository
from app.schemas.user import (
    ParamBinding,
    QueryMode,
    UpdateResult,
    UserCreate,
    UserPage,
    UserResponse,
    UserSearchRequest,
    UserStatusUpdate,
)
from app.utils.exceptions import BadRequestError, NotFoundError
from app.utils.pagination import PageRequest
from app.utils.sorting import Sort


class UserService:
    """사용자 관련 비즈니스 로직을 처리하는 서비스.

    Service handling user business logic.
    """

    def _to_response(self, user: User) -> UserResponse:
        """사용자 모델을 응답 스키마로 변환합니다.

        Convert a User model instance to a UserResponse schema.
        """
        return UserResponse(
            id=user.id,
            name=user.name,
            status=user.status,
            email=user.email,
        )

    def _to_responses(self, users: list[User]) -> list[UserResponse]:
        return [self._to_response(u) for u in users]

    async def list_users(self, db: AsyncSession, sort: Sort | None = None) -> list[UserResponse]:
        """전체 사용자를 정렬하여 조회합니다.

        List all users, ordered by ``sort`` or by id.

        Raises:
            InvalidSortError: 정렬 속성이 매핑된 컬럼이 아닌 경우
        """
        users = await user_repository.get_all(db, sort=sort)
        return self._to_responses(list(users))

    async def list_active_users(self, db: AsyncSession, mode: QueryMode) -> list[UserResponse]:
        """활성 사용자 목록을 조회합니다.

        List active users using the requested query style.
        """
        if mode is QueryMode.NATIVE:
            users = await user_repository.find_all_active_users_native(db)
        else:
            users = await user_repository.find_all_active_users_orm(db)
        return self._to_responses(users)

    async def list_users_page(
        self,
        db: AsyncSession,
        page_request: PageRequest,
        mode: QueryMode,
    ) -> UserPage:
        """ID 순 사용자 페이지를 조회합니다.

        Return one page of users ordered by id.
        """
        if mode is QueryMode.NATIVE:
            users, total = await user_repository.find_all_users_paginated_native(db, page_request)
        else:
            users, total = await user_repository.find_all_users_paginated_orm(db, page_request)
        return UserPage.build(self._to_responses(users), total, page_request)

    async def list_users_by_status(
        self,
        db: AsyncSession,
        status: int,
        name: str | None,
        binding: ParamBinding,
        mode: QueryMode,
    ) -> list[UserResponse]:
        """상태 (및 이름) 조건으로 사용자를 조회합니다.

        Filter users by status, and by name when given, using the requested
        binding style and query mode.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            status: 상태 값 (Status value)
            name: 이름, 선택 (Optional exact name)
            binding: 파라미터 바인딩 방식 (Positional or named binding)
            mode: 쿼리 방식 (ORM or native)

        Returns:
            list[UserResponse]: 사용자 목록 (Matching users)

        Raises:
            BadRequestError: 지원되지 않는 조합 (Combination without a repository query)
        """
        if name is None:
            if binding is ParamBinding.NAMED:
                raise BadRequestError("Named binding requires a name filter")
            if mode is QueryMode.NATIVE:
                users = await user_repository.find_users_by_status_native(db, status)
            else:
                users = await user_repository.find_users_by_status_orm(db, status)
        elif binding is ParamBinding.NAMED:
            if mode is QueryMode.NATIVE:
                users = await user_repository.find_users_by_status_and_name_named_native(db, status, name)
            else:
                users = await user_repository.find_users_by_status_and_name_named_orm(db, status, name)
        else:
            if mode is QueryMode.NATIVE:
                raise BadRequestError("Positional status and name lookup has no native form")
            users = await user_repository.find_users_by_status_and_name_orm(db, status, name)
        return self._to_responses(users)

    async def list_users_by_names(self, db: AsyncSession, names: list[str]) -> list[UserResponse]:
        users = await user_repository.find_users_by_names_orm(db, names)
        return self._to_responses(users)

    async def search_users(self, db: AsyncSession, data: UserSearchRequest) -> list[UserResponse]:
        """동적 조건으로 사용자를 검색합니다.

        Search users with dynamically assembled criteria.
        """
        criteria = UserSearchCriteria(
            name=data.name,
            names=data.names,
            name_contains=data.name_contains,
            status=data.status,
            emails=data.emails,
        )
        users = await user_repository.search(db, criteria, Sort.parse(data.sort))
        return self._to_responses(users)

    async def get_user(self, db: AsyncSession, user_id: int) -> UserResponse:
        """사용자 상세 정보를 조회합니다.

        Raises:
            NotFoundError: 사용자가 존재하지 않는 경우 (User not found)
        """
        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return self._to_response(user)

    async def create_user(self, db: AsyncSession, data: UserCreate) -> UserResponse:
        user: User = await user_repository.create(db, data.model_dump())
        return self._to_response(user)

    async def insert_user_native(self, db: AsyncSession, data: UserCreate) -> None:
        await user_repository.insert_user_native(db, data.name, data.status, data.email)

    async def update_status(
        self,
        db: AsyncSession,
        data: UserStatusUpdate,
        mode: QueryMode,
    ) -> UpdateResult:
        """이름으로 찾은 사용자들의 상태를 변경합니다.

        Set the status of every user with the given name; zero matches
        is not an error.
        """
        if mode is QueryMode.NATIVE:
            affected = await user_repository.update_user_status_for_name_native(db, data.status, data.name)
        else:
            affected = await user_repository.update_user_status_for_name_orm(db, data.status, data.name)
        return UpdateResult(affected=affected)

    async def delete_user(self, db: AsyncSession, user_id: int) -> None:
        """사용자를 삭제합니다.

        Raises:
            NotFoundError: 사용자가 존재하지 않는 경우 (User not found)
        """
        if not await user_repository.delete(db, user_id):
            raise NotFoundError("User not found")


# 싱글턴 인스턴스 — Singleton instance
user_service: UserService = UserService()
