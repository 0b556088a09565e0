"""사용자 라우터 — 쿼리 방식별 사용자 조회/변경 엔드포인트.

User Router — Endpoints exposing every repository query style:
sorted listing, active users, paging, status/name lookups with
positional or named binding, collection lookups, criteria search,
and ORM or native modifying statements.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.schemas.common import MessageResponse
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
from app.services.user_service import user_service
from app.utils.pagination import PageRequest
from app.utils.sorting import Sort

router: APIRouter = APIRouter()

ModeQuery = Annotated[QueryMode, Query(description="쿼리 방식 (orm | native)")]


@router.get("/", response_model=list[UserResponse])
async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    sort: Annotated[list[str] | None, Query(description="정렬 (e.g. name,desc), 반복 가능")] = None,
) -> list[UserResponse]:
    """전체 사용자를 정렬하여 조회합니다.

    List all users; ``sort`` accepts mapped column names only.
    """
    return await user_service.list_users(db, Sort.parse(sort))


@router.get("/active", response_model=list[UserResponse])
async def list_active_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    mode: ModeQuery = QueryMode.ORM,
) -> list[UserResponse]:
    """활성 사용자 목록을 조회합니다.

    List users with status 1.
    """
    return await user_service.list_active_users(db, mode)


@router.get("/page", response_model=UserPage)
async def list_users_page(
    db: Annotated[AsyncSession, Depends(get_db)],
    page: Annotated[int, Query(description="페이지 번호, 1부터 시작")] = 1,
    per_page: Annotated[int, Query(description="페이지당 항목 수")] = settings.DEFAULT_PAGE_SIZE,
    mode: ModeQuery = QueryMode.ORM,
) -> UserPage:
    """ID 순 사용자 페이지를 조회합니다.

    Return one page of users ordered by id.
    """
    return await user_service.list_users_page(db, PageRequest(page, per_page), mode)


@router.get("/by-status", response_model=list[UserResponse])
async def list_users_by_status(
    db: Annotated[AsyncSession, Depends(get_db)],
    status: Annotated[int, Query(description="상태 값")],
    name: Annotated[str | None, Query(description="이름 필터")] = None,
    binding: Annotated[ParamBinding, Query(description="바인딩 방식")] = ParamBinding.POSITIONAL,
    mode: ModeQuery = QueryMode.ORM,
) -> list[UserResponse]:
    """상태 (및 이름) 조건으로 사용자를 조회합니다.

    Filter users by status and optional name.
    """
    return await user_service.list_users_by_status(db, status, name, binding, mode)


@router.get("/by-names", response_model=list[UserResponse])
async def list_users_by_names(
    db: Annotated[AsyncSession, Depends(get_db)],
    names: Annotated[list[str], Query(description="이름 목록, 반복 가능")] = [],
) -> list[UserResponse]:
    """이름 목록에 속한 사용자를 조회합니다.

    List users whose name is one of ``names``; no names yields no users.
    """
    return await user_service.list_users_by_names(db, names)


@router.post("/search", response_model=list[UserResponse])
async def search_users(
    data: UserSearchRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[UserResponse]:
    """동적 조건으로 사용자를 검색합니다.

    Search users with dynamically assembled criteria.
    """
    return await user_service.search_users(db, data)


@router.patch("/status", response_model=UpdateResult)
async def update_user_status(
    data: UserStatusUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    mode: ModeQuery = QueryMode.ORM,
) -> UpdateResult:
    """이름으로 찾은 사용자들의 상태를 변경합니다.

    Set the status of every user with the given name.
    """
    result: UpdateResult = await user_service.update_status(db, data, mode)
    await db.commit()
    return result


@router.post("/native", response_model=MessageResponse, status_code=201)
async def insert_user_native(
    data: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict[str, str]:
    """원시 SQL로 새 사용자를 삽입합니다.

    Insert a user via native SQL.
    """
    await user_service.insert_user_native(db, data)
    await db.commit()
    return {"message": "User inserted"}


@router.post("/", response_model=UserResponse, status_code=201)
async def create_user(
    data: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserResponse:
    """새 사용자를 생성합니다.

    Create a user via the ORM.
    """
    result: UserResponse = await user_service.create_user(db, data)
    await db.commit()
    return result


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserResponse:
    """사용자 상세 정보를 조회합니다."""
    return await user_service.get_user(db, user_id)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict[str, str]:
    """사용자를 삭제합니다.

    Delete a user by id.
    """
    await user_service.delete_user(db, user_id)
    await db.commit()
    return {"message": "User deleted"}
