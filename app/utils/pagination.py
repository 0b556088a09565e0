"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides a page window description (``PageRequest``), a generic
``paginate`` for ORM queries, a ``paginate_native`` for raw SQL with an
explicit count query, and a ``Page`` response model for consistent
pagination across all list endpoints.
"""

import math
from dataclasses import dataclass
from typing import Any, Sequence

from pydantic import BaseModel
from sqlalchemy import Select, func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.utils.exceptions import BadRequestError
from app.utils.sorting import Sort


@dataclass(frozen=True)
class PageRequest:
    """페이지 요청 — 1부터 시작하는 페이지 창과 선택적 정렬.

    Page window request: 1-based page number, page size and optional sort.

    Raises:
        BadRequestError: page < 1 또는 per_page 범위 초과 (Out-of-range values)
    """

    page: int = 1
    per_page: int = settings.DEFAULT_PAGE_SIZE
    sort: Sort | None = None

    def __post_init__(self) -> None:
        if self.page < 1:
            raise BadRequestError("page must be >= 1")
        if not 1 <= self.per_page <= settings.MAX_PAGE_SIZE:
            raise BadRequestError(f"per_page must be between 1 and {settings.MAX_PAGE_SIZE}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


class Page(BaseModel):
    """페이지네이션 결과 모델.

    Pagination result model for typed responses.
    Contains the paginated items and metadata for client-side pagination controls.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        page: 현재 페이지 번호 (Current page number, 1-based)
        per_page: 페이지당 항목 수 (Items per page)
        pages: 전체 페이지 수 (Total number of pages)
    """

    items: list[Any]  # 현재 페이지 항목 목록 (Paginated items)
    total: int  # 전체 항목 수 (Total item count)
    page: int  # 현재 페이지 번호 — 1부터 시작 (Current page, 1-indexed)
    per_page: int  # 페이지당 항목 수 (Items per page)
    pages: int  # 전체 페이지 수 (Total pages, computed: ceil(total/per_page))

    @classmethod
    def build(cls, items: Sequence[Any], total: int, page_request: PageRequest) -> "Page":
        return cls(
            items=list(items),
            total=total,
            page=page_request.page,
            per_page=page_request.per_page,
            pages=math.ceil(total / page_request.per_page) if total else 0,
        )


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    page: int = 1,
    per_page: int = 20,
) -> tuple[Sequence[Any], int]:
    """SQLAlchemy 쿼리에 대한 페이지네이션을 수행합니다.

    Execute a paginated SQLAlchemy query, returning items and total count.
    Runs two queries: one for the total count (via subquery) and one for
    the actual page of results with OFFSET/LIMIT.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: SQLAlchemy Select 쿼리 (Base query to paginate)
        page: 요청 페이지 번호, 1부터 시작 (Page number, 1-indexed, default: 1)
        per_page: 페이지당 항목 수 (Items per page, default: 20)

    Returns:
        tuple[Sequence[Any], int]: (항목 목록, 전체 개수) 튜플
            (Tuple of paginated items and total count)
    """
    # 전체 개수 조회 — 서브쿼리로 감싸서 COUNT 실행 (Count total via subquery)
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total: int = (await db.execute(count_query)).scalar() or 0

    # 페이지 항목 조회 — OFFSET/LIMIT 적용 (Fetch page items with offset/limit)
    offset: int = (page - 1) * per_page
    result = await db.execute(query.offset(offset).limit(per_page))
    items: Sequence[Any] = result.scalars().all()

    return items, total


async def paginate_native(
    db: AsyncSession,
    model: type[Any],
    sql: str,
    count_sql: str,
    page: int = 1,
    per_page: int = 20,
    params: dict[str, Any] | None = None,
) -> tuple[Sequence[Any], int]:
    """원시 SQL 쿼리에 대한 페이지네이션을 수행합니다.

    Paginate a native SQL query. Native SQL cannot be wrapped reliably,
    so the caller supplies the count statement; the row statement gets
    ``LIMIT :limit OFFSET :offset`` appended and its rows are mapped
    back onto ``model``.

    Args:
        db: 비동기 DB 세션 (Async database session)
        model: 결과 행을 매핑할 모델 (Model the rows are mapped onto)
        sql: 행 조회 SQL, LIMIT/OFFSET 없이 (Row SQL without LIMIT/OFFSET)
        count_sql: 전체 개수 SQL (Count SQL)
        page: 요청 페이지 번호, 1부터 시작 (Page number, 1-indexed)
        per_page: 페이지당 항목 수 (Items per page)
        params: 두 SQL에 공통으로 바인딩할 파라미터 (Parameters bound into both statements)

    Returns:
        tuple[Sequence[Any], int]: (항목 목록, 전체 개수) 튜플
    """
    params = dict(params or {})
    total: int = (await db.execute(text(count_sql), params)).scalar() or 0

    stmt = text(f"{sql.rstrip().rstrip(';')} LIMIT :limit OFFSET :offset")
    result = await db.execute(
        select(model).from_statement(stmt),
        {**params, "limit": per_page, "offset": (page - 1) * per_page},
    )
    items: Sequence[Any] = result.scalars().all()

    return items, total
