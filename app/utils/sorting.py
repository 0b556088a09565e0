"""정렬 유틸리티 모듈.

Sorting utility module for SQLAlchemy queries.
Provides an immutable ``Sort`` description that can be passed into
repository methods, plus ``apply_sort`` which turns it into ORDER BY
clauses against a mapped model.

Two kinds of orders exist:
    - safe: 모델의 매핑된 컬럼 이름만 허용 (Must name a mapped column)
    - unsafe: SQL 표현식을 그대로 ORDER BY에 삽입 (Raw SQL expression, e.g. LENGTH(name))

Usage:
    Sort.by("name")
    Sort.by("status", direction=Direction.DESC).and_(Sort.by("name"))
    Sort.unsafe("LENGTH(name)")
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from sqlalchemy import Select, inspect, literal_column

from app.utils.exceptions import BadRequestError, InvalidSortError


class Direction(str, Enum):
    """정렬 방향 — Sort direction."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Order:
    """단일 정렬 조건 — A single (property, direction) pair.

    Attributes:
        prop: 컬럼 이름 또는 SQL 표현식 (Column name, or SQL expression when unsafe)
        direction: 정렬 방향 (Sort direction)
        unsafe: True이면 prop을 검증 없이 SQL로 사용 (Emit prop verbatim as SQL)
    """

    prop: str
    direction: Direction = Direction.ASC
    unsafe: bool = False


@dataclass(frozen=True)
class Sort:
    """정렬 조건 목록 — Ordered list of ``Order`` entries.

    Empty sorts are falsy so callers can write ``if sort:``.
    """

    orders: tuple[Order, ...] = field(default_factory=tuple)

    @classmethod
    def by(cls, *props: str, direction: Direction = Direction.ASC) -> "Sort":
        """매핑된 속성 이름으로 안전한 정렬을 만듭니다.

        Build a safe sort over mapped property names.
        """
        return cls(tuple(Order(p, direction) for p in props))

    @classmethod
    def unsafe(cls, *expressions: str, direction: Direction = Direction.ASC) -> "Sort":
        """SQL 표현식으로 정렬합니다. 신뢰할 수 없는 입력에 사용하지 마십시오.

        Build a sort whose entries are emitted verbatim into ORDER BY.
        Never feed user input into this.
        """
        return cls(tuple(Order(e, direction, unsafe=True) for e in expressions))

    @classmethod
    def unsorted(cls) -> "Sort":
        return cls()

    @classmethod
    def parse(cls, values: Iterable[str] | None) -> "Sort":
        """쿼리 문자열 값을 안전한 정렬로 파싱합니다.

        Parse query-string values of the form ``prop`` or ``prop,asc|desc``.

        Args:
            values: 정렬 문자열 목록 (e.g. ["name,desc", "id"])

        Returns:
            Sort: 파싱된 안전한 정렬 (Parsed safe sort)

        Raises:
            BadRequestError: 빈 속성 또는 알 수 없는 방향 (Empty property or unknown direction)
        """
        orders: list[Order] = []
        for raw in values or ():
            prop, _, direction = raw.partition(",")
            prop = prop.strip()
            direction = direction.strip().lower() or Direction.ASC.value
            if not prop:
                raise BadRequestError(f"Invalid sort parameter: '{raw}'")
            try:
                orders.append(Order(prop, Direction(direction)))
            except ValueError:
                raise BadRequestError(f"Invalid sort direction: '{direction}'") from None
        return cls(tuple(orders))

    def and_(self, other: "Sort") -> "Sort":
        return Sort(self.orders + other.orders)

    def descending(self) -> "Sort":
        return Sort(tuple(Order(o.prop, Direction.DESC, o.unsafe) for o in self.orders))

    def ascending(self) -> "Sort":
        return Sort(tuple(Order(o.prop, Direction.ASC, o.unsafe) for o in self.orders))

    def __bool__(self) -> bool:
        return bool(self.orders)

    def __iter__(self):
        return iter(self.orders)


def order_clauses(model: type[Any], sort: Sort) -> list[Any]:
    """정렬 조건을 ORDER BY 절 목록으로 변환합니다.

    Resolve every order of ``sort`` against ``model``.
    All safe orders are validated before anything is returned, so an
    invalid property never reaches the database.

    Args:
        model: 매핑된 SQLAlchemy 모델 클래스 (Mapped model class)
        sort: 정렬 조건 (Sort description)

    Returns:
        list: ORDER BY에 전달할 절 목록 (Clauses for ``order_by``)

    Raises:
        InvalidSortError: 안전한 정렬이 매핑된 컬럼이 아닌 경우
                          (A safe order does not name a mapped column)
    """
    columns = inspect(model).column_attrs
    clauses: list[Any] = []
    for order in sort:
        if order.unsafe:
            clause: Any = literal_column(order.prop)
        elif order.prop in columns:
            clause = getattr(model, order.prop)
        else:
            raise InvalidSortError(order.prop, model.__name__)
        clauses.append(clause.desc() if order.direction is Direction.DESC else clause.asc())
    return clauses


def apply_sort(query: Select, model: type[Any], sort: Sort | None) -> Select:
    """쿼리에 정렬을 적용합니다. 정렬이 없으면 쿼리를 그대로 반환합니다.

    Apply ``sort`` to ``query``; returns the query unchanged when unsorted.
    """
    if not sort:
        return query
    return query.order_by(*order_clauses(model, sort))
