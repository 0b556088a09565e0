"""원시 SQL 파라미터 바인딩 헬퍼.

Native SQL parameter binding helpers.
SQLAlchemy ``text()`` only understands named ``:param`` placeholders and
leaves the driver paramstyle (qmark for sqlite, $n for asyncpg) hidden.
``positional_text`` lets native queries be written with positional
placeholders anyway, by rewriting them into generated named binds:

    positional_text("SELECT * FROM users WHERE status = ?1 AND name = ?2", 1, "lisi")
    positional_text("UPDATE users SET status = ? WHERE name = ?", 0, "lisi")
"""

import re
from typing import Any

from sqlalchemy import TextClause, text

# 문자열 리터럴 또는 위치 파라미터 — A quoted literal, or a ?/?N placeholder
_TOKEN = re.compile(r"'(?:[^']|'')*'|\?(\d+)?")


def positional_text(sql: str, *args: Any) -> TextClause:
    """위치 파라미터 SQL을 바인딩된 TextClause로 변환합니다.

    Convert SQL using positional placeholders into a bound ``TextClause``.
    ``?N`` placeholders are 1-based and may repeat or appear out of
    order; bare ``?`` placeholders are consumed left to right.
    Question marks inside single-quoted literals are left alone.

    Args:
        sql: ``?N`` 또는 ``?`` 를 사용하는 SQL (SQL with positional placeholders)
        *args: 위치 순서대로의 값 (Values in positional order)

    Returns:
        TextClause: ``:p1``, ``:p2`` ... 로 바인딩된 절 (Clause bound as :p1, :p2, ...)

    Raises:
        ValueError: 두 스타일 혼용, 범위 밖 인덱스, 사용되지 않은 인자
                    (Mixed styles, index without argument, or unused arguments)
    """
    used: set[int] = set()
    styles: set[str] = set()
    counter: list[int] = [0]

    def _replace(match: re.Match[str]) -> str:
        token: str = match.group(0)
        if token.startswith("'"):
            return token
        if match.group(1) is not None:
            styles.add("numbered")
            index: int = int(match.group(1))
        else:
            styles.add("bare")
            counter[0] += 1
            index = counter[0]
        if index < 1 or index > len(args):
            raise ValueError(f"Positional parameter ?{index} has no argument ({len(args)} given)")
        used.add(index)
        return f":p{index}"

    rewritten: str = _TOKEN.sub(_replace, sql)

    if len(styles) > 1:
        raise ValueError("Cannot mix '?' and '?N' placeholders in one statement")
    unused: set[int] = set(range(1, len(args) + 1)) - used
    if unused:
        raise ValueError(f"Unused positional arguments at positions {sorted(unused)}")

    return text(rewritten).bindparams(**{f"p{i}": args[i - 1] for i in sorted(used)})


def named_text(sql: str, **params: Any) -> TextClause:
    """이름 파라미터 SQL을 바인딩된 TextClause로 변환합니다.

    Bind named ``:param`` placeholders. Unknown names raise from SQLAlchemy.
    """
    return text(sql).bindparams(**params) if params else text(sql)
