"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for common error patterns.
These simplify error raising across services and repositories by
eliminating the need to specify status codes at each call site.

Usage:
    from app.utils.exceptions import NotFoundError, InvalidSortError
    raise NotFoundError("User not found")
    raise InvalidSortError("LENGTH(name)", "User")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a requested resource (e.g. a user id) does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised when the request data is invalid beyond what Pydantic validation catches
    (e.g. page numbers below 1, unsupported query mode combinations).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidSortError(BadRequestError):
    """400 예외 — 정렬 속성이 모델의 매핑된 컬럼이 아닐 때 사용.

    Raised when a safe sort order names something that is not a mapped
    column of the queried model, e.g. ``Sort.by("LENGTH(name)")``.
    Expressions like that must be passed through ``Sort.unsafe``.

    Args:
        prop: 잘못된 정렬 속성 (Offending sort property)
        model_name: 대상 모델 이름 (Name of the queried model)
    """

    def __init__(self, prop: str, model_name: str) -> None:
        self.prop: str = prop
        super().__init__(
            f"No property '{prop}' found for type '{model_name}'; "
            "use an unsafe sort for SQL expressions"
        )
