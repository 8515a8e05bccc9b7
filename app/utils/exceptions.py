"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the directory's error
taxonomy. Services raise these directly; the handlers in
``app.middleware.error_handlers`` render them into the response envelope.

Usage:
    from app.utils.exceptions import NotFoundError, ConflictError
    raise NotFoundError("Specialist not found")
    raise ConflictError("Specialist with this email already exists")
"""

from fastapi import HTTPException, status

from app.schemas.common import FieldError


class ApiError(HTTPException):
    """봉투 형식으로 렌더링되는 예외의 공통 부모.

    Common parent of exceptions rendered into the envelope.

    Args:
        status_code: HTTP 상태 코드 (HTTP status code)
        detail: 오류 메시지 (Error message)
        errors: 필드 오류 목록 (Per-field errors, optional)
    """

    def __init__(self, status_code: int, detail: str, errors: list[FieldError] | None = None) -> None:
        super().__init__(status_code=status_code, detail=detail)
        self.errors: list[FieldError] | None = errors


class ValidationError(ApiError):
    """400 Bad Request 예외 — 입력 값이 제약 조건을 위반할 때 사용.

    400 Bad Request exception carrying one entry per offending field.
    Raised for checks pydantic cannot do alone, such as references to
    media or platform fees that do not exist.

    Args:
        errors: 필드 오류 목록 (Per-field errors)
        detail: 오류 메시지 (Error message, default: "Validation failed")
    """

    def __init__(self, errors: list[FieldError], detail: str = "Validation failed") -> None:
        super().__init__(status.HTTP_400_BAD_REQUEST, detail, errors)


class NotFoundError(ApiError):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a requested aggregate does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status.HTTP_404_NOT_FOUND, detail)


class ConflictError(ApiError):
    """유니크 제약 위반 예외 — 400으로 응답.

    Uniqueness violation (e.g. duplicate contact email).
    Answered with 400 rather than 409 to keep the existing client contract.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)


class PersistenceError(ApiError):
    """저장소 계층 실패 — 내부 정보를 숨긴 일반화된 메시지.

    Storage layer failure with a generalized message; the SQL statement
    and driver message never reach the caller.

    Args:
        detail: 오류 메시지 (Generalized error message)
        status_code: HTTP 상태 코드 (400 or 404 depending on the failure)
    """

    def __init__(self, detail: str = "Database error", status_code: int = status.HTTP_400_BAD_REQUEST) -> None:
        super().__init__(status_code, detail)
