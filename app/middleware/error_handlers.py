"""전역 예외 핸들러 — 모든 오류를 응답 봉투로 변환.

Global exception handlers rendering every failure into the
``{success: false, message, errors?}`` envelope.

Mapping:
    - ApiError 계열 → 자체 상태 코드와 필드 오류 (own status and field errors)
    - RequestValidationError → 400 "Validation failed", 필드별 항목
    - 라우트 없음 → 404 "Route {METHOD} {path} not found"
    - SQLAlchemy 오류 → 일반화된 메시지, SQL 문은 노출하지 않음
    - 그 외 → 500 "Internal server error" (traceback은 로그에만)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, NoResultFound, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.schemas.common import ApiResponse, FieldError
from app.utils.exceptions import ApiError, PersistenceError

logger = logging.getLogger(__name__)

# 요청 위치 접두사 — Location prefixes stripped from pydantic error paths
_LOC_PREFIXES: frozenset[str] = frozenset({"body", "query", "path", "header", "cookie"})


def _field_path(loc: tuple) -> str:
    """pydantic 오류 위치를 점 구분 경로로 변환합니다.

    ("body", "service_offerings", 0, "service_name") → "service_offerings.0.service_name"
    """
    parts = list(loc)
    if parts and parts[0] in _LOC_PREFIXES and len(parts) > 1:
        parts = parts[1:]
    return ".".join(str(part) for part in parts)


def _persistence_error(exc: SQLAlchemyError) -> PersistenceError:
    # IntegrityError는 DBAPIError의 하위 클래스 (IntegrityError subclasses DBAPIError)
    if isinstance(exc, DBAPIError):
        return PersistenceError("Database query failed")
    if isinstance(exc, NoResultFound):
        return PersistenceError("Resource not found", status_code=status.HTTP_404_NOT_FOUND)
    return PersistenceError("Database error")


def _envelope(status_code: int, message: str, errors: list[FieldError] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ApiResponse.error(message, errors))


def register_exception_handlers(app: FastAPI) -> None:
    """애플리케이션에 예외 핸들러를 등록합니다.

    Register the envelope-producing exception handlers on ``app``.
    """

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        return _envelope(exc.status_code, exc.detail, exc.errors)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            return _envelope(exc.status_code, f"Route {request.method} {request.url.path} not found")
        return _envelope(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors: list[FieldError] = [
            FieldError(field=_field_path(tuple(err.get("loc", ()))), message=err.get("msg", ""), code=err.get("type"))
            for err in exc.errors()
        ]
        return _envelope(status.HTTP_400_BAD_REQUEST, "Validation failed", errors)

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        mapped: PersistenceError = _persistence_error(exc)
        # 원본 SQL/드라이버 메시지는 로그에만 남김 (statement text stays in the log)
        logger.warning(
            "Database error on %s %s: %s", request.method, request.url.path, type(exc).__name__,
            exc_info=True,
        )
        return _envelope(mapped.status_code, mapped.detail)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
