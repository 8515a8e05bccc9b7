"""공통 Pydantic 응답 봉투(envelope) 스키마 정의.

Common Pydantic response envelope schema definitions.
Every endpoint answers with the same shape::

    {success, message, data?, meta?, errors?}

Keys that were never set are omitted from the wire (routers serialize
with ``response_model_exclude_unset=True``).
"""

import math
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class FieldError(BaseModel):
    """필드 단위 오류 항목.

    Per-field error entry used by validation failures.

    Attributes:
        field: 오류 필드 경로, 점 구분 (Dotted field path, e.g. "service_offerings.0.service_name")
        message: 오류 메시지 (Human-readable message)
        code: 오류 코드 (Machine-readable code, optional)
    """

    field: str  # 점(.)으로 연결된 필드 경로 (Dotted field path)
    message: str  # 오류 메시지 (Error message)
    code: str | None = None  # 오류 코드 — pydantic 오류 타입 등 (Error code, optional)


class PaginationMeta(BaseModel):
    """페이지네이션 메타데이터.

    Pagination metadata. ``totalPages`` keeps the camelCase wire name
    consumed by existing clients.
    """

    page: int  # 현재 페이지 — 1부터 시작 (Current page, 1-indexed)
    limit: int  # 페이지당 항목 수 (Items per page)
    total: int  # 전체 항목 수 (Total matching items)
    totalPages: int  # 전체 페이지 수 — ceil(total/limit) (Total pages)

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PaginationMeta":
        """전체 개수로부터 메타데이터를 계산합니다 (Compute meta from a total count)."""
        return cls(page=page, limit=limit, total=total, totalPages=math.ceil(total / limit))


class ApiResponse(BaseModel, Generic[T]):
    """성공/실패 공통 응답 봉투.

    Uniform success/error envelope.

    Attributes:
        success: 성공 여부 (Whether the request succeeded)
        message: 응답 메시지 (Human-readable message)
        data: 응답 데이터 (Payload, omitted when absent)
        meta: 페이지네이션 정보 (Pagination metadata, list endpoints only)
        errors: 필드 오류 목록 (Field errors, failures only)
    """

    success: bool
    message: str
    data: T | None = None
    meta: PaginationMeta | None = None
    errors: list[FieldError] | None = None

    @classmethod
    def ok(cls, message: str, data: Any = None, meta: PaginationMeta | None = None) -> "ApiResponse":
        """성공 봉투를 생성합니다 — 전달된 값만 설정됨.

        Build a success envelope; only the arguments actually given are
        marked as set, so absent keys stay off the wire.
        """
        fields: dict[str, Any] = {"success": True, "message": message}
        if data is not None:
            fields["data"] = data
        if meta is not None:
            fields["meta"] = meta
        return cls(**fields)

    @staticmethod
    def error(message: str, errors: list[FieldError] | None = None) -> dict[str, Any]:
        """오류 봉투를 JSON 직렬화 가능한 dict로 생성합니다.

        Build an error envelope as a plain JSON-ready dict.
        """
        body: dict[str, Any] = {"success": False, "message": message}
        if errors:
            body["errors"] = [e.model_dump(exclude_none=True) for e in errors]
        return body


class MessageResponse(BaseModel):
    """범용 메시지 응답 스키마.

    Generic message payload for confirmations such as deletes.
    """

    message: str  # 응답 메시지 (Human-readable confirmation message)
