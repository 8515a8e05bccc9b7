"""스페셜리스트 관련 Pydantic 요청/응답 스키마 정의.

Specialist Pydantic request/response schema definitions.
Covers create, sparse update (patch), publish and list-query payloads,
plus the aggregate read-model returned by every endpoint.

Patch semantics (SpecialistUpdate / ServiceOfferingPatch):
    - 필드 생략 → 기존 값 유지 (absent field → keep current value)
    - 명시적 null → 값 삭제, 선택 필드만 허용
      (explicit null → clear; only allowed on optional columns)
    - name, contact_email, service_offerings, service_name 에 null 전달 시 검증 오류
      (null on a required column is a validation error)
"""

from datetime import datetime
from decimal import Decimal
from typing import Literal
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, field_validator, model_validator

from app.models.media import MediaType
from app.models.specialist import SpecialistStatus

_HTTP_URL: TypeAdapter[HttpUrl] = TypeAdapter(HttpUrl)

SortField = Literal["created_at", "name", "updated_at"]
SortOrder = Literal["ASC", "DESC"]


def _check_website_url(value: str | None) -> str | None:
    """URL 형식 검증 — 빈 문자열 허용, 원본 문자열 그대로 저장.

    Validate an http(s) URL while keeping the caller's exact string
    (pydantic's HttpUrl would normalise it). Empty string is allowed.
    """
    if value is None or value == "":
        return value
    try:
        _HTTP_URL.validate_python(value)
    except ValueError:
        raise ValueError("Invalid URL")
    return value


def _check_contact_email(value: str | None) -> str | None:
    """이메일 형식 검증 후 정규화된 주소를 반환합니다.

    Validate email syntax with email-validator and return the normalised
    address. The rules do not depend on the runtime environment; reserved
    and special-use domains such as ``.test`` are accepted.
    """
    if value is None:
        return value
    try:
        result = validate_email(
            value,
            check_deliverability=False,
            test_environment=True,
            globally_deliverable=False,
        )
    except EmailNotValidError:
        raise ValueError("Invalid email address")
    return result.normalized


# === 서비스 오퍼링 (Service Offering) 스키마 ===

class ServiceOfferingCreate(BaseModel):
    """서비스 오퍼링 생성 항목 — 스페셜리스트 생성 요청에 포함.

    Service offering item embedded in a specialist creation request.
    """

    service_name: str = Field(min_length=1, max_length=255)
    service_type: str | None = Field(default=None, max_length=100)
    description: str | None = None
    platform_fee_id: UUID | None = None


class ServiceOfferingPatch(BaseModel):
    """서비스 오퍼링 패치 항목 — 업데이트 요청의 목표 상태 목록.

    Service offering item of an update request's target-state list.
    With ``id``: merge into the existing offering. Without ``id``: create.
    """

    id: UUID | None = None  # 기존 오퍼링 ID — 없으면 신규 생성 (Existing offering id; absent = create)
    service_name: str | None = Field(default=None, min_length=1, max_length=255)
    service_type: str | None = Field(default=None, max_length=100)
    description: str | None = None
    platform_fee_id: UUID | None = None

    @field_validator("service_name")
    @classmethod
    def _service_name_not_null(cls, value: str | None) -> str | None:
        # 전달된 경우에만 실행 — runs only when the key is present
        if value is None:
            raise ValueError("Service name cannot be null")
        return value

    @model_validator(mode="after")
    def _service_name_required_for_new(self) -> "ServiceOfferingPatch":
        if self.id is None and self.service_name is None:
            raise ValueError("Service name is required for new service offerings")
        return self


# === 스페셜리스트 (Specialist) 요청 스키마 ===

class SpecialistCreate(BaseModel):
    """스페셜리스트 생성 요청 스키마.

    Specialist creation request schema. Any ``status`` key in the body is
    ignored; new specialists always start as draft.

    Attributes:
        name: 이름 (Display name, 1..255 chars)
        description: 소개 (Description, optional)
        contact_email: 연락 이메일 (Contact email, globally unique)
        contact_phone: 연락처 (Phone, optional)
        website_url: 웹사이트 (http(s) URL or "", optional)
        logo_id: 로고 미디어 ID (Media id of the logo, optional)
        service_offerings: 함께 생성할 오퍼링 목록 (Offerings created with the specialist)
    """

    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    contact_email: str = Field(max_length=255)
    contact_phone: str | None = Field(default=None, max_length=50)
    website_url: str | None = Field(default=None, max_length=500)
    logo_id: UUID | None = None
    service_offerings: list[ServiceOfferingCreate] = Field(default_factory=list)

    @field_validator("website_url")
    @classmethod
    def _validate_website_url(cls, value: str | None) -> str | None:
        return _check_website_url(value)

    @field_validator("contact_email")
    @classmethod
    def _validate_contact_email(cls, value: str) -> str:
        return _check_contact_email(value)


class SpecialistUpdate(BaseModel):
    """스페셜리스트 수정 요청 스키마 (희소 패치).

    Sparse specialist patch. Use ``model_dump(exclude_unset=True)`` to get
    only the keys the caller actually sent.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    contact_email: str | None = Field(default=None, max_length=255)
    contact_phone: str | None = Field(default=None, max_length=50)
    website_url: str | None = Field(default=None, max_length=500)
    logo_id: UUID | None = None
    # 전달 시 전체 목록 교체(ID 기준) — 생략 시 기존 목록 유지
    # When present, whole-collection replacement by identity; absent keeps the collection
    service_offerings: list[ServiceOfferingPatch] | None = None

    @field_validator("website_url")
    @classmethod
    def _validate_website_url(cls, value: str | None) -> str | None:
        return _check_website_url(value)

    @field_validator("name", "contact_email", "service_offerings")
    @classmethod
    def _required_columns_not_null(cls, value):
        # 전달된 경우에만 실행 — runs only when the key is present
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    @field_validator("contact_email")
    @classmethod
    def _validate_contact_email(cls, value: str | None) -> str | None:
        return _check_contact_email(value)


class SpecialistPublish(BaseModel):
    """공개 상태 변경 요청 스키마 (Status transition request)."""

    status: SpecialistStatus


class SpecialistListQuery(BaseModel):
    """목록 조회 쿼리 파라미터.

    List query parameters after validation. Wire names ``sortBy`` and
    ``sortOrder`` are mapped by the router.
    """

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)
    status: SpecialistStatus | None = None
    search: str | None = None
    sort_by: SortField = "created_at"
    sort_order: SortOrder = "DESC"


# === 응답 (Response) 스키마 ===

class PlatformFeeResponse(BaseModel):
    """플랫폼 수수료 응답 스키마."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    fee_name: str
    fee_percentage: Decimal | None
    fee_fixed_amount: Decimal | None
    is_active: bool


class MediaResponse(BaseModel):
    """미디어 응답 스키마."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    specialist_id: UUID | None
    file_name: str
    file_url: str
    file_type: str
    file_size: int | None
    media_type: MediaType
    uploaded_at: datetime


class ServiceOfferingResponse(BaseModel):
    """서비스 오퍼링 응답 스키마 (수수료 포함)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    specialist_id: UUID
    service_name: str
    service_type: str | None
    description: str | None
    platform_fee_id: UUID | None
    platform_fee: PlatformFeeResponse | None = None
    created_at: datetime
    updated_at: datetime


class SpecialistResponse(BaseModel):
    """스페셜리스트 애그리거트 응답 스키마.

    Specialist aggregate read-model: the entity plus offerings, logo
    and attached media, as loaded after every mutation.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None
    status: SpecialistStatus
    contact_email: str
    contact_phone: str | None
    website_url: str | None
    logo_id: UUID | None
    logo: MediaResponse | None = None
    published_at: datetime | None
    created_at: datetime
    updated_at: datetime
    service_offerings: list[ServiceOfferingResponse] = []
    media: list[MediaResponse] = []
