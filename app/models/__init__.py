"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    specialist: 스페셜리스트 및 서비스 오퍼링 (Specialist, ServiceOffering)
    media: 업로드 자산 메타데이터 (Media)
    platform_fee: 수수료 정의 (PlatformFee)
"""

from app.models.media import Media, MediaType
from app.models.platform_fee import PlatformFee
from app.models.specialist import ServiceOffering, Specialist, SpecialistStatus

__all__ = [
    "Specialist", "SpecialistStatus", "ServiceOffering",
    "Media", "MediaType",
    "PlatformFee",
]
