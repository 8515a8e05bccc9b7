"""스페셜리스트 애그리거트 SQLAlchemy ORM 모델 정의.

Specialist aggregate SQLAlchemy ORM model definitions.
A Specialist owns its ServiceOffering rows (cascade delete) and is
referenced, but not owned, by Media rows (nullified on delete).

Tables:
    - specialists: 애그리거트 루트 (Aggregate root)
    - service_offerings: 스페셜리스트 하위 서비스 (Child offerings, existence-dependent)
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SpecialistStatus(str, enum.Enum):
    """스페셜리스트 공개 상태 (Publication status)."""

    DRAFT = "draft"
    PUBLISHED = "published"


class Specialist(Base):
    """스페셜리스트 모델 — 디렉터리의 애그리거트 루트.

    Specialist model — Root of the aggregate exposed by the directory.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 이름 (Display name, max 255 chars)
        description: 소개 (Free-form description, optional)
        status: 공개 상태 (draft | published)
        contact_email: 연락 이메일 — 전역 고유 (Globally unique contact email)
        contact_phone: 연락처 (Phone number, optional)
        website_url: 웹사이트 (Website URL or empty string, optional)
        logo_id: 로고 미디어 FK (Weak reference to a Media row)
        published_at: 최초 공개 일시 — 한 번만 설정 (First publication time, set once)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        service_offerings: 서비스 목록 (Owned offerings, cascade delete-orphan)
        media: 소속 미디어 (Attached media, detached on delete)
        logo: 로고 미디어 (Logo media, weak reference)
    """

    __tablename__ = "specialists"
    __table_args__ = (
        Index("idx_specialists_status", "status"),
        Index("idx_specialists_name", "name"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 공개 상태 — 생성 시 항상 draft (Always draft on creation)
    status: Mapped[SpecialistStatus] = mapped_column(
        Enum(
            SpecialistStatus,
            name="specialist_status",
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
        default=SpecialistStatus.DRAFT,
    )
    # 연락 이메일 — DB 유니크 제약은 보조 수단, 서비스에서 먼저 검사
    # Unique at DB level as a backstop; the service checks it first
    contact_email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    contact_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    website_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    # 로고 FK — media와 순환 참조이므로 use_alter (circular with media.specialist_id)
    logo_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("media.id", ondelete="SET NULL", use_alter=True, name="fk_specialists_logo_id"),
        nullable=True,
    )
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    service_offerings = relationship(
        "ServiceOffering",
        back_populates="specialist",
        cascade="all, delete-orphan",
        order_by="ServiceOffering.created_at",
    )
    media = relationship("Media", back_populates="specialist", foreign_keys="Media.specialist_id")
    logo = relationship("Media", foreign_keys=[logo_id], post_update=True)


class ServiceOffering(Base):
    """서비스 오퍼링 모델 — 스페셜리스트에 종속된 하위 엔티티.

    Service offering model — Child entity existence-dependent on a Specialist.
    Created, updated and deleted only through the specialist aggregate.
    """

    __tablename__ = "service_offerings"
    __table_args__ = (Index("idx_service_specialist", "specialist_id"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소속 스페셜리스트 FK — CASCADE: 스페셜리스트 삭제 시 함께 삭제
    specialist_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("specialists.id", ondelete="CASCADE"), nullable=False
    )
    service_name: Mapped[str] = mapped_column(String(255), nullable=False)
    service_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 수수료 FK — SET NULL: 수수료가 삭제되어도 오퍼링은 유지 (weak reference)
    platform_fee_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("platform_fee.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    specialist = relationship("Specialist", back_populates="service_offerings")
    platform_fee = relationship("PlatformFee")
