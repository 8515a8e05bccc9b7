"""미디어 SQLAlchemy ORM 모델 정의.

Media SQLAlchemy ORM model definition.
Media rows are metadata pointers to uploaded assets; the binaries live
elsewhere. A media row outlives its specialist (the link is nullified).
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class MediaType(str, enum.Enum):
    """미디어 분류 (Media category)."""

    LOGO = "logo"
    DOCUMENT = "document"
    IMAGE = "image"


class Media(Base):
    """업로드된 자산의 메타데이터.

    Uploaded asset metadata.

    Attributes:
        specialist_id: 소속 스페셜리스트 FK — SET NULL (Owning specialist, nullified on delete)
        file_name: 파일 이름 (Original file name)
        file_url: 파일 URL (Where the binary is served from)
        file_type: MIME 타입 (MIME / type classifier)
        file_size: 바이트 크기 (Size in bytes, optional)
        media_type: 분류 — logo/document/image (Media category)
        uploaded_at: 업로드 일시 UTC (Upload timestamp)
    """

    __tablename__ = "media"
    __table_args__ = (
        Index("idx_media_specialist", "specialist_id"),
        Index("idx_media_type", "media_type"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    specialist_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("specialists.id", ondelete="SET NULL"), nullable=True
    )
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    file_type: Mapped[str] = mapped_column(String(50), nullable=False)
    file_size: Mapped[int | None] = mapped_column(Integer, nullable=True)
    media_type: Mapped[MediaType] = mapped_column(
        Enum(MediaType, name="media_type", values_callable=lambda members: [m.value for m in members]),
        nullable=False,
    )
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    specialist = relationship("Specialist", back_populates="media", foreign_keys=[specialist_id])
