"""플랫폼 수수료 SQLAlchemy ORM 모델 정의.

Platform fee SQLAlchemy ORM model definition.
A fee schedule (percentage and/or fixed amount). Offerings hold a weak
reference to it; nothing here moves money.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class PlatformFee(Base):
    """플랫폼 수수료 정의 모델.

    Platform fee definition model.

    Attributes:
        fee_name: 수수료 이름 (Display name)
        fee_percentage: 비율 수수료 % (Percentage rate, optional)
        fee_fixed_amount: 고정 수수료 (Fixed amount, optional)
        is_active: 활성 상태 (Active flag)
    """

    __tablename__ = "platform_fee"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    fee_name: Mapped[str] = mapped_column(String(100), nullable=False)
    fee_percentage: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    fee_fixed_amount: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
