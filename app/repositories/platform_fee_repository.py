"""플랫폼 수수료 레포지토리.

Platform Fee Repository — Read-only from the specialist aggregate's point
of view; used to verify offering fee references.
"""

from app.models.platform_fee import PlatformFee
from app.repositories.base import BaseRepository


class PlatformFeeRepository(BaseRepository[PlatformFee]):
    """플랫폼 수수료 테이블 레포지토리 (Repository for the platform_fee table)."""

    def __init__(self) -> None:
        super().__init__(PlatformFee)


# 싱글턴 인스턴스 — Singleton instance
platform_fee_repository: PlatformFeeRepository = PlatformFeeRepository()
