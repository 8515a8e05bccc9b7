"""미디어 레포지토리 — 로고 참조 무결성 확인용.

Media Repository — Used to verify logo references before writing.
"""

from app.models.media import Media
from app.repositories.base import BaseRepository


class MediaRepository(BaseRepository[Media]):
    """미디어 테이블 레포지토리 (Repository for the media table)."""

    def __init__(self) -> None:
        super().__init__(Media)


# 싱글턴 인스턴스 — Singleton instance
media_repository: MediaRepository = MediaRepository()
