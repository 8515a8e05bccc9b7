"""스페셜리스트 레포지토리 — 애그리거트 조회 및 목록 쿼리.

Specialist Repository — Aggregate loading and listing queries.
Extends BaseRepository with relation-graph eager loading, list filtering,
sorting and the email uniqueness lookup.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.specialist import ServiceOffering, Specialist, SpecialistStatus
from app.repositories.base import BaseRepository

# 정렬 허용 컬럼 — Whitelisted sort columns
_SORT_COLUMNS = {
    "created_at": Specialist.created_at,
    "name": Specialist.name,
    "updated_at": Specialist.updated_at,
}


def _with_relations(query: Select) -> Select:
    """오퍼링(수수료 포함), 로고, 미디어를 함께 로드합니다.

    Eager-load the full relation graph: offerings with their platform fee,
    logo, and attached media.
    """
    return query.options(
        selectinload(Specialist.service_offerings).selectinload(ServiceOffering.platform_fee),
        selectinload(Specialist.logo),
        selectinload(Specialist.media),
    )


class SpecialistRepository(BaseRepository[Specialist]):
    """스페셜리스트 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the specialists table.
    """

    def __init__(self) -> None:
        super().__init__(Specialist)

    async def get_detail(self, db: AsyncSession, specialist_id: UUID) -> Specialist | None:
        """관계 전체를 포함한 애그리거트를 조회합니다.

        Retrieve the aggregate with all relations loaded. ``populate_existing``
        refreshes instances already in the identity map, so a read after a
        mutation reflects the committed state rather than stale collections.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            specialist_id: 스페셜리스트 ID (Specialist UUID)

        Returns:
            Specialist | None: 관계가 로드된 스페셜리스트 또는 None
                               (Specialist with relations loaded, or None)
        """
        query: Select = (
            _with_relations(select(Specialist))
            .where(Specialist.id == specialist_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def list_paginated(
        self,
        db: AsyncSession,
        *,
        page: int,
        limit: int,
        status: SpecialistStatus | None = None,
        search: str | None = None,
        sort_by: str = "created_at",
        sort_order: str = "DESC",
    ) -> tuple[Sequence[Specialist], int]:
        """필터/정렬/페이지네이션이 적용된 목록을 조회합니다.

        List specialists with filtering, sorting and pagination.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            page: 페이지 번호, 1부터 (Page number, 1-based)
            limit: 페이지당 항목 수 (Items per page)
            status: 상태 필터 (Status filter, optional)
            search: 이름 부분 검색어, 대소문자 무시 (Case-insensitive name substring)
            sort_by: 정렬 컬럼 (created_at | name | updated_at)
            sort_order: 정렬 방향 (ASC | DESC)

        Returns:
            tuple[Sequence[Specialist], int]: (현재 페이지 목록, 전체 개수)
        """
        query: Select = select(Specialist)

        if status is not None:
            query = query.where(Specialist.status == status)
        if search:
            query = query.where(Specialist.name.icontains(search, autoescape=True))

        column = _SORT_COLUMNS.get(sort_by, Specialist.created_at)
        direction = column.asc() if sort_order == "ASC" else column.desc()
        # 동일 값 정렬 안정화를 위해 id 보조 정렬 (id tie-breaker for stable paging)
        query = _with_relations(query.order_by(direction, Specialist.id)).execution_options(populate_existing=True)

        return await self.get_paginated(db, query, page=page, per_page=limit)


# 싱글턴 인스턴스 — Singleton instance
specialist_repository: SpecialistRepository = SpecialistRepository()
