"""FastAPI 의존성 주입 모듈 — 서비스 및 목록 쿼리.

FastAPI dependency injection module.
Provides the request-scoped ``SpecialistService`` bound to the request's
database session, and the listing query parameters parsed into
``SpecialistListQuery``.

Dependency Flow:
    1. get_db가 app.state.database에서 세션을 생성
       (get_db opens a session from app.state.database)
    2. get_specialist_service가 해당 세션으로 서비스를 생성
       (get_specialist_service binds a new service to that session)
    3. 요청 종료 시 세션이 닫힘 (The session closes when the request ends)
"""

from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.specialist import SpecialistStatus
from app.schemas.specialist import SortField, SortOrder, SpecialistListQuery
from app.services.specialist_service import SpecialistService


async def get_specialist_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SpecialistService:
    """요청 범위 스페셜리스트 서비스를 반환합니다.

    Return a SpecialistService bound to this request's session.
    """
    return SpecialistService(db)


async def get_list_query(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1)] = 10,
    status: Annotated[SpecialistStatus | None, Query()] = None,
    search: Annotated[str | None, Query()] = None,
    sort_by: Annotated[SortField, Query(alias="sortBy")] = "created_at",
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = "DESC",
) -> SpecialistListQuery:
    """목록 쿼리 파라미터를 파싱합니다.

    Parse listing query parameters. Invalid values surface as a request
    validation error and are answered with a 400 envelope.
    """
    return SpecialistListQuery(
        page=page,
        limit=limit,
        status=status,
        search=search or None,
        sort_by=sort_by,
        sort_order=sort_order,
    )


# 편의 타입 별칭 — Shorthand annotated dependencies
SpecialistServiceDep = Annotated[SpecialistService, Depends(get_specialist_service)]
ListQueryDep = Annotated[SpecialistListQuery, Depends(get_list_query)]
