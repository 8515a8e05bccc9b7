"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates every router into ``api_router``, which
``app.main`` mounts under ``/api``.

Included routers:
    - specialists: 스페셜리스트 애그리거트 관리 (Specialist aggregate management)
"""

from fastapi import APIRouter

from app.api.specialists import router as specialists_router

api_router: APIRouter = APIRouter()

api_router.include_router(specialists_router, prefix="/specialists", tags=["Specialists"])
