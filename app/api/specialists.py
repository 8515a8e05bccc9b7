"""스페셜리스트 라우터 — 애그리거트 CRUD 및 공개 목록 엔드포인트.

Specialist Router — CRUD endpoints for the specialist aggregate plus the
public listing. Every response uses the ``ApiResponse`` envelope; keys that
were not set are left off the wire.

Endpoints:
    - GET    /specialists/public         공개 목록 (published only)
    - GET    /specialists                관리자 목록 (all statuses)
    - GET    /specialists/{id}           상세 조회
    - POST   /specialists                생성 (always draft)
    - PUT    /specialists/{id}           희소 패치 + 오퍼링 조정
    - PATCH  /specialists/{id}/publish   상태 변경
    - DELETE /specialists/{id}           삭제
"""

from uuid import UUID

from fastapi import APIRouter

from app.api.deps import ListQueryDep, SpecialistServiceDep
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.specialist import (
    SpecialistCreate,
    SpecialistPublish,
    SpecialistResponse,
    SpecialistUpdate,
)

router: APIRouter = APIRouter()


# 공개 목록은 /{specialist_id}보다 먼저 선언 (declared before the id route so "public" is not parsed as an id)
@router.get(
    "/public",
    response_model=ApiResponse[list[SpecialistResponse]],
    response_model_exclude_unset=True,
)
async def list_public_specialists(
    service: SpecialistServiceDep,
    query: ListQueryDep,
) -> ApiResponse[list[SpecialistResponse]]:
    """공개된 스페셜리스트 목록을 조회합니다.

    List published specialists. Any ``status`` query value is ignored.
    """
    items, meta = await service.list_public_specialists(query)
    return ApiResponse.ok("Public specialists retrieved successfully", data=items, meta=meta)


@router.get(
    "",
    response_model=ApiResponse[list[SpecialistResponse]],
    response_model_exclude_unset=True,
)
async def list_specialists(
    service: SpecialistServiceDep,
    query: ListQueryDep,
) -> ApiResponse[list[SpecialistResponse]]:
    """스페셜리스트 목록을 조회합니다 (필터/검색/정렬/페이지네이션).

    List specialists with status filter, name search, sorting and paging.
    """
    items, meta = await service.list_specialists(query)
    return ApiResponse.ok("Specialists retrieved successfully", data=items, meta=meta)


@router.get(
    "/{specialist_id}",
    response_model=ApiResponse[SpecialistResponse],
    response_model_exclude_unset=True,
)
async def get_specialist(
    specialist_id: UUID,
    service: SpecialistServiceDep,
) -> ApiResponse[SpecialistResponse]:
    """스페셜리스트 상세를 조회합니다 (오퍼링/로고/미디어 포함).

    Retrieve one specialist with offerings, logo and media.
    """
    result: SpecialistResponse = await service.get_specialist(specialist_id)
    return ApiResponse.ok("Specialist retrieved successfully", data=result)


@router.post(
    "",
    response_model=ApiResponse[SpecialistResponse],
    response_model_exclude_unset=True,
    status_code=201,
)
async def create_specialist(
    data: SpecialistCreate,
    service: SpecialistServiceDep,
) -> ApiResponse[SpecialistResponse]:
    """새 스페셜리스트를 생성합니다. 상태는 항상 draft.

    Create a specialist with its offerings. The new record is always a draft.
    """
    result: SpecialistResponse = await service.create_specialist(data)
    return ApiResponse.ok("Specialist created successfully", data=result)


@router.put(
    "/{specialist_id}",
    response_model=ApiResponse[SpecialistResponse],
    response_model_exclude_unset=True,
)
async def update_specialist(
    specialist_id: UUID,
    data: SpecialistUpdate,
    service: SpecialistServiceDep,
) -> ApiResponse[SpecialistResponse]:
    """스페셜리스트를 수정합니다 — 생략된 필드는 유지.

    Apply a sparse update. When ``service_offerings`` is present it is the
    complete target list: offerings missing from it are deleted.
    """
    result: SpecialistResponse = await service.update_specialist(specialist_id, data)
    return ApiResponse.ok("Specialist updated successfully", data=result)


@router.patch(
    "/{specialist_id}/publish",
    response_model=ApiResponse[SpecialistResponse],
    response_model_exclude_unset=True,
)
async def publish_specialist(
    specialist_id: UUID,
    data: SpecialistPublish,
    service: SpecialistServiceDep,
) -> ApiResponse[SpecialistResponse]:
    """공개 상태를 변경합니다 (Publish or unpublish)."""
    result: SpecialistResponse = await service.publish_specialist(specialist_id, data.status)
    return ApiResponse.ok("Specialist status updated successfully", data=result)


@router.delete(
    "/{specialist_id}",
    response_model=ApiResponse[MessageResponse],
    response_model_exclude_unset=True,
)
async def delete_specialist(
    specialist_id: UUID,
    service: SpecialistServiceDep,
) -> ApiResponse[MessageResponse]:
    """스페셜리스트를 삭제합니다. 오퍼링은 함께 삭제되고 미디어는 분리됩니다.

    Delete a specialist. Offerings go with it; media rows are detached.
    """
    result: MessageResponse = await service.delete_specialist(specialist_id)
    return ApiResponse.ok(result.message)
