"""스페셜리스트 서비스 — 애그리거트 비즈니스 로직.

Specialist Service — Business logic for the specialist aggregate.
Owns creation, retrieval, sparse update with offering reconciliation,
status transition and deletion. Every mutation runs as one transaction and
answers with the aggregate re-read from the database.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.specialist import ServiceOffering, Specialist, SpecialistStatus
from app.repositories.media_repository import media_repository
from app.repositories.platform_fee_repository import platform_fee_repository
from app.repositories.specialist_repository import specialist_repository
from app.schemas.common import FieldError, MessageResponse, PaginationMeta
from app.schemas.specialist import (
    SpecialistCreate,
    SpecialistListQuery,
    SpecialistResponse,
    SpecialistUpdate,
)
from app.services.offering_reconciler import merge_fields, plan_offering_changes
from app.utils.exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE: str = "Specialist with this email already exists"


class SpecialistService:
    """스페셜리스트 애그리거트 서비스.

    Specialist aggregate service bound to one database session.
    Constructed per request with the session it must use; it never reaches
    for a global connection.

    Attributes:
        db: 요청 범위 비동기 세션 (Request-scoped async session)
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db: AsyncSession = db

    # ------------------------------------------------------------------
    # 내부 헬퍼 — Internal helpers
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _unit_of_work(self) -> AsyncIterator[None]:
        """하나의 트랜잭션 범위 — 성공 시 커밋, 실패 시 전체 롤백.

        One transactional scope: commit on success, roll everything back
        and re-raise on any failure.
        """
        try:
            yield
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def _load(self, specialist_id: UUID) -> Specialist:
        specialist: Specialist | None = await specialist_repository.get_detail(self.db, specialist_id)
        if specialist is None:
            raise NotFoundError("Specialist not found")
        return specialist

    async def _ensure_email_available(self, contact_email: str) -> None:
        # 어떤 레코드든 같은 이메일이면 충돌 (any row with that email conflicts)
        if await specialist_repository.exists(self.db, {"contact_email": contact_email}):
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

    async def _check_references(
        self,
        logo_id: UUID | None,
        fee_refs: list[tuple[str, UUID]],
    ) -> None:
        """로고/수수료 참조가 실제로 존재하는지 확인합니다.

        Verify that referenced media and platform fee rows exist, so a bad
        reference is reported per field instead of as a storage failure.

        Args:
            logo_id: 로고 미디어 ID (Logo media id, optional)
            fee_refs: (필드 경로, 수수료 ID) 목록 (Pairs of field path and fee id)
        """
        errors: list[FieldError] = []

        if logo_id is not None:
            if not await media_repository.existing_ids(self.db, [logo_id]):
                errors.append(FieldError(field="logo_id", message="Logo media not found", code="not_found"))

        if fee_refs:
            found: set[UUID] = await platform_fee_repository.existing_ids(self.db, [fee_id for _, fee_id in fee_refs])
            for field_path, fee_id in fee_refs:
                if fee_id not in found:
                    errors.append(FieldError(field=field_path, message="Platform fee not found", code="not_found"))

        if errors:
            raise ValidationError(errors)

    async def _add_offering(self, specialist_id: UUID, values: dict[str, Any]) -> ServiceOffering:
        """신규 오퍼링을 스페셜리스트에 연결해 추가합니다 (Insert one offering bound to the specialist)."""
        offering = ServiceOffering(specialist_id=specialist_id, **values)
        self.db.add(offering)
        await self.db.flush()
        return offering

    # ------------------------------------------------------------------
    # 조회 — Queries
    # ------------------------------------------------------------------

    async def list_specialists(
        self,
        query: SpecialistListQuery,
    ) -> tuple[list[SpecialistResponse], PaginationMeta]:
        """스페셜리스트 목록을 조회합니다 (관리자용).

        List specialists with their offerings, logo and media.

        Args:
            query: 페이지/필터/정렬 파라미터 (Paging, filter and sort parameters)

        Returns:
            tuple: (현재 페이지 항목, 페이지네이션 메타) (Page items and pagination meta)
        """
        items, total = await specialist_repository.list_paginated(
            self.db,
            page=query.page,
            limit=query.limit,
            status=query.status,
            search=query.search,
            sort_by=query.sort_by,
            sort_order=query.sort_order,
        )
        return (
            [SpecialistResponse.model_validate(s) for s in items],
            PaginationMeta.build(query.page, query.limit, total),
        )

    async def list_public_specialists(
        self,
        query: SpecialistListQuery,
    ) -> tuple[list[SpecialistResponse], PaginationMeta]:
        """공개된 스페셜리스트만 조회합니다 — 상태 필터를 강제로 덮어씀.

        Public listing: identical to ``list_specialists`` except the status
        filter is forced to published whatever the caller sent.
        """
        return await self.list_specialists(query.model_copy(update={"status": SpecialistStatus.PUBLISHED}))

    async def get_specialist(self, specialist_id: UUID) -> SpecialistResponse:
        """스페셜리스트 애그리거트를 조회합니다.

        Raises:
            NotFoundError: 스페셜리스트가 없을 때 (Specialist not found)
        """
        return SpecialistResponse.model_validate(await self._load(specialist_id))

    # ------------------------------------------------------------------
    # 변경 — Mutations
    # ------------------------------------------------------------------

    async def create_specialist(self, data: SpecialistCreate) -> SpecialistResponse:
        """새 스페셜리스트와 오퍼링을 하나의 트랜잭션으로 생성합니다.

        Create a specialist and its offerings as one unit of work. The
        status is always draft regardless of the request body.

        Raises:
            ConflictError: 이메일이 이미 존재할 때 (Email already registered)
            ValidationError: 로고/수수료 참조가 없을 때 (Dangling logo or fee reference)
        """
        async with self._unit_of_work():
            await self._ensure_email_available(data.contact_email)
            await self._check_references(
                data.logo_id,
                [
                    (f"service_offerings.{i}.platform_fee_id", item.platform_fee_id)
                    for i, item in enumerate(data.service_offerings)
                    if item.platform_fee_id is not None
                ],
            )

            specialist: Specialist = await specialist_repository.create(
                self.db,
                {
                    "name": data.name,
                    "description": data.description,
                    "contact_email": data.contact_email,
                    "contact_phone": data.contact_phone,
                    "website_url": data.website_url,
                    "logo_id": data.logo_id,
                    "status": SpecialistStatus.DRAFT,
                    "published_at": None,
                },
            )
            specialist_id: UUID = specialist.id

            # 오퍼링 간 중복 검사는 하지 않음 (no duplicate check between items)
            for item in data.service_offerings:
                await self._add_offering(specialist_id, item.model_dump())

        logger.info(
            "Specialist %s created with %d service offering(s)",
            specialist_id, len(data.service_offerings),
        )
        return await self.get_specialist(specialist_id)

    async def update_specialist(self, specialist_id: UUID, data: SpecialistUpdate) -> SpecialistResponse:
        """희소 패치를 적용하고 오퍼링 목록을 조정합니다.

        Apply a sparse patch and, when ``service_offerings`` is present,
        reconcile the offering collection by identity:

            - 패치에 없는 기존 오퍼링 → 삭제 (persisted but not listed → delete)
            - ID가 있는 항목 → 필드 병합 (listed with id → merge in place)
            - ID가 없는 항목 → 생성 (listed without id → create)

        All checks run before the first write; the whole update commits or
        rolls back as one transaction.

        Raises:
            NotFoundError: 스페셜리스트가 없을 때 (Specialist not found)
            ConflictError: 변경할 이메일이 이미 존재할 때 (New email already registered)
            ValidationError: 잘못된 오퍼링 ID 또는 참조 (Foreign offering id or dangling reference)
        """
        async with self._unit_of_work():
            specialist: Specialist = await self._load(specialist_id)
            changes: dict[str, Any] = data.model_dump(exclude_unset=True, exclude={"service_offerings"})

            new_email: str | None = changes.get("contact_email")
            if new_email is not None and new_email != specialist.contact_email:
                await self._ensure_email_available(new_email)

            patch_items = data.service_offerings if "service_offerings" in data.model_fields_set else None
            await self._check_references(
                changes.get("logo_id"),
                [
                    (f"service_offerings.{i}.platform_fee_id", item.platform_fee_id)
                    for i, item in enumerate(patch_items or [])
                    if item.platform_fee_id is not None
                ],
            )

            plan = None
            if patch_items is not None:
                by_id: dict[UUID, ServiceOffering] = {o.id: o for o in specialist.service_offerings}
                plan = plan_offering_changes(by_id.keys(), patch_items)

            changed_fields: list[str] = merge_fields(specialist, changes)

            if plan is not None:
                for offering_id in plan.to_delete:
                    # delete-orphan 캐스케이드로 삭제 (removed from the collection → deleted on flush)
                    specialist.service_offerings.remove(by_id[offering_id])
                for offering_id, offering_changes in plan.to_update:
                    merge_fields(by_id[offering_id], offering_changes)
                for values in plan.to_create:
                    specialist.service_offerings.append(ServiceOffering(**values))

            await self.db.flush()

        if plan is not None and not plan.is_empty:
            logger.info(
                "Specialist %s updated (fields=%s, offerings: -%d ~%d +%d)",
                specialist_id, changed_fields,
                len(plan.to_delete), len(plan.to_update), len(plan.to_create),
            )
        else:
            logger.info("Specialist %s updated (fields=%s)", specialist_id, changed_fields)
        return await self.get_specialist(specialist_id)

    async def publish_specialist(self, specialist_id: UUID, status: SpecialistStatus) -> SpecialistResponse:
        """공개 상태를 변경합니다.

        Set the status. The first transition to published stamps
        ``published_at``; it is never cleared afterwards, and republishing
        keeps the original timestamp.

        Raises:
            NotFoundError: 스페셜리스트가 없을 때 (Specialist not found)
        """
        async with self._unit_of_work():
            specialist: Specialist = await self._load(specialist_id)
            specialist.status = status
            if status == SpecialistStatus.PUBLISHED and specialist.published_at is None:
                specialist.published_at = datetime.now(timezone.utc)
            await self.db.flush()

        logger.info("Specialist %s status set to %s", specialist_id, status.value)
        return await self.get_specialist(specialist_id)

    async def delete_specialist(self, specialist_id: UUID) -> MessageResponse:
        """스페셜리스트를 삭제합니다.

        Delete the specialist; its offerings are deleted with it and its
        media rows stay, detached (``specialist_id`` set to NULL).

        Raises:
            NotFoundError: 스페셜리스트가 없을 때 (Specialist not found)
        """
        async with self._unit_of_work():
            specialist: Specialist = await self._load(specialist_id)
            detached_media: int = len(specialist.media)
            await self.db.delete(specialist)
            await self.db.flush()

        logger.info("Specialist %s deleted (%d media detached)", specialist_id, detached_media)
        return MessageResponse(message="Specialist deleted successfully")
