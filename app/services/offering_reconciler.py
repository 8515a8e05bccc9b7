"""서비스 오퍼링 조정(reconciliation) 헬퍼 — 순수 함수.

Service offering reconciliation helpers — pure functions, no I/O.

An update request carries the *target state* of a specialist's offering
collection. ``plan_offering_changes`` turns it into three work lists with a
set diff over identifiers:

    current ids  − patch ids      → delete
    current ids  ∩ patch ids      → update (field merge)
    patch items without an id     → create

``merge_fields`` applies a sparse patch to an ORM object. The patch dict is
produced with ``model_dump(exclude_unset=True)``: keys that are absent are
left untouched, keys present with ``None`` clear the column.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence
from uuid import UUID

from app.schemas.common import FieldError
from app.schemas.specialist import ServiceOfferingPatch
from app.utils.exceptions import ValidationError


@dataclass(frozen=True)
class OfferingChangePlan:
    """조정 결과 작업 목록 (Work lists produced by reconciliation).

    Attributes:
        to_delete: 삭제할 기존 오퍼링 ID (Existing offering ids to delete)
        to_update: (ID, 변경 필드) 목록 (Pairs of id and sparse changes)
        to_create: 신규 오퍼링 데이터 (Field values of offerings to create)
    """

    to_delete: list[UUID] = field(default_factory=list)
    to_update: list[tuple[UUID, dict[str, Any]]] = field(default_factory=list)
    to_create: list[dict[str, Any]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.to_delete or self.to_update or self.to_create)


def plan_offering_changes(
    current_ids: Iterable[UUID],
    items: Sequence[ServiceOfferingPatch],
) -> OfferingChangePlan:
    """현재 오퍼링 ID와 패치 목록으로 삭제/수정/생성 작업을 분류합니다.

    Classify every offering into exactly one of delete, update or create.

    Args:
        current_ids: 현재 저장된 오퍼링 ID (Ids currently persisted for the specialist)
        items: 패치의 목표 상태 목록 (Target-state list from the patch)

    Returns:
        OfferingChangePlan: 삭제/수정/생성 작업 목록

    Raises:
        ValidationError: 다른 스페셜리스트의 ID이거나 ID가 중복될 때
            (An id does not belong to this specialist, or appears twice)
    """
    current: list[UUID] = list(current_ids)
    current_set: set[UUID] = set(current)

    errors: list[FieldError] = []
    seen: set[UUID] = set()
    to_update: list[tuple[UUID, dict[str, Any]]] = []
    to_create: list[dict[str, Any]] = []

    for index, item in enumerate(items):
        if item.id is None:
            to_create.append(item.model_dump(exclude={"id"}))
            continue

        if item.id in seen:
            errors.append(FieldError(
                field=f"service_offerings.{index}.id",
                message="Service offering id is listed more than once",
                code="duplicate",
            ))
            continue
        seen.add(item.id)

        if item.id not in current_set:
            errors.append(FieldError(
                field=f"service_offerings.{index}.id",
                message="Service offering does not belong to this specialist",
                code="not_found",
            ))
            continue

        to_update.append((item.id, item.model_dump(exclude_unset=True, exclude={"id"})))

    if errors:
        raise ValidationError(errors)

    to_delete: list[UUID] = [offering_id for offering_id in current if offering_id not in seen]
    return OfferingChangePlan(to_delete=to_delete, to_update=to_update, to_create=to_create)


def merge_fields(target: Any, changes: dict[str, Any]) -> list[str]:
    """희소 패치를 대상 객체에 병합합니다.

    Merge a sparse patch into ``target``. Only attributes whose value
    actually differs are assigned, so replaying a patch is a no-op and does
    not bump ``updated_at``.

    Returns:
        list[str]: 실제로 변경된 필드 이름 (Names of the fields that changed)
    """
    changed: list[str] = []
    for name, value in changes.items():
        if getattr(target, name) != value:
            setattr(target, name, value)
            changed.append(name)
    return changed
