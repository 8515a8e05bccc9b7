"""스페셜리스트 API 테스트.

Specialist API tests — envelope shape, status codes, validation errors,
error mapping and the end-to-end create → publish → reconcile flow.
"""

import uuid

from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import IntegrityError

from app.api.deps import get_specialist_service
from app.config import settings
from app.main import app
from tests.conftest import specialist_payload

URL = "/api/specialists"


class TestAcmeLabsFlow:
    """생성 → 공개 → 오퍼링 추가 → 이름 변경 흐름."""

    async def test_full_flow(self, client: AsyncClient):
        """Acme Labs 예제 흐름."""
        res = await client.post(URL, json={"name": "Acme Labs", "contact_email": "a@acme.test"})
        assert res.status_code == 201
        body = res.json()
        assert body["success"] is True
        assert body["message"] == "Specialist created successfully"
        assert body["data"]["status"] == "draft"
        assert body["data"]["service_offerings"] == []
        specialist_id = body["data"]["id"]

        res = await client.patch(f"{URL}/{specialist_id}/publish", json={"status": "published"})
        assert res.status_code == 200
        assert res.json()["message"] == "Specialist status updated successfully"
        assert res.json()["data"]["status"] == "published"
        assert res.json()["data"]["published_at"] is not None

        res = await client.put(f"{URL}/{specialist_id}", json={"service_offerings": [{"service_name": "Consulting"}]})
        assert res.status_code == 200
        offerings = res.json()["data"]["service_offerings"]
        assert len(offerings) == 1
        offering_id = offerings[0]["id"]

        res = await client.put(f"{URL}/{specialist_id}", json={
            "service_offerings": [{"id": offering_id, "service_name": "Consulting Plus"}],
        })
        assert res.status_code == 200
        assert res.json()["message"] == "Specialist updated successfully"
        offerings = res.json()["data"]["service_offerings"]
        assert [(o["id"], o["service_name"]) for o in offerings] == [(offering_id, "Consulting Plus")]


class TestSpecialistRead:
    """조회 및 봉투 형식 테스트."""

    async def test_get_specialist(self, client: AsyncClient):
        """상세 조회 — 봉투에 meta/errors 키 없음."""
        created = (await client.post(URL, json=specialist_payload())).json()["data"]
        res = await client.get(f"{URL}/{created['id']}")
        assert res.status_code == 200
        body = res.json()
        assert body["message"] == "Specialist retrieved successfully"
        assert "meta" not in body
        assert "errors" not in body
        assert body["data"]["contact_email"] == "a@acme.test"

    async def test_get_nonexistent_specialist(self, client: AsyncClient):
        """존재하지 않는 스페셜리스트 조회 시 404."""
        res = await client.get(f"{URL}/{uuid.uuid4()}")
        assert res.status_code == 404
        assert res.json() == {"success": False, "message": "Specialist not found"}

    async def test_invalid_id_is_validation_error(self, client: AsyncClient):
        """UUID가 아닌 ID는 400."""
        res = await client.get(f"{URL}/not-a-uuid")
        assert res.status_code == 400
        assert res.json()["errors"][0]["field"] == "specialist_id"

    async def test_list_with_meta(self, client: AsyncClient):
        """목록 조회 — meta 포함, sortBy/sortOrder 별칭."""
        for i in range(3):
            await client.post(URL, json=specialist_payload(name=f"S{i}", contact_email=f"s{i}@acme.test"))

        res = await client.get(URL, params={"page": 1, "limit": 2, "sortBy": "name", "sortOrder": "ASC"})
        assert res.status_code == 200
        body = res.json()
        assert body["message"] == "Specialists retrieved successfully"
        assert [s["name"] for s in body["data"]] == ["S0", "S1"]
        assert body["meta"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}

    async def test_list_page_beyond_last(self, client: AsyncClient):
        """마지막 페이지 이후는 빈 data."""
        await client.post(URL, json=specialist_payload())
        res = await client.get(URL, params={"page": 3})
        assert res.status_code == 200
        assert res.json()["data"] == []
        assert res.json()["meta"]["totalPages"] == 1

    async def test_public_list_only_published(self, client: AsyncClient):
        """공개 목록은 status 파라미터를 무시하고 published만."""
        draft = (await client.post(URL, json=specialist_payload())).json()["data"]
        live = (await client.post(URL, json=specialist_payload(contact_email="live@acme.test"))).json()["data"]
        await client.patch(f"{URL}/{live['id']}/publish", json={"status": "published"})

        res = await client.get(f"{URL}/public", params={"status": "draft"})
        assert res.status_code == 200
        assert res.json()["message"] == "Public specialists retrieved successfully"
        ids = [s["id"] for s in res.json()["data"]]
        assert ids == [live["id"]]
        assert draft["id"] not in ids

    async def test_list_rejects_bad_paging(self, client: AsyncClient):
        """page=0, limit=0, 잘못된 sortBy는 400."""
        res = await client.get(URL, params={"page": 0, "limit": 0, "sortBy": "email"})
        assert res.status_code == 400
        fields = {e["field"] for e in res.json()["errors"]}
        assert fields == {"page", "limit", "sortBy"}

    async def test_list_accepts_large_limit(self, client: AsyncClient):
        """limit에는 상한이 없음."""
        await client.post(URL, json=specialist_payload())
        res = await client.get(URL, params={"limit": 150})
        assert res.status_code == 200
        assert res.json()["meta"] == {"page": 1, "limit": 150, "total": 1, "totalPages": 1}


class TestSpecialistValidation:
    """요청 검증 테스트."""

    async def test_create_missing_fields(self, client: AsyncClient):
        """필수 필드 누락 시 필드별 오류."""
        res = await client.post(URL, json={"description": "nameless"})
        assert res.status_code == 400
        body = res.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert {e["field"] for e in body["errors"]} == {"name", "contact_email"}

    async def test_create_invalid_email_and_url(self, client: AsyncClient):
        """잘못된 이메일/URL."""
        res = await client.post(URL, json=specialist_payload(contact_email="not-an-email", website_url="ftp//x"))
        assert res.status_code == 400
        assert {e["field"] for e in res.json()["errors"]} == {"contact_email", "website_url"}

    async def test_email_rules_same_in_production(self, client: AsyncClient, monkeypatch):
        """운영 모드에서도 .test 같은 예약 도메인 이메일 허용."""
        monkeypatch.setattr(settings, "ENVIRONMENT", "production")
        res = await client.post(URL, json=specialist_payload(contact_email="a@acme.test"))
        assert res.status_code == 201
        assert res.json()["data"]["contact_email"] == "a@acme.test"

    async def test_create_empty_website_url_allowed(self, client: AsyncClient):
        """빈 문자열 URL은 허용."""
        res = await client.post(URL, json=specialist_payload(website_url=""))
        assert res.status_code == 201
        assert res.json()["data"]["website_url"] == ""

    async def test_nested_offering_error_path(self, client: AsyncClient):
        """오퍼링 오류는 점 경로로 보고."""
        res = await client.post(URL, json=specialist_payload(service_offerings=[
            {"service_name": "Ok"},
            {"service_name": ""},
        ]))
        assert res.status_code == 400
        assert res.json()["errors"][0]["field"] == "service_offerings.1.service_name"

    async def test_update_null_name_rejected(self, client: AsyncClient):
        """필수 필드에 null 전달 시 400."""
        created = (await client.post(URL, json=specialist_payload())).json()["data"]
        res = await client.put(f"{URL}/{created['id']}", json={"name": None})
        assert res.status_code == 400
        assert res.json()["errors"][0]["field"] == "name"

    async def test_duplicate_email_is_400(self, client: AsyncClient):
        """중복 이메일은 400 (409 아님)."""
        await client.post(URL, json=specialist_payload())
        res = await client.post(URL, json=specialist_payload(name="Copycat"))
        assert res.status_code == 400
        assert res.json() == {"success": False, "message": "Specialist with this email already exists"}

    async def test_publish_invalid_status(self, client: AsyncClient):
        """알 수 없는 상태값은 400."""
        created = (await client.post(URL, json=specialist_payload())).json()["data"]
        res = await client.patch(f"{URL}/{created['id']}/publish", json={"status": "archived"})
        assert res.status_code == 400
        assert res.json()["errors"][0]["field"] == "status"


class TestSpecialistDelete:
    """삭제 테스트."""

    async def test_delete_specialist(self, client: AsyncClient):
        """삭제 후 조회 시 404."""
        created = (await client.post(URL, json=specialist_payload())).json()["data"]
        res = await client.delete(f"{URL}/{created['id']}")
        assert res.status_code == 200
        assert res.json() == {"success": True, "message": "Specialist deleted successfully"}

        res = await client.get(f"{URL}/{created['id']}")
        assert res.status_code == 404


class TestErrorMapping:
    """공통 오류 처리 테스트."""

    async def test_unknown_route(self, client: AsyncClient):
        """등록되지 않은 경로는 404 봉투."""
        res = await client.get("/api/unknown")
        assert res.status_code == 404
        assert res.json() == {"success": False, "message": "Route GET /api/unknown not found"}

    async def test_health(self, client: AsyncClient):
        """헬스 체크."""
        res = await client.get("/api/health")
        assert res.status_code == 200
        assert res.json()["status"] == "ok"
        assert "timestamp" in res.json()
        assert res.headers["X-Content-Type-Options"] == "nosniff"

    async def test_database_error_is_generalized(self, client: AsyncClient):
        """DB 오류는 SQL 문을 노출하지 않는 일반 메시지."""
        class _BrokenService:
            async def get_specialist(self, specialist_id):
                raise IntegrityError("SELECT secret FROM specialists", {}, Exception("boom"))

        app.dependency_overrides[get_specialist_service] = lambda: _BrokenService()
        res = await client.get(f"{URL}/{uuid.uuid4()}")
        app.dependency_overrides.pop(get_specialist_service)

        assert res.status_code == 400
        assert res.json() == {"success": False, "message": "Database query failed"}

    async def test_unexpected_error_is_500(self, db):
        """예상치 못한 오류는 500, 내부 정보 미노출."""
        class _BrokenService:
            async def get_specialist(self, specialist_id):
                raise RuntimeError("stack details")

        app.dependency_overrides[get_specialist_service] = lambda: _BrokenService()
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                res = await ac.get(f"{URL}/{uuid.uuid4()}")
        finally:
            app.dependency_overrides.clear()

        assert res.status_code == 500
        assert res.json() == {"success": False, "message": "Internal server error"}
