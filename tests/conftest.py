"""테스트 인프라 — 테스트 DB 엔진, 세션, httpx 클라이언트 픽스처.

Test infrastructure — Test database engine, session, and httpx client fixtures.
The database comes from TEST_DATABASE_URL; by default an in-memory SQLite
database (aiosqlite) with foreign keys enforced. Schema is created fresh for
every test.
"""

import os
from collections.abc import AsyncGenerator
from decimal import Decimal
from typing import Any
from uuid import UUID

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.models.media import Media, MediaType
from app.models.platform_fee import PlatformFee

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL: str = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
_IS_SQLITE: bool = TEST_DATABASE_URL.startswith("sqlite")


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 스키마를 새로 생성합니다."""
    if _IS_SQLITE:
        eng = create_async_engine(
            TEST_DATABASE_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        event.listen(eng.sync_engine, "connect", _enable_sqlite_foreign_keys)
    else:
        eng = create_async_engine(TEST_DATABASE_URL, pool_pre_ping=True)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    if not _IS_SQLITE:
        async with eng.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ORM 객체 대신 ID를 반환 — 롤백 후 만료된 객체를 건드리지 않도록
# Fixtures return ids, so tests never touch instances expired by a rollback
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def fee_id(db: AsyncSession) -> UUID:
    """활성 플랫폼 수수료를 생성합니다."""
    fee = PlatformFee(fee_name="Standard", fee_percentage=Decimal("10.00"), fee_fixed_amount=Decimal("0.00"), is_active=True)
    db.add(fee)
    await db.commit()
    return fee.id


@pytest_asyncio.fixture
async def logo_id(db: AsyncSession) -> UUID:
    """아직 스페셜리스트에 연결되지 않은 로고 미디어를 생성합니다."""
    media = Media(
        file_name="logo.png",
        file_url="https://cdn.example.com/logo.png",
        file_type="image/png",
        file_size=2048,
        media_type=MediaType.LOGO,
    )
    db.add(media)
    await db.commit()
    return media.id


def specialist_payload(**overrides: Any) -> dict[str, Any]:
    """스페셜리스트 생성 요청 본문을 만듭니다."""
    payload: dict[str, Any] = {
        "name": "Acme Labs",
        "description": "Applied research",
        "contact_email": "a@acme.test",
        "contact_phone": "+1 555 0100",
        "website_url": "https://acme.example.com",
        "service_offerings": [],
    }
    payload.update(overrides)
    return payload


async def count_rows(db: AsyncSession, model: type) -> int:
    """테이블의 행 수를 반환합니다."""
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()
