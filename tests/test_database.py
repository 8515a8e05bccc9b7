"""영속성 컨텍스트 수명 주기 테스트.

Database context lifecycle tests — connect, session, disconnect.
"""

import pytest
from sqlalchemy import text

from app.database import Database


class TestDatabaseLifecycle:
    """Database connect/disconnect 테스트."""

    async def test_session_requires_connect(self):
        """연결 전에는 세션/엔진 사용 불가."""
        database = Database("sqlite+aiosqlite:///:memory:")
        with pytest.raises(RuntimeError):
            database.session()
        with pytest.raises(RuntimeError):
            _ = database.engine

    async def test_connect_and_disconnect(self):
        """연결 후 쿼리 가능, 해제 후 다시 사용 불가."""
        database = Database("sqlite+aiosqlite:///:memory:")
        await database.connect()
        try:
            assert database.engine is not None
            async with database.session() as session:
                assert (await session.execute(text("SELECT 1"))).scalar_one() == 1
        finally:
            await database.disconnect()

        with pytest.raises(RuntimeError):
            database.session()

    async def test_unreachable_database_fails_connect(self):
        """연결할 수 없는 DB는 connect에서 실패하고 엔진을 남기지 않음."""
        database = Database("sqlite+aiosqlite:////nonexistent-dir/specialists.db")
        with pytest.raises(Exception):
            await database.connect()
        with pytest.raises(RuntimeError):
            _ = database.engine
