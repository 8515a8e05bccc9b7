"""데이터베이스 엔진 및 세션 설정 모듈.

Database engine and session configuration module.
The engine is owned by an explicitly constructed ``Database`` context that is
opened in the application lifespan and closed on shutdown; nothing connects
at import time.
"""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.config import Settings


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스.

    Declarative base class for all ORM models.
    All models inherit from this class to register with the metadata.
    """

    pass


class Database:
    """비동기 엔진과 세션 팩토리를 보유하는 영속성 컨텍스트.

    Persistence context holding the async engine and session factory.

    Lifecycle:
        1. ``Database(url)`` — 설정만 저장 (stores configuration only)
        2. ``await connect()`` — 엔진 생성 및 연결 확인 (creates engine, verifies connectivity)
        3. ``session()`` — 요청마다 새 세션 (new session per request)
        4. ``await disconnect()`` — 커넥션 풀 정리 (disposes the pool)
    """

    def __init__(self, url: str, *, echo: bool = False, ssl: bool = False) -> None:
        self.url: str = url
        self.echo: bool = echo
        self.ssl: bool = ssl
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """설정 객체로부터 Database를 생성합니다 (Build from application settings)."""
        return cls(settings.database_url, echo=settings.sql_echo, ssl=settings.database_ssl)

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    async def connect(self) -> None:
        """엔진을 생성하고 연결을 검증합니다.

        Create the engine and run a trivial query so that an unreachable
        database fails application startup instead of the first request.
        """
        if self._engine is not None:
            return

        connect_args: dict = {}
        engine_kwargs: dict = {"echo": self.echo, "pool_pre_ping": True}
        if self.url.startswith("postgresql+asyncpg"):
            # 풀 크기는 PostgreSQL에서만 적용 (pool sizing applies to the asyncpg pool only)
            engine_kwargs.update(pool_size=5, max_overflow=10)
            if self.ssl:
                connect_args["ssl"] = "require"

        engine: AsyncEngine = create_async_engine(self.url, connect_args=connect_args, **engine_kwargs)
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception:
            await engine.dispose()
            raise

        self._engine = engine
        # expire_on_commit=False: 커밋 후에도 객체 속성 접근 가능 (Allows attribute access after commit)
        self._session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def disconnect(self) -> None:
        """커넥션 풀을 정리합니다 (Dispose the connection pool)."""
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_factory = None

    def session(self) -> AsyncSession:
        """새 비동기 세션을 생성합니다 (Open a new AsyncSession)."""
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        return self._session_factory()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """비동기 데이터베이스 세션을 생성하고 요청 종료 시 닫습니다.

    FastAPI dependency that yields an async database session from the
    ``Database`` stored on ``app.state``. The session is closed after the
    request completes; uncommitted work is rolled back on close.

    Yields:
        AsyncSession: SQLAlchemy 비동기 세션 인스턴스 (Async session instance)
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
        finally:
            await session.close()
