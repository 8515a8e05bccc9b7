"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어, 예외 핸들러, 라우터 등록.

FastAPI application entry point — Middleware, exception handler and router
registration. The database is opened in the lifespan and closed on
shutdown; a database that cannot be reached aborts startup.
"""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import api_router
from app.config import settings
from app.database import Database
from app.middleware.axiom_logging import AxiomLoggingMiddleware
from app.middleware.error_handlers import register_exception_handlers
from app.middleware.security_headers import SecurityHeadersMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(database: Database | None = None) -> FastAPI:
    """FastAPI 애플리케이션을 생성합니다.

    Build the FastAPI application.

    Args:
        database: 사용할 영속성 컨텍스트, 기본값은 설정 기반
            (Persistence context to use; built from settings when omitted)

    Returns:
        FastAPI: 구성된 애플리케이션 (Configured application)
    """
    db: Database = database or Database.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await db.connect()
        logger.info("Database connected (environment=%s)", settings.ENVIRONMENT)
        try:
            yield
        finally:
            await db.disconnect()
            logger.info("Database disconnected")

    application: FastAPI = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.state.database = db

    # 나중에 등록한 미들웨어가 바깥쪽에서 실행됨 (the last middleware added runs outermost)
    application.add_middleware(SecurityHeadersMiddleware)
    # Axiom API 로깅 — CORS보다 먼저 등록하여 모든 요청을 캡처 (Registered before CORS to capture all requests)
    application.add_middleware(AxiomLoggingMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(application)

    @application.get("/api/health", tags=["Health"])
    async def health_check() -> dict[str, str]:
        """서버 상태 확인 엔드포인트.

        Health check endpoint for load balancers and monitoring.
        """
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    application.include_router(api_router, prefix="/api")
    return application


app: FastAPI = create_app()


def run() -> None:
    """uvicorn으로 서버를 실행합니다. 시작 실패 시 0이 아닌 코드로 종료.

    Serve the application with uvicorn; exit non-zero on a fatal startup error.
    """
    try:
        uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT, lifespan="on")
    except Exception:
        logger.exception("Server failed to start")
        sys.exit(1)


if __name__ == "__main__":
    run()
