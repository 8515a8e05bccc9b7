"""애플리케이션 환경 설정 모듈.

Application configuration module using pydantic-settings.
All settings can be overridden via environment variables or a .env file.
"""

from pathlib import Path
from typing import Literal
from urllib.parse import quote

from pydantic_settings import BaseSettings

# .env 파일 절대 경로 — CWD와 무관하게 항상 프로젝트 루트의 .env를 참조
# Absolute path to .env file — ensures correct loading regardless of CWD
_ENV_FILE: Path = Path(__file__).resolve().parent.parent / ".env"

# asyncpg 드라이버로 치환할 URL 스킴 — Schemes rewritten to the asyncpg driver
_ASYNC_SCHEMES: tuple[str, ...] = ("postgresql+ssl://", "postgresql://", "postgres://")


class Settings(BaseSettings):
    """애플리케이션 전역 설정 — 환경 변수 기반 구성.

    Global application settings loaded from environment variables.
    The database can be configured either with a single DATABASE_URL
    or with the discrete PG* variables.

    Attributes:
        ENVIRONMENT: 실행 모드 (Runtime mode: development/production/test)
        PORT: 리스닝 포트 (HTTP listening port)
        DATABASE_URL: 단일 연결 URL, 선택 (Single connection URL, optional)
        PGHOST/PGPORT/PGUSER/PGPASSWORD/PGDATABASE: 개별 연결 파라미터
            (Discrete connection parameters used when DATABASE_URL is unset)
        DB_SSL: DB 연결 TLS 사용 여부 (Use TLS for the database connection)
        CORS_ORIGIN: 허용 출처, 쉼표 구분 (Comma-separated allowed origins)
        JWT_SECRET: 토큰 서명 키 — 선언만 됨 (Token signing key, declared only)
        JWT_EXPIRES_IN: 토큰 만료 — 선언만 됨 (Token TTL, declared only)
        LOG_LEVEL: 로그 레벨 (Root log level)
    """

    ENVIRONMENT: Literal["development", "production", "test"] = "development"
    PORT: int = 5000

    # 데이터베이스 — DATABASE_URL이 우선 (DATABASE_URL takes precedence)
    DATABASE_URL: str | None = None
    PGHOST: str = "localhost"
    PGPORT: int = 5432
    PGUSER: str = "postgres"
    PGPASSWORD: str = "postgres"
    PGDATABASE: str = "specialist_directory"
    DB_SSL: bool = False

    # 인증 토큰 설정 — 현재 사용되지 않음 (Declared, not used by any endpoint)
    JWT_SECRET: str | None = None
    JWT_EXPIRES_IN: str = "7d"

    # CORS 설정 — 쉼표로 구분된 출처 목록 (Comma-separated origin list)
    CORS_ORIGIN: str = "http://localhost:3000"

    # 앱 메타데이터 — Application metadata
    APP_NAME: str = "Specialist Directory API"
    LOG_LEVEL: str = "INFO"

    # Axiom 로깅 설정 — Axiom observability platform settings
    AXIOM_API_TOKEN: str = ""  # Axiom API 토큰 (API token from Axiom dashboard)
    AXIOM_DATASET: str = ""  # Axiom 데이터셋 이름 (Dataset name for API logs)

    model_config = {"env_file": _ENV_FILE, "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def database_url(self) -> str:
        """asyncpg 드라이버용 연결 URL을 반환합니다.

        Return the SQLAlchemy async connection URL.
        A DATABASE_URL using postgres://, postgresql:// or postgresql+ssl://
        is rewritten to postgresql+asyncpg://; other drivers pass through.
        """
        if self.DATABASE_URL:
            for scheme in _ASYNC_SCHEMES:
                if self.DATABASE_URL.startswith(scheme):
                    return "postgresql+asyncpg://" + self.DATABASE_URL[len(scheme):]
            return self.DATABASE_URL

        return (
            f"postgresql+asyncpg://{quote(self.PGUSER, safe='')}:{quote(self.PGPASSWORD, safe='')}"
            f"@{self.PGHOST}:{self.PGPORT}/{self.PGDATABASE}"
        )

    @property
    def database_ssl(self) -> bool:
        """DB 연결에 TLS를 사용할지 여부 (postgresql+ssl 스킴 또는 DB_SSL)."""
        if self.DATABASE_URL and self.DATABASE_URL.startswith("postgresql+ssl://"):
            return True
        return self.DB_SSL

    @property
    def cors_origins(self) -> list[str]:
        """CORS_ORIGIN을 출처 목록으로 분리합니다 (Split CORS_ORIGIN into a list)."""
        return [origin.strip() for origin in self.CORS_ORIGIN.split(",") if origin.strip()]

    @property
    def sql_echo(self) -> bool:
        """개발 모드에서만 SQL 로그 출력 (Echo SQL in development only)."""
        return self.ENVIRONMENT == "development"


# 전역 설정 싱글턴 인스턴스 — Global settings singleton instance
settings: Settings = Settings()
