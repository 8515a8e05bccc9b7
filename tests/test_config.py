"""환경 설정 테스트.

Settings tests — database URL normalisation, TLS flag and CORS origins.
"""

from app.config import Settings


def _settings(**env) -> Settings:
    return Settings(_env_file=None, **env)


class TestDatabaseUrl:
    """DB 연결 URL 테스트."""

    def test_postgres_scheme_rewritten_to_asyncpg(self):
        """postgres:// 스킴은 asyncpg로 치환."""
        s = _settings(DATABASE_URL="postgres://u:p@db:5432/app")
        assert s.database_url == "postgresql+asyncpg://u:p@db:5432/app"
        assert s.database_ssl is False

    def test_ssl_scheme_enables_tls(self):
        """postgresql+ssl:// 스킴은 TLS 사용."""
        s = _settings(DATABASE_URL="postgresql+ssl://u:p@db/app")
        assert s.database_url == "postgresql+asyncpg://u:p@db/app"
        assert s.database_ssl is True

    def test_other_driver_passes_through(self):
        """다른 드라이버 URL은 그대로 사용."""
        s = _settings(DATABASE_URL="sqlite+aiosqlite:///./local.db")
        assert s.database_url == "sqlite+aiosqlite:///./local.db"

    def test_built_from_discrete_fields(self):
        """DATABASE_URL이 없으면 PG* 값으로 조립, 비밀번호는 인코딩."""
        s = _settings(DATABASE_URL=None, PGHOST="db", PGPORT=6543, PGUSER="svc", PGPASSWORD="p@ss/word", PGDATABASE="dir")
        assert s.database_url == "postgresql+asyncpg://svc:p%40ss%2Fword@db:6543/dir"


class TestMiscSettings:
    """기타 설정 테스트."""

    def test_cors_origins_split(self):
        """쉼표로 구분된 출처 목록."""
        s = _settings(CORS_ORIGIN="https://a.example.com, https://b.example.com,")
        assert s.cors_origins == ["https://a.example.com", "https://b.example.com"]

    def test_sql_echo_only_in_development(self):
        """SQL 로그는 개발 모드에서만."""
        assert _settings(ENVIRONMENT="development").sql_echo is True
        assert _settings(ENVIRONMENT="production").sql_echo is False
