"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from sqlalchemy.engine import URL


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_codes(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name) or default
    return tuple(c.strip().lower() for c in raw.split(",") if c.strip())


def resolve_database_url() -> str:
    """Resolve DB connection string.

    Priority:
      1) DATABASE_URL (explicit)
      2) POSTGRES_URL (Vercel Postgres integration)
      3) Build from PG* env vars (common Postgres convention)
      4) Fallback to local sqlite
    """

    explicit = os.getenv("DATABASE_URL") or os.getenv("POSTGRES_URL")
    if explicit:
        # Hosted Postgres providers hand out the legacy "postgres://" scheme.
        if explicit.startswith("postgres://"):
            explicit = "postgresql+psycopg2://" + explicit[len("postgres://"):]
        return explicit

    host = os.getenv("PGHOST")
    user = os.getenv("PGUSER")
    database = os.getenv("PGDATABASE")

    if host and user and database:
        sslmode = os.getenv("PGSSLMODE", "require")
        query = {"sslmode": sslmode} if sslmode else {}
        url = URL.create(
            drivername="postgresql+psycopg2",
            username=user,
            password=os.getenv("PGPASSWORD"),
            host=host,
            port=_env_int("PGPORT", 5432),
            database=database,
            query=query,
        )
        return url.render_as_string(hide_password=False)

    return "sqlite:///./lottery.db"


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    DATABASE_URL: str = resolve_database_url()

    # Bearer secret for the sync endpoints; empty disables the check.
    CRON_SECRET: str = os.getenv("CRON_SECRET", "")

    # Upstream services
    RANDOM_ORG_URL: str = os.getenv("RANDOM_ORG_URL", "https://www.random.org/integers/")
    AA1_API_URL: str = os.getenv("AA1_API_URL", "https://tools.mgtv100.com/external/v1/pear/lottery")
    HUINIAO_API_URL: str = os.getenv("HUINIAO_API_URL", "http://api.huiniao.top/interface/home")
    HTTP_TIMEOUT_SECONDS: float = _env_float("HTTP_TIMEOUT_SECONDS", 15.0)
    HTTP_RETRIES: int = _env_int("HTTP_RETRIES", 2)
    HTTP_BACKOFF_FACTOR: float = _env_float("HTTP_BACKOFF_FACTOR", 0.3)

    # Draw synchronisation
    ENABLED_LOTTERY_CODES: tuple[str, ...] = _env_codes("ENABLED_LOTTERY_CODES", "dlt")
    SYNC_PAGE_SIZE: int = _env_int("SYNC_PAGE_SIZE", 50)
    SYNC_MAX_PAGES: int = _env_int("SYNC_MAX_PAGES", 10)
    SYNC_INCREMENTAL_LIMIT: int = _env_int("SYNC_INCREMENTAL_LIMIT", 20)
    SYNC_PAGE_DELAY_SECONDS: float = _env_float("SYNC_PAGE_DELAY_SECONDS", 0.3)

    # Ticket checks
    TICKET_PRICE: int = _env_int("TICKET_PRICE", 2)
    MAX_BATCH_TICKETS: int = _env_int("MAX_BATCH_TICKETS", 200)
    MAX_CORPUS_DRAWS: int = _env_int("MAX_CORPUS_DRAWS", 10_000)


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


@dataclass(frozen=True)
class TestingConfig(BaseConfig):
    """Test configuration: in-memory database, no upstream delays."""

    TESTING: bool = True
    DATABASE_URL: str = "sqlite://"
    SYNC_PAGE_DELAY_SECONDS: float = 0.0
    CRON_SECRET: str = ""


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
