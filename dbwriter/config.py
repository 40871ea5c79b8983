import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATABASE_URL = "postgresql+asyncpg://localhost/dbwriter"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    host: str = "0.0.0.0"
    port: int = 8080
    pool_size: int = 8
    max_overflow: int = 0
    pool_recycle: int = 3600
    sql_echo: bool = False
    statsd_host: str = "localhost"
    statsd_port: int = 8125
    statsd_prefix: str = "dbwriter"
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read the service settings from the environment (and .env, if present)."""
    return Settings(
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_env_int("PORT", 8080),
        pool_size=_env_int("DB_POOL_SIZE", 8),
        max_overflow=_env_int("DB_MAX_OVERFLOW", 0),
        pool_recycle=_env_int("DB_POOL_RECYCLE", 3600),
        sql_echo=_env_bool("SQL_ECHO", False),
        statsd_host=os.getenv("STATSD_HOST", "localhost"),
        statsd_port=_env_int("STATSD_PORT", 8125),
        statsd_prefix=os.getenv("STATSD_PREFIX", "dbwriter"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
