import logging
import os
from dataclasses import dataclass, field
from typing import List

from sqlalchemy.engine import make_url

DEFAULT_DATABASE_URL = "sqlite:///./algotracker.db"
DEFAULT_ALLOWED_ORIGINS = ["http://localhost:5173"]

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _normalize_sqlalchemy_postgres_url(url: str) -> str:
    """
    Normalize a Postgres URL into a SQLAlchemy psycopg2 URL.

    Accepts:
    - postgres://...
    - postgresql://...
    - postgresql+psycopg2://...

    Returns:
    - postgresql+psycopg2://...
    """
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg2://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg2://", 1)
    return url


def _env_postgres_url_if_usable() -> str | None:
    """
    Return a SQLAlchemy-ready URL from POSTGRES_URL, but only if it is usable.

    A credential-less URL such as postgresql://localhost:5432/algotracker makes
    psycopg2 default the username to the OS user, which rarely exists as a role.
    Such URLs are ignored so the next source in the chain gets a chance.
    """
    postgres_url = os.getenv("POSTGRES_URL")
    if not postgres_url:
        return None

    if not postgres_url.startswith(("postgres://", "postgresql://", "postgresql+psycopg2://")):
        return postgres_url

    normalized = _normalize_sqlalchemy_postgres_url(postgres_url)
    try:
        parsed = make_url(normalized)
    except Exception:
        # Malformed; let SQLAlchemy raise when the engine is built.
        return normalized

    if parsed.username and parsed.password:
        return normalized
    return None


# PUBLIC_INTERFACE
def build_database_url() -> str:
    """
    Build a SQLAlchemy database URL.

    Preference order:
    1) DATABASE_URL
    2) POSTGRES_URL (only if it includes explicit credentials)
    3) POSTGRES_USER/POSTGRES_PASSWORD/POSTGRES_DB/POSTGRES_PORT (+ optional POSTGRES_HOST)
    4) Embedded SQLite file in the working directory
    """
    database_url = (os.getenv("DATABASE_URL") or "").strip()
    if database_url:
        return _normalize_sqlalchemy_postgres_url(database_url)

    usable_env_url = _env_postgres_url_if_usable()
    if usable_env_url:
        return usable_env_url

    user = os.getenv("POSTGRES_USER")
    password = os.getenv("POSTGRES_PASSWORD")
    db = os.getenv("POSTGRES_DB")
    port = os.getenv("POSTGRES_PORT")
    if user and password and db and port:
        host = os.getenv("POSTGRES_HOST", "localhost")
        return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{db}"

    return DEFAULT_DATABASE_URL


def parse_allowed_origins(raw: str | None) -> List[str]:
    """
    Parse a comma-separated ALLOWED_ORIGINS value.

    Falls back to the Vite dev server origin when not set.
    """
    raw = (raw or "").strip()
    if not raw:
        return list(DEFAULT_ALLOWED_ORIGINS)

    origins = [o.strip() for o in raw.split(",")]
    return [o for o in origins if o]


def normalize_api_prefix(raw: str | None) -> str:
    """Return the prefix as "/segment[/segment]" with no trailing slash, or "" for the root."""
    stripped = (raw or "").strip().strip("/")
    if not stripped:
        return ""
    return "/" + stripped


@dataclass(frozen=True)
class Settings:
    """Runtime settings, read from the process environment."""

    database_url: str = DEFAULT_DATABASE_URL
    allowed_origins: List[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS))
    api_prefix: str = "/api"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8080

    # PUBLIC_INTERFACE
    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        return cls(
            database_url=build_database_url(),
            allowed_origins=parse_allowed_origins(os.getenv("ALLOWED_ORIGINS")),
            api_prefix=normalize_api_prefix(os.getenv("API_PREFIX", "/api")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "8080")),
        )


# PUBLIC_INTERFACE
def configure_logging(level_name: str = "INFO") -> None:
    """Configure root logging once for the process."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
