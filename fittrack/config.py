import os
from dataclasses import dataclass, field
from functools import lru_cache


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///fittrack.db"
    session_ttl_days: int = 30
    admin_emails: frozenset[str] = field(default_factory=frozenset)
    log_level: str = "INFO"


def _parse_emails(raw: str) -> frozenset[str]:
    return frozenset(e.strip().lower() for e in raw.split(",") if e.strip())


def load_settings() -> Settings:
    """Build settings from FITTRACK_* environment variables."""
    return Settings(
        database_url=os.getenv("FITTRACK_DATABASE_URL", "sqlite:///fittrack.db"),
        session_ttl_days=int(os.getenv("FITTRACK_SESSION_TTL_DAYS", "30")),
        admin_emails=_parse_emails(os.getenv("FITTRACK_ADMIN_EMAILS", "")),
        log_level=os.getenv("FITTRACK_LOG_LEVEL", "INFO").upper(),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
