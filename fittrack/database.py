import logging

from fastapi import Request
from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from fittrack.config import Settings

logger = logging.getLogger(__name__)

# Columns that older databases may be missing: table -> {column: DDL suffix}
OPTIONAL_COLUMNS: dict[str, dict[str, str]] = {
    "exercise": {"status": "VARCHAR(8) NOT NULL DEFAULT 'approved'"},
    "profile": {"is_admin": "BOOLEAN NOT NULL DEFAULT FALSE"},
}


def build_engine(settings: Settings) -> Engine:
    url = settings.database_url
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    engine = create_engine(url, connect_args=connect_args)

    # Enable WAL mode for better read performance
    if url.startswith("sqlite") and ":memory:" not in url:
        with engine.connect() as conn:
            conn.exec_driver_sql("PRAGMA journal_mode=WAL")

    return engine


def add_missing_columns(engine: Engine) -> list[str]:
    """Add optional columns absent from tables created by earlier versions."""
    inspector = inspect(engine)
    missing: list[tuple[str, str, str]] = []
    for table, columns in OPTIONAL_COLUMNS.items():
        if not inspector.has_table(table):
            continue
        existing = {col["name"] for col in inspector.get_columns(table)}
        missing.extend((table, name, ddl) for name, ddl in columns.items() if name not in existing)

    if missing:
        with engine.begin() as conn:
            for table, name, ddl in missing:
                conn.exec_driver_sql(f"ALTER TABLE {table} ADD COLUMN {name} {ddl}")
                logger.info("Added missing column %s.%s", table, name)
    return [f"{table}.{name}" for table, name, _ in missing]


def create_db_and_tables(engine: Engine) -> None:
    import fittrack.models as _models  # noqa: F401 - registers tables with SQLModel metadata

    SQLModel.metadata.create_all(engine)
    add_missing_columns(engine)


def get_session(request: Request):
    with Session(request.app.state.engine) as session:
        try:
            yield session
        except SQLAlchemyError:
            session.rollback()
            raise
