"""Database connection and session management."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import Settings, settings


def build_engine(cfg: Settings) -> Engine:
    """Create the engine with pool and statement timeouts taken from settings."""
    url = cfg.DATABASE_URL
    if url.startswith("sqlite://"):
        # SQLite connections are shared with FastAPI's threadpool
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=cfg.DEBUG,
        )

    connect_args: dict[str, Any] = {}
    if cfg.DB_STATEMENT_TIMEOUT_MS > 0:
        connect_args["options"] = f"-c statement_timeout={cfg.DB_STATEMENT_TIMEOUT_MS}"
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_timeout=cfg.DB_POOL_TIMEOUT_SEC,
        connect_args=connect_args,
        echo=cfg.DEBUG,
    )


engine = build_engine(settings)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
