"""Database engine and session management."""

from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from micropost.core.config import Settings


def build_engine(settings: Settings) -> Engine:
    """Create the engine for DATABASE_URL. In-memory SQLite shares one connection."""
    url = settings.DATABASE_URL
    if url.startswith("sqlite://"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=settings.DEBUG, **kwargs)
    return create_engine(url, pool_pre_ping=True, echo=settings.DEBUG)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = request.app.state.session_factory()
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


def init_db(engine: Engine) -> None:
    """Create tables directly for SQLite; Postgres schemas are managed by Alembic."""
    if engine.dialect.name == "sqlite":
        from micropost.models import Base

        Base.metadata.create_all(engine)
