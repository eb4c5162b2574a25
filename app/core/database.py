"""Database engine, session factory and the per-app context that carries them."""

from collections.abc import Generator
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings


@dataclass(frozen=True)
class AppContext:
    """Process-wide collaborators for one app instance: settings and the store handle."""

    settings: Settings
    engine: Engine
    session_factory: sessionmaker[Session]


def build_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine for settings.DATABASE_URL."""
    url = settings.DATABASE_URL
    if url.startswith("sqlite"):
        # In-memory SQLite must share one connection across the threadpool.
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=settings.DEBUG, **kwargs)
    return create_engine(url, pool_pre_ping=True, echo=settings.DEBUG)


def build_context(settings: Settings) -> AppContext:
    engine = build_engine(settings)
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return AppContext(settings=settings, engine=engine, session_factory=session_factory)


def get_context(request: Request) -> AppContext:
    """Dependency returning the context the app was built with."""
    return request.app.state.context


def get_db(
    ctx: Annotated[AppContext, Depends(get_context)],
) -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = ctx.session_factory()
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
