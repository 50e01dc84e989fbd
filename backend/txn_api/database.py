"""Database connection and session management."""
from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from txn_api.config import Settings


def _connect_args(settings: Settings) -> dict:
    backend = make_url(settings.database_url).get_backend_name()

    # SQLite requires check_same_thread=False for FastAPI
    if backend == "sqlite":
        return {"check_same_thread": False}

    # Bound every statement so a stuck query cannot hold a pooled connection forever.
    if backend == "postgresql" and settings.db_statement_timeout_ms:
        return {"options": f"-c statement_timeout={settings.db_statement_timeout_ms}"}

    return {}


def build_engine(settings: Settings) -> Engine:
    """Create the process-wide pooled engine for the given settings."""
    pool_args = {}
    if make_url(settings.database_url).get_backend_name() != "sqlite":
        pool_args = {
            "pool_size": settings.db_pool_size,
            "max_overflow": settings.db_max_overflow,
            "pool_timeout": settings.db_pool_timeout,
            "pool_pre_ping": True,
        }

    return create_engine(
        settings.database_url,
        connect_args=_connect_args(settings),
        echo=settings.db_echo,
        **pool_args,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


Base = declarative_base()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that provides a session from the app's own engine."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
