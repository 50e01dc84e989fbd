import os
import sys
from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from txn_api.api import deps
from txn_api.database import Base
from txn_api.main import create_app
from txn_api.models.transaction import Transaction


def _memory_engine():
    # StaticPool keeps one connection so every thread sees the same in-memory database
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def _client_for(testing_session_local, settings=None) -> TestClient:
    app = create_app(settings)

    def override_get_db():
        db = testing_session_local()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[deps.get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def session_factory():
    engine = _memory_engine()
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    return _client_for(session_factory)


@pytest.fixture
def broken_client():
    """Client whose store has no transactions table, so every query fails."""
    engine = _memory_engine()
    yield _client_for(sessionmaker(autocommit=False, autoflush=False, bind=engine))
    engine.dispose()


@pytest.fixture
def add_transaction(session_factory):
    """Insert a transaction and return its id."""

    def _add(
        amount=10.0,
        type="debit",
        description="Coffee",
        txn_date=date(2024, 1, 5),
        created_at=datetime(2024, 2, 1, 9, 0, 0),
        job_id="job-a",
    ) -> int:
        session = session_factory()
        try:
            transaction = Transaction(
                date=txn_date,
                description=description,
                amount=amount,
                type=type,
                created_at=created_at,
                job_id=job_id,
            )
            session.add(transaction)
            session.commit()
            return transaction.id
        finally:
            session.close()

    return _add


@pytest.fixture
def make_client(session_factory):
    """Build a client for the shared store with non-default settings."""

    def _make(settings):
        return _client_for(session_factory, settings)

    return _make
