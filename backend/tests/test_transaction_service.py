from datetime import date, datetime
from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from txn_api.core.errors import ErrorKind
from txn_api.core.exceptions import NotFoundError, StoreFailureError
from txn_api.models.transaction import Transaction
from txn_api.services import transactions as transaction_service


def _seed(db, *rows):
    for job_id, created_at, txn_type, amount in rows:
        db.add(Transaction(
            date=date(2024, 1, 10),
            description=f"{job_id} {txn_type}",
            amount=amount,
            type=txn_type,
            created_at=created_at,
            job_id=job_id,
        ))
    db.commit()


def _failing_session() -> Session:
    session = Mock(spec=Session)
    session.query.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
    session.get.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
    return session


def test_get_stats_sums_by_type(db):
    _seed(
        db,
        ("A", datetime(2024, 1, 1), "debit", 12.25),
        ("A", datetime(2024, 1, 1), "debit", 7.75),
        ("A", datetime(2024, 1, 1), "credit", 100),
    )

    assert transaction_service.get_stats(db) == {
        "total_transactions": 3,
        "total_debits": 20.0,
        "total_credits": 100.0,
    }


def test_get_stats_without_credits_coalesces_to_zero(db):
    _seed(db, ("A", datetime(2024, 1, 1), "debit", 5))

    stats = transaction_service.get_stats(db)

    assert stats["total_credits"] == 0.0
    assert stats["total_debits"] == 5.0


def test_get_stats_aborts_on_first_failure():
    session = _failing_session()

    with pytest.raises(StoreFailureError) as exc_info:
        transaction_service.get_stats(session)

    assert session.query.call_count == 1
    assert exc_info.value.kind is ErrorKind.STORE_FAILURE
    assert "connection refused" in exc_info.value.details["error"]


def test_get_transaction_missing_raises_not_found(db):
    with pytest.raises(NotFoundError) as exc_info:
        transaction_service.get_transaction(db, 12345)

    assert exc_info.value.http_status == 404


def test_delete_transaction_store_failure_rolls_back():
    session = _failing_session()

    with pytest.raises(StoreFailureError):
        transaction_service.delete_transaction(session, 1)

    session.rollback.assert_called_once()
    session.commit.assert_not_called()


def test_delete_most_recent_job_returns_deleted_count(db):
    _seed(
        db,
        ("old", datetime(2024, 1, 1), "debit", 1),
        ("new", datetime(2024, 1, 2), "debit", 2),
        ("new", datetime(2024, 1, 2), "credit", 3),
        ("new", datetime(2024, 1, 2), "debit", 4),
    )

    assert transaction_service.delete_most_recent_job(db) == 3
    assert [t.job_id for t in db.query(Transaction).all()] == ["old"]


def test_delete_most_recent_job_groups_by_job_not_timestamp(db):
    # Rows of the latest job written at different instants still go together.
    _seed(
        db,
        ("old", datetime(2024, 1, 1, 12, 0, 0), "debit", 1),
        ("new", datetime(2024, 1, 1, 9, 0, 0), "debit", 2),
        ("new", datetime(2024, 1, 2, 9, 0, 0), "debit", 3),
    )

    assert transaction_service.delete_most_recent_job(db) == 2
    assert [t.job_id for t in db.query(Transaction).all()] == ["old"]


def test_delete_most_recent_job_empty_store_is_store_failure(db):
    with pytest.raises(StoreFailureError):
        transaction_service.delete_most_recent_job(db)


def test_list_transactions_store_failure():
    with pytest.raises(StoreFailureError) as exc_info:
        transaction_service.list_transactions(_failing_session())

    assert exc_info.value.message == "Transaction store is unavailable"
    assert isinstance(exc_info.value.__cause__, OperationalError)


def test_delete_most_recent_job_failed_delete_rolls_back_lookup():
    lookup = Mock()
    lookup.order_by.return_value.first.return_value = Mock(job_id="B")
    batch = Mock()
    batch.filter.return_value.delete.side_effect = OperationalError(
        "DELETE FROM transactions", {}, Exception("deadlock detected")
    )
    session = Mock(spec=Session)
    session.query.side_effect = [lookup, batch]

    with pytest.raises(StoreFailureError) as exc_info:
        transaction_service.delete_most_recent_job(session)

    session.rollback.assert_called_once()
    session.commit.assert_not_called()
    assert exc_info.value.details["error"] == "deadlock detected"
