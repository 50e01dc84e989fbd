"""Read and delete operations over the transactions table."""
import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from txn_api.core.exceptions import NotFoundError, StoreFailureError
from txn_api.models.transaction import Transaction

logger = logging.getLogger(__name__)


def _store_failure(exc: SQLAlchemyError, operation: str) -> StoreFailureError:
    # Keep the driver message only; str(exc) also carries SQL and bound parameters.
    cause = getattr(exc, "orig", None) or exc
    return StoreFailureError(details={"operation": operation, "error": str(cause)})


def list_transactions(db: Session) -> list[Transaction]:
    """Get every transaction, newest business date first.

    An empty table yields an empty list.
    """
    try:
        return (
            db.query(Transaction)
            .order_by(Transaction.date.desc(), Transaction.id.desc())
            .all()
        )
    except SQLAlchemyError as exc:
        raise _store_failure(exc, "list_transactions") from exc


def get_transaction(db: Session, transaction_id: int) -> Transaction:
    """Get a single transaction by id."""
    try:
        transaction = db.get(Transaction, transaction_id)
    except SQLAlchemyError as exc:
        raise _store_failure(exc, "get_transaction") from exc

    if transaction is None:
        raise NotFoundError(details={"transaction_id": transaction_id})
    return transaction


def get_stats(db: Session) -> dict:
    """Compute count, debit total and credit total.

    Each aggregate is its own query; the first failure aborts the rest.
    Sums coalesce to zero when no row of that type exists.
    """
    try:
        total_transactions = db.query(func.count(Transaction.id)).scalar()
        total_debits = (
            db.query(func.coalesce(func.sum(Transaction.amount), 0))
            .filter(Transaction.type == "debit")
            .scalar()
        )
        total_credits = (
            db.query(func.coalesce(func.sum(Transaction.amount), 0))
            .filter(Transaction.type == "credit")
            .scalar()
        )
    except SQLAlchemyError as exc:
        raise _store_failure(exc, "get_stats") from exc

    return {
        "total_transactions": int(total_transactions or 0),
        "total_debits": float(total_debits or 0),
        "total_credits": float(total_credits or 0),
    }


def delete_transaction(db: Session, transaction_id: int) -> None:
    """Delete one transaction by id."""
    try:
        deleted = (
            db.query(Transaction)
            .filter(Transaction.id == transaction_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise _store_failure(exc, "delete_transaction") from exc

    if deleted == 0:
        raise NotFoundError(details={"transaction_id": transaction_id})

    logger.info(f"Deleted transaction {transaction_id}")


def delete_most_recent_job(db: Session) -> int:
    """Delete every transaction of the most recent ingestion run.

    The run is identified by the job_id of the row with the latest
    created_at (ties broken by highest id). Lookup and delete share one
    store transaction, so both commit or neither does.

    Returns:
        Number of rows deleted.

    Raises:
        StoreFailureError: The table is empty, so no job can be looked up,
            or the store failed.
        NotFoundError: The latest job matched no rows to delete.
    """
    try:
        latest = (
            db.query(Transaction.job_id)
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
            .first()
        )
        if latest is None:
            db.rollback()
            raise StoreFailureError(
                "Most recent job could not be determined",
                details={"operation": "delete_most_recent_job", "error": "no transactions"},
            )

        job_id = latest.job_id
        deleted = 0
        # A row without a job_id belongs to no batch; never match NULLs.
        if job_id is not None:
            deleted = (
                db.query(Transaction)
                .filter(Transaction.job_id == job_id)
                .delete(synchronize_session=False)
            )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise _store_failure(exc, "delete_most_recent_job") from exc

    if deleted == 0:
        raise NotFoundError(details={"job_id": job_id})

    logger.info(f"Deleted {deleted} transactions from job {job_id}")
    return deleted
