"""SQLAlchemy models package."""
from txn_api.models.transaction import Transaction

__all__ = [
    "Transaction",
]
