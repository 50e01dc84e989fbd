"""Transaction model for ingested ledger entries."""
from sqlalchemy import BigInteger, CheckConstraint, Column, Date, DateTime, Index, Integer, Numeric, String, Text, func

from txn_api.database import Base


class Transaction(Base):
    """Single ledger entry written by the ingestion process.

    Rows are only ever read and deleted by this service.
    """

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("type IN ('debit', 'credit')", name="ck_transactions_type"),
        Index("ix_transactions_date", "date"),
        Index("ix_transactions_created_at", "created_at"),
        Index("ix_transactions_job_id", "job_id"),
    )

    # SQLite only autoincrements INTEGER PRIMARY KEY columns
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)

    date = Column(Date, nullable=False)  # Business date, not ingestion time
    description = Column(Text, nullable=False)
    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    type = Column(String(6), nullable=False)  # debit | credit

    # Ingestion metadata
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    job_id = Column(String(64))  # Shared by every row of one ingestion run
