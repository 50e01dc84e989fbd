"""Transaction schemas."""
import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict


class TransactionResponse(BaseModel):
    """Transaction response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    date: dt.date
    description: str
    amount: float
    type: Literal["debit", "credit"]
    created_at: dt.datetime
    job_id: str | None = None


class StatsResponse(BaseModel):
    """Aggregate statistics over every stored transaction."""

    total_transactions: int
    total_debits: float
    total_credits: float


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    error: str
    error_code: str
