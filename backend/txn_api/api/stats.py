"""Aggregate statistics endpoint."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from txn_api.api.deps import get_db
from txn_api.schemas.transaction import ErrorResponse, StatsResponse
from txn_api.services import transactions as transaction_service

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=StatsResponse, responses={500: {"model": ErrorResponse}})
def get_stats(db: Session = Depends(get_db)):
    """Transaction count plus debit and credit totals, computed on every call."""
    return StatsResponse(**transaction_service.get_stats(db))
