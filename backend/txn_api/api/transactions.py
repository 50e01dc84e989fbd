"""Transactions API endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from txn_api.api.deps import get_db
from txn_api.schemas.transaction import ErrorResponse, MessageResponse, TransactionResponse
from txn_api.services import transactions as transaction_service

router = APIRouter(prefix="/transactions", tags=["transactions"])

# Largest id a BIGINT column can hold; anything above cannot exist.
MAX_TRANSACTION_ID = 2**63 - 1

TransactionId = Annotated[int, Path(ge=0, le=MAX_TRANSACTION_ID, description="Transaction id")]


@router.get(
    "",
    response_model=list[TransactionResponse],
    responses={500: {"model": ErrorResponse}},
)
def list_transactions(db: Session = Depends(get_db)):
    """List all transactions, newest date first."""
    return transaction_service.list_transactions(db)


@router.get(
    "/{transaction_id}",
    response_model=TransactionResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def get_transaction(transaction_id: TransactionId, db: Session = Depends(get_db)):
    """Get a single transaction."""
    return transaction_service.get_transaction(db, transaction_id)


delete_router = APIRouter(prefix="/transactions", tags=["transactions"])


@delete_router.delete(
    "/{transaction_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def delete_transaction(transaction_id: TransactionId, db: Session = Depends(get_db)):
    """Delete a single transaction."""
    transaction_service.delete_transaction(db, transaction_id)
    return MessageResponse(message="Transaction deleted")
