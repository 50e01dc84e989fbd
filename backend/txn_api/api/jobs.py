"""Ingestion job endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from txn_api.api.deps import get_db
from txn_api.schemas.transaction import ErrorResponse, MessageResponse
from txn_api.services import transactions as transaction_service

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.delete(
    "/most-recent",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def delete_most_recent_job(db: Session = Depends(get_db)):
    """Delete every transaction written by the latest ingestion run."""
    transaction_service.delete_most_recent_job(db)
    return MessageResponse(message="Most recent job transactions deleted")
