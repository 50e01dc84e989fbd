"""Transactions API - read and delete access to ingested ledger entries."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from txn_api.api import jobs, stats, transactions
from txn_api.api.middleware.cors import FixedCORSMiddleware
from txn_api.api.middleware.error_handler import (
    handle_database_error,
    handle_generic_error,
    handle_http_exception,
    handle_service_error,
    handle_validation_error,
)
from txn_api.api.middleware.logging import RequestLoggingMiddleware
from txn_api.config import Settings, get_settings
from txn_api.core.exceptions import TransactionServiceError
from txn_api.database import build_engine, build_session_factory
from txn_api.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    yield
    # Shutdown: return pooled connections
    app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Read and delete ingested bank transactions",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # One pool per app; get_db draws sessions from app.state
    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)

    # Last added runs first: logging wraps CORS so preflights are logged too
    app.add_middleware(FixedCORSMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(TransactionServiceError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
    app.add_exception_handler(Exception, handle_generic_error)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "app": settings.app_name}

    app.include_router(transactions.router)
    app.include_router(stats.router)

    if settings.enable_delete_routes:
        app.include_router(transactions.delete_router)
        app.include_router(jobs.router)
    else:
        logger.warning("Delete routes disabled; serving read-only API")

    return app


app = create_app()


def run() -> None:
    """Console entry point."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
