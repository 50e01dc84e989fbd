"""FastAPI dependencies shared by the routers."""
from txn_api.database import get_db

__all__ = ["get_db"]
