"""PostgreSQL database layer.

This module provides:
- Connection pool management
- Repository classes for data access
- Health check utilities
"""

from recyclehub.database.connection import (
    DatabaseNotInitializedError,
    check_database_health,
    close_database_pool,
    get_database_pool,
    init_database_pool,
)
from recyclehub.database.repositories.status import StatusRecord, StatusRepository


__all__ = [
    "DatabaseNotInitializedError",
    "StatusRecord",
    "StatusRepository",
    "check_database_health",
    "close_database_pool",
    "get_database_pool",
    "init_database_pool",
]
