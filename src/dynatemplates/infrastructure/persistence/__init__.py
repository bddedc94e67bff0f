"""Persistence layer: database manager, models and repositories."""

from dynatemplates.infrastructure.persistence.database import (
    Base,
    DatabaseManager,
    get_db_manager,
    get_db_session,
)

__all__ = [
    "Base",
    "DatabaseManager",
    "get_db_manager",
    "get_db_session",
]
