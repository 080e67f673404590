"""Database store layer - provides persistence for the application.

This module re-exports the public store API for easy importing.
"""

from tuimoney.store.repository import SqliteRepository, build_list_query
from tuimoney.store.schema import (
    applied_migrations,
    apply_migrations,
    connect,
    database_exists,
    get_db_path,
    init_database,
)

__all__ = [
    # Schema
    "applied_migrations",
    "apply_migrations",
    "connect",
    "database_exists",
    "get_db_path",
    "init_database",
    # Repository
    "SqliteRepository",
    "build_list_query",
]
