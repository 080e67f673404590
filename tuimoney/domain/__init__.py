"""Domain models and rules for tui-money.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- The repository contract, with no storage technology behind it
"""

from tuimoney.domain.errors import (
    ConnectionFailed,
    ConstraintViolation,
    EmptyCategory,
    InvalidAmount,
    InvalidDate,
    MigrationFailed,
    NotFound,
    StorageError,
    TuiMoneyError,
    ValidationError,
)
from tuimoney.domain.models import (
    CategoryName,
    Entry,
    EntryFilter,
    EntryKind,
    MigrationRecord,
    Money,
    Month,
    NewEntry,
    ValidEntry,
)
from tuimoney.domain.repository import EntryRepository

__all__ = [
    # Models
    "CategoryName",
    "Entry",
    "EntryFilter",
    "EntryKind",
    "MigrationRecord",
    "Money",
    "Month",
    "NewEntry",
    "ValidEntry",
    # Contract
    "EntryRepository",
    # Errors
    "ConnectionFailed",
    "ConstraintViolation",
    "EmptyCategory",
    "InvalidAmount",
    "InvalidDate",
    "MigrationFailed",
    "NotFound",
    "StorageError",
    "TuiMoneyError",
    "ValidationError",
]
