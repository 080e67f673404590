"""Exceptions raised by the domain and storage layers."""


class TuiMoneyError(Exception):
    """Base class for every error tui-money raises on purpose."""


class ValidationError(TuiMoneyError, ValueError):
    """Candidate entry was rejected; the user can correct it and retry."""


class InvalidAmount(ValidationError):
    """Amount is missing, unparseable, or not strictly positive."""


class EmptyCategory(ValidationError):
    """Category is empty or only whitespace."""


class InvalidDate(ValidationError):
    """Date is not an ISO-8601 calendar date (YYYY-MM-DD)."""


class StorageError(TuiMoneyError):
    """The persistence layer could not complete an operation."""


class ConnectionFailed(StorageError):
    """The database could not be opened or used."""


class ConstraintViolation(StorageError):
    """Stored or submitted data breaks a storage-level rule."""


class NotFound(StorageError):
    """Requested record does not exist."""


class MigrationFailed(StorageError):
    """A schema migration failed and was rolled back.

    The schema is only partially migrated, so the app must not start.
    """

    def __init__(self, version: str, cause: BaseException) -> None:
        super().__init__(f"migration {version} failed: {cause}")
        self.version = version
        self.cause = cause
