"""Abstract persistence contract for entries.

The dashboard only talks to this interface; the SQLite implementation lives in
``tuimoney.store.repository`` and is chosen explicitly at startup.
"""

from abc import ABC, abstractmethod

from tuimoney.domain.models import Entry, EntryFilter, ValidEntry


class EntryRepository(ABC):
    """Storage for entries. Implementations own their connection."""

    @abstractmethod
    def add(self, entry: ValidEntry) -> Entry:
        """Persist a validated entry.

        Args:
            entry: Entry that passed ``validate``.

        Returns:
            The stored entry with its assigned id.

        Raises:
            StorageError: If the entry could not be stored.
        """

    @abstractmethod
    def list(self, entry_filter: EntryFilter | None = None) -> list[Entry]:
        """List entries matching a filter.

        Args:
            entry_filter: Constraints to apply. None lists everything.

        Returns:
            Matching entries, most recent ``occurred_on`` first, ties broken
            by id descending.

        Raises:
            StorageError: If the entries could not be read.
        """

    def close(self) -> None:
        """Release the underlying handle."""

    def __enter__(self) -> "EntryRepository":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
