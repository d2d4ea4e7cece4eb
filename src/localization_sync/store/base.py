# SPDX-License-Identifier: MIT
"""Record store contract consumed by the sync layer."""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from ..exceptions import StoreError
from ..logging_config import get_detail_logger
from ..models import LocalizationRecord


detail_logger = get_detail_logger()


class RecordStore(ABC):
    """Durable store of localization records.

    Mutations are staged until ``commit``; all mutations of one logical batch
    are flushed together. The triple (name, culture_name, resource_key) is a
    de-facto unique identity. Every method may raise ``StoreError``.
    """

    name: str = "store"

    @abstractmethod
    def find_one(
        self, name: str, culture: str, resource_key: str
    ) -> LocalizationRecord | None:
        """Find the record for an identity triple.

        If the store holds duplicates for the triple, the first in insertion
        order is returned.
        """

    @abstractmethod
    def find_many(
        self, names: Iterable[str], culture: str, resource_keys: Iterable[str]
    ) -> list[LocalizationRecord]:
        """Batch lookup of records for a culture in one round trip."""

    @abstractmethod
    def find_by_key_fragment(self, fragment: str) -> list[LocalizationRecord]:
        """Return records whose resource_key contains ``fragment``."""

    @abstractmethod
    def insert(self, record: LocalizationRecord) -> None:
        """Stage a new record."""

    @abstractmethod
    def update(self, record: LocalizationRecord) -> None:
        """Stage a value change for an existing record."""

    @abstractmethod
    def delete(self, record: LocalizationRecord) -> None:
        """Stage removal of a record."""

    def delete_many(self, records: Iterable[LocalizationRecord]) -> None:
        """Stage removal of several records."""
        for record in records:
            self.delete(record)

    @abstractmethod
    def commit(self) -> None:
        """Flush all staged mutations durably."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard all staged mutations."""

    def close(self) -> None:
        """Release store resources."""
        return None

    @contextmanager
    def transaction(self) -> Iterator["RecordStore"]:
        """Context manager with automatic commit/rollback.

        Yields:
            The store, for staging mutations

        Raises:
            StoreError: Store failures, after rolling back staged mutations
        """
        detail_logger.debug(f"Beginning {self.name} store transaction")
        try:
            yield self
            self.commit()
            detail_logger.debug(f"Committed {self.name} store transaction")
        except Exception:
            detail_logger.debug(f"Rolling back {self.name} store transaction")
            try:
                self.rollback()
            except StoreError as e:
                detail_logger.exception(f"Rollback failed: {e}")
            raise


def first_by_identity(
    records: Iterable[LocalizationRecord],
) -> dict[tuple[str, str], LocalizationRecord]:
    """Index records by (name, resource_key), keeping the first occurrence."""
    indexed: dict[tuple[str, str], LocalizationRecord] = {}
    for record in records:
        indexed.setdefault((record.name, record.resource_key), record)
    return indexed
