# SPDX-License-Identifier: MIT
"""Flat XML file record store."""

import os
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

from ..exceptions import StoreError
from ..export import check_xml_record, export_xml, parse_xml_records
from ..logging_config import get_detail_logger
from ..models import LocalizationRecord
from .base import RecordStore


detail_logger = get_detail_logger()


class XmlFileRecordStore(RecordStore):
    """Keeps every record in one XML file, scanned linearly.

    The file is read once on construction. Mutations are staged on a working
    copy and the whole file is rewritten atomically on ``commit``. A transaction
    holds the store lock until it commits or rolls back, so one thread's
    rollback never discards another thread's staged records.
    """

    name = "xml"

    def __init__(self, file_path: Path):
        self.file_path = Path(file_path)
        self._lock = threading.RLock()
        self._committed: list[LocalizationRecord] = self._load()
        self._working: list[LocalizationRecord] = self._copy(self._committed)
        self._dirty = False

    def _load(self) -> list[LocalizationRecord]:
        if not self.file_path.exists():
            detail_logger.debug(f"XML store file {self.file_path} not found, empty")
            return []
        try:
            records = parse_xml_records(self.file_path.read_bytes())
        except (OSError, ValueError) as e:
            raise StoreError(
                f"Failed to read XML store {self.file_path}: {e}", component=self.name
            ) from e
        detail_logger.debug(f"Loaded {len(records)} records from {self.file_path}")
        return records

    def _check(self, record: LocalizationRecord) -> None:
        try:
            check_xml_record(record)
        except ValueError as e:
            raise StoreError(str(e), component=self.name) from e

    @contextmanager
    def transaction(self) -> Iterator[RecordStore]:
        with self._lock:
            with super().transaction() as store:
                yield store

    @staticmethod
    def _copy(records: list[LocalizationRecord]) -> list[LocalizationRecord]:
        return [record.model_copy() for record in records]

    def find_one(
        self, name: str, culture: str, resource_key: str
    ) -> LocalizationRecord | None:
        identity = (name, culture, resource_key)
        with self._lock:
            for record in self._working:
                if record.identity() == identity:
                    return record.model_copy()
        return None

    def find_many(
        self, names: Iterable[str], culture: str, resource_keys: Iterable[str]
    ) -> list[LocalizationRecord]:
        name_set = set(names)
        key_set = set(resource_keys)
        with self._lock:
            return [
                record.model_copy()
                for record in self._working
                if record.culture_name == culture
                and record.name in name_set
                and record.resource_key in key_set
            ]

    def find_by_key_fragment(self, fragment: str) -> list[LocalizationRecord]:
        with self._lock:
            return [
                record.model_copy()
                for record in self._working
                if fragment in record.resource_key
            ]

    def insert(self, record: LocalizationRecord) -> None:
        self._check(record)
        with self._lock:
            identity = record.identity()
            if any(existing.identity() == identity for existing in self._working):
                raise StoreError(
                    f"Duplicate localization record {record.identity()}",
                    component=self.name,
                )
            self._working.append(record.model_copy())
            self._dirty = True

    def update(self, record: LocalizationRecord) -> None:
        self._check(record)
        with self._lock:
            for existing in self._working:
                if existing.identity() == record.identity():
                    existing.value = record.value
                    self._dirty = True

    def delete(self, record: LocalizationRecord) -> None:
        with self._lock:
            remaining = [
                existing
                for existing in self._working
                if existing.identity() != record.identity()
            ]
            if len(remaining) != len(self._working):
                self._working = remaining
                self._dirty = True

    def commit(self) -> None:
        with self._lock:
            if not self._dirty:
                return
            try:
                self.file_path.parent.mkdir(parents=True, exist_ok=True)
                tmp_path = self.file_path.with_suffix(self.file_path.suffix + ".tmp")
                tmp_path.write_text(export_xml(self._working), encoding="utf-8")
                os.replace(tmp_path, self.file_path)
            except OSError as e:
                raise StoreError(
                    f"Failed to write XML store {self.file_path}: {e}",
                    component=self.name,
                ) from e
            self._committed = self._copy(self._working)
            self._dirty = False
            detail_logger.debug(
                f"Wrote {len(self._committed)} records to {self.file_path}"
            )

    def rollback(self) -> None:
        with self._lock:
            self._working = self._copy(self._committed)
            self._dirty = False
