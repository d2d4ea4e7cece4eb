# SPDX-License-Identifier: MIT
"""Record snapshot sources used to warm the cache."""

from abc import ABC, abstractmethod
from pathlib import Path

from ..constants import DEFAULT_SNAPSHOT_FILE_TEMPLATE
from ..exceptions import StoreError
from ..export import parse_xml_records
from ..keys import KeyBuilder
from ..logging_config import get_detail_logger
from ..models import LocalizationRecord
from ..store.base import RecordStore


detail_logger = get_detail_logger()


class SnapshotSource(ABC):
    """Produces the full record set for a (culture, resource group)."""

    @abstractmethod
    def read(
        self, culture: str, resource_group: str | None = None
    ) -> list[LocalizationRecord]:
        """Read the snapshot sequentially."""


class XmlSnapshotSource(SnapshotSource):
    """Reads one serialized XML file per (culture, resource group).

    The file name comes from a positional template (``{0}`` culture, ``{1}``
    resource group). A missing file is an empty snapshot.
    """

    def __init__(
        self,
        directory: Path,
        file_template: str = DEFAULT_SNAPSHOT_FILE_TEMPLATE,
        key_builder: KeyBuilder | None = None,
    ):
        self.directory = Path(directory)
        self.file_template = file_template
        self.key_builder = key_builder or KeyBuilder()

    def path_for(self, culture: str, resource_group: str | None = None) -> Path:
        group = self.key_builder.resolve_resource_group(resource_group)
        return self.directory / self.file_template.format(str(culture), group)

    def read(
        self, culture: str, resource_group: str | None = None
    ) -> list[LocalizationRecord]:
        path = self.path_for(culture, resource_group)
        if not path.exists():
            detail_logger.debug(f"Snapshot file {path} not found, nothing to load")
            return []

        try:
            records = parse_xml_records(path.read_bytes())
        except (OSError, ValueError) as e:
            raise StoreError(
                f"Failed to read snapshot {path}: {e}", component="snapshot"
            ) from e

        detail_logger.debug(f"Read {len(records)} records from snapshot {path}")
        return records


class StoreSnapshotSource(SnapshotSource):
    """Reads the snapshot straight from a record store."""

    def __init__(self, store: RecordStore, key_builder: KeyBuilder | None = None):
        self.store = store
        self.key_builder = key_builder or KeyBuilder()

    def read(
        self, culture: str, resource_group: str | None = None
    ) -> list[LocalizationRecord]:
        path = self.key_builder.compute_path(culture, resource_group)
        return self.store.find_by_key_fragment(path)
