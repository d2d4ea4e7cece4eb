# SPDX-License-Identifier: MIT
"""Core data models for the localization sync layer."""

from pydantic import BaseModel, ConfigDict, Field

from .enums import LookupOutcome


class LocalizationRecord(BaseModel):
    """A culture-specific string as persisted in the durable store.

    ``resource_key`` is not a free grouping label: it is the canonical cache key
    computed from (culture, resource group, name), stored on the record so
    lookups by computed key need no recomputation at the store.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Logical key within the group")
    value: str = Field("", description="Localized text")
    culture_name: str = Field(..., alias="cultureName", description="e.g. en-US")
    resource_key: str = Field(
        ..., alias="resourceKey", description="Canonical cache key"
    )

    def identity(self) -> tuple[str, str, str]:
        """Return the (name, culture_name, resource_key) identity triple."""
        return (self.name, self.culture_name, self.resource_key)


class RecordLookup(BaseModel):
    """Tagged outcome of an existence check against the store."""

    outcome: LookupOutcome
    record: LocalizationRecord | None = None

    @classmethod
    def of(cls, record: LocalizationRecord | None) -> "RecordLookup":
        if record is None:
            return cls(outcome=LookupOutcome.NOT_FOUND)
        return cls(outcome=LookupOutcome.FOUND, record=record)


class SyncResult(BaseModel):
    """Outcome of a SyncCrud write.

    The store is authoritative: ``store_changed`` reflects the committed store
    mutation, ``failed_cache_keys`` lists keys whose follow-up cache mutation
    failed after that commit.
    """

    store_changed: bool = Field(False, description="Store mutation committed")
    keys: list[str] = Field(
        default_factory=list, description="Keys mutated in store and cache"
    )
    failed_cache_keys: list[str] = Field(
        default_factory=list, description="Keys whose cache mutation failed"
    )

    @property
    def cache_synced(self) -> bool:
        return not self.failed_cache_keys


class BulkLoadFailure(BaseModel):
    """A single cache write that failed during warm-up."""

    key: str
    error: str


class BulkLoadResult(BaseModel):
    """Summary of one cache warm-up run."""

    culture: str
    resource_group: str
    total: int = 0
    loaded: int = 0
    failed: int = 0
    failures: list[BulkLoadFailure] = Field(default_factory=list)

    @property
    def complete(self) -> bool:
        return self.failed == 0
