# SPDX-License-Identifier: MIT
"""One-shot concurrent cache warm-up from a record snapshot."""

import asyncio

from ..cache.base import CacheBackend
from ..constants import DEFAULT_BULK_LOAD_CONCURRENCY
from ..enums import FailurePolicy
from ..exceptions import ConfigurationError
from ..keys import KeyBuilder
from ..logging_config import get_detail_logger, get_status_logger
from ..models import BulkLoadFailure, BulkLoadResult, LocalizationRecord
from .snapshot import SnapshotSource


class BulkLoader:
    """Populates the cache with ``resource_key -> value`` for a snapshot.

    The snapshot is read sequentially, then one task per record writes to the
    cache. Writes run concurrently up to ``max_concurrency`` and the loader
    waits for all of them before returning. A failed write never rolls back
    the others; the cache may end up partially warmed.
    """

    def __init__(
        self,
        cache: CacheBackend | None,
        source: SnapshotSource | None,
        key_builder: KeyBuilder | None = None,
        max_concurrency: int = DEFAULT_BULK_LOAD_CONCURRENCY,
        failure_policy: FailurePolicy = FailurePolicy.COLLECT,
    ):
        if cache is None:
            raise ConfigurationError("A cache backend is required", component="bulk")
        if source is None:
            raise ConfigurationError("A snapshot source is required", component="bulk")
        if max_concurrency < 1:
            raise ConfigurationError(
                "max_concurrency must be at least 1", component="bulk"
            )

        self.cache = cache
        self.source = source
        self.key_builder = key_builder or KeyBuilder()
        self.max_concurrency = max_concurrency
        self.failure_policy = FailurePolicy(failure_policy)
        self.detail_logger = get_detail_logger()
        self.status_logger = get_status_logger()

    async def load(
        self, culture: str, resource_group: str | None = None
    ) -> BulkLoadResult:
        """Warm the cache for (culture, resource group).

        Args:
            culture: Culture identifier, e.g. "en-US"
            resource_group: Resource group; empty or None means the shared group

        Returns:
            Summary of loaded and failed writes
        """
        group = self.key_builder.resolve_resource_group(resource_group)
        records = self.source.read(culture, group)
        result = BulkLoadResult(
            culture=culture, resource_group=group, total=len(records)
        )

        if not records:
            self.detail_logger.debug(f"No records to warm for {culture}/{group}")
            return result

        self.detail_logger.debug(
            f"Warming {len(records)} cache entries for {culture}/{group} "
            f"with {self.max_concurrency} concurrent writes"
        )

        semaphore = asyncio.Semaphore(self.max_concurrency)
        tasks = [self._write_with_semaphore(record, semaphore) for record in records]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        for record, outcome in zip(records, outcomes, strict=True):
            if isinstance(outcome, asyncio.CancelledError):
                raise outcome
            if isinstance(outcome, BaseException):
                result.failed += 1
                self.detail_logger.debug(
                    f"Cache write failed for '{record.resource_key}': {outcome}"
                )
                if self.failure_policy is FailurePolicy.COLLECT:
                    result.failures.append(
                        BulkLoadFailure(key=record.resource_key, error=str(outcome))
                    )
            else:
                result.loaded += 1

        if result.failed:
            self.status_logger.warning(
                f"Cache warm-up for {culture}/{group}: {result.failed} of "
                f"{result.total} writes failed, cache partially warmed"
            )
        else:
            self.status_logger.info(
                f"Cache warm-up for {culture}/{group}: {result.loaded} entries loaded"
            )
        return result

    def load_sync(
        self, culture: str, resource_group: str | None = None
    ) -> BulkLoadResult:
        """Run ``load`` to completion from synchronous code.

        Must not be called from inside a running event loop.
        """
        return asyncio.run(self.load(culture, resource_group))

    async def _write_with_semaphore(
        self, record: LocalizationRecord, semaphore: asyncio.Semaphore
    ) -> None:
        async with semaphore:
            await asyncio.to_thread(self.cache.set, record.resource_key, record.value)
