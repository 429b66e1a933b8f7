"""Bounded-concurrency fan-out of per-container stats queries."""

from __future__ import annotations

import asyncio
from typing import Optional, Sequence

from configs.metrics_config import FailurePolicy, MetricsConfig
from metrics.errors import CollectionFailed, MetricsError, StatsQueryFailed
from metrics.identifier import ContainerIdentifier
from metrics.parser import SnapshotParser
from metrics.units import UnitConverter
from model.metrics import CollectionBatch, ContainerMetrics
from runtime.base import ContainerRuntimeBase
from utils.misc import time_rfc3339


class MetricsCollector:
    """Query every requested container and merge the results into one batch.

    Each :meth:`collect` call owns an admission gate of
    ``config.max_concurrency`` slots. A worker holds a slot for the whole time
    it talks to the runtime (name lookup and stats query), so at most that
    many runtime queries are in flight for one call. All workers are awaited
    before the outcome is decided; nothing is cancelled early.
    """

    def __init__(
        self,
        runtime: ContainerRuntimeBase,
        logger,
        config: Optional[MetricsConfig] = None,
        parser: Optional[SnapshotParser] = None,
        identifier: Optional[ContainerIdentifier] = None,
    ):
        """Wire the collector to its collaborators.

        :param runtime: Runtime answering ``stats_once`` and ``inspect_name``.
        :param logger: Logger used for diagnostics.
        :param config: Engine configuration; defaults to :class:`MetricsConfig`.
        :param parser: Snapshot parser; built from the configured units when omitted.
        :param identifier: Name resolver; built from ``runtime`` when omitted.
        """
        self.runtime = runtime
        self.logger = logger
        self.config = config or MetricsConfig()
        self.parser = parser or SnapshotParser(UnitConverter(self.config.unit_multipliers))
        self.identifier = identifier or ContainerIdentifier(
            runtime, logger, sentinel=self.config.name_sentinel
        )

    async def collect(self, identifiers: Sequence[str]) -> CollectionBatch:
        """Collect metrics for every identifier.

        :param identifiers: Ordered container identifiers; may be empty.
        :return: Batch of metrics, in no guaranteed order.
        :raises CollectionFailed: If any worker failed and the policy is all-or-nothing.
        """
        requested = list(identifiers)
        batch = CollectionBatch(identifiers=requested)
        if not requested:
            return batch

        gate = asyncio.Semaphore(self.config.max_concurrency)
        tasks = [asyncio.create_task(self._worker(cid, gate)) for cid in requested]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        for cid, result in zip(requested, results):
            if isinstance(result, ContainerMetrics):
                batch.metrics.append(result)
            elif isinstance(result, Exception):
                self.logger.error(f"Metrics worker for {cid} failed: {type(result).__name__}: {result}")
                batch.failed.append(cid)
            else:
                raise result

        if batch.failed and self.config.failure_policy is FailurePolicy.ALL_OR_NOTHING:
            raise CollectionFailed(len(batch.failed), len(requested))

        self.logger.debug(
            f"Collected {len(batch.metrics)}/{len(requested)} containers "
            f"(policy={self.config.failure_policy.value})"
        )
        return batch

    async def collect_one(self, identifier: str) -> ContainerMetrics:
        """Collect metrics for a single container.

        :param identifier: Container identifier.
        :return: Metrics for that container.
        :raises StatsQueryFailed: If the stats query fails; not wrapped as a batch failure.
        """
        gate = asyncio.Semaphore(self.config.max_concurrency)
        return await self._worker(identifier, gate)

    async def _worker(self, identifier: str, gate: asyncio.Semaphore) -> ContainerMetrics:
        async with gate:
            timestamp = time_rfc3339()
            name = await self.identifier.resolve(identifier)
            try:
                raw = await self.runtime.stats_once(identifier)
            except MetricsError as exc:
                raise StatsQueryFailed(identifier, str(exc)) from exc
        return self.parser.parse(raw, identifier, name, timestamp=timestamp)
