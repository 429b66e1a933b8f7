"""Decode a raw ``docker stats`` record into :class:`ContainerMetrics`."""

from __future__ import annotations

import re
from typing import Optional, Tuple

from metrics.errors import MalformedNumber, MetricsError
from metrics.units import UnitConverter, parse_decimal
from model.metrics import ContainerMetrics, RawStatsRecord
from utils.misc import time_rfc3339

_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)
_MAX_COUNT = 2**63 - 1


class SnapshotParser:
    """Field-by-field parser; a bad field is zeroed, never fatal for the record."""

    def __init__(self, converter: Optional[UnitConverter] = None) -> None:
        self._converter = converter or UnitConverter()

    def parse(
        self,
        raw: RawStatsRecord,
        identifier: str,
        display_name: str,
        timestamp: Optional[str] = None,
    ) -> ContainerMetrics:
        """Build the normalized metrics for one container.

        :param raw: Strings exactly as reported by the runtime.
        :param identifier: Container identifier the stats were requested for.
        :param display_name: Resolved display name (or the failure sentinel).
        :param timestamp: RFC-3339 time captured by the caller; defaults to now.
        :return: Fully populated :class:`ContainerMetrics`.
        """
        mem_used, mem_limit = self._byte_pair(raw.mem_usage)
        net_rx, net_tx = self._byte_pair(raw.net_io)
        block_read, block_write = self._byte_pair(raw.block_io)

        return ContainerMetrics(
            container_id=identifier,
            container_name=display_name,
            timestamp=timestamp or time_rfc3339(),
            container_cpu_usage_percent=self._percent(raw.cpu_perc),
            container_memory_usage_bytes=mem_used,
            container_memory_limit_bytes=mem_limit,
            container_memory_usage_percent=self._percent(raw.mem_perc),
            container_network_receive_bytes_total=net_rx,
            container_network_transmit_bytes_total=net_tx,
            container_block_read_bytes=block_read,
            container_block_write_bytes=block_write,
            container_pids=self._count(raw.pids),
        )

    def _percent(self, text: str) -> float:
        body = _as_text(text).strip()
        if body.endswith("%"):
            body = body[:-1]
        try:
            return parse_decimal(body)
        except MalformedNumber:
            return 0.0

    def _bytes(self, text: str) -> int:
        try:
            return self._converter.convert(text)
        except MetricsError:
            return 0

    def _byte_pair(self, text: str) -> Tuple[int, int]:
        # "<A> / <B>"; any other arity leaves both sides at zero
        parts = _as_text(text).split("/")
        if len(parts) != 2:
            return 0, 0
        return self._bytes(parts[0]), self._bytes(parts[1])

    @staticmethod
    def _count(text: str) -> int:
        body = _as_text(text).strip()
        if not _INTEGER.fullmatch(body):
            return 0
        try:
            value = int(body)
        except ValueError:
            return 0
        # int64 range
        if value > _MAX_COUNT:
            return 0
        return max(value, 0)


def _as_text(value) -> str:
    return "" if value is None else str(value)
