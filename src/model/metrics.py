from dataclasses import dataclass, field
from typing import Any, List, Mapping


@dataclass
class ContainerMetrics:
    container_id: str
    container_name: str
    timestamp: str  # RFC3339 UTC e.g. "2021-09-01T12:34:56Z"
    container_cpu_usage_percent: float = 0.0
    container_memory_usage_bytes: int = 0
    container_memory_limit_bytes: int = 0
    container_memory_usage_percent: float = 0.0
    container_network_receive_bytes_total: int = 0
    container_network_transmit_bytes_total: int = 0
    container_block_read_bytes: int = 0
    container_block_write_bytes: int = 0
    container_pids: int = 0
    active: bool = False  # always false on the wire


@dataclass
class RawStatsRecord:
    """One ``docker stats --no-stream --format '{{json .}}'`` object, as strings."""

    cpu_perc: str = ""   # "0.07%"
    mem_usage: str = ""  # "34.5MiB / 1.945GiB"
    mem_perc: str = ""   # "0.79%"
    net_io: str = ""     # "1.2MB / 3.4MB"
    block_io: str = ""   # "73.7kB / 0B"
    pids: str = ""       # "123"
    container: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RawStatsRecord":
        """Pick the stats fields out of a decoded runtime JSON object.

        :param payload: Mapping keyed like Docker's template fields (``CPUPerc``...).
        :return: Record with missing keys as empty strings.
        """
        def _text(key: str) -> str:
            value = payload.get(key)
            return "" if value is None else str(value)

        return cls(
            cpu_perc=_text("CPUPerc"),
            mem_usage=_text("MemUsage"),
            mem_perc=_text("MemPerc"),
            net_io=_text("NetIO"),
            block_io=_text("BlockIO"),
            pids=_text("PIDs"),
            container=_text("Container"),
        )


@dataclass
class CollectionBatch:
    """Outcome of one ``collect`` call."""

    identifiers: List[str]
    metrics: List[ContainerMetrics] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failed
