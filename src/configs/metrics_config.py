"""Explicit configuration object for the metrics engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from configs.env_config import Env


DEFAULT_UNIT_MULTIPLIERS: Mapping[str, int] = MappingProxyType(
    {
        # Decimal labels are read as binary multiples, like `docker stats` itself does.
        "KB": 1024,
        "MB": 1024**2,
        "GB": 1024**3,
        "MIB": 1024**2,
        "GIB": 1024**3,
    }
)


class FailurePolicy(str, Enum):
    """How a batch reacts to individual container failures."""

    ALL_OR_NOTHING = "all_or_nothing"
    PARTIAL = "partial"


@dataclass(frozen=True)
class MetricsConfig:
    """Settings handed to the collector, parser and runtime at construction.

    :param max_concurrency: Size of the admission gate for one ``collect`` call.
    :param unit_multipliers: Upper-case byte-unit suffix to multiplier.
    :param name_sentinel: Display name used when name resolution fails.
    :param failure_policy: Batch outcome policy.
    :param query_timeout: Seconds allowed per runtime query, ``None`` for no limit.
    :param docker_binary: Executable used by the Docker CLI runtime.
    """

    max_concurrency: int = 10
    unit_multipliers: Mapping[str, int] = field(default_factory=lambda: DEFAULT_UNIT_MULTIPLIERS)
    name_sentinel: str = "N/A"
    failure_policy: FailurePolicy = FailurePolicy.ALL_OR_NOTHING
    query_timeout: Optional[float] = None
    docker_binary: str = "docker"

    def __post_init__(self) -> None:
        if not isinstance(self.max_concurrency, int) or self.max_concurrency < 1:
            raise ValueError(f"Invalid max_concurrency; expected int >= 1 but got {self.max_concurrency!r}")

        if not self.unit_multipliers:
            raise ValueError("At least one byte unit must be configured")

        normalized = {suffix.strip().upper(): int(mult) for suffix, mult in self.unit_multipliers.items()}
        if any(not suffix for suffix in normalized):
            raise ValueError("Byte unit suffixes must not be empty")
        object.__setattr__(self, "unit_multipliers", MappingProxyType(normalized))

        if self.query_timeout is not None and self.query_timeout <= 0:
            raise ValueError(f"Invalid query_timeout; expected >0 but got {self.query_timeout}")

        object.__setattr__(self, "failure_policy", FailurePolicy(self.failure_policy))

    @classmethod
    def from_env(cls) -> "MetricsConfig":
        """Build the configuration from ``DM_*`` environment variables."""
        timeout = Env.QUERY_TIMEOUT.strip()
        return cls(
            max_concurrency=int(Env.MAX_CONCURRENCY),
            failure_policy=FailurePolicy(Env.FAILURE_POLICY.strip().lower()),
            query_timeout=float(timeout) if timeout else None,
            docker_binary=Env.DOCKER_BINARY,
        )
