"""Metrics service tying runtime, enumerator, collector and logger together."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from configs.metrics_config import MetricsConfig
from metrics.collector import MetricsCollector
from metrics.enumerator import ContainerEnumerator
from model.metrics import CollectionBatch, ContainerMetrics
from runtime.base import ContainerRuntimeBase
from runtime.docker_cli import DockerCliRuntime
from utils.logger.logger import Logger
from utils.logger_factory import EnhancedLoggerFactory


class MetricsService:
    """Encapsulates the logger lifecycle and the metrics use cases of the API."""

    def __init__(
        self,
        *,
        config: Optional[MetricsConfig] = None,
        runtime: Optional[ContainerRuntimeBase] = None,
        logger: Optional[Logger] = None,
        logger_name: str = "docker_metrics",
    ) -> None:
        """Build the collaborators; nothing touches the runtime until a request.

        :param config: Engine configuration, defaults to :class:`MetricsConfig`.
        :param runtime: Runtime collaborator, defaults to the Docker CLI.
        :param logger: Logger to use; an application logger is created when omitted.
        :param logger_name: Name of the created application logger.
        """
        self._config = config or MetricsConfig()
        self._runtime = runtime or DockerCliRuntime(
            binary=self._config.docker_binary, timeout=self._config.query_timeout
        )
        self._logger = logger or EnhancedLoggerFactory.create_application_logger(
            name=logger_name, enable_stdout=True
        )
        self._enumerator = ContainerEnumerator(self._runtime, self._logger)
        self._collector = MetricsCollector(self._runtime, self._logger, config=self._config)
        self._started = False
        self._started_at: Optional[datetime] = None

    async def startup(self) -> None:
        if self._started:
            return
        await self._logger.start()
        self._started = True
        self._started_at = datetime.now(tz=timezone.utc)
        self._logger.info(
            f"Metrics service started (runtime={self._runtime.describe()}, "
            f"max_concurrency={self._config.max_concurrency}, "
            f"failure_policy={self._config.failure_policy.value})"
        )

    async def shutdown(self) -> None:
        if not self._started:
            return
        self._started = False
        self._logger.info("Metrics service stopped")
        await self._logger.shutdown()

    @property
    def logger(self) -> Logger:
        return self._logger

    @property
    def config(self) -> MetricsConfig:
        return self._config

    async def fleet_metrics(self) -> CollectionBatch:
        """Collect metrics for every running container.

        :raises EnumerationFailed: If the running containers cannot be listed.
        :raises CollectionFailed: If any container failed under the all-or-nothing policy.
        """
        identifiers = await self._enumerator.list_running()
        return await self._collector.collect(identifiers)

    async def container_metrics(self, target: str) -> ContainerMetrics:
        """Collect metrics for one container given by name or identifier.

        :raises StatsQueryFailed: If the stats query for the container fails.
        """
        identifier = await self.resolve_target(target)
        return await self._collector.collect_one(identifier)

    async def resolve_target(self, target: str) -> str:
        """Map a container name onto its identifier; anything else is taken as an identifier."""
        try:
            identifier = await self._runtime.find_by_name(target)
        except Exception as exc:
            self._logger.warning(f"Name lookup for {target!r} failed, using it as an id: {exc}")
            return target
        return identifier or target

    def status(self) -> Dict[str, Any]:
        """Summarise the service state for the health endpoint."""
        return {
            "started": self._started,
            "started_at": self._started_at,
            "runtime": self._runtime.describe(),
            "max_concurrency": self._config.max_concurrency,
            "failure_policy": self._config.failure_policy.value,
            "query_timeout": self._config.query_timeout,
        }
