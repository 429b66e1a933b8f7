from abc import ABC, abstractmethod
from typing import List, Optional

from model.metrics import RawStatsRecord


class ContainerRuntimeBase(ABC):
    """Queries the metrics engine needs from a container runtime."""

    @abstractmethod
    async def list_running_containers(self) -> List[str]:
        """Return the identifiers of all running containers."""
        raise NotImplementedError

    @abstractmethod
    async def inspect_name(self, identifier: str) -> str:
        """Return the display name of ``identifier`` without a leading ``/``."""
        raise NotImplementedError

    @abstractmethod
    async def stats_once(self, identifier: str) -> RawStatsRecord:
        """Return a single, non-streaming stats record for ``identifier``."""
        raise NotImplementedError

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[str]:
        """Return the identifier of the running container called ``name``, if any."""
        raise NotImplementedError

    def describe(self) -> str:
        """Short human-readable description used in status payloads."""
        return self.__class__.__name__
