from typing import List

from metrics.errors import EnumerationFailed, MetricsError
from runtime.base import ContainerRuntimeBase


class ContainerEnumerator:
    """List the identifiers of the currently running containers."""

    def __init__(self, runtime: ContainerRuntimeBase, logger):
        self.runtime = runtime
        self.logger = logger

    async def list_running(self) -> List[str]:
        """Issue a single ``list running`` query.

        :return: Flat list of identifiers, possibly empty.
        :raises EnumerationFailed: If the runtime query fails.
        """
        try:
            identifiers = await self.runtime.list_running_containers()
        except MetricsError as exc:
            self.logger.error(f"Listing running containers failed: {exc}")
            raise EnumerationFailed("Failed to retrieve container list") from exc

        # An entry may still hold several whitespace-separated ids.
        flat = [part for entry in identifiers for part in str(entry).split()]
        self.logger.debug(f"Found {len(flat)} running containers")
        return flat
