from metrics.errors import NameResolutionFailed
from runtime.base import ContainerRuntimeBase


class ContainerIdentifier:
    """Best-effort lookup of a container's display name."""

    def __init__(self, runtime: ContainerRuntimeBase, logger, sentinel: str = "N/A"):
        """Keep the runtime used for ``inspect`` lookups.

        :param runtime: Collaborator answering ``inspect_name``.
        :param logger: Logger used for diagnostics.
        :param sentinel: Name returned when the lookup fails.
        """
        self.runtime = runtime
        self.logger = logger
        self.sentinel = sentinel

    async def resolve(self, identifier: str) -> str:
        """Return the display name of ``identifier`` or the sentinel on failure."""
        try:
            return await self._lookup(identifier)
        except NameResolutionFailed as exc:
            self.logger.warning(f"{exc}: {exc.__cause__}")
            return self.sentinel

    async def _lookup(self, identifier: str) -> str:
        try:
            return await self.runtime.inspect_name(identifier)
        except Exception as exc:
            raise NameResolutionFailed(identifier) from exc
