"""Exception taxonomy for the metrics engine and the runtime collaborator."""

from typing import Optional, Sequence


class MetricsError(Exception):
    """Base class for every error raised by the metrics engine."""


class UnrecognizedUnit(MetricsError, ValueError):
    """A byte quantity carries no suffix, or one that is not configured."""

    def __init__(self, quantity: str) -> None:
        super().__init__(f"Unknown byte unit in {quantity!r}")
        self.quantity = quantity


class MalformedNumber(MetricsError, ValueError):
    """The numeric part of a quantity or percentage is not a decimal."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Malformed number {text!r}")
        self.text = text


class RuntimeQueryError(MetricsError):
    """An invocation of the container runtime failed."""

    def __init__(self, command: Sequence[str], returncode: Optional[int] = None, stderr: str = "") -> None:
        """Describe a failed runtime invocation.

        :param command: Argument vector that was executed.
        :param returncode: Exit status, ``None`` when the process never ran or was killed.
        :param stderr: Captured standard error, already decoded.
        """
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = self.stderr or "no output"
        super().__init__(f"{' '.join(self.command)} failed (exit={returncode}): {detail}")


class StatsPayloadError(MetricsError):
    """The runtime answered, but its stats output could not be decoded."""


class EnumerationFailed(MetricsError):
    """Listing running containers failed; a fleet collection cannot proceed."""


class StatsQueryFailed(MetricsError):
    """The stats query for a single container failed or returned garbage."""

    def __init__(self, identifier: str, reason: str = "") -> None:
        message = f"Stats query failed for container {identifier}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.identifier = identifier


class NameResolutionFailed(MetricsError):
    """Looking up a container's display name failed."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Could not resolve name of container {identifier}")
        self.identifier = identifier


class CollectionFailed(MetricsError):
    """At least one container of a batch failed, so the whole batch failed."""

    def __init__(self, failures: int, total: int) -> None:
        super().__init__(f"Failed to collect metrics ({failures} of {total} containers failed)")
        self.failures = failures
        self.total = total
