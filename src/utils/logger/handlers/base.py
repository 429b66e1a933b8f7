"""Base class every log handler plugged into :class:`Logger` extends."""

from abc import ABC, abstractmethod
from typing import List, Optional

from utils.logger.config import LogEvent, LoggerConfig


class BaseLogHandler(ABC):
    """Receives flushed batches of :class:`LogEvent` from the logger."""

    def __init__(self) -> None:
        self._primary_config: Optional[LoggerConfig] = None

    def add_primary_config(self, config: LoggerConfig) -> None:
        """Receive the owning logger's configuration (format, level)."""
        self._primary_config = config

    @abstractmethod
    async def push(self, records: List[LogEvent]) -> None:
        """Persist or forward a batch of rendered events."""
        raise NotImplementedError
