"""Levels, events and settings of the buffered application logger."""

from dataclasses import dataclass
from enum import IntEnum


DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


class LogLevel(IntEnum):
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @classmethod
    def from_name(cls, value: str) -> "LogLevel":
        """Map a name such as ``debug`` (any case, padded) onto a level.

        :raises ValueError: If the name is not a known level.
        """
        try:
            return cls[value.strip().upper()]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {value!r}") from exc


@dataclass(frozen=True)
class LogEvent:
    text: str
    level: LogLevel


@dataclass(frozen=True)
class LoggerConfig:
    """How the logger renders and batches events.

    :param base_level: Events below this level are dropped at the call site.
    :param do_stdout: Mirror rendered events to stdout in colour.
    :param str_format: %-style template with ``asctime``, ``levelname``, ``name``, ``message``.
    :param buffer_capacity: Events held before the handlers are flushed.
    :param buffer_timeout: Seconds after which a partial buffer is flushed anyway.
    """

    base_level: LogLevel = LogLevel.INFO
    do_stdout: bool = True
    str_format: str = DEFAULT_FORMAT
    buffer_capacity: int = 100
    buffer_timeout: float = 5.0

    def __post_init__(self) -> None:
        if isinstance(self.buffer_capacity, bool) or not isinstance(self.buffer_capacity, int):
            raise ValueError(f"buffer_capacity must be an int, got {self.buffer_capacity!r}")
        if self.buffer_capacity < 1:
            raise ValueError(f"buffer_capacity must be at least 1, got {self.buffer_capacity}")
        if self.buffer_timeout <= 0:
            raise ValueError(f"buffer_timeout must be positive, got {self.buffer_timeout}")
        if "%(message)s" not in self.str_format:
            raise ValueError("str_format has no %(message)s field")
        object.__setattr__(self, "base_level", LogLevel(self.base_level))
