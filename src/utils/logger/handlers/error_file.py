"""Handler that isolates error-level logs into dedicated files."""

from typing import List

from utils.logger.config import LogEvent, LogLevel
from utils.logger.handlers.rotating_file import RotatingFileHandler


class ErrorFileHandler(RotatingFileHandler):
    """Persist only error and higher severity messages to ``<window>.error.log``."""

    suffix = ".error.log"

    def select(self, records: List[LogEvent]) -> List[str]:
        return [ev.text for ev in records if ev.level >= LogLevel.ERROR]
