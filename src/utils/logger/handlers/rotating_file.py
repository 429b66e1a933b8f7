"""Log handler that appends every event to time-rotated files."""

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Literal

from utils.logger.config import LogEvent
from utils.logger.handlers.base import BaseLogHandler


ROTATION_PATTERNS = {
    "daily": "%Y-%m-%d",
    "hourly": "%Y-%m-%d_%H",
}


class RotatingFileHandler(BaseLogHandler):
    """Write buffered log events to ``<base_dir>/<prefix>/<window>.log``."""

    suffix = ".log"

    def __init__(
        self,
        base_dir: str,
        filename_prefix: str = "",
        create: bool = True,
        rotation: Literal["daily", "hourly"] = "daily",
    ) -> None:
        """Initialise the handler with target directory and rotation scheme.

        :param base_dir: Base directory where log files are written.
        :param filename_prefix: Optional subdirectory grouping the files.
        :param create: Whether to create the directory if missing.
        :param rotation: Granularity of the rotating filenames.
        """
        super().__init__()
        self.base_dir = Path(base_dir)
        self.filename_prefix = filename_prefix
        if create:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        self._pattern = ROTATION_PATTERNS[rotation]

    def current_filepath(self) -> Path:
        """Path of the file for the current rotation window."""
        window = datetime.now(timezone.utc).strftime(self._pattern)
        filename = f"{window}{self.suffix}"
        if self.filename_prefix:
            return self.base_dir / self.filename_prefix / filename
        return self.base_dir / filename

    def select(self, records: List[LogEvent]) -> List[str]:
        return [ev.text for ev in records]

    async def push(self, records: List[LogEvent]) -> None:
        """Append the selected records to the current rotation file.

        :param records: Buffered log events awaiting persistence.
        """
        lines = self.select(records)
        if not lines:
            return
        path = self.current_filepath()
        os.makedirs(path.parent, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
            f.flush()
