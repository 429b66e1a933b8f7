"""Asynchronous buffered logger that feeds custom handlers."""

import asyncio
import sys
import traceback
from typing import Optional

from colorama import Fore, Style, init as colorama_init

from utils.logger.config import LogEvent, LogLevel, LoggerConfig
from utils.logger.handlers.base import BaseLogHandler
from utils.misc import time_iso8601, time_s

colorama_init(autoreset=True)


LOG_COLORS = {
    LogLevel.DEBUG: Fore.LIGHTBLACK_EX,
    LogLevel.INFO: Fore.GREEN,
    LogLevel.WARNING: Fore.YELLOW,
    LogLevel.ERROR: Fore.RED + Style.BRIGHT,
    LogLevel.CRITICAL: Fore.RED + Style.BRIGHT,
}


class Logger:
    """Asynchronous logger that buffers messages before dispatching them.

    Log calls are synchronous and only enqueue; a background ingestor task
    started by :meth:`start` renders to stdout and flushes batches to the
    handlers. Messages logged before :meth:`start` wait in the queue.
    """

    def __init__(
        self,
        config: LoggerConfig = None,
        name: str = "",
        handlers: Optional[list[BaseLogHandler]] = None,
    ):
        """Initialise the logger with optional configuration and handlers.

        :param config: Configuration settings controlling buffering and output.
        :param name: Name used in emitted log records.
        :param handlers: Sequence of :class:`BaseLogHandler` instances.
        :raises TypeError: If a provided handler does not extend :class:`BaseLogHandler`.
        """
        self._config = config if config is not None else LoggerConfig()
        self._name = name
        self._handlers = handlers if handlers is not None else []

        for handler in self._handlers:
            if not isinstance(handler, BaseLogHandler):
                raise TypeError(f"Invalid handler; expected BaseLogHandler but got {type(handler).__name__}")
            handler.add_primary_config(self._config)

        self._buffer: list[LogEvent] = []
        self._buffer_start_time = time_s()

        self._msg_queue: asyncio.Queue = asyncio.Queue()
        self._is_running = True
        self._log_ingestor_task: Optional[asyncio.Task] = None

    async def _flush_buffer(self) -> None:
        """Flush the buffered log events to all registered handlers."""
        batch = list(self._buffer)
        for handler in self._handlers:
            await handler.push(batch)
        self._buffer.clear()
        self._buffer_start_time = time_s()

    async def _log_ingestor(self) -> None:
        """Consume queued log events and dispatch them to handlers."""
        while self._is_running or not self._msg_queue.empty():
            try:
                event: LogEvent = await self._msg_queue.get()
            except asyncio.CancelledError:
                break

            try:
                self._buffer.append(event)

                if self._config.do_stdout:
                    color = LOG_COLORS.get(event.level, "")
                    print(color + event.text + Style.RESET_ALL)

                # WARNING and above reach the handlers immediately.
                if event.level >= LogLevel.WARNING:
                    await self._flush_buffer()
                else:
                    is_buffer_full = len(self._buffer) >= self._config.buffer_capacity
                    is_buffer_expired = (time_s() - self._buffer_start_time) >= self._config.buffer_timeout
                    if is_buffer_full or is_buffer_expired:
                        await self._flush_buffer()
            except Exception:
                traceback.print_exc(file=sys.stderr)
            finally:
                self._msg_queue.task_done()

    def _process_log(self, level: LogLevel, msg: str) -> None:
        """Render ``msg`` and put it on the queue.

        :param level: Severity level associated with the message.
        :param msg: Log message text.
        """
        try:
            log_msg = self._config.str_format % {
                "asctime": time_iso8601(),
                "name": self._name,
                "levelname": level.name,
                "message": msg,
            }
            self._msg_queue.put_nowait(LogEvent(text=log_msg, level=level))
        except Exception:
            traceback.print_exc(file=sys.stderr)

    async def _drain(self, timeout: float | None = None) -> None:
        """Wait for the queue to empty, respecting an optional timeout.

        :raises asyncio.TimeoutError: If the drain does not complete in time.
        """
        if timeout is None:
            await self._msg_queue.join()
        else:
            await asyncio.wait_for(self._msg_queue.join(), timeout=timeout)

    def _log(self, level: LogLevel, msg: str) -> None:
        if self._is_running and self._config.base_level <= level:
            self._process_log(level, msg)

    def debug(self, msg: str) -> None:
        self._log(LogLevel.DEBUG, msg)

    def info(self, msg: str) -> None:
        self._log(LogLevel.INFO, msg)

    def warning(self, msg: str) -> None:
        self._log(LogLevel.WARNING, msg)

    def error(self, msg: str) -> None:
        self._log(LogLevel.ERROR, msg)

    def critical(self, msg: str) -> None:
        self._log(LogLevel.CRITICAL, msg)

    async def start(self) -> None:
        """Start the ingest task and the handlers that need startup."""
        self._is_running = True
        # Re-create the queue inside the running loop, keeping early messages.
        pending = []
        while not self._msg_queue.empty():
            pending.append(self._msg_queue.get_nowait())
        self._msg_queue = asyncio.Queue()
        for event in pending:
            self._msg_queue.put_nowait(event)

        for handler in self._handlers:
            if hasattr(handler, "start"):
                await handler.start()
        self._log_ingestor_task = asyncio.create_task(self._log_ingestor())

    async def shutdown(self) -> None:
        """Flush remaining events and stop the logger and handlers."""
        self._is_running = False
        await asyncio.sleep(0)

        if self._log_ingestor_task is not None:
            try:
                await self._drain(timeout=2.0)
            except asyncio.TimeoutError:
                print("[Logger] drain timeout; forcing shutdown", file=sys.stderr)

        if self._buffer:
            await self._flush_buffer()

        if self._log_ingestor_task is not None:
            self._log_ingestor_task.cancel()
            try:
                await self._log_ingestor_task
            except asyncio.CancelledError:
                pass
            self._log_ingestor_task = None

        for handler in self._handlers:
            if hasattr(handler, "shutdown"):
                try:
                    await handler.shutdown()
                except Exception:
                    traceback.print_exc(file=sys.stderr)
