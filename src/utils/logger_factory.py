"""Factories for application loggers and helper utilities."""

import traceback
from typing import Optional

from bot.discord import DiscordHandler
from utils.logger.config import LogLevel, LoggerConfig
from utils.logger.handlers.error_file import ErrorFileHandler
from utils.logger.handlers.rotating_file import RotatingFileHandler
from utils.logger.logger import Logger


class EnhancedLoggerFactory:
    """Convenience constructors for configured application loggers."""

    @staticmethod
    def create_application_logger(name: str = "docker_metrics",
                                  enable_stdout: bool = False,
                                  log_level: LogLevel = LogLevel.INFO,
                                  base_dir: str = "logs",
                                  config_prefix: Optional[str] = None,
                                  discord_webhook: Optional[str] = None) -> Logger:
        """Create the main application logger with rotating file handlers.

        :param name: Logger name used in records.
        :param enable_stdout: Whether to emit log lines to stdout.
        :param log_level: Minimum log level captured by the logger.
        :param base_dir: Directory holding the log files.
        :param config_prefix: Subdirectory for the files, defaults to ``name``.
        :param discord_webhook: When set, error batches are also posted there.
        :return: Configured :class:`Logger` instance.
        """
        config = LoggerConfig(
            base_level=log_level,
            do_stdout=enable_stdout,
        )

        prefix = config_prefix if config_prefix is not None else name

        handlers = [
            RotatingFileHandler(base_dir=base_dir, filename_prefix=prefix, rotation="daily"),
            ErrorFileHandler(base_dir=base_dir, filename_prefix=prefix, rotation="daily"),
        ]
        if discord_webhook:
            handlers.append(DiscordHandler(webhook_url=discord_webhook))

        return Logger(config=config, name=name, handlers=handlers)


def log_exception(logger: Logger, exc: Exception, context: str = ""):
    """Log an exception with traceback using the provided logger.

    :param logger: Logger instance used for reporting the failure.
    :param exc: Exception that should be logged.
    :param context: Optional textual context describing the failure.
    """
    tb_str = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    error_msg = f"EXCEPTION in {context}: {type(exc).__name__}: {str(exc)}\n{tb_str}"
    logger.error(error_msg)
