"""HTTP-facing settings: credentials, access filtering, CORS and logging."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from configs.env_config import Env
from utils.logger.config import LogLevel


@dataclass(frozen=True)
class ApiConfig:
    """Settings for the FastAPI application.

    :param username: Basic-auth user name.
    :param password: Basic-auth password.
    :param allowed_ips: IPs or CIDR ranges allowed to call the API; empty disables the filter.
    :param cors_origin: Value of ``Access-Control-Allow-Origin``.
    :param rate_limit: slowapi limit string such as ``5/second``; ``None`` disables limiting.
    :param log_level: Minimum level of the application logger.
    :param log_dir: Directory for rotating log files.
    :param discord_webhook: Optional webhook receiving error-level log batches.
    """

    username: str = ""
    password: str = ""
    allowed_ips: Tuple[str, ...] = ()
    cors_origin: str = "*"
    rate_limit: Optional[str] = "5/second"
    log_level: LogLevel = LogLevel.INFO
    log_dir: str = "logs"
    discord_webhook: Optional[str] = None

    @property
    def request_logging(self) -> bool:
        """Per-request access logs are only written in debug mode."""
        return self.log_level <= LogLevel.DEBUG

    @classmethod
    def from_env(cls) -> "ApiConfig":
        """Build the configuration from ``DM_*`` environment variables."""
        allowed = tuple(ip.strip() for ip in Env.ALLOWED_IPS.split(",") if ip.strip())
        return cls(
            username=Env.USERNAME or "",
            password=Env.PASSWORD or "",
            allowed_ips=allowed,
            cors_origin=Env.CORS_ORIGIN or "*",
            rate_limit=Env.RATE_LIMIT.strip() or None,
            log_level=LogLevel.from_name(Env.LOG_LEVEL),
            log_dir=Env.LOG_DIR,
            discord_webhook=Env.DISCORD_WEBHOOK or None,
        )
