"""FastAPI application factory that boots the metrics service."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from api.middleware import install_middleware
from api.routers import create_router
from configs.api_config import ApiConfig
from configs.metrics_config import MetricsConfig
from metrics.service import MetricsService
from utils.logger_factory import EnhancedLoggerFactory


API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    service: MetricsService = app.state.metrics_service
    await service.startup()
    try:
        yield
    finally:
        await service.shutdown()


def build_service(api_config: ApiConfig, metrics_config: MetricsConfig) -> MetricsService:
    """Create the production service with a logger configured from ``api_config``."""
    logger = EnhancedLoggerFactory.create_application_logger(
        name="docker_metrics",
        enable_stdout=True,
        log_level=api_config.log_level,
        base_dir=api_config.log_dir,
        discord_webhook=api_config.discord_webhook,
    )
    return MetricsService(config=metrics_config, logger=logger)


def create_app(
    api_config: Optional[ApiConfig] = None,
    metrics_config: Optional[MetricsConfig] = None,
    service: Optional[MetricsService] = None,
) -> FastAPI:
    """Assemble the application.

    :param api_config: HTTP settings, read from the environment when omitted.
    :param metrics_config: Engine settings, read from the environment when omitted.
    :param service: Pre-built service (tests inject one with a fake runtime).
    :return: Configured FastAPI application.
    """
    api_config = api_config or ApiConfig.from_env()
    if service is None:
        service = build_service(api_config, metrics_config or MetricsConfig.from_env())

    app = FastAPI(title="Docker Metrics API", version=API_VERSION, lifespan=lifespan)
    app.state.api_config = api_config
    app.state.metrics_service = service
    install_middleware(app, api_config)
    app.include_router(create_router())
    return app
