"""Shared FastAPI dependencies exposing the metrics service and API settings."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from configs.api_config import ApiConfig
from metrics.service import MetricsService


def get_metrics_service(request: Request) -> MetricsService:
    service = getattr(request.app.state, "metrics_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Metrics service not ready")
    return service


def get_api_config(request: Request) -> ApiConfig:
    return request.app.state.api_config


def metrics_service_dependency(service: MetricsService = Depends(get_metrics_service)) -> MetricsService:
    return service
