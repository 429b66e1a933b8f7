"""Health-check endpoint returning the current metrics service status."""

from fastapi import APIRouter, Depends

from api.dependencies import metrics_service_dependency
from metrics.service import MetricsService


router = APIRouter()


@router.get("/", tags=["health"])
async def healthcheck(service: MetricsService = Depends(metrics_service_dependency)) -> dict:
    return {
        "ok": True,
        "service": service.status(),
    }
