"""Container metrics endpoints: the whole fleet, or one container by name or id."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import metrics_service_dependency
from api.schemas import APIResponse
from metrics.errors import CollectionFailed, EnumerationFailed, StatsQueryFailed
from metrics.service import MetricsService
from utils.logger_factory import log_exception


router = APIRouter()

SUCCESS_MESSAGE = "Container metrics retrieved successfully"
PARTIAL_MESSAGE = "Container metrics partially retrieved"


def _error(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=APIResponse.error(message).model_dump(mode="json"),
    )


@router.get("", tags=["metrics"], response_model=APIResponse)
async def fleet_metrics(service: MetricsService = Depends(metrics_service_dependency)):
    try:
        batch = await service.fleet_metrics()
    except EnumerationFailed as exc:
        log_exception(service.logger, exc, context="fleet_metrics:list")
        return _error("Failed to retrieve container list")
    except CollectionFailed as exc:
        log_exception(service.logger, exc, context="fleet_metrics:collect")
        return _error("Failed to retrieve container metrics")

    message = SUCCESS_MESSAGE if batch.succeeded else PARTIAL_MESSAGE
    return APIResponse.success(message, metrics=batch.metrics, failed=batch.failed)


@router.get("/{container}", tags=["metrics"], response_model=APIResponse)
async def container_metrics(container: str, service: MetricsService = Depends(metrics_service_dependency)):
    try:
        metrics = await service.container_metrics(container)
    except StatsQueryFailed as exc:
        log_exception(service.logger, exc, context=f"container_metrics:{container}")
        return _error(f"Failed to retrieve metrics for container '{container}'")

    return APIResponse.success(SUCCESS_MESSAGE, metrics=[metrics])
