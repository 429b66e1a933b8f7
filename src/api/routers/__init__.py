"""HTTP router factory wiring root, health, and metrics endpoints."""

from fastapi import APIRouter, Depends

from api.security import require_allowed_ip, require_basic_auth

from . import health, metrics, root


def create_router() -> APIRouter:
    router = APIRouter(dependencies=[Depends(require_allowed_ip), Depends(require_basic_auth)])
    router.include_router(root.router)
    router.include_router(health.router, prefix="/health")
    router.include_router(metrics.router, prefix="/api/metrics")
    return router
