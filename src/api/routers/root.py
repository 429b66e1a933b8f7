"""Root endpoint announcing the API version."""

from fastapi import APIRouter, Request

from api.schemas import APIResponse


router = APIRouter()


@router.get("/", tags=["root"], response_model=APIResponse)
async def root(request: Request) -> APIResponse:
    return APIResponse.success(f"Docker Metrics API v{request.app.version}")
