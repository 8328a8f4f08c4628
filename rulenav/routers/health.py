from os import getenv

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from rulenav.models import HealthResponse, ReadyResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(ok=True)


@router.get(
    "/ready",
    response_model=ReadyResponse,
    response_model_exclude_none=True,
    responses={503: {"model": ReadyResponse, "description": "Missing required Regula env vars"}},
)
async def ready():
    if not getenv("REGULA_BASE_URL"):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=ReadyResponse(ready=False, reason="REGULA_BASE_URL missing").model_dump(),
        )
    return ReadyResponse(ready=True)
