"""Liveness endpoint."""

from fastapi import APIRouter

from planguard.config import SERVICE_NAME
from planguard_api.models.common import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    summary="Liveness probe",
    response_model=HealthResponse,
)
async def health() -> HealthResponse:
    """Always answers ok; no dependency is checked."""
    return HealthResponse(status="ok", service=SERVICE_NAME)
