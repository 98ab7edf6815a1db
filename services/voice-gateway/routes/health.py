"""Liveness endpoint."""

from fastapi import APIRouter

from response_models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/", response_model=HealthResponse)
def health() -> HealthResponse:
    """Returns ok while the process is serving requests."""
    return HealthResponse(status="ok")
