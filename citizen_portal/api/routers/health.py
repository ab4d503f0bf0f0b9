"""Liveness check."""
from fastapi import APIRouter

from citizen_portal import __version__
from citizen_portal.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)
