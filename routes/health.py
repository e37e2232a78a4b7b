"""
Health check routes.
"""
from fastapi import APIRouter

from config import Config
from models.api_models import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
@router.get("/healthz", response_model=HealthResponse)
async def health():
    """Liveness check."""
    return {"status": "ok", "service": Config.SERVICE_NAME}
