"""Liveness probe for load balancers and uptime checks."""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Answers 200 while the process is serving; touches neither Supabase nor auth."""
    return HealthResponse(status="healthy", version=get_settings().app_version)
