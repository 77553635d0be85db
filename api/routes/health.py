"""
Health Check Route

Simple health check endpoint for liveness probes.
"""

from fastapi import APIRouter, Depends

from api.deps import get_runtime_config
from api.models.responses import HealthResponse
from core.config.runtime import RuntimeConfig


router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    config: RuntimeConfig = Depends(get_runtime_config),
) -> HealthResponse:
    """
    Health check endpoint.

    Returns service status and the active hashing and ledger settings.
    """
    return HealthResponse(
        ok=True,
        hash_algorithm=config.hashing.algorithm,
        ledger_backend=config.ledger.backend,
    )


@router.get("/", response_model=HealthResponse)
async def root(
    config: RuntimeConfig = Depends(get_runtime_config),
) -> HealthResponse:
    """
    Root endpoint - same as health check.
    """
    return await health_check(config)
