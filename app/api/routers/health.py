"""
Health check router for observability.
"""
from fastapi import APIRouter

from app.api.dependencies import get_fetch_circuit_breakers, get_subscription_store
from app.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health", summary="Health Check")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "healthy"}


@router.get("/health/ready", summary="Readiness Check")
async def readiness_check() -> dict:
    """
    Readiness check for Kubernetes.
    Returns per-channel circuit breaker status and storage mode.
    """
    breakers = get_fetch_circuit_breakers()
    settings = get_settings()

    return {
        "status": "ready",
        "circuit_breakers": {
            "name": breakers.name,
            "tracked": len(breakers),
            "open": breakers.open_keys(),
        },
        "storage": "file" if settings.STORAGE_FILE else "memory",
        "subscriptions": len(get_subscription_store().list()),
    }
