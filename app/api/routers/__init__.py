"""API routers package."""
from .filter import router as filter_router
from .health import router as health_router
from .subscriptions import router as subscriptions_router

__all__ = ["filter_router", "health_router", "subscriptions_router"]
