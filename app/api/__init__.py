"""API package - FastAPI routes and dependencies."""
from .dependencies import get_content_filter_service, get_subscription_service
from .routers import filter_router, health_router, subscriptions_router

__all__ = [
    "filter_router",
    "get_content_filter_service",
    "get_subscription_service",
    "health_router",
    "subscriptions_router",
]
