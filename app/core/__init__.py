"""Core infrastructure components."""
from .cache import CacheInterface, InMemoryCache
from .circuit_breaker import CircuitBreaker, CircuitBreakerRegistry, CircuitState
from .exceptions import (
    AppException,
    ChannelFetchError,
    CircuitBreakerOpenError,
    NotFoundError,
    PreferenceError,
    ValidationError,
)

__all__ = [
    "AppException",
    "CacheInterface",
    "ChannelFetchError",
    "CircuitBreaker",
    "CircuitBreakerOpenError",
    "CircuitBreakerRegistry",
    "CircuitState",
    "InMemoryCache",
    "NotFoundError",
    "PreferenceError",
    "ValidationError",
]
