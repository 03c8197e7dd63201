"""
Dependency injection container.
Creates and wires all application components.
Uses FastAPI's dependency injection system.
"""
import random
from functools import lru_cache

from app.config import get_settings
from app.core.circuit_breaker import CircuitBreakerRegistry
from app.models.interfaces import ChannelVideoFetcher, KeyValueStore
from app.repositories.cached import CachedChannelVideoFetcher
from app.repositories.file import JsonFileKeyValueStore
from app.repositories.memory import InMemoryChannelVideoRepository, InMemoryKeyValueStore
from app.repositories.preferences import StoredFilterPreferenceRepository
from app.repositories.subscriptions import KeyValueSubscriptionStore
from app.services.content_filter import ContentFilterService
from app.services.subscriptions import SubscriptionService


# =============================================================================
# Singleton Instances (Application Lifetime)
# =============================================================================


@lru_cache()
def get_key_value_store() -> KeyValueStore:
    """Get singleton key-value store (file-backed when STORAGE_FILE is set)."""
    settings = get_settings()
    if settings.STORAGE_FILE:
        return JsonFileKeyValueStore(settings.STORAGE_FILE)
    return InMemoryKeyValueStore()


@lru_cache()
def get_preference_repository() -> StoredFilterPreferenceRepository:
    """Get singleton filter preference repository."""
    return StoredFilterPreferenceRepository(get_key_value_store())


@lru_cache()
def get_subscription_store() -> KeyValueSubscriptionStore:
    """Get singleton subscription store."""
    return KeyValueSubscriptionStore(get_key_value_store())


@lru_cache()
def get_channel_video_repository() -> InMemoryChannelVideoRepository:
    """Get singleton channel video source."""
    return InMemoryChannelVideoRepository()


@lru_cache()
def get_channel_video_fetcher() -> ChannelVideoFetcher:
    """Get singleton channel video source, behind the TTL cache when enabled."""
    ttl = get_settings().CHANNEL_CACHE_TTL_SEC
    if ttl > 0:
        return CachedChannelVideoFetcher(get_channel_video_repository(), ttl_seconds=ttl)
    return get_channel_video_repository()


@lru_cache()
def get_fetch_circuit_breakers() -> CircuitBreakerRegistry:
    """Get singleton per-channel circuit breakers for channel video fetches."""
    settings = get_settings()
    return CircuitBreakerRegistry(
        name="channel_videos",
        failure_threshold=settings.CIRCUIT_BREAKER_FAILURE_THRESHOLD,
        recovery_timeout_sec=settings.CIRCUIT_BREAKER_RECOVERY_TIMEOUT_SEC,
    )


@lru_cache()
def get_feed_rng() -> random.Random:
    """Get singleton random source for the feed shuffle."""
    return random.Random(get_settings().FEED_SHUFFLE_SEED)


# =============================================================================
# Request-Scoped Dependencies (Per-Request Lifetime)
# =============================================================================


def get_content_filter_service() -> ContentFilterService:
    """Get content filter service bound to the stored preferences."""
    return ContentFilterService(preference_repo=get_preference_repository())


def get_subscription_service() -> SubscriptionService:
    """Get subscription service with all dependencies wired."""
    return SubscriptionService(
        store=get_subscription_store(),
        fetcher=get_channel_video_fetcher(),
        circuit_breakers=get_fetch_circuit_breakers(),
        rng=get_feed_rng(),
    )


# =============================================================================
# Cleanup Functions
# =============================================================================


def clear_caches() -> None:
    """Clear all cached singleton instances (for testing)."""
    get_key_value_store.cache_clear()
    get_preference_repository.cache_clear()
    get_subscription_store.cache_clear()
    get_channel_video_repository.cache_clear()
    get_channel_video_fetcher.cache_clear()
    get_fetch_circuit_breakers.cache_clear()
    get_feed_rng.cache_clear()
