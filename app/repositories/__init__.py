"""Repository implementations package."""
from .cached import CachedChannelVideoFetcher
from .file import JsonFileKeyValueStore
from .memory import InMemoryChannelVideoRepository, InMemoryKeyValueStore
from .preferences import StoredFilterPreferenceRepository
from .subscriptions import KeyValueSubscriptionStore

__all__ = [
    "CachedChannelVideoFetcher",
    "InMemoryChannelVideoRepository",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueSubscriptionStore",
    "StoredFilterPreferenceRepository",
]
