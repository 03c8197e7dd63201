"""
Repository interfaces (abstractions).
Using Protocol for structural subtyping (duck typing with type hints).
Services depend on these contracts, never on a concrete store.
"""
from typing import Callable, List, Optional, Protocol, runtime_checkable

from app.models.schemas import ChannelVideoList, FilterPreferences, SubscribedChannel


@runtime_checkable
class KeyValueStore(Protocol):
    """
    String key-value persistence (browser-storage semantics).
    Production: JSON file on disk.
    Testing: In-memory implementation.
    """

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored string, or None when the key is absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


@runtime_checkable
class FilterPreferenceRepository(Protocol):
    """Access to the user's content-filter preferences."""

    def load(self) -> FilterPreferences:
        """
        Load preferences, applying defaults for absent values.

        Raises:
            PreferenceError: If stored data cannot be parsed
        """
        ...

    def save(self, preferences: FilterPreferences) -> None:
        ...


@runtime_checkable
class ChannelVideoFetcher(Protocol):
    """
    Source of per-channel video lists.
    Each call may fail independently of the others.
    """

    async def get_channel_videos(self, channel_id: str) -> ChannelVideoList:
        """
        Fetch the latest videos of a channel, newest first.

        Raises:
            ChannelFetchError: If the channel's videos could not be fetched
        """
        ...


SubscriptionListener = Callable[[List[SubscribedChannel]], None]


@runtime_checkable
class SubscriptionStore(Protocol):
    """
    Ordered list of subscribed channels with change notification.
    """

    def list(self) -> List[SubscribedChannel]:
        """Return a snapshot of subscriptions in subscription order."""
        ...

    def contains(self, channel_id: str) -> bool:
        ...

    def add(self, channel: SubscribedChannel) -> bool:
        """Append a channel; False if its id is already present."""
        ...

    def remove(self, channel_id: str) -> bool:
        """Remove a channel; False if it was not subscribed."""
        ...

    def on_change(self, listener: SubscriptionListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        ...
