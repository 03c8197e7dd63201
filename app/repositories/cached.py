"""
Caching decorator for channel video sources.
Serves recently fetched channel lists from a TTL cache; failures are not cached.
"""
import logging
from typing import Optional

from app.core.cache import CacheInterface, InMemoryCache
from app.models.interfaces import ChannelVideoFetcher
from app.models.schemas import ChannelVideoList

logger = logging.getLogger(__name__)


class CachedChannelVideoFetcher:
    """ChannelVideoFetcher that remembers each channel's videos for `ttl_seconds`."""

    def __init__(
        self,
        fetcher: ChannelVideoFetcher,
        ttl_seconds: float,
        cache: Optional[CacheInterface[ChannelVideoList]] = None,
    ) -> None:
        self._fetcher = fetcher
        self._ttl_seconds = ttl_seconds
        self._cache = cache or InMemoryCache[ChannelVideoList](default_ttl_seconds=ttl_seconds)

    async def get_channel_videos(self, channel_id: str) -> ChannelVideoList:
        cached = self._cache.get(channel_id)
        if cached is not None:
            logger.debug(f"Channel cache hit: {channel_id}", extra={"channel_id": channel_id})
            return cached

        channel = await self._fetcher.get_channel_videos(channel_id)
        self._cache.set(channel_id, channel, ttl_seconds=self._ttl_seconds)
        return channel

    def invalidate(self, channel_id: str) -> None:
        """Drop a channel so the next request fetches it again."""
        self._cache.delete(channel_id)
