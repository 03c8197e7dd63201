"""
Subscription service - subscription management and the subscription feed.
Fetches every subscribed channel concurrently, tolerates individual channel
failures and interleaves the results into one feed.
"""
import asyncio
import logging
import random
import time
from typing import List, Optional

from app.core.circuit_breaker import CircuitBreakerRegistry
from app.core.exceptions import ValidationError
from app.models.interfaces import ChannelVideoFetcher, SubscriptionStore
from app.models.schemas import (
    ChannelVideoList,
    FeedVideo,
    SubscribedChannel,
    SubscribeRequest,
)
from app.services.interleave import interleave

logger = logging.getLogger(__name__)

DEFAULT_FEED_LIMIT = 30


class SubscriptionService:
    """
    Subscription orchestration.

    Responsibilities:
    - Subscribe / unsubscribe through the injected store
    - Fan out channel fetches (all-settled), each behind its own circuit breaker
    - Merge results with the feed interleaver
    """

    def __init__(
            self,
            store: SubscriptionStore,
            fetcher: ChannelVideoFetcher,
            circuit_breakers: Optional[CircuitBreakerRegistry] = None,
            rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize subscription service with dependencies.

        Args:
            store: Subscription store (read, mutate, change listeners)
            fetcher: Source of per-channel video lists
            circuit_breakers: Optional per-channel circuit breakers for fetches
            rng: Optional random source for the feed shuffle
        """
        self._store = store
        self._fetcher = fetcher
        self._circuit_breakers = circuit_breakers or CircuitBreakerRegistry(
            name="channel_videos",
            failure_threshold=5,
            recovery_timeout_sec=30,
        )
        self._rng = rng

    def subscribe(self, request: SubscribeRequest) -> bool:
        """Subscribe to a channel. Returns False if already subscribed."""
        channel_id = request.author_id.strip()
        if not channel_id:
            raise ValidationError("Channel id must not be blank")

        thumbnail = request.author_thumbnails[0].url if request.author_thumbnails else None
        added = self._store.add(
            SubscribedChannel(
                id=channel_id,
                name=request.author,
                thumbnail=thumbnail,
                subscribed_at=int(time.time() * 1000),
            )
        )
        if added:
            logger.info(f"Subscribed to channel {channel_id}", extra={"channel_id": channel_id})
        return added

    def unsubscribe(self, channel_id: str) -> bool:
        """Remove a channel. Returns False if it was not subscribed."""
        removed = self._store.remove(channel_id)
        if removed:
            self._circuit_breakers.discard(channel_id)
            logger.info(f"Unsubscribed from channel {channel_id}", extra={"channel_id": channel_id})
        return removed

    def is_subscribed(self, channel_id: str) -> bool:
        return self._store.contains(channel_id)

    def get_subscriptions(self) -> List[SubscribedChannel]:
        return self._store.list()

    async def get_subscription_feed(self, limit: int = DEFAULT_FEED_LIMIT) -> List[FeedVideo]:
        """
        Latest videos from all subscribed channels, balanced across channels.

        Never raises: failed channels contribute nothing, and an unexpected
        error while aggregating yields an empty feed.
        """
        subscriptions = self._store.list()
        if not subscriptions:
            return []

        start_time = time.time()
        try:
            results = await asyncio.gather(
                *(self._fetch_channel(sub.id) for sub in subscriptions),
                return_exceptions=True,
            )

            channel_lists = []
            failed = 0
            for sub, result in zip(subscriptions, results):
                if isinstance(result, BaseException):
                    failed += 1
                    logger.warning(
                        f"Channel fetch failed, skipping: channel={sub.id}, error={result}",
                        extra={"channel_id": sub.id},
                    )
                    videos = []
                else:
                    videos = result.videos
                channel_lists.append(
                    ChannelVideoList(channel_id=sub.id, channel_name=sub.name, videos=videos)
                )

            feed = interleave(channel_lists, limit, rng=self._rng)

        except Exception:
            logger.exception("Error building subscription feed")
            return []

        elapsed_ms = (time.time() - start_time) * 1000
        logger.info(
            f"Subscription feed served: channels={len(subscriptions)}, "
            f"failed={failed}, items={len(feed)}, elapsed_ms={elapsed_ms:.2f}"
        )
        return feed

    async def _fetch_channel(self, channel_id: str) -> ChannelVideoList:
        return await self._circuit_breakers.get(channel_id).call_async(
            lambda: self._fetcher.get_channel_videos(channel_id)
        )
