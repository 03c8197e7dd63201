"""
In-memory repository implementations.
Used for prototyping and testing.
Production swaps the key-value store for the JSON file store and the
channel repository for a metadata API client.
"""
import time
from typing import Optional

from app.core.cache import CacheInterface, InMemoryCache
from app.core.exceptions import ChannelFetchError
from app.models.schemas import CandidateVideo, ChannelVideoList


class InMemoryKeyValueStore:
    """
    In-memory implementation of KeyValueStore.
    Values live for the lifetime of the process.
    """

    def __init__(self, cache: Optional[CacheInterface[str]] = None) -> None:
        self._cache = cache or InMemoryCache[str]()

    def get_item(self, key: str) -> Optional[str]:
        return self._cache.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._cache.set(key, value)

    def remove_item(self, key: str) -> None:
        self._cache.delete(key)


class InMemoryChannelVideoRepository:
    """
    In-memory implementation of ChannelVideoFetcher.
    Simulates the video metadata API with seeded channels.
    """

    def __init__(
        self,
        cache: Optional[CacheInterface[ChannelVideoList]] = None,
        seed_mock_data: bool = True,
    ) -> None:
        self._cache = cache or InMemoryCache[ChannelVideoList]()
        if seed_mock_data:
            self._initialize_mock_data()

    def _initialize_mock_data(self) -> None:
        """Load mock channels for local development."""
        now = int(time.time())
        hour = 3600

        self.put_channel(ChannelVideoList(
            channel_id="UC_cooking",
            channel_name="Weeknight Kitchen",
            videos=[
                CandidateVideo(
                    video_id="ck1",
                    title="15 Minute Ramen",
                    description="Fast noodles for busy nights",
                    author="Weeknight Kitchen",
                    author_id="UC_cooking",
                    length_seconds=612,
                    published=now - 2 * hour,
                ),
                CandidateVideo(
                    video_id="ck2",
                    title="Knife Skills 101",
                    description="Dice, mince and julienne",
                    author="Weeknight Kitchen",
                    author_id="UC_cooking",
                    length_seconds=905,
                    published=now - 26 * hour,
                ),
                CandidateVideo(
                    video_id="ck3",
                    title="One Pan Pasta #shorts",
                    author="Weeknight Kitchen",
                    author_id="UC_cooking",
                    length_seconds=45,
                    published=now - 50 * hour,
                ),
            ],
        ))
        self.put_channel(ChannelVideoList(
            channel_id="UC_synthwave",
            channel_name="Synthwave - Topic",
            videos=[
                CandidateVideo(
                    video_id="sw1",
                    title="Midnight Drive",
                    author="Synthwave - Topic",
                    author_id="UC_synthwave",
                    length_seconds=244,
                    published=now - 5 * hour,
                ),
                CandidateVideo(
                    video_id="sw2",
                    title="Neon Skyline",
                    author="Synthwave - Topic",
                    author_id="UC_synthwave",
                    length_seconds=301,
                    published=now - 30 * hour,
                ),
            ],
        ))

    def put_channel(self, channel: ChannelVideoList) -> None:
        """Register or replace a channel's videos."""
        self._cache.set(channel.channel_id, channel)

    async def get_channel_videos(self, channel_id: str) -> ChannelVideoList:
        channel = self._cache.get(channel_id)
        if channel is None:
            raise ChannelFetchError(channel_id, "channel not found")
        return channel
