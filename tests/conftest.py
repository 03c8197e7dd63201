"""
Pytest configuration and fixtures.
"""
import asyncio
from typing import Dict, List, Optional, Set

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import clear_caches
from app.core.exceptions import ChannelFetchError
from app.main import app
from app.models.schemas import CandidateVideo, ChannelVideoList
from app.repositories.memory import InMemoryKeyValueStore
from app.repositories.preferences import StoredFilterPreferenceRepository
from app.repositories.subscriptions import KeyValueSubscriptionStore


class FixedRng:
    """Random stand-in whose randrange always returns the same offset."""

    def __init__(self, value: int = 0) -> None:
        self.value = value

    def randrange(self, stop: int) -> int:
        return min(self.value, stop - 1)


class FakeChannelFetcher:
    """ChannelVideoFetcher with canned videos, failures and delays."""

    def __init__(
        self,
        videos: Optional[Dict[str, List[CandidateVideo]]] = None,
        failing: Optional[Set[str]] = None,
        delays: Optional[Dict[str, float]] = None,
    ) -> None:
        self.videos = videos or {}
        self.failing = failing or set()
        self.delays = delays or {}
        self.calls: List[str] = []

    async def get_channel_videos(self, channel_id: str) -> ChannelVideoList:
        self.calls.append(channel_id)
        await asyncio.sleep(self.delays.get(channel_id, 0))
        if channel_id in self.failing:
            raise ChannelFetchError(channel_id, "upstream timeout")
        return ChannelVideoList(
            channel_id=channel_id,
            channel_name=f"upstream {channel_id}",
            videos=self.videos.get(channel_id, []),
        )


def make_video(video_id: str, author_id: str = "UC_a", **fields) -> CandidateVideo:
    """Build a CandidateVideo with sensible defaults."""
    fields.setdefault("title", f"Video {video_id}")
    fields.setdefault("author", f"Channel {author_id}")
    fields.setdefault("length_seconds", 300)
    return CandidateVideo(video_id=video_id, author_id=author_id, **fields)


@pytest.fixture
def kv_store():
    """Fixture for an empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def preference_repo(kv_store):
    """Fixture for preferences stored in the in-memory store."""
    return StoredFilterPreferenceRepository(kv_store)


@pytest.fixture
def subscription_store(kv_store):
    """Fixture for an empty subscription store."""
    return KeyValueSubscriptionStore(kv_store)


@pytest.fixture
def sample_video():
    """Fixture for a standard video."""
    return make_video(
        "v1",
        author_id="UC_sample",
        title="Weekly Vlog",
        description="What I did this week",
        author="Sample Channel",
        length_seconds=420,
    )


@pytest.fixture
def test_client():
    """
    TestClient fixture with fresh singletons.
    Every test starts with empty in-memory storage and seeded mock channels.
    """
    clear_caches()

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
    clear_caches()
