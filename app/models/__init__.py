"""Models package - domain entities and interfaces."""
from .interfaces import (
    ChannelVideoFetcher,
    FilterPreferenceRepository,
    KeyValueStore,
    SubscriptionListener,
    SubscriptionStore,
)
from .schemas import (
    BannedChannel,
    CandidateVideo,
    ChannelVideoList,
    ErrorResponse,
    FeedVideo,
    FilterDecision,
    FilterPreferences,
    SubscribedChannel,
    SubscribeRequest,
    SubscribeResponse,
    SubscriptionFeedResponse,
    TextCheckRequest,
    TextCheckResponse,
    Thumbnail,
)

__all__ = [
    # Interfaces
    "ChannelVideoFetcher",
    "FilterPreferenceRepository",
    "KeyValueStore",
    "SubscriptionListener",
    "SubscriptionStore",
    # Schemas
    "BannedChannel",
    "CandidateVideo",
    "ChannelVideoList",
    "ErrorResponse",
    "FeedVideo",
    "FilterDecision",
    "FilterPreferences",
    "SubscribedChannel",
    "SubscribeRequest",
    "SubscribeResponse",
    "SubscriptionFeedResponse",
    "TextCheckRequest",
    "TextCheckResponse",
    "Thumbnail",
]
