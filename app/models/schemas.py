"""
Domain models using Pydantic.
Video, channel, preference and filter records for the private feed.
Wire names follow the upstream metadata API (camelCase aliases).
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# Video Records
# =============================================================================


class Thumbnail(BaseModel):
    """Image reference for a video or channel avatar."""

    url: str
    width: int = 0
    height: int = 0
    quality: Optional[str] = None


class CandidateVideo(BaseModel):
    """
    Video record as supplied by the metadata source.
    Immutable input to the content filter.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str = Field(default="", description="Video title")
    description: str = Field(default="", description="Video description")
    author: str = Field(default="", description="Channel display name")
    author_id: str = Field(default="", alias="authorId", description="Channel id")
    length_seconds: int = Field(
        default=0,
        ge=0,
        alias="lengthSeconds",
        description="Duration; 0 when unknown or live",
    )
    video_id: Optional[str] = Field(default=None, alias="videoId")
    published: Optional[int] = Field(default=None, description="Unix timestamp")
    published_text: Optional[str] = Field(default=None, alias="publishedText")
    view_count: Optional[int] = Field(default=None, alias="viewCount")
    video_thumbnails: List[Thumbnail] = Field(
        default_factory=list, alias="videoThumbnails"
    )
    author_thumbnails: List[Thumbnail] = Field(
        default_factory=list, alias="authorThumbnails"
    )


class FeedVideo(CandidateVideo):
    """Video placed in the subscription feed, tagged with its source channel."""

    channel_id: str = Field(..., alias="channelId")
    channel_name: str = Field(..., alias="channelName")


class ChannelVideoList(BaseModel):
    """Newest-first videos of one channel, as returned by a fetcher."""

    model_config = ConfigDict(populate_by_name=True)

    channel_id: str = Field(..., alias="channelId")
    channel_name: str = Field(default="", alias="channelName")
    videos: List[CandidateVideo] = Field(default_factory=list)


# =============================================================================
# Filtering
# =============================================================================


class BannedChannel(BaseModel):
    """Channel hidden from every feed, matched by exact id."""

    id: str = Field(..., min_length=1)
    name: str = ""


class FilterPreferences(BaseModel):
    """User content-filter settings (persisted in the key-value store)."""

    model_config = ConfigDict(populate_by_name=True)

    banned_words: List[str] = Field(default_factory=list, alias="bannedWords")
    banned_channels: List[BannedChannel] = Field(
        default_factory=list, alias="bannedChannels"
    )
    levenshtein_threshold: int = Field(
        default=1,
        ge=0,
        alias="levenshteinThreshold",
        description="Maximum edit distance before adaptive tightening",
    )
    ban_short_form: bool = Field(default=False, alias="banShortForm")
    short_form_threshold: int = Field(
        default=60,
        ge=0,
        alias="shortFormThreshold",
        description="Videos shorter than this many seconds count as short form",
    )

    @property
    def banned_channel_ids(self) -> List[str]:
        return [channel.id for channel in self.banned_channels]


class FilterDecision(BaseModel):
    """Outcome of filtering a single video. `reason` is empty iff not filtered."""

    filtered: bool
    reason: str = ""

    @model_validator(mode="after")
    def _reason_matches_outcome(self) -> "FilterDecision":
        if self.filtered != bool(self.reason):
            raise ValueError("reason must be set exactly when filtered is true")
        return self


# =============================================================================
# Subscriptions
# =============================================================================


class SubscribedChannel(BaseModel):
    """Channel the user follows."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    thumbnail: Optional[str] = None
    subscribed_at: int = Field(..., alias="subscribedAt", description="Epoch ms")


# =============================================================================
# API Models (External)
# =============================================================================


class SubscribeRequest(BaseModel):
    """Channel to subscribe to, in the shape the metadata API returns it."""

    model_config = ConfigDict(populate_by_name=True)

    author_id: str = Field(..., alias="authorId", min_length=1)
    author: str = Field(..., description="Channel display name")
    author_thumbnails: List[Thumbnail] = Field(
        default_factory=list, alias="authorThumbnails"
    )


class SubscribeResponse(BaseModel):
    subscribed: bool = Field(..., description="False if already subscribed")


class TextCheckRequest(BaseModel):
    """Ad-hoc banned word check."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = ""
    banned_words: List[str] = Field(default_factory=list, alias="bannedWords")
    threshold: int = Field(default=1, ge=0)


class TextCheckResponse(BaseModel):
    banned: bool


class SubscriptionFeedResponse(BaseModel):
    """Subscription feed endpoint response."""

    items: List[FeedVideo] = Field(..., description="Interleaved feed videos")
    count: int = Field(..., description="Number of items returned")
    filtered_count: int = Field(
        default=0,
        description="Videos removed by the content filter",
    )


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: dict = Field(..., description="Error details")
