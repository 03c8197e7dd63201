"""
Subscription feed interleaving.
Merges per-channel video lists round-robin so no single channel dominates,
then lightly shuffles neighbouring items.
"""
import logging
import random
from typing import Dict, List, MutableSequence, Optional, Sequence, TypeVar

from app.models.schemas import ChannelVideoList, FeedVideo

logger = logging.getLogger(__name__)

T = TypeVar("T")

MIN_VIDEOS_PER_CHANNEL = 3
MAX_SHUFFLE_OFFSET = 2


def local_shuffle(items: MutableSequence[T], rng: Optional[random.Random] = None) -> None:
    """
    Shuffle in place by swapping each position with one of the (up to) two
    positions before it, scanning from the end.

    This is a bounded local shuffle, not a uniform one: an item moves at
    most two places toward the end, but can drift further toward the front.
    """
    rng = rng or random
    for i in range(len(items) - 1, 0, -1):
        j = max(0, i - rng.randrange(MAX_SHUFFLE_OFFSET + 1))
        if i != j:
            items[i], items[j] = items[j], items[i]


def interleave(
    channel_lists: Sequence[ChannelVideoList],
    limit: int,
    rng: Optional[random.Random] = None,
) -> List[FeedVideo]:
    """
    Build a bounded feed that samples channels fairly.

    Args:
        channel_lists: Newest-first videos per channel, in subscription order
        limit: Maximum number of videos returned
        rng: Random source for the final shuffle (seed it for reproducibility)

    Returns:
        Feed videos tagged with their channel id and name
    """
    if not channel_lists or limit <= 0:
        return []

    per_channel_cap = max(MIN_VIDEOS_PER_CHANNEL, limit // len(channel_lists))

    videos_per_channel: Dict[str, List[FeedVideo]] = {}
    for channel in channel_lists:
        videos_per_channel[channel.channel_id] = [
            FeedVideo.model_validate({
                **video.model_dump(),
                "channel_id": channel.channel_id,
                "channel_name": channel.channel_name,
            })
            for video in channel.videos[:per_channel_cap]
        ]

    feed: List[FeedVideo] = []
    index = 0
    has_more = True
    while has_more and len(feed) < limit:
        has_more = False
        for videos in videos_per_channel.values():
            if index < len(videos):
                feed.append(videos[index])
                has_more = True
                if len(feed) >= limit:
                    break
        index += 1

    local_shuffle(feed, rng)

    logger.debug(
        f"Interleaved {len(videos_per_channel)} channels into {len(feed)} videos "
        f"(cap {per_channel_cap} per channel)"
    )
    return feed
