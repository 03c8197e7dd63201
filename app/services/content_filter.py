"""
Content filter service.
Decides whether a video is hidden from feeds, based on banned channels,
banned words and the short-form policy. Never fails a caller: bad stored
preferences degrade to "not filtered".
"""
import logging
from typing import Iterable, List, Sequence, TypeVar

from app.core.exceptions import PreferenceError
from app.models.interfaces import FilterPreferenceRepository
from app.models.schemas import CandidateVideo, FilterDecision
from app.services.matching import contains_banned_word, is_short_form_content

logger = logging.getLogger(__name__)

TOPIC_SUFFIX = "- Topic"

REASON_CHANNEL_BANNED = "Channel is banned"
REASON_TITLE = "Contains banned word in title"
REASON_DESCRIPTION = "Description contains banned word"
REASON_AUTHOR = "Channel name contains banned word"
REASON_TOPIC_AUTHOR = "Channel name (without Topic suffix) contains banned word"
REASON_SHORT_FORM = "Short form content"

NOT_FILTERED = FilterDecision(filtered=False, reason="")

V = TypeVar("V", bound=CandidateVideo)


def classify(
    video: CandidateVideo,
    banned_words: Sequence[str],
    banned_channel_ids: Iterable[str],
    threshold: int,
    short_form_enabled: bool,
    short_form_threshold: int,
) -> FilterDecision:
    """
    Apply filter rules to a video; the first matching rule gives the reason.

    Order: banned channel, title, description, channel name, channel name
    without its " - Topic" suffix, short form.
    """
    banned_channel_ids = set(banned_channel_ids)
    if banned_channel_ids and video.author_id and video.author_id in banned_channel_ids:
        return FilterDecision(filtered=True, reason=REASON_CHANNEL_BANNED)

    if banned_words:
        if contains_banned_word(video.title, banned_words, threshold):
            return FilterDecision(filtered=True, reason=REASON_TITLE)

        if contains_banned_word(video.description, banned_words, threshold):
            return FilterDecision(filtered=True, reason=REASON_DESCRIPTION)

        if contains_banned_word(video.author, banned_words, threshold):
            return FilterDecision(filtered=True, reason=REASON_AUTHOR)

        if TOPIC_SUFFIX in video.author:
            channel_name = video.author.split(TOPIC_SUFFIX)[0].strip()
            if contains_banned_word(channel_name, banned_words, threshold):
                return FilterDecision(filtered=True, reason=REASON_TOPIC_AUTHOR)

    # Zero length means unknown (e.g. live streams)
    if (
        short_form_enabled
        and video.length_seconds
        and is_short_form_content(video.length_seconds, short_form_threshold)
    ):
        return FilterDecision(filtered=True, reason=REASON_SHORT_FORM)

    return NOT_FILTERED


class ContentFilterService:
    """
    Filters videos using the user's stored preferences.

    Preferences are re-read on every decision so edits apply immediately.
    """

    def __init__(self, preference_repo: FilterPreferenceRepository) -> None:
        self._preference_repo = preference_repo

    def should_filter_video(self, video: CandidateVideo) -> FilterDecision:
        """Return the filter decision for a video; never raises."""
        try:
            preferences = self._preference_repo.load()
            return classify(
                video,
                banned_words=preferences.banned_words,
                banned_channel_ids=preferences.banned_channel_ids,
                threshold=preferences.levenshtein_threshold,
                short_form_enabled=preferences.ban_short_form,
                short_form_threshold=preferences.short_form_threshold,
            )
        except PreferenceError as e:
            logger.error(f"Content filtering skipped, {e.message}")
        except Exception:
            logger.exception("Error in content filtering")

        return NOT_FILTERED

    def filter_videos(self, videos: Sequence[V]) -> List[V]:
        """Return the videos that pass the filter, keeping their order."""
        try:
            preferences = self._preference_repo.load()
        except PreferenceError as e:
            logger.error(f"Content filtering skipped, {e.message}")
            return list(videos)

        kept = []
        for video in videos:
            decision = classify(
                video,
                banned_words=preferences.banned_words,
                banned_channel_ids=preferences.banned_channel_ids,
                threshold=preferences.levenshtein_threshold,
                short_form_enabled=preferences.ban_short_form,
                short_form_threshold=preferences.short_form_threshold,
            )
            if decision.filtered:
                logger.debug(f"Filtered video {video.video_id}: {decision.reason}")
                continue
            kept.append(video)

        removed = len(videos) - len(kept)
        if removed:
            logger.info(f"Content filter removed {removed} of {len(videos)} videos")
        return kept
