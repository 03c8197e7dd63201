"""
Unit tests for filter decisions and ContentFilterService.
"""
import logging
from unittest.mock import MagicMock, patch

from app.models.schemas import FilterDecision
from app.services.content_filter import (
    REASON_AUTHOR,
    REASON_CHANNEL_BANNED,
    REASON_DESCRIPTION,
    REASON_SHORT_FORM,
    REASON_TITLE,
    REASON_TOPIC_AUTHOR,
    ContentFilterService,
    classify,
)
from conftest import make_video


def run_classify(video, words=(), channels=(), threshold=1, short_form=False, short_form_threshold=60):
    return classify(
        video,
        banned_words=list(words),
        banned_channel_ids=list(channels),
        threshold=threshold,
        short_form_enabled=short_form,
        short_form_threshold=short_form_threshold,
    )


class TestClassify:
    def test_no_rules_never_filters(self, sample_video):
        videos = [
            sample_video,
            make_video("v2", title="f**k this", description="bad bad bad", length_seconds=5),
            make_video("v3", title="", author="", author_id=""),
        ]
        for video in videos:
            decision = run_classify(video)
            assert decision == FilterDecision(filtered=False, reason="")

    def test_banned_channel_takes_precedence(self):
        video = make_video("v1", author_id="UC_banned", title="spoiler alert")
        decision = run_classify(video, words=["spoiler"], channels=["UC_banned"])
        assert decision.filtered is True
        assert decision.reason == REASON_CHANNEL_BANNED

    def test_channel_match_is_exact(self):
        video = make_video("v1", author_id="UC_banned2")
        assert run_classify(video, channels=["UC_banned"]).filtered is False

    def test_title_checked_before_description(self):
        video = make_video("v1", title="Huge spoiler", description="more spoilers")
        assert run_classify(video, words=["spoiler"]).reason == REASON_TITLE

    def test_description(self):
        video = make_video("v1", title="Episode 4 recap", description="spoiler warning")
        assert run_classify(video, words=["spoiler"]).reason == REASON_DESCRIPTION

    def test_channel_name(self):
        video = make_video("v1", title="Recap", author="Spoilers Central")
        assert run_classify(video, words=["spoiler"]).reason == REASON_AUTHOR

    def test_topic_suffix_is_stripped(self):
        video = make_video("v1", title="Track 1", description="", author="Lofi Girl - Topic")

        def only_bare_name(text, words, threshold):
            return text == "Lofi Girl"

        with patch(
            "app.services.content_filter.contains_banned_word",
            side_effect=only_bare_name,
        ):
            decision = run_classify(video, words=["lofi girl"])

        assert decision.reason == REASON_TOPIC_AUTHOR

    def test_short_form(self):
        video = make_video("v1", length_seconds=45)
        decision = run_classify(video, short_form=True, short_form_threshold=60)
        assert decision == FilterDecision(filtered=True, reason=REASON_SHORT_FORM)

    def test_short_form_disabled(self):
        video = make_video("v1", length_seconds=45)
        assert run_classify(video, short_form=False).filtered is False

    def test_short_form_boundary_and_unknown_length(self):
        at_threshold = make_video("v1", length_seconds=60)
        unknown = make_video("v2", length_seconds=0)
        assert run_classify(at_threshold, short_form=True).filtered is False
        assert run_classify(unknown, short_form=True).filtered is False

    def test_banned_words_before_short_form(self):
        video = make_video("v1", title="spoiler", length_seconds=10)
        decision = run_classify(video, words=["spoiler"], short_form=True)
        assert decision.reason == REASON_TITLE


class TestContentFilterService:
    def test_filters_with_stored_preferences(self, kv_store, preference_repo):
        kv_store.set_item("bannedWords", '["spoiler"]')
        service = ContentFilterService(preference_repo)

        decision = service.should_filter_video(make_video("v1", title="Big spoiler ahead"))

        assert decision.filtered is True
        assert decision.reason == REASON_TITLE

    def test_banned_channel_from_store(self, kv_store, preference_repo):
        kv_store.set_item("bannedChannels", '[{"id": "UC_x", "name": "X"}]')
        service = ContentFilterService(preference_repo)

        decision = service.should_filter_video(make_video("v1", author_id="UC_x"))

        assert decision.reason == REASON_CHANNEL_BANNED

    def test_short_form_from_store(self, kv_store, preference_repo):
        kv_store.set_item("banShortForm", "true")
        kv_store.set_item("shortFormThreshold", "120")
        service = ContentFilterService(preference_repo)

        assert service.should_filter_video(make_video("v1", length_seconds=90)).filtered is True
        assert service.should_filter_video(make_video("v2", length_seconds=150)).filtered is False

    def test_malformed_preferences_do_not_filter(self, kv_store, preference_repo, caplog):
        kv_store.set_item("bannedWords", "not json")
        service = ContentFilterService(preference_repo)

        with caplog.at_level(logging.ERROR):
            decision = service.should_filter_video(make_video("v1", title="anything"))

        assert decision == FilterDecision(filtered=False, reason="")
        assert "Content filtering skipped" in caplog.text

    def test_unexpected_error_does_not_filter(self):
        repo = MagicMock()
        repo.load.side_effect = RuntimeError("disk on fire")
        service = ContentFilterService(repo)

        decision = service.should_filter_video(make_video("v1"))

        assert decision.filtered is False
        assert decision.reason == ""

    def test_filter_videos_keeps_order(self, kv_store, preference_repo):
        kv_store.set_item("bannedWords", '["spoiler"]')
        service = ContentFilterService(preference_repo)
        videos = [
            make_video("v1", title="Trailer"),
            make_video("v2", title="Spoiler review"),
            make_video("v3", title="Behind the scenes"),
        ]

        kept = service.filter_videos(videos)

        assert [v.video_id for v in kept] == ["v1", "v3"]

    def test_filter_videos_malformed_keeps_everything(self, kv_store, preference_repo):
        kv_store.set_item("bannedChannels", "{broken")
        service = ContentFilterService(preference_repo)
        videos = [make_video("v1"), make_video("v2")]

        assert service.filter_videos(videos) == videos
