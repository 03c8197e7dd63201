"""Services package - business logic layer."""
from .content_filter import ContentFilterService, classify
from .interleave import interleave, local_shuffle
from .matching import (
    contains_banned_word,
    is_censored_version,
    is_short_form_content,
    levenshtein_distance,
)
from .subscriptions import SubscriptionService

__all__ = [
    "ContentFilterService",
    "SubscriptionService",
    "classify",
    "contains_banned_word",
    "interleave",
    "is_censored_version",
    "is_short_form_content",
    "levenshtein_distance",
    "local_shuffle",
]
