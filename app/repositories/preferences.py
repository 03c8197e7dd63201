"""
Filter preferences stored in a key-value store.

Each preference lives under its own key, as strings:
    bannedWords          JSON list of strings
    bannedChannels       JSON list of {"id", "name"} objects
    levenshteinThreshold integer
    banShortForm         "true" / "false"
    shortFormThreshold   integer (seconds)
"""
import json
import logging
from typing import Any, List

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import PreferenceError
from app.models.interfaces import KeyValueStore
from app.models.schemas import BannedChannel, FilterPreferences

logger = logging.getLogger(__name__)

BANNED_WORDS_KEY = "bannedWords"
BANNED_CHANNELS_KEY = "bannedChannels"
LEVENSHTEIN_THRESHOLD_KEY = "levenshteinThreshold"
BAN_SHORT_FORM_KEY = "banShortForm"
SHORT_FORM_THRESHOLD_KEY = "shortFormThreshold"

DEFAULT_LEVENSHTEIN_THRESHOLD = 1
DEFAULT_SHORT_FORM_THRESHOLD = 60


class StoredFilterPreferenceRepository:
    """FilterPreferenceRepository backed by a KeyValueStore."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def load(self) -> FilterPreferences:
        """
        Read all filter preferences.

        Absent keys take their defaults. Unparsable integers fall back to the
        default with a warning.

        Raises:
            PreferenceError: If a list-valued key does not hold valid JSON
        """
        banned_words = self._read_list(BANNED_WORDS_KEY)
        banned_channels = self._read_list(BANNED_CHANNELS_KEY)

        try:
            return FilterPreferences(
                banned_words=[str(word) for word in banned_words],
                banned_channels=[BannedChannel.model_validate(c) for c in banned_channels],
                levenshtein_threshold=self._read_int(
                    LEVENSHTEIN_THRESHOLD_KEY, DEFAULT_LEVENSHTEIN_THRESHOLD
                ),
                ban_short_form=self._store.get_item(BAN_SHORT_FORM_KEY) == "true",
                short_form_threshold=self._read_int(
                    SHORT_FORM_THRESHOLD_KEY, DEFAULT_SHORT_FORM_THRESHOLD
                ),
            )
        except PydanticValidationError as e:
            raise PreferenceError(BANNED_CHANNELS_KEY, str(e)) from e

    def save(self, preferences: FilterPreferences) -> None:
        self._store.set_item(BANNED_WORDS_KEY, json.dumps(preferences.banned_words))
        self._store.set_item(
            BANNED_CHANNELS_KEY,
            json.dumps([channel.model_dump() for channel in preferences.banned_channels]),
        )
        self._store.set_item(
            LEVENSHTEIN_THRESHOLD_KEY, str(preferences.levenshtein_threshold)
        )
        self._store.set_item(
            BAN_SHORT_FORM_KEY, "true" if preferences.ban_short_form else "false"
        )
        self._store.set_item(
            SHORT_FORM_THRESHOLD_KEY, str(preferences.short_form_threshold)
        )
        logger.info(
            f"Saved filter preferences: {len(preferences.banned_words)} words, "
            f"{len(preferences.banned_channels)} channels"
        )

    def _read_list(self, key: str) -> List[Any]:
        raw = self._store.get_item(key)
        if raw is None:
            return []
        try:
            value = json.loads(raw)
        except ValueError as e:
            raise PreferenceError(key, f"invalid JSON ({e})") from e
        if not isinstance(value, list):
            raise PreferenceError(key, "expected a JSON list")
        return value

    def _read_int(self, key: str, default: int) -> int:
        raw = self._store.get_item(key)
        if raw is None:
            return default
        try:
            value = int(raw.strip())
        except ValueError:
            logger.warning(f"Ignoring non-integer preference {key}={raw!r}, using {default}")
            return default
        if value < 0:
            logger.warning(f"Ignoring negative preference {key}={value}, using {default}")
            return default
        return value
