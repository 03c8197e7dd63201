"""
Subscription store.
Explicit, injectable replacement for a process-wide subscription list:
callers read snapshots, mutate through add/remove and register listeners
to hear about changes.
"""
import json
import logging
from threading import Lock
from typing import Callable, List

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from app.models.interfaces import KeyValueStore, SubscriptionListener
from app.models.schemas import SubscribedChannel

logger = logging.getLogger(__name__)

SUBSCRIPTIONS_KEY = "subscriptions"

_subscription_list = TypeAdapter(List[SubscribedChannel])


class KeyValueSubscriptionStore:
    """SubscriptionStore persisted as a JSON list in a KeyValueStore."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self._lock = Lock()
        self._listeners: List[SubscriptionListener] = []
        self._subscriptions = self._load()

    def _load(self) -> List[SubscribedChannel]:
        raw = self._store.get_item(SUBSCRIPTIONS_KEY)
        if raw is None:
            return []
        try:
            return _subscription_list.validate_json(raw)
        except PydanticValidationError as e:
            logger.error(f"Failed to parse subscriptions, starting empty: {e}")
            return []

    def _save(self, subscriptions: List[SubscribedChannel]) -> None:
        self._store.set_item(
            SUBSCRIPTIONS_KEY,
            json.dumps([s.model_dump(by_alias=True) for s in subscriptions]),
        )

    def _notify(self, snapshot: List[SubscribedChannel]) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Subscription listener failed")

    def list(self) -> List[SubscribedChannel]:
        with self._lock:
            return list(self._subscriptions)

    def contains(self, channel_id: str) -> bool:
        with self._lock:
            return any(sub.id == channel_id for sub in self._subscriptions)

    def add(self, channel: SubscribedChannel) -> bool:
        with self._lock:
            if any(sub.id == channel.id for sub in self._subscriptions):
                return False
            updated = self._subscriptions + [channel]
            self._save(updated)
            self._subscriptions = updated
            snapshot = list(updated)
        self._notify(snapshot)
        return True

    def remove(self, channel_id: str) -> bool:
        with self._lock:
            remaining = [sub for sub in self._subscriptions if sub.id != channel_id]
            if len(remaining) == len(self._subscriptions):
                return False
            self._save(remaining)
            self._subscriptions = remaining
            snapshot = list(remaining)
        self._notify(snapshot)
        return True

    def on_change(self, listener: SubscriptionListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe
