from __future__ import annotations

import json
from collections.abc import Iterable

from ..errors import PersistenceError
from ..logger import get_logger
from ..metrics import metrics
from ..models import User
from .kv_store import KeyValueStore

_logger = get_logger("persistence")

LOCAL_STORAGE_KEY = "scaid_users"


class PersistenceAdapter:
    """Mirrors the whole user collection into one key-value slot.

    Neither direction raises: failed writes are logged, and reads that find
    nothing usable return an empty list.
    """

    def __init__(self, store: KeyValueStore, key: str = LOCAL_STORAGE_KEY) -> None:
        self._store = store
        self.key = key

    def save(self, users: Iterable[User]) -> None:
        try:
            payload = json.dumps([u.to_dict() for u in users], ensure_ascii=False)
            with metrics.timed("persistence.save"):
                self._store.set_item(self.key, payload)
            metrics.inc("persistence.saves")
        except (PersistenceError, TypeError, ValueError) as e:
            metrics.inc("persistence.save_failures")
            _logger.error("saving users failed: %s", e)

    def load(self) -> list[User]:
        try:
            raw = self._store.get_item(self.key)
        except PersistenceError as e:
            _logger.error("loading users failed: %s", e)
            return []
        if not raw:
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            users = [User.from_dict(item) for item in data]
        except (ValueError, RecursionError) as e:
            metrics.inc("persistence.malformed_loads")
            _logger.warning("stored users malformed, ignoring: %s", e)
            return []
        _logger.debug("loaded %d users from %s", len(users), self.key)
        return users
