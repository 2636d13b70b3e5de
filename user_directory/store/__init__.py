"""User collection storage: query stages, persistence and the repository.

Usage:
    from user_directory.store import JsonFileStore, PersistenceAdapter, UserRepository

    repo = UserRepository(PersistenceAdapter(JsonFileStore("users.json")))
    repo.usersChanged.connect(on_users_changed)
    repo.set_filter_params(only_adults=True)
    repo.sorted_users
"""

from .kv_store import JsonFileStore, KeyValueStore, MemoryStore
from .persistence import LOCAL_STORAGE_KEY, PersistenceAdapter
from .query import filter_users, sort_users
from .repository import UserRepository

__all__ = [
    "LOCAL_STORAGE_KEY",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "PersistenceAdapter",
    "UserRepository",
    "filter_users",
    "sort_users",
]
