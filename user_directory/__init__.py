"""User directory core.

This package provides the client-side user directory:
- User collection, filtering and sorting (store)
- Photo validation, compression and upload (photo)
- Startup loading and filter/sort helpers (directory)

Usage:
    from user_directory import UserDirectory
    from user_directory.store import MemoryStore, PersistenceAdapter, UserRepository

    directory = UserDirectory(UserRepository(PersistenceAdapter(MemoryStore())))
    directory.initialize_users()
    directory.filter_only_adults(True)
    directory.sorted_users
"""

from .directory import UserDirectory
from .models import FilterParams, SortParams, User

__all__ = ["FilterParams", "SortParams", "User", "UserDirectory"]
