from __future__ import annotations

from dataclasses import replace
from typing import Any, get_args

from PySide6.QtCore import QObject, Signal

from ..logger import get_logger
from ..metrics import metrics
from ..models import FilterParams, SortDirection, SortField, SortParams, User, UserId
from .persistence import PersistenceAdapter
from .query import filter_users, sort_users

_logger = get_logger("repository")

_SORT_FIELDS = set(get_args(SortField))
_SORT_DIRECTIONS = set(get_args(SortDirection))


class UserRepository(QObject):
    """Owns the user collection and the current filter/sort parameters.

    `filtered_users` and `sorted_users` are derived on read and cached until
    the collection or the relevant parameters change. Every collection
    mutation is mirrored to the persistence adapter in full; parameters are
    never persisted.

    The User objects handed out are shared with the repository and must be
    treated as read-only; change them through the mutation methods.
    """

    usersChanged = Signal()
    filterParamsChanged = Signal()
    sortParamsChanged = Signal()

    def __init__(self, persistence: PersistenceAdapter | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._persistence = persistence
        self._users: list[User] = []
        self._filter_params = FilterParams()
        self._sort_params = SortParams()

        self._users_version = 0
        self._filter_version = 0
        self._sort_version = 0
        self._filtered_cache: tuple[tuple[int, int], list[User]] | None = None
        self._sorted_cache: tuple[tuple[int, int, int], list[User]] | None = None

    # ---- state -----------------------------------------------------------
    @property
    def users(self) -> list[User]:
        return list(self._users)

    @property
    def filter_params(self) -> FilterParams:
        return self._filter_params

    @property
    def sort_params(self) -> SortParams:
        return self._sort_params

    def __len__(self) -> int:
        return len(self._users)

    # ---- derived views ---------------------------------------------------
    @property
    def filtered_users(self) -> list[User]:
        return list(self._filtered())

    @property
    def sorted_users(self) -> list[User]:
        version = (self._users_version, self._filter_version, self._sort_version)
        if self._sorted_cache is None or self._sorted_cache[0] != version:
            metrics.inc("repository.sort_recomputes")
            self._sorted_cache = (version, sort_users(self._filtered(), self._sort_params))
        return list(self._sorted_cache[1])

    def _filtered(self) -> list[User]:
        version = (self._users_version, self._filter_version)
        if self._filtered_cache is None or self._filtered_cache[0] != version:
            metrics.inc("repository.filter_recomputes")
            self._filtered_cache = (version, filter_users(self._users, self._filter_params))
        return self._filtered_cache[1]

    # ---- persistence -----------------------------------------------------
    def save_to_storage(self) -> None:
        if self._persistence is None:
            return
        self._persistence.save(self._users)

    def load_from_storage(self) -> list[User]:
        """Read the persisted collection without installing it."""
        if self._persistence is None:
            return []
        return self._persistence.load()

    # ---- collection mutations ------------------------------------------
    def _users_mutated(self) -> None:
        self._users_version += 1
        self.save_to_storage()
        self.usersChanged.emit()

    def load_users(self, users: list[User]) -> None:
        self._users = list(users)
        _logger.debug("collection replaced: %d users", len(self._users))
        self._users_mutated()

    def add_user(self, user: User) -> None:
        self._users.append(user)
        self._users_mutated()

    def find_user(self, user_id: UserId) -> User | None:
        """First user with this id; duplicates after it are never reached."""
        return next((u for u in self._users if u.id == user_id), None)

    def update_user_photo(self, user_id: UserId, photo_url: str) -> bool:
        user = self.find_user(user_id)
        if user is None:
            _logger.debug("photo update for unknown user id %r ignored", user_id)
            return False
        user.photo_url = photo_url
        self._users_mutated()
        return True

    # ---- parameters ------------------------------------------------------
    def set_filter_params(self, **changes: Any) -> None:
        """Merge the given fields into the filter parameters; None clears a field."""
        params = replace(self._filter_params, **changes)
        if params == self._filter_params:
            return
        self._filter_params = params
        self._filter_version += 1
        self.filterParamsChanged.emit()

    def set_sort_params(self, **changes: Any) -> None:
        params = replace(self._sort_params, **changes)
        if params.field is not None and params.field not in _SORT_FIELDS:
            raise ValueError(f"unknown sort field: {params.field!r}")
        if params.direction not in _SORT_DIRECTIONS:
            raise ValueError(f"unknown sort direction: {params.direction!r}")
        if params == self._sort_params:
            return
        self._sort_params = params
        self._sort_version += 1
        self.sortParamsChanged.emit()
