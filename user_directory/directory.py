from __future__ import annotations

from .logger import get_logger
from .models import SortDirection, SortField, SortParams, User, UserId
from .seed import seed_users
from .store.repository import UserRepository

_logger = get_logger("directory")


class UserDirectory:
    """Application-facing access to the user collection.

    Wraps a repository with startup loading, lookups and one-call filter
    and sort helpers.
    """

    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository
        self.is_loading = False
        self.error: str | None = None

    def initialize_users(self) -> None:
        """Fill an empty repository from storage, or from the seed users."""
        if len(self.repository) > 0:
            return

        self.is_loading = True
        self.error = None
        try:
            saved = self.repository.load_from_storage()
            if saved:
                _logger.info("restored %d users from storage", len(saved))
                self.repository.load_users(saved)
            else:
                _logger.info("storage empty, loading sample users")
                self.repository.load_users(seed_users())
        except Exception as e:
            self.error = str(e) or "Ошибка при загрузке пользователей"
            raise
        finally:
            self.is_loading = False

    # ---- lookups -----------------------------------------------------------
    def get_users(self) -> list[User]:
        return self.repository.users

    def get_user_by_id(self, user_id: UserId) -> User | None:
        return self.repository.find_user(user_id)

    @property
    def filtered_users(self) -> list[User]:
        return self.repository.filtered_users

    @property
    def sorted_users(self) -> list[User]:
        return self.repository.sorted_users

    # ---- filters -----------------------------------------------------------
    def filter_by_age(self, min_age: int | None) -> None:
        self.repository.set_filter_params(min_age=min_age)

    def filter_by_max_age(self, max_age: int | None) -> None:
        self.repository.set_filter_params(max_age=max_age)

    def filter_only_adults(self, only_adults: bool) -> None:
        self.repository.set_filter_params(only_adults=bool(only_adults))

    def search_by_name(self, query: str | None) -> None:
        self.repository.set_filter_params(name_search=(query or "").strip() or None)

    def filter_by_email(self, query: str | None) -> None:
        self.repository.set_filter_params(email_search=(query or "").strip() or None)

    def reset_filters(self) -> None:
        self.repository.set_filter_params(
            min_age=None,
            max_age=None,
            only_adults=False,
            name_search=None,
            email_search=None,
        )

    # ---- sorting -----------------------------------------------------------
    def sort_by(self, field: SortField, direction: SortDirection) -> None:
        self.repository.set_sort_params(field=field, direction=direction)

    def reset_sort(self) -> None:
        self.repository.set_sort_params(field=None, direction="asc")

    @property
    def current_sort_params(self) -> SortParams:
        return self.repository.sort_params
