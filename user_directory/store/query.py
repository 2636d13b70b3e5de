"""Filter and sort stages over a user collection.

Both stages are pure: they never mutate the input list or the users in it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import cmp_to_key
from typing import Any

from PySide6.QtCore import QCollator, QLocale, Qt

from ..models import ADULT_AGE, FilterParams, SortParams, User

UserPredicate = Callable[[User], bool]


def _normalize_query(query: str | None) -> str:
    return (query or "").strip().lower()


def _name_matches(query: str) -> UserPredicate:
    # first OR last name, never the concatenation
    return lambda user: query in user.first_name.lower() or query in user.last_name.lower()


def _email_matches(query: str) -> UserPredicate:
    return lambda user: query in user.email.lower()


def build_predicates(params: FilterParams) -> list[UserPredicate]:
    """Active predicates in application order; inactive filters contribute nothing."""
    predicates: list[UserPredicate] = []
    if params.only_adults:
        predicates.append(lambda user: user.age >= ADULT_AGE)
    if params.min_age is not None:
        min_age = params.min_age
        predicates.append(lambda user: user.age >= min_age)
    if params.max_age is not None:
        max_age = params.max_age
        predicates.append(lambda user: user.age <= max_age)
    name_query = _normalize_query(params.name_search)
    if name_query:
        predicates.append(_name_matches(name_query))
    email_query = _normalize_query(params.email_search)
    if email_query:
        predicates.append(_email_matches(email_query))
    return predicates


def filter_users(users: Iterable[User], params: FilterParams) -> list[User]:
    result = list(users)
    for predicate in build_predicates(params):
        result = [user for user in result if predicate(user)]
    return result


def _name_collator() -> QCollator:
    locale = QLocale()
    # the C locale collates by code point; fall back to a real language
    if locale.language() == QLocale.Language.C:
        locale = QLocale(QLocale.Language.English, QLocale.Country.UnitedStates)
    collator = QCollator(locale)
    collator.setCaseSensitivity(Qt.CaseSensitivity.CaseInsensitive)
    return collator


def _name_key() -> Callable[[User], Any]:
    compare_key = cmp_to_key(_name_collator().compare)
    return lambda user: compare_key(f"{user.first_name} {user.last_name}".lower())


def _age_key() -> Callable[[User], Any]:
    return lambda user: user.age


_SORT_KEYS: dict[str, Callable[[], Callable[[User], Any]]] = {
    "name": _name_key,
    "age": _age_key,
}


def sort_users(users: Iterable[User], params: SortParams) -> list[User]:
    """Order users by the requested field.

    Without a field the input order is returned unchanged. Equal keys keep
    their input order in both directions.
    """
    result = list(users)
    if not params.field:
        return result
    return sorted(result, key=_SORT_KEYS[params.field](), reverse=params.direction == "desc")
