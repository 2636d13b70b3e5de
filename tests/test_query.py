from __future__ import annotations

import itertools

from user_directory.models import FilterParams, SortParams, User
from user_directory.seed import seed_users
from user_directory.store.query import filter_users, sort_users


def _ids(users: list[User]) -> list:
    return [u.id for u in users]


def test_no_filters_returns_everything_in_order() -> None:
    users = seed_users()
    assert _ids(filter_users(users, FilterParams())) == _ids(users)


def test_empty_collection_gives_empty_result() -> None:
    assert filter_users([], FilterParams(only_adults=True, name_search="x")) == []
    assert sort_users([], SortParams(field="age")) == []


def test_only_adults_then_min_age() -> None:
    users = seed_users()
    adults = filter_users(users, FilterParams(only_adults=True))
    assert len(adults) == 8
    assert 1 not in _ids(adults)

    narrowed = filter_users(users, FilterParams(only_adults=True, min_age=25))
    assert sorted(u.age for u in narrowed) == [27, 28, 30, 35]


def test_adult_threshold_is_inclusive() -> None:
    users = [User(1, "A", "A", 17, "a@x"), User(2, "B", "B", 18, "b@x")]
    assert _ids(filter_users(users, FilterParams(only_adults=True))) == [2]


def test_age_bounds_are_inclusive() -> None:
    users = seed_users()
    result = filter_users(users, FilterParams(min_age=24, max_age=28))
    assert sorted(u.age for u in result) == [24, 24, 27, 28]


def test_name_search_is_case_insensitive_and_trimmed() -> None:
    result = filter_users(seed_users(), FilterParams(name_search="  ольга "))
    assert _ids(result) == [8, 9]


def test_name_search_matches_last_name() -> None:
    assert _ids(filter_users(seed_users(), FilterParams(name_search="ПЕТРОВА"))) == [2]


def test_name_search_does_not_match_across_first_and_last_name() -> None:
    assert filter_users(seed_users(), FilterParams(name_search="иван иванов")) == []


def test_email_search() -> None:
    result = filter_users(seed_users(), FilterParams(email_search="OLGA.NOVIKOVA@"))
    assert _ids(result) == [8, 9]


def test_blank_search_strings_are_ignored() -> None:
    users = seed_users()
    assert len(filter_users(users, FilterParams(name_search="   ", email_search=""))) == len(users)


def test_every_combination_is_a_conjunctive_subset() -> None:
    users = seed_users()
    options = {
        "only_adults": [False, True],
        "min_age": [None, 20, 25],
        "max_age": [None, 24, 30],
        "name_search": [None, "ов", "ольга"],
        "email_search": [None, "example", "ivan"],
    }
    keys = list(options)
    for values in itertools.product(*options.values()):
        params = FilterParams(**dict(zip(keys, values)))
        result = filter_users(users, params)
        for user in result:
            assert user in users
            if params.only_adults:
                assert user.age >= 18
            if params.min_age is not None:
                assert user.age >= params.min_age
            if params.max_age is not None:
                assert user.age <= params.max_age
            if params.name_search:
                q = params.name_search.lower()
                assert q in user.first_name.lower() or q in user.last_name.lower()
            if params.email_search:
                assert params.email_search.lower() in user.email.lower()
        # nothing that satisfies every predicate was dropped
        assert len(result) == sum(
            1
            for u in users
            if (not params.only_adults or u.age >= 18)
            and (params.min_age is None or u.age >= params.min_age)
            and (params.max_age is None or u.age <= params.max_age)
            and (
                not params.name_search
                or params.name_search in u.first_name.lower()
                or params.name_search in u.last_name.lower()
            )
            and (not params.email_search or params.email_search in u.email.lower())
        )


def test_filter_does_not_mutate_input() -> None:
    users = seed_users()
    before = list(users)
    filter_users(users, FilterParams(only_adults=True))
    assert users == before


def test_sort_without_field_is_passthrough() -> None:
    users = seed_users()
    assert sort_users(users, SortParams(direction="desc")) == users


def test_sort_by_age_ascending_is_stable() -> None:
    result = sort_users(seed_users(), SortParams(field="age", direction="asc"))
    ages = [u.age for u in result]
    assert ages == sorted(ages)
    # the two 24-year-olds keep their collection order
    assert [u.id for u in result if u.age == 24] == [8, 9]


def test_sort_by_age_descending_is_stable() -> None:
    result = sort_users(seed_users(), SortParams(field="age", direction="desc"))
    ages = [u.age for u in result]
    assert ages == sorted(ages, reverse=True)
    assert [u.id for u in result if u.age == 24] == [8, 9]


def test_sort_by_name_uses_full_lowercased_name() -> None:
    users = [
        User(1, "борис", "Б", 30, "b@x"),
        User(2, "Анна", "Я", 30, "a@x"),
        User(3, "Анна", "Б", 30, "c@x"),
    ]
    assert _ids(sort_users(users, SortParams(field="name"))) == [3, 2, 1]
    assert _ids(sort_users(users, SortParams(field="name", direction="desc"))) == [1, 2, 3]


def test_sort_by_name_keeps_equal_names_in_order() -> None:
    users = [User(1, "Анна", "Б", 30, "a@x"), User(2, "анна", "б", 31, "b@x")]
    assert _ids(sort_users(users, SortParams(field="name", direction="desc"))) == [1, 2]


def test_sort_by_name_treats_yo_as_e() -> None:
    users = [User(1, "Алина", "Смирнова", 20, "a@x"), User(2, "Алёна", "Смирнова", 21, "b@x")]
    assert _ids(sort_users(users, SortParams(field="name"))) == [2, 1]
    assert _ids(sort_users(users, SortParams(field="name", direction="desc"))) == [1, 2]


def test_sort_by_name_places_accented_letters_with_base_letter() -> None:
    users = [User(1, "Zoe", "Adams", 20, "z@x"), User(2, "Émile", "Blanc", 21, "e@x")]
    assert _ids(sort_users(users, SortParams(field="name"))) == [2, 1]
