import pytest

from user_directory.formatting import format_user_age, get_full_name
from user_directory.models import User


@pytest.mark.parametrize(
    ("age", "expected"),
    [
        (0, "0 лет"),
        (1, "1 год"),
        (2, "2 года"),
        (4, "4 года"),
        (5, "5 лет"),
        (11, "11 лет"),
        (14, "14 лет"),
        (21, "21 год"),
        (22, "22 года"),
        (111, "111 лет"),
        (-1, "Не указан"),
    ],
)
def test_format_user_age(age: int, expected: str) -> None:
    assert format_user_age(age) == expected


def test_full_name_is_trimmed() -> None:
    assert get_full_name(User(1, "Анна", "Волкова", 19, "a@x")) == "Анна Волкова"
    assert get_full_name(User(2, "Анна", "", 19, "a@x")) == "Анна"
