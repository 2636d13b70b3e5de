from __future__ import annotations

from .models import User


def get_full_name(user: User) -> str:
    return f"{user.first_name} {user.last_name}".strip()


def format_user_age(age: int) -> str:
    """Age with the Russian plural form of "год" (1 год, 2 года, 5 лет)."""
    if isinstance(age, bool) or not isinstance(age, int) or age < 0:
        return "Не указан"

    last_digit = age % 10
    last_two = age % 100

    if 11 <= last_two <= 14:
        return f"{age} лет"
    if last_digit == 1:
        return f"{age} год"
    if 2 <= last_digit <= 4:
        return f"{age} года"
    return f"{age} лет"
