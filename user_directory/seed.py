"""Built-in sample users, used when local storage holds nothing."""

from __future__ import annotations

from .models import User

_SEED: list[tuple[int, str, str, int, str, str | None]] = [
    (1, "Иван", "Иванов", 5, "ivan.ivanov@example.com", None),
    (2, "Мария", "Петрова", 30, "maria.petrova@example.com", "https://stihi.ru/pics/2020/06/02/2893.jpg"),
    (3, "Алексей", "Сидоров", 22, "alexey.sidorov@example.com", None),
    (4, "Елена", "Козлова", 28, "elena.kozlova@example.com", None),
    (5, "Дмитрий", "Смирнов", 35, "dmitry.smirnov@example.com", None),
    (6, "Анна", "Волкова", 19, "anna.volkova@example.com", None),
    (7, "Сергей", "Лебедев", 27, "sergey.lebedev@example.com", None),
    (8, "Ольга", "Новикова", 24, "olga.novikova@example.com", None),
    # same email as id 8 on purpose
    (9, "Ольга", "Новикова1", 24, "olga.novikova@example.com", None),
]


def seed_users() -> list[User]:
    """Return a fresh copy of the sample users."""
    return [User(*row) for row in _SEED]
