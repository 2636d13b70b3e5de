"""Pytest configuration.

The repository and upload coordinator are QObjects. Signals work without an
application object, but a single QCoreApplication for the whole session keeps
Qt from warning when the first QObject is created.
"""

from __future__ import annotations

from typing import Any

import pytest

_APP: Any | None = None


def pytest_configure(config) -> None:  # noqa: ARG001
    try:
        from PySide6.QtCore import QCoreApplication
    except ImportError:
        return

    global _APP

    app = QCoreApplication.instance()
    # Keep a strong ref so it isn't GC'd mid-session.
    _APP = app if app is not None else QCoreApplication([])


@pytest.fixture(autouse=True)
def _reset_metrics():
    from user_directory.metrics import metrics

    metrics.reset()
    yield
    metrics.reset()


class RecordingNotifier:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, int]] = []

    def notify(self, message: str, severity: str = "info", duration_ms: int = 3000) -> None:
        self.calls.append((message, severity, duration_ms))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def repository():
    from user_directory.seed import seed_users
    from user_directory.store import MemoryStore, PersistenceAdapter, UserRepository

    repo = UserRepository(PersistenceAdapter(MemoryStore()))
    repo.load_users(seed_users())
    return repo
