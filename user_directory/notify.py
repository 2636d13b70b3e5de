from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

from PySide6.QtCore import QObject, Signal

from .logger import get_logger

_logger = get_logger("notify")

Severity = Literal["success", "error", "info", "warning"]
DEFAULT_DURATION_MS = 3000


class Notifier(Protocol):
    def notify(self, message: str, severity: Severity = "info", duration_ms: int = DEFAULT_DURATION_MS) -> None: ...


class LogNotifier:
    """Sends notifications to the project log instead of a screen."""

    _LEVELS = {"success": "info", "info": "info", "warning": "warning", "error": "error"}

    def notify(self, message: str, severity: Severity = "info", duration_ms: int = DEFAULT_DURATION_MS) -> None:
        getattr(_logger, self._LEVELS.get(severity, "info"))("[%s] %s", severity, message)


@dataclass(frozen=True)
class Toast:
    id: int
    message: str
    severity: Severity
    duration_ms: int


class ToastQueue(QObject):
    """Pending toasts for a rendering surface.

    The surface owns dismissal timing and calls `remove()` when a toast is
    gone; this queue only keeps the list and announces changes.
    """

    toastAdded = Signal(int)
    toastRemoved = Signal(int)
    toastsCleared = Signal()

    def __init__(self, default_duration_ms: int = DEFAULT_DURATION_MS, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._default_duration_ms = default_duration_ms
        self._toasts: list[Toast] = []
        self._next_id = 0

    @property
    def toasts(self) -> list[Toast]:
        return list(self._toasts)

    def notify(self, message: str, severity: Severity = "info", duration_ms: int | None = None) -> None:
        self.show(message, severity, duration_ms)

    def show(self, message: str, severity: Severity = "info", duration_ms: int | None = None) -> Toast:
        self._next_id += 1
        duration = self._default_duration_ms if duration_ms is None else int(duration_ms)
        toast = Toast(self._next_id, message, severity, duration)
        self._toasts.append(toast)
        self.toastAdded.emit(toast.id)
        return toast

    def remove(self, toast_id: int) -> None:
        for i, toast in enumerate(self._toasts):
            if toast.id == toast_id:
                del self._toasts[i]
                self.toastRemoved.emit(toast_id)
                return

    def clear(self) -> None:
        self._toasts = []
        self.toastsCleared.emit()

    def success(self, message: str, duration_ms: int | None = None) -> Toast:
        return self.show(message, "success", duration_ms)

    def error(self, message: str, duration_ms: int | None = None) -> Toast:
        return self.show(message, "error", duration_ms)

    def info(self, message: str, duration_ms: int | None = None) -> Toast:
        return self.show(message, "info", duration_ms)

    def warning(self, message: str, duration_ms: int | None = None) -> Toast:
        return self.show(message, "warning", duration_ms)
