from __future__ import annotations

import json
import os
from typing import Any

from .logger import get_logger

_logger = get_logger("settings")


class SettingsManager:
    def __init__(self, settings_path: str):
        self.settings_path = settings_path
        self._settings: dict[str, Any] = {}
        self.load()

    DEFAULTS: dict[str, Any] = {
        "storage_path": "user_directory_storage.json",
        "optimize_photos": True,
        "max_width": 1920,
        "max_height": 1920,
        "quality": 0.8,
        "max_size_kb": 500,
        "toast_duration_ms": 3000,
    }

    def load(self) -> None:
        try:
            if os.path.exists(self.settings_path):
                with open(self.settings_path, encoding="utf-8") as f:
                    data = json.load(f)
                    if isinstance(data, dict):
                        self._settings = data
                        _logger.debug("settings loaded: %s", self.settings_path)
                        return
        except (OSError, ValueError) as e:
            _logger.warning("settings load failed: %s", e)
        self._settings = {}

    def save(self) -> None:
        try:
            parent = os.path.dirname(self.settings_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.settings_path, "w", encoding="utf-8") as f:
                json.dump(self._settings, f, ensure_ascii=False, indent=2)
            _logger.debug("settings saved: %s", self.settings_path)
        except OSError as e:
            _logger.error("settings save failed: %s", e)

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._settings:
            return self._settings[key]
        if default is not None:
            return default
        return self.DEFAULTS.get(key)

    def has(self, key: str) -> bool:
        return key in self._settings

    def set(self, key: str, value: Any) -> None:
        self._settings[key] = value
        self.save()

    @property
    def data(self) -> dict[str, Any]:
        return self._settings

    @property
    def storage_path(self) -> str:
        """Storage file path; relative values resolve next to the settings file."""
        val = self.get("storage_path")
        if not isinstance(val, str) or not val.strip():
            val = self.DEFAULTS["storage_path"]
        if os.path.isabs(val):
            return val
        return os.path.join(os.path.dirname(os.path.abspath(self.settings_path)), val)

    @property
    def optimize_photos(self) -> bool:
        return bool(self.get("optimize_photos"))

    @property
    def toast_duration_ms(self) -> int:
        try:
            return max(0, int(self.get("toast_duration_ms")))
        except (TypeError, ValueError):
            _logger.warning("toast_duration_ms invalid: %r", self.get("toast_duration_ms"))
            return int(self.DEFAULTS["toast_duration_ms"])

    def optimizer_options(self) -> dict[str, Any]:
        """Keyword arguments for `optimize_image`, falling back to defaults on bad values."""
        opts: dict[str, Any] = {}
        for key, cast in (("max_width", int), ("max_height", int), ("quality", float), ("max_size_kb", float)):
            try:
                value = cast(self.get(key))
                if value <= 0:
                    raise ValueError(key)
            except (TypeError, ValueError):
                _logger.warning("saved %s invalid: %r", key, self.get(key))
                value = cast(self.DEFAULTS[key])
            opts[key] = value
        opts["quality"] = min(1.0, opts["quality"])
        return opts
