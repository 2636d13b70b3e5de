from __future__ import annotations

import json
from pathlib import Path

from user_directory.settings_manager import SettingsManager


def test_defaults_when_file_missing(tmp_path: Path) -> None:
    sm = SettingsManager(str(tmp_path / "settings.json"))
    assert sm.data == {}
    assert sm.optimize_photos is True
    assert sm.toast_duration_ms == 3000
    assert sm.optimizer_options() == {"max_width": 1920, "max_height": 1920, "quality": 0.8, "max_size_kb": 500.0}


def test_set_persists_immediately(tmp_path: Path) -> None:
    settings_file = tmp_path / "cfg" / "settings.json"
    sm = SettingsManager(str(settings_file))
    sm.set("max_size_kb", 200)

    assert json.loads(settings_file.read_text(encoding="utf-8")) == {"max_size_kb": 200}
    assert SettingsManager(str(settings_file)).optimizer_options()["max_size_kb"] == 200


def test_corrupt_file_is_ignored(tmp_path: Path) -> None:
    settings_file = tmp_path / "settings.json"
    settings_file.write_text("{nope", encoding="utf-8")
    sm = SettingsManager(str(settings_file))
    assert sm.data == {}
    assert sm.get("quality") == 0.8


def test_invalid_optimizer_values_fall_back(tmp_path: Path) -> None:
    settings_file = tmp_path / "settings.json"
    settings_file.write_text(json.dumps({"max_width": "wide", "quality": 5, "max_height": -1}), encoding="utf-8")
    opts = SettingsManager(str(settings_file)).optimizer_options()
    assert opts["max_width"] == 1920
    assert opts["max_height"] == 1920
    assert opts["quality"] == 1.0


def test_relative_storage_path_resolves_next_to_settings(tmp_path: Path) -> None:
    sm = SettingsManager(str(tmp_path / "settings.json"))
    assert Path(sm.storage_path) == tmp_path / "user_directory_storage.json"

    absolute = tmp_path / "elsewhere" / "users.json"
    sm.set("storage_path", str(absolute))
    assert Path(sm.storage_path) == absolute
